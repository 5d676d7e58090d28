import uuid

from quart import Blueprint, Response, g, request

bp_request_handler = Blueprint("request_handler", __name__)

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_ID_HEADER = "X-Api-Correlation-Id"


@bp_request_handler.before_app_request
async def assign_request_id() -> None:
    g.request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())


@bp_request_handler.after_app_request
async def add_response_headers(response: Response) -> Response:
    request_id = getattr(g, "request_id", None) or str(uuid.uuid4())
    response.headers[REQUEST_ID_HEADER] = request_id
    response.headers.setdefault(CORRELATION_ID_HEADER, request_id)
    if response.mimetype == "application/json":
        response.headers["Content-Type"] = "application/json; charset=utf-8"
    return response

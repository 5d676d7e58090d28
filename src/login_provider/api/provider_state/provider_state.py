from pydantic import ValidationError
from quart import Blueprint, Response, make_response, request
from quart import current_app as app
from quart_schema import hide
from werkzeug.exceptions import BadRequest

from login_provider.provider_states import get_state_manager

from .models import ProviderState, StateAction

bp_provider_state = Blueprint("ProviderState", __name__)

CONTENT_TYPE = "application/json; charset=utf-8"


@bp_provider_state.post("/setup")
@hide
async def setup_provider_state() -> Response:
    """Switch the provider into the requested provider state

    The body must be a JSON object like {"state": "User jmarie exists"}. Anything that doesn't parse is answered with
    503 and an empty body. A JSON null is an empty provider state
    """
    try:
        data = await request.get_json(force=True)
    except BadRequest as e:
        app.logger.warning(f"Invalid provider state request: {e.description}")
        return await _empty_response(503)

    try:
        provider_state = ProviderState.model_validate(data if data is not None else {})
    except ValidationError as e:
        app.logger.warning(f"Invalid provider state request: {e}")
        return await _empty_response(503)

    state_manager = get_state_manager()
    if provider_state.action is StateAction.TEARDOWN:
        state_manager.reset()
    else:
        state_manager.set_state(provider_state.state)
    current_state, repository = state_manager.snapshot()
    app.logger.info(
        f"Provider state {provider_state.action.value}: '{provider_state.state}' "
        f"(current state: '{current_state}', users: {len(repository)})"
    )
    return await _empty_response(200)


async def _empty_response(status_code: int) -> Response:
    response = await make_response("", status_code)
    response.headers["Content-Type"] = CONTENT_TYPE
    return response

import traceback
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional, Union

from requests import ConnectionError, PreparedRequest, ReadTimeout, Response, Session
from requests.hooks import dispatch_hook

from provider_verifier.libraries.common.logging import get_logger
from provider_verifier.libraries.rest_client.utils import process_response, retry_on

if TYPE_CHECKING:
    JSONType = str | int | float | bool | None | dict[str, Any] | list[Any]


logger = get_logger(__name__)


class PreparedRequestExt(PreparedRequest):
    """Extended PreparedRequest class that generates a request UUID for each request"""

    def __init__(self) -> None:
        super().__init__()
        self.request_id = str(uuid.uuid4())
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None


@dataclass
class ResponseExt(Response):
    """Extended Response class"""

    request: PreparedRequestExt


@dataclass(frozen=True)
class RestResponse:
    """Response class that wraps the requests Response object"""

    # raw response returned from requests lib
    _response: ResponseExt | Response = field(init=True)

    request_id: str = field(init=False)
    status_code: int = field(init=False)
    headers: Mapping[str, str] = field(init=False)
    response: "JSONType" = field(init=False)
    response_time: float = field(init=False)
    ok: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "request_id", self._response.request.request_id)
        object.__setattr__(self, "status_code", self._response.status_code)
        object.__setattr__(self, "headers", self._response.headers)
        object.__setattr__(self, "response", process_response(self._response))
        object.__setattr__(self, "response_time", self._response.elapsed.total_seconds())
        object.__setattr__(self, "ok", self._response.ok)


class SessionExt(Session):
    def send(self, request: PreparedRequestExt, **kwargs: Any) -> ResponseExt:
        """Add following behaviors to requests.Session.send()

        - Set X-Request-ID header
        - Dispatch request hooks
        - Reconnect in case a connection is reset by peer
        - Log exceptions
        """
        log_data = {
            "request_id": request.request_id,
            "request": f"{request.method.upper()} {request.url}",
            "method": request.method,
            "path": request.path_url,
        }
        request.headers.update({"X-Request-ID": request.request_id})
        try:
            try:
                return self._send(request, **kwargs)
            except ConnectionError as e:
                if "Connection reset by peer" in str(e):
                    logger.warning("The connection was already reset by peer. Reconnecting...", extra=log_data)
                    return self._send(request, **kwargs)
                else:
                    raise
        except ReadTimeout as e:
            log_data["traceback"] = traceback.format_exc()
            logger.error(
                f"Request timed out: {request.method.upper()} {request.url}\n (request_id: {request.request_id})",
                extra=log_data,
            )
            raise e from None
        except Exception as e:
            log_data["traceback"] = traceback.format_exc()
            logger.error(
                f"An unexpected error occurred while processing the API request (request_id: {request.request_id})\n"
                f"request: {request.method.upper()} {request.url}\n"
                f"error: {type(e).__name__}: {e}",
                extra=log_data,
            )
            raise

    @retry_on(503, retry_after=5, safe_methods_only=True)
    def _send(self, request: PreparedRequestExt, **kwargs: Any) -> Union[Response, ResponseExt]:
        """Send a request"""
        request.start_time = datetime.now(tz=timezone.utc)
        dispatch_hook("request", request.hooks, request, **kwargs)
        try:
            return super().send(request, **kwargs)
        finally:
            request.end_time = datetime.now(tz=timezone.utc)

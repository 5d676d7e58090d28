import json
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Union

from provider_verifier.libraries.common.ansi_colors import ColorCodes, color
from provider_verifier.libraries.common.logging import get_logger

from .ext import PreparedRequestExt, ResponseExt
from .utils import get_response_reason, parse_query_strings, process_request_body, process_response

if TYPE_CHECKING:
    from .rest_client import RestClient


logger = get_logger(__name__)


def get_hooks(rest_client: "RestClient", quiet: bool) -> dict[str, list[Callable[..., Any]]]:
    """Get request/response hooks"""
    return {
        "request": [_hook_factory(_log_request, quiet)],
        "response": [
            _hook_factory(_log_response, rest_client.prettify_response_log, quiet),
            _hook_factory(_print_api_summary, rest_client.prettify_response_log, rest_client.log_headers, quiet),
        ],
    }


def _log_request(request: PreparedRequestExt, quiet: bool, **kwargs: Any) -> None:
    """Log API request"""
    log_data = {
        "request_id": request.request_id,
        "request": f"{request.method.upper()} {request.url}",
        "method": request.method,
        "path": request.path_url,
        "payload": process_request_body(request),
        "request_headers": request.headers,
    }
    if not quiet:
        logger.debug(f"request: {request.method} {request.url}", extra=log_data)


def _log_response(response: ResponseExt, prettify_response_log: bool, quiet: bool, *args: Any, **kwargs: Any) -> None:
    """Log API response"""
    request: PreparedRequestExt = response.request
    log_data = {
        "request_id": request.request_id,
        "request": f"{request.method.upper()} {request.url}",
        "method": request.method,
        "path": request.path_url,
        "status_code": response.status_code,
        "response_headers": response.headers,
        "response_time": response.elapsed.total_seconds(),
        "response": process_response(response, prettify=prettify_response_log),
    }

    msg = f"response: {response.status_code}"
    if reason := get_response_reason(response):
        msg += f" ({reason})"

    if response.ok:
        if not quiet:
            logger.debug(msg, extra=log_data)
    else:
        # Log response regardless of the "quiet" value
        logger.warning(msg, extra=log_data)


def _print_api_summary(
    response: ResponseExt, prettify: bool, log_headers: bool, quiet: bool, *args: Any, **kwargs: Any
) -> None:
    """Print API request/response summary to the console"""
    if quiet:
        return

    request: PreparedRequestExt = response.request
    bullet = "-"
    summary = color(f"{bullet} request_id: {request.request_id}\n", color_code=ColorCodes.CYAN)
    summary += color(f"{bullet} request: {request.method} {response.url}\n", color_code=ColorCodes.CYAN)
    if log_headers:
        summary += color(f"{bullet} request_headers: {request.headers}\n", color_code=ColorCodes.CYAN)

    if query_strings := parse_query_strings(request.url):
        summary += color(f"{bullet} query params: {query_strings}\n", color_code=ColorCodes.CYAN)
    if request_body := process_request_body(request, truncate_bytes=True):
        try:
            payload = json.dumps(request_body, ensure_ascii=False)
        except TypeError:
            payload = request_body
        summary += color(f"{bullet} payload: {payload}\n", color_code=ColorCodes.CYAN)

    status_color_code = ColorCodes.GREEN if response.ok else ColorCodes.RED
    summary += color(f"{bullet} status_code: ", color_code=ColorCodes.CYAN) + color(
        response.status_code, color_code=status_color_code
    )
    if reason := get_response_reason(response):
        summary += f" ({reason})"
    summary += "\n"

    formatted_response = process_response(response, prettify=prettify)
    if formatted_response is not None:
        if not response.ok:
            formatted_response = color(formatted_response, color_code=ColorCodes.RED)
        summary += color(f"{bullet} response: ", color_code=ColorCodes.CYAN)
        summary += f"{formatted_response}\n"

    if log_headers:
        summary += color(f"{bullet} response_headers: {response.headers}\n", color_code=ColorCodes.CYAN)
    summary += color(f"{bullet} response_time: {response.elapsed.total_seconds()}s\n", color_code=ColorCodes.CYAN)

    sys.stdout.write(summary)
    sys.stdout.flush()


def _hook_factory(hook_func: Callable[..., None], *hook_args: Any, **hook_kwargs: Any) -> Callable[..., None]:
    """Dynamically create a hook with arguments"""

    def hook(hook_data: Union[PreparedRequestExt, ResponseExt], *request_args: Any, **request_kwargs: Any) -> None:
        return hook_func(hook_data, *hook_args, *request_args, **hook_kwargs, **request_kwargs)

    return hook

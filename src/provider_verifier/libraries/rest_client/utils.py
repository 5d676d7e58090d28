import json
import time
import urllib.parse
from collections.abc import Callable, Sequence
from functools import wraps
from http import HTTPStatus
from json import JSONDecodeError
from typing import TYPE_CHECKING, Any, Optional, ParamSpec, TypeVar, Union
from urllib.parse import parse_qs, urlparse

from provider_verifier.libraries.common.logging import get_logger

if TYPE_CHECKING:
    from requests import Response

    from .ext import PreparedRequestExt, ResponseExt
    from .rest_client import RestClient


P = ParamSpec("P")
RT = TypeVar("RT")

logger = get_logger(__name__)


TRUNCATE_LEN = 512
SENSITIVE_FIELD_NAMES = ["password", "token"]


def generate_query_string(query_params: dict[str, Any]) -> str:
    """Returns a string containing the URL query string based on the passed dictionary

    :param query_params: A dictionary of key/value pairs that will be used in the API call
    """

    def convert_if_bool(val: Any) -> Any:
        """Convert boolean to lower string"""
        if isinstance(val, bool):
            return str(val).lower()
        else:
            return val

    query_string = "&".join(
        urllib.parse.urlencode({k: convert_if_bool(v)}, doseq=True) for (k, v) in query_params.items() if v is not None
    )
    return query_string


def process_request_body(
    request: "PreparedRequestExt", hide_sensitive_values: bool = True, truncate_bytes: bool = False
) -> Any:
    """Process request body (PreparedRequest.body)"""
    body = request.body
    if body:
        body = _decode_utf8(body)
        if isinstance(body, bytes):
            if truncate_bytes and len(body) > TRUNCATE_LEN:
                body = _truncate(body)
        else:
            try:
                body = json.loads(body)
            except JSONDecodeError:
                return body
            if hide_sensitive_values:
                body = mask_sensitive_value(body)
    return body


def mask_sensitive_value(body: Any) -> Any:
    """Mask a field value when a field name of the request body contains a sensitive word"""
    if isinstance(body, dict):
        for k, v in body.items():
            if isinstance(v, dict):
                mask_sensitive_value(v)
            elif isinstance(v, list):
                for nested_obj in v:
                    mask_sensitive_value(nested_obj)
            elif isinstance(v, str) and any(part in k.lower() for part in SENSITIVE_FIELD_NAMES):
                body[k] = "*" * len(v)
    return body


def process_response(
    response: Union["ResponseExt", "Response"], prettify: bool = False
) -> str | bytes | dict[str, Any] | list[Any] | None:
    """Get json-encoded content of a response if possible, otherwise return content of the response"""
    if not response.content:
        return None
    try:
        resp = response.json()
        if prettify:
            resp = json.dumps(resp, indent=4, ensure_ascii=False)
    except JSONDecodeError:
        resp = _decode_utf8(response.content)

    return resp


def parse_query_strings(url: str) -> Optional[dict[str, Any]]:
    """Parse query strings in the URL and return as a dictionary, if any"""
    q = urlparse(url)
    if q.query:
        query_params = parse_qs(q.query)
        return {k: v[0] if len(v) == 1 else v for k, v in query_params.items()}
    return None


def get_response_reason(response: "ResponseExt") -> str:
    """Get response reason from the response. If the response doesn't have the value, we resolve it using HTTPStatus"""
    if response.reason:
        return response.reason
    else:
        try:
            return HTTPStatus(response.status_code).phrase
        except ValueError:
            return ""


def manage_content_type(f: Callable[P, RT]) -> Callable[P, RT]:
    """Set Content-Type: application/json header by default to a request whenever appropriate"""

    @wraps(f)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> RT:
        self: RestClient = args[0]
        session_headers = self.session.headers
        request_headers = kwargs.get("headers") or {}
        headers = {**session_headers, **request_headers}
        has_content_type_header = "Content-Type" in [h.title() for h in list(headers.keys())]
        content_type_set = False
        if not has_content_type_header and (kwargs.get("json") or not kwargs.get("data")):
            self.session.headers.update({"Content-Type": "application/json"})
            content_type_set = True
        try:
            return f(*args, **kwargs)
        finally:
            if content_type_set:
                self.session.headers.pop("Content-Type", None)

    return wrapper


def retry_on(
    condition: int | Sequence[int] | Callable[["Response"], bool],
    num_retry: int = 1,
    retry_after: float = 5,
    safe_methods_only: bool = False,
) -> Callable[[Callable[P, "Response"]], Callable[P, "Response"]]:
    """Retry the request if the given condition matches

    :param condition: Either status code(s) or a function that takes response object as the argument
    :param num_retry: Max number of retries
    :param retry_after: Wait time before retrying in seconds
    :param safe_methods_only: Retry will happen only for safe methods
    """

    def decorator_with_args(f: Callable[P, "Response"]) -> Callable[P, "Response"]:
        def matches_condition(r: "Response") -> bool:
            if isinstance(condition, int):
                return r.status_code == condition
            elif isinstance(condition, (tuple, list)) and all(isinstance(x, int) for x in condition):
                return r.status_code in condition
            elif callable(condition):
                return condition(r)
            else:
                raise ValueError(f"Invalid condition: {condition}")

        @wraps(f)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> "Response":
            resp = f(*args, **kwargs)
            num_retried = 0
            while num_retried < num_retry and matches_condition(resp):
                if safe_methods_only and resp.request.method.upper() not in ["GET", "HEAD", "OPTIONS"]:
                    logger.debug("Retry condition matched but will be skipped (safe_methods_only=True was given)")
                    return resp

                if callable(condition):
                    msg = "Retry condition matched."
                else:
                    msg = f"Received status code {resp.status_code}."
                logger.warning(
                    f"{msg} Retrying in {retry_after} seconds...",
                    extra={"status_code": resp.status_code, "response": process_response(resp, prettify=True)},
                )
                time.sleep(retry_after)
                resp = f(*args, **kwargs)
                num_retried += 1

            if num_retried and matches_condition(resp):
                text = f"{num_retry} times" if num_retry > 1 else "once"
                logger.warning(f"Retried {text} but the request still matches the retry condition")
            return resp

        return wrapper

    return decorator_with_args


def _decode_utf8(obj: Any) -> Any:
    """Decode bytes object with UTF-8, if possible"""
    if obj and isinstance(obj, bytes):
        try:
            obj = obj.decode("utf-8")
        except UnicodeDecodeError:
            # Binary data
            pass
    return obj


def _truncate(v: str | bytes) -> str | bytes:
    """Truncate value"""
    trunc_pos = int(TRUNCATE_LEN / 2)
    if isinstance(v, bytes):
        return v[:trunc_pos] + b"   ...TRUNCATED...   " + v[-trunc_pos:]
    return v[:trunc_pos] + "\n\n   ...TRUNCATED...   \n\n" + v[-trunc_pos:]

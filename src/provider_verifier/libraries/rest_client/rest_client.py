from typing import Any, Optional

import requests.models
import requests.sessions
from requests.hooks import HOOKS

from provider_verifier.libraries.common.logging import get_logger

from .ext import PreparedRequestExt, RestResponse, SessionExt
from .hooks import get_hooks
from .utils import generate_query_string, manage_content_type

# Monkey patch PreparedRequest so that every request gets a request ID
requests.models.PreparedRequest = PreparedRequestExt
requests.sessions.PreparedRequest = PreparedRequestExt

# Register a custom "request" hook event
if "request" not in HOOKS:
    HOOKS.append("request")


logger = get_logger(__name__)


class RestClient:
    """Rest API client"""

    def __init__(
        self,
        base_url: str,
        log_headers: bool = False,
        prettify_response_log: bool = True,
        timeout: int | float = 30,
    ):
        """
        :param base_url: API base url
        :param log_headers: Include request/response headers to the API summary logs
        :param prettify_response_log: Prettify response in the API summary logs
        :param timeout: Session timeout in seconds
        """
        self.base_url = base_url
        self.session = SessionExt()
        self.timeout = timeout
        self.log_headers = log_headers
        self.prettify_response_log = prettify_response_log

    def close(self) -> None:
        self.session.close()

    def get(self, path: str, quiet: bool = False, **query_params: Any) -> RestResponse:
        """Make a GET API request

        :param path: Endpoint path
        :param quiet: A flag to suppress API request/response log
        :param query_params: Query parameters
        """
        return self._get(path, query=query_params, quiet=quiet)

    def post(self, path: str, quiet: bool = False, **payload: Any) -> RestResponse:
        """Make a POST API request

        :param path: Endpoint path
        :param quiet: A flag to suppress API request/response log
        :param payload: JSON payload
        """
        return self._post(path, json=payload, quiet=quiet)

    @manage_content_type
    def _get(
        self, path: str, query: Optional[dict[str, Any]] = None, quiet: bool = False, **requests_lib_options: Any
    ) -> RestResponse:
        """Low-level function of get()

        :param path: Endpoint path
        :param query: Query parameters
        :param quiet: A flag to suppress API request/response log
        :param requests_lib_options: Any other parameters passed directly to the requests library
        """
        r = self.session.get(
            self._generate_url(path, query=query),
            timeout=requests_lib_options.pop("timeout", self.timeout),
            hooks=get_hooks(self, quiet),
            **requests_lib_options,
        )
        return RestResponse(r)

    @manage_content_type
    def _post(
        self,
        path: str,
        json: Optional[dict[str, Any] | list[Any]] = None,
        query: Optional[dict[str, Any]] = None,
        quiet: bool = False,
        **requests_lib_options: Any,
    ) -> RestResponse:
        """Low-level function of post()

        :param path: Endpoint path
        :param json: JSON payload
        :param query: Query parameters
        :param quiet: A flag to suppress API request/response log
        :param requests_lib_options: Any other parameters passed directly to the requests library (eg. data=)
        """
        r = self.session.post(
            self._generate_url(path, query=query),
            json=json,
            timeout=requests_lib_options.pop("timeout", self.timeout),
            hooks=get_hooks(self, quiet),
            **requests_lib_options,
        )
        return RestResponse(r)

    def _generate_url(self, path: str, query: Optional[dict[str, Any]] = None) -> str:
        if not path.startswith("/"):
            path = "/" + path
        url = f"{self.base_url}{path}"
        if query:
            url += f"?{generate_query_string(query)}"
        return url

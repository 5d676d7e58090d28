from typing import Any

from provider_verifier import DEFAULT_ENV
from provider_verifier.clients.base import APIClient
from provider_verifier.libraries.rest_client import RestClient, RestResponse


class LoginProviderClient(APIClient):
    """API client for login_provider

    Usage:
    >>> client = LoginProviderClient()
    >>> r = client.setup_provider_state("User jmarie exists")
    >>> assert r.status_code == 200
    >>> r = client.login(username="jmarie", password="issilly")
    >>> assert r.response["user"]["username"] == "jmarie"
    """

    def __init__(self, env: str = DEFAULT_ENV, rest_client: RestClient | None = None) -> None:
        super().__init__("login_provider", env=env, rest_client=rest_client)

    def login(self, username: str, password: str, user_id: int | str | None = None, **kwargs: Any) -> RestResponse:
        """Login

        :param username: Username
        :param password: Password
        :param user_id: Optional user ID appended to the login path
        """
        path = "/users/login/" if user_id is None else f"/users/login/{user_id}"
        return self.rest_client.post(path, username=username, password=password, **kwargs)

    def setup_provider_state(
        self, state: str, action: str = "setup", quiet: bool = False, **params: Any
    ) -> RestResponse:
        """Switch the provider into the given provider state

        :param state: Provider state name
        :param action: "setup" or "teardown"
        :param quiet: A flag to suppress API request/response log
        :param params: Provider state parameters
        """
        return self.rest_client.post("/setup", quiet=quiet, state=state, action=action, params=params)

    def healthcheck(self) -> RestResponse:
        """Healthcheck"""
        return self.rest_client.get("/healthcheck", quiet=True)

from collections.abc import Generator

import pytest

from login_provider import create_app
from provider_verifier.clients.login_provider import LoginProviderClient
from provider_verifier.libraries.server import ProviderServer
from tests.integration.helper import update_client_base_url


@pytest.fixture(scope="module")
def provider_server() -> Generator[ProviderServer]:
    """Login provider served on a background thread with a dynamically selected port"""
    with ProviderServer(create_app()) as server:
        yield server


@pytest.fixture
def api_client(provider_server: ProviderServer) -> Generator[LoginProviderClient]:
    with LoginProviderClient() as client:
        update_client_base_url(client, provider_server.port)
        yield client
        client.setup_provider_state("", action="teardown", quiet=True)

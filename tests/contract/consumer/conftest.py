from collections.abc import Callable, Generator
from contextlib import AbstractContextManager, contextmanager
from pathlib import Path

import pytest
from common_libs.network import find_open_port
from pact import Pact
from pact.pact import PactServer

from provider_verifier import CONSUMER_NAME, PROVIDER_NAME, logger
from provider_verifier.clients.login_provider import LoginProviderClient
from provider_verifier.libraries.verification import ContractVerifier
from tests.integration.helper import update_client_base_url


@pytest.fixture(scope="session", autouse=True)
def _remove_stale_pact(contract_verifier: ContractVerifier) -> None:
    """Start from a clean contract so that removed interactions don't linger in the pact file"""
    if contract_verifier.pact_file.exists():
        logger.info(f"Removing the existing pact file {contract_verifier.pact_file}")
        contract_verifier.pact_file.unlink()


@pytest.fixture
def client() -> Generator[LoginProviderClient]:
    with LoginProviderClient() as client:
        yield client


@pytest.fixture
def pact_factory(pacts_dir: Path) -> Callable[[], AbstractContextManager[Pact]]:
    """Pact factory"""

    @contextmanager
    def create_pact() -> Generator[Pact]:
        pact = Pact(CONSUMER_NAME, PROVIDER_NAME).with_specification("V3")
        yield pact
        pact.write_file(pacts_dir)

    return create_pact


@pytest.fixture
def pact_server_factory() -> Callable[[Pact, LoginProviderClient], AbstractContextManager[PactServer]]:
    """Pact mock server factory"""

    @contextmanager
    def create_pact_server(pact: Pact, client: LoginProviderClient) -> Generator[PactServer]:
        host = "127.0.0.1"
        port = find_open_port()
        logger.debug(f"Starting Pact server on {host}:{port}...")
        with pact.serve(addr=host, port=port) as mock_server:
            update_client_base_url(client, port)
            yield mock_server

    return create_pact_server

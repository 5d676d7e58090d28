from collections.abc import Generator

import pytest

from login_provider import create_app
from provider_verifier.libraries.server import ProviderServer
from provider_verifier.libraries.verification import ContractVerifier


@pytest.fixture(scope="module")
def provider_server() -> Generator[ProviderServer]:
    """Login provider served on a background thread with a dynamically selected port"""
    with ProviderServer(create_app()) as server:
        yield server


@pytest.fixture(scope="module")
def pact_file(contract_verifier: ContractVerifier) -> str:
    """The local pact file recorded by the consumer contract tests"""
    if not contract_verifier.pact_file.exists():
        pytest.skip(f"{contract_verifier.pact_file} does not exist. Run the consumer contract tests first")
    return str(contract_verifier.pact_file)

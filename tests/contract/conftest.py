from pathlib import Path

import pytest

from provider_verifier import CONSUMER_NAME, DEFAULT_PACT_DIR, PROVIDER_NAME
from provider_verifier.libraries.verification import ContractVerifier


@pytest.fixture(scope="session")
def pacts_dir() -> Path:
    return DEFAULT_PACT_DIR


@pytest.fixture(scope="session")
def contract_verifier(pacts_dir: Path) -> ContractVerifier:
    return ContractVerifier(CONSUMER_NAME, PROVIDER_NAME, pact_dir=pacts_dir)

import pytest

from provider_verifier.libraries.server import ProviderServer
from provider_verifier.libraries.verification import (
    BrokerSettings,
    ContractVerifier,
    ProviderVerificationError,
    VerifyRequest,
    integrated_tests_enabled,
)

pytestmark = [pytest.mark.contracttest]

PROVIDER_VERSION = "1.0.0"


def test_login_provider(contract_verifier: ContractVerifier, provider_server: ProviderServer, pact_file: str) -> None:
    """Verify the login provider against the local consumer contract"""
    request = VerifyRequest(
        provider_base_url=provider_server.base_url,
        pact_urls=[pact_file],
        provider_states_setup_url=provider_server.setup_url,
    )
    contract_verifier.verify_provider(request)


def test_login_provider_without_provider_states(
    contract_verifier: ContractVerifier, provider_server: ProviderServer, pact_file: str
) -> None:
    """The contract can't be satisfied when the provider is never switched into the recorded states"""
    request = VerifyRequest(provider_base_url=provider_server.base_url, pact_urls=[pact_file])
    with pytest.raises(ProviderVerificationError):
        contract_verifier.verify_provider(request)


@pytest.mark.skipif(not integrated_tests_enabled(), reason="PACT_INTEGRATED_TESTS is not set")
class TestBrokerVerification:
    """Verify the provider against pacts published to a pact broker"""

    @pytest.fixture(scope="class")
    def broker(self) -> BrokerSettings:
        broker = BrokerSettings.from_env()
        if not broker.is_configured:
            pytest.skip("PACT_BROKER_HOST is not set")
        return broker

    def test_specific_published_pact(
        self, contract_verifier: ContractVerifier, provider_server: ProviderServer, broker: BrokerSettings
    ) -> None:
        pact_url = (
            f"{broker.url}/pacts/provider/{contract_verifier.provider}/consumer/{contract_verifier.consumer}/latest/sit4"
        )
        contract_verifier.verify_provider(self._request(provider_server, broker, pact_urls=[pact_url]))

    def test_latest_published_pacts(
        self, contract_verifier: ContractVerifier, provider_server: ProviderServer, broker: BrokerSettings
    ) -> None:
        contract_verifier.verify_provider(self._request(provider_server, broker))

    def test_tagged_published_pacts(
        self, contract_verifier: ContractVerifier, provider_server: ProviderServer, broker: BrokerSettings
    ) -> None:
        contract_verifier.verify_provider(self._request(provider_server, broker, tags=["latest", "sit4"]))

    @staticmethod
    def _request(provider_server: ProviderServer, broker: BrokerSettings, **options) -> VerifyRequest:
        return VerifyRequest(
            provider_base_url=provider_server.base_url,
            provider_states_setup_url=provider_server.setup_url,
            broker_url=broker.url,
            broker_username=broker.username,
            broker_password=broker.password,
            broker_token=broker.token,
            publish_verification_results=True,
            provider_version=PROVIDER_VERSION,
            **options,
        )

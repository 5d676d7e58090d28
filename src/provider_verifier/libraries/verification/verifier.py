from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

from common_libs.utils import list_items
from pact import Verifier

from provider_verifier.libraries.common.logging import get_logger

from .types import ProviderVerificationError, VerifyRequest

logger = get_logger(__name__)


class ContractVerifier:
    """Verifies a provider against the contracts recorded by its consumer

    Usage:
    >>> verifier = ContractVerifier("jmarie", "loginprovider", pact_dir=Path("pacts"))
    >>> verifier.verify_provider(
    ...     VerifyRequest(
    ...         provider_base_url="http://127.0.0.1:5000",
    ...         pact_urls=[str(verifier.pact_file)],
    ...         provider_states_setup_url="http://127.0.0.1:5000/setup",
    ...     )
    ... )
    """

    def __init__(self, consumer: str, provider: str, pact_dir: Path | str) -> None:
        self.consumer = consumer
        self.provider = provider
        self.pact_dir = Path(pact_dir)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(consumer={self.consumer!r}, provider={self.provider!r})"

    @property
    def pact_file(self) -> Path:
        """The pact file the consumer writes for this provider"""
        return self.pact_dir / f"{self.consumer}-{self.provider}.json"

    def verify_provider(self, request: VerifyRequest) -> None:
        """Replay the recorded interactions against the provider

        :param request: Verification options
        """
        verifier = self.build_verifier(request)
        sources = request.pact_urls or [request.broker_url]
        logger.info(f"Verifying provider '{self.provider}' ({request.provider_base_url}) against:\n{list_items(sources)}")
        try:
            verifier.verify()
        except RuntimeError as e:
            logger.error(f"Provider verification failed for '{self.provider}': {e}")
            raise ProviderVerificationError(f"Provider '{self.provider}' failed verification: {e}") from e
        logger.info(f"Provider '{self.provider}' satisfies the consumer contract(s)")

    def build_verifier(self, request: VerifyRequest) -> Verifier:
        """Build a pact Verifier for the verification request

        :param request: Verification options
        """
        verifier = Verifier(self.provider, host=urlparse(request.provider_base_url).hostname)
        verifier.add_transport(url=request.provider_base_url)

        if request.uses_broker:
            broker = verifier.broker_source(request.broker_url, selector=True, **_broker_auth(request))
            if request.tags:
                broker.consumer_tags(*request.tags)
            verifier = broker.build()
        else:
            for pact_url in request.pact_urls:
                if _is_url(pact_url):
                    verifier.add_source(pact_url, **_broker_auth(request))
                else:
                    verifier.add_source(Path(pact_url))

        if request.provider_states_setup_url:
            verifier.state_handler(request.provider_states_setup_url, teardown=True, body=True)

        for name, value in request.custom_provider_headers.items():
            verifier.add_custom_header(name, value)

        if request.request_timeout:
            verifier.set_request_timeout(request.request_timeout)

        if request.publish_verification_results:
            verifier.set_publish_options(
                version=request.provider_version,
                url=request.broker_url,
                branch=request.provider_branch,
                tags=request.provider_tags or None,
            )
        return verifier


def _is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def _broker_auth(request: VerifyRequest) -> dict[str, str]:
    """Broker credentials. Basic auth takes precedence over a bearer token"""
    if request.broker_username:
        return {"username": request.broker_username, "password": request.broker_password}
    elif request.broker_token:
        return {"token": request.broker_token}
    return {}

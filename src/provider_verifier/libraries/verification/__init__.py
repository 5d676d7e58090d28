from .config import BrokerSettings, integrated_tests_enabled
from .types import ProviderVerificationError, VerifyRequest
from .verifier import ContractVerifier

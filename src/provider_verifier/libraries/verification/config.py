import os
from dataclasses import dataclass

ENV_VAR_INTEGRATED_TESTS = "PACT_INTEGRATED_TESTS"
ENV_VAR_BROKER_HOST = "PACT_BROKER_HOST"
ENV_VAR_BROKER_USERNAME = "PACT_BROKER_USERNAME"
ENV_VAR_BROKER_PASSWORD = "PACT_BROKER_PASSWORD"
ENV_VAR_BROKER_TOKEN = "PACT_BROKER_TOKEN"


@dataclass(frozen=True)
class BrokerSettings:
    """Pact broker connection settings"""

    url: str | None = None
    username: str | None = None
    password: str | None = None
    token: str | None = None

    @classmethod
    def from_env(cls) -> "BrokerSettings":
        """Load broker settings from PACT_BROKER_* environment variables"""
        return cls(
            url=os.environ.get(ENV_VAR_BROKER_HOST) or None,
            username=os.environ.get(ENV_VAR_BROKER_USERNAME) or None,
            password=os.environ.get(ENV_VAR_BROKER_PASSWORD) or None,
            token=os.environ.get(ENV_VAR_BROKER_TOKEN) or None,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.url)


def integrated_tests_enabled() -> bool:
    """Whether verification against a real pact broker is enabled"""
    return bool(os.environ.get(ENV_VAR_INTEGRATED_TESTS))

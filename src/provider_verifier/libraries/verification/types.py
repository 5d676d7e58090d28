from typing import Self

from pydantic import BaseModel, Field, PositiveInt, model_validator


class ProviderVerificationError(Exception):
    """Raised when the provider does not satisfy the consumer contract(s)"""


class VerifyRequest(BaseModel):
    """Options of a provider verification run

    Pact sources are either explicit pact URLs (local files, directories or URLs) or a pact broker. When both are
    given, the pact URLs win and the broker is only used for authentication/publishing
    """

    provider_base_url: str
    pact_urls: list[str] = Field(default_factory=list)
    provider_states_setup_url: str | None = None
    broker_url: str | None = None
    broker_username: str | None = None
    broker_password: str | None = None
    broker_token: str | None = None
    tags: list[str] = Field(default_factory=list)
    publish_verification_results: bool = False
    provider_version: str | None = None
    provider_branch: str | None = None
    provider_tags: list[str] = Field(default_factory=list)
    custom_provider_headers: dict[str, str] = Field(default_factory=dict)
    request_timeout: PositiveInt | None = None

    @model_validator(mode="after")
    def validate_options(self) -> Self:
        if not self.pact_urls and not self.broker_url:
            raise ValueError("Either pact_urls or broker_url must be provided")
        if bool(self.broker_username) != bool(self.broker_password):
            raise ValueError("broker_username and broker_password must be provided together")
        if self.publish_verification_results and not self.provider_version:
            raise ValueError("provider_version is required to publish verification results")
        return self

    @property
    def uses_broker(self) -> bool:
        return not self.pact_urls

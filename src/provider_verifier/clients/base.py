from __future__ import annotations

import json
from typing import Any, Self

from provider_verifier import DEFAULT_ENV, get_config_dir
from provider_verifier.libraries.common.logging import get_logger
from provider_verifier.libraries.rest_client import RestClient

logger = get_logger(__name__)


class APIClient:
    """Base class for all clients"""

    def __init__(self, app_name: str, env: str = DEFAULT_ENV, rest_client: RestClient | None = None) -> None:
        self.app_name = app_name
        self.env = env

        if rest_client:
            self.rest_client = rest_client
            self._base_url = rest_client.base_url
        else:
            url_cfg = get_config_dir() / "urls.json"
            urls = json.loads(url_cfg.read_text())
            try:
                self._base_url = urls[self.env][self.app_name]
            except KeyError:
                raise NotImplementedError(
                    f"Please add base URL for app '{self.app_name}' (env={self.env}) in {url_cfg}"
                ) from None
            self.rest_client = RestClient(self._base_url)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        self.rest_client.close()

    @property
    def base_url(self) -> str:
        return self._base_url

    @base_url.setter
    def base_url(self, url: str) -> None:
        self._base_url = url
        self.rest_client.base_url = url

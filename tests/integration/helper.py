import re

from provider_verifier.clients import APIClient


def update_client_base_url(client: APIClient, port: int) -> None:
    base_url = client.base_url
    client.base_url = re.sub(r"(.+):\d+", rf"\1:{port}", base_url)

from typing import Any

import pytest

from provider_verifier.libraries.rest_client.utils import generate_query_string, mask_sensitive_value

pytestmark = [pytest.mark.unittest]


@pytest.mark.parametrize(
    ("body", "expected_body"),
    [
        ({"username": "jmarie", "password": "issilly"}, {"username": "jmarie", "password": "*******"}),
        ({"user": {"name": "foo", "password": "bar"}}, {"user": {"name": "foo", "password": "***"}}),
        ({"users": [{"password": "bar"}]}, {"users": [{"password": "***"}]}),
        ({"state": "User jmarie exists"}, {"state": "User jmarie exists"}),
        ("plain text", "plain text"),
    ],
)
def test_mask_sensitive_value(body: Any, expected_body: Any) -> None:
    assert mask_sensitive_value(body) == expected_body


def test_generate_query_string() -> None:
    query = generate_query_string({"tag": ["latest", "sit4"], "pending": True, "skip": None})
    assert query == "tag=latest&tag=sit4&pending=true"

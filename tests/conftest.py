import sys
from typing import Any

import pytest
from pytest import Item
from quart import Quart
from quart.typing import TestClientProtocol

from login_provider import create_app


def pytest_make_parametrize_id(val: Any, argname: str) -> str:
    return f"{argname}={val!r}"


def pytest_runtest_setup(item: Item) -> None:
    if item.config.option.capture == "no":
        # Improve the readability of console logs
        sys.stdout.write("\n")


@pytest.fixture
def app() -> Quart:
    """A new login provider app"""
    return create_app()


@pytest.fixture
def client(app: Quart) -> TestClientProtocol:
    """Quart test client of the app"""
    return app.test_client()

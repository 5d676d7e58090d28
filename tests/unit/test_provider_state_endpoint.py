import pytest
from quart import Quart
from quart.typing import TestClientProtocol

from login_provider.provider_states import (
    STATE_USER_DOES_NOT_EXIST,
    STATE_USER_EXISTS,
    STATE_USER_UNAUTHORIZED,
    get_state_manager,
)

pytestmark = [pytest.mark.unittest]


@pytest.mark.parametrize(
    ("state", "expected_state", "num_users"),
    [
        (STATE_USER_EXISTS, STATE_USER_EXISTS, 1),
        (STATE_USER_UNAUTHORIZED, STATE_USER_UNAUTHORIZED, 1),
        (STATE_USER_DOES_NOT_EXIST, STATE_USER_DOES_NOT_EXIST, 0),
        ("Some unknown state", STATE_USER_DOES_NOT_EXIST, 0),
    ],
)
async def test_setup_provider_state(
    app: Quart, client: TestClientProtocol, state: str, expected_state: str, num_users: int
) -> None:
    """Check that the setup endpoint switches the dataset and responds with an empty body"""
    r = await client.post("/setup", json={"state": state})
    assert r.status_code == 200
    assert await r.get_data(as_text=True) == ""
    assert r.headers["Content-Type"] == "application/json; charset=utf-8"

    state_manager = get_state_manager(app)
    assert state_manager.current_state == expected_state
    assert len(state_manager.repository) == num_users


async def test_setup_provider_state_with_params_and_action(app: Quart, client: TestClientProtocol) -> None:
    """Check the body format the pact verifier sends"""
    r = await client.post(
        "/setup", json={"state": STATE_USER_UNAUTHORIZED, "params": {"id": 10}, "action": "setup"}
    )
    assert r.status_code == 200
    assert get_state_manager(app).current_state == STATE_USER_UNAUTHORIZED


async def test_teardown_provider_state(app: Quart, client: TestClientProtocol) -> None:
    """Check that a teardown restores the default dataset"""
    r = await client.post("/setup", json={"state": STATE_USER_DOES_NOT_EXIST})
    assert r.status_code == 200
    assert get_state_manager(app).current_state == STATE_USER_DOES_NOT_EXIST

    r = await client.post("/setup", json={"state": STATE_USER_DOES_NOT_EXIST, "action": "teardown"})
    assert r.status_code == 200
    assert await r.get_data(as_text=True) == ""
    assert get_state_manager(app).current_state == STATE_USER_EXISTS


@pytest.mark.parametrize("body", ["{}", "null", '{"state": null}', '{"description": "no state here"}'])
async def test_setup_provider_state_without_state_name(app: Quart, client: TestClientProtocol, body: str) -> None:
    """JSON without a state name selects the fallback dataset"""
    r = await client.post("/setup", data=body, headers={"Content-Type": "application/json"})
    assert r.status_code == 200
    assert await r.get_data(as_text=True) == ""
    assert get_state_manager(app).current_state == STATE_USER_DOES_NOT_EXIST


async def test_setup_provider_state_ignores_unknown_fields(app: Quart, client: TestClientProtocol) -> None:
    r = await client.post("/setup", json={"state": STATE_USER_UNAUTHORIZED, "consumer": "jmarie"})
    assert r.status_code == 200
    assert get_state_manager(app).current_state == STATE_USER_UNAUTHORIZED


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        '{"state": "User jmarie exists"',
        "[]",
        '"User jmarie exists"',
        '{"state": 123}',
        '{"state": "User jmarie exists", "action": "unknown"}',
    ],
)
async def test_setup_provider_state_with_malformed_body(
    app: Quart, client: TestClientProtocol, body: str
) -> None:
    """Check that a body that doesn't parse is rejected with 503 and an empty body, and the dataset stays as is"""
    state_manager = get_state_manager(app)
    state_manager.set_state(STATE_USER_UNAUTHORIZED)

    r = await client.post("/setup", data=body, headers={"Content-Type": "application/json"})
    assert r.status_code == 503
    assert await r.get_data(as_text=True) == ""
    assert state_manager.current_state == STATE_USER_UNAUTHORIZED

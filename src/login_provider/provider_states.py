"""Provider states for contract verification

Each provider state maps to a factory that builds a fresh user dataset. The verifier switches the provider into the
state recorded in an interaction (via POST /setup) right before replaying the interaction.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from login_provider.api.user.models import User, UserRepository, UserType

if TYPE_CHECKING:
    from quart import Quart

EXTENSION_NAME = "provider_state_manager"

STATE_USER_EXISTS = "User jmarie exists"
STATE_USER_UNAUTHORIZED = "User jmarie is unauthorized"
STATE_USER_DOES_NOT_EXIST = "User jmarie does not exist"

JMARIE_NAME = "Jean-Marie de La Beaujardière😀😍"
JMARIE_USERNAME = "jmarie"
JMARIE_PASSWORD = "issilly"


def jmarie_exists() -> UserRepository:
    return UserRepository(
        {
            JMARIE_USERNAME: User(
                name=JMARIE_NAME, username=JMARIE_USERNAME, password=JMARIE_PASSWORD, type=UserType.ADMIN
            )
        }
    )


def jmarie_unauthorized() -> UserRepository:
    return UserRepository(
        {
            JMARIE_USERNAME: User(
                name=JMARIE_NAME, username=JMARIE_USERNAME, password=f"{JMARIE_PASSWORD}1", type=UserType.BLOCKED
            )
        }
    )


def jmarie_does_not_exist() -> UserRepository:
    return UserRepository()


class ProviderStateManager:
    """Manages the user dataset the provider currently serves"""

    def __init__(
        self,
        default_state: str = STATE_USER_EXISTS,
        fallback_state: str = STATE_USER_DOES_NOT_EXIST,
    ) -> None:
        self.default_state = default_state
        self.fallback_state = fallback_state
        self._factories: dict[str, Callable[[], UserRepository]] = {}
        self._lock = threading.Lock()
        self.register(STATE_USER_EXISTS, jmarie_exists)
        self.register(STATE_USER_UNAUTHORIZED, jmarie_unauthorized)
        self.register(STATE_USER_DOES_NOT_EXIST, jmarie_does_not_exist)
        self._current_state = self.default_state
        self._repository = self._factories[self.default_state]()

    def init_app(self, app: Quart) -> None:
        app.extensions[EXTENSION_NAME] = self

    @property
    def states(self) -> list[str]:
        with self._lock:
            return list(self._factories)

    @property
    def current_state(self) -> str:
        with self._lock:
            return self._current_state

    @property
    def repository(self) -> UserRepository:
        with self._lock:
            return self._repository

    def snapshot(self) -> tuple[str, UserRepository]:
        """Return the current state and its dataset as a consistent pair"""
        with self._lock:
            return self._current_state, self._repository

    def register(self, state: str, factory: Callable[[], UserRepository]) -> None:
        """Register a dataset factory for a provider state

        :param state: Provider state name
        :param factory: A callable that returns a new UserRepository for the state
        """
        with self._lock:
            self._factories[state] = factory

    def set_state(self, state: str | None) -> UserRepository:
        """Switch the dataset to the one for the given provider state

        Unknown (or empty) states select the fallback dataset.

        :param state: Provider state name
        """
        with self._lock:
            if state not in self._factories:
                state = self.fallback_state
            self._current_state = state
            self._repository = self._factories[state]()
            return self._repository

    def reset(self) -> UserRepository:
        """Restore the default dataset"""
        return self.set_state(self.default_state)


def get_state_manager(app: Quart | None = None) -> ProviderStateManager:
    """Return the provider state manager of the app (or the current app)"""
    if app is None:
        from quart import current_app

        app = current_app
    return app.extensions[EXTENSION_NAME]

from enum import Enum
from typing import Any

from pydantic import BaseModel, StrictStr


class StateAction(Enum):
    SETUP = "setup"
    TEARDOWN = "teardown"


class ProviderState(BaseModel):
    state: StrictStr | None = None
    params: dict[str, Any] | None = None
    action: StateAction = StateAction.SETUP

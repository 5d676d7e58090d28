from enum import Enum

from pydantic import BaseModel, Field, RootModel


class UserType(Enum):
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"
    BLOCKED = "blocked"


class UserNotFoundError(LookupError):
    """Raised when a user does not exist in the repository"""


class PublicUser(BaseModel):
    name: str
    username: str
    type: UserType


class User(PublicUser):
    password: str = Field(..., repr=False)

    @property
    def is_authorized(self) -> bool:
        return self.type is not UserType.BLOCKED

    def to_public(self) -> PublicUser:
        return PublicUser.model_validate(self.model_dump(exclude={"password"}))


class UserRepository(RootModel[dict[str, User]]):
    """In-memory users keyed by username"""

    root: dict[str, User] = Field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.root)

    def __contains__(self, username: object) -> bool:
        return username in self.root

    def by_username(self, username: str) -> User:
        """Look up a user

        :param username: Username of the user
        """
        try:
            return self.root[username]
        except KeyError:
            raise UserNotFoundError(f"User '{username}' does not exist") from None

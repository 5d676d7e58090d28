from pydantic import BaseModel

from login_provider.api.user.models import PublicUser


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    user: PublicUser

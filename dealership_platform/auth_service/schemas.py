from pydantic import BaseModel

from typing import Optional

from ..common.schemas import Identity, Role


class UserLogin(BaseModel):
    # Both optional so a missing field is reported as 400, not a schema error
    email: Optional[str] = None
    password: Optional[str] = None


class LoginUser(BaseModel):
    id: int
    name: str
    email: str
    role: Role


class LoginResponse(BaseModel):
    token: str
    user: LoginUser


class VerifyResponse(BaseModel):
    user: Identity

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from typing import Annotated, List, Optional

from ..common.schemas import Pagination, Role


def check_email(value: str) -> str:
    """Reject malformed addresses but store exactly what was submitted."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(f"value is not a valid email address: {exc}") from exc
    return value


Email = Annotated[str, AfterValidator(check_email)]


class UserCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=3, max_length=100)
    email: Email
    password: str = Field(..., min_length=6)
    role: Role = "user"


class UserUpdate(BaseModel):
    """Partial update; only name and email may change."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=3, max_length=100)
    email: Optional[Email] = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class UserListResponse(BaseModel):
    users: List[UserOut]
    pagination: Pagination

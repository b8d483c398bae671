"""
Pydantic schemas shared across services.
"""
from pydantic import BaseModel, Field
from typing import Literal

Role = Literal["admin", "user"]


class Identity(BaseModel):
    """
    Identity encoded in an access token.

    Returned by the auth service's verify endpoint and bound to the request
    by the vehicle service's authorization gate.
    """
    id: int = Field(..., description="User ID")
    role: Role = Field(..., description="User role")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error message")


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int

"""
Authorization gate for vehicle endpoints.

Each request's bearer token is verified by the Auth Service before the
controller runs. Anything short of a clean verification is answered with 401.
"""
from fastapi import Depends, Header, Request
from typing import Optional

from ..common.errors import ServiceError
from ..common.results import ErrorKind, Failure
from ..common.schemas import Identity
from ..common.security import extract_bearer
from .client import AuthServiceClient

MISSING_TOKEN = "No token provided"
INVALID_TOKEN = "Invalid token"


def get_auth_client(request: Request) -> AuthServiceClient:
    """The client created by the application lifespan, shared by every request."""
    return request.app.state.auth_client


async def require_identity(
    request: Request,
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    client: AuthServiceClient = Depends(get_auth_client)
) -> Identity:
    token = extract_bearer(authorization)
    if token is None:
        raise ServiceError(Failure(ErrorKind.AUTH, MISSING_TOKEN))

    identity = await client.verify(token)
    if identity is None:
        raise ServiceError(Failure(ErrorKind.AUTH, INVALID_TOKEN))

    request.state.identity = identity
    return identity

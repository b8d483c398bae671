"""
Login and token verification endpoints
"""
from fastapi import APIRouter, Body, Depends, Header
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Optional

from ...common.results import Failure, Ok, to_response
from ...common.schemas import ErrorResponse
from ...common.security import extract_bearer
from ..auth import TokenService, authenticate, get_token_service
from ..db import get_db
from ..schemas import LoginResponse, UserLogin, VerifyResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/login",
    responses={
        200: {"model": LoginResponse},
        400: {"description": "Email or password missing", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Exchange email and password for an access token",
)
def login(
    credentials: Optional[UserLogin] = Body(default=None),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service)
) -> JSONResponse:
    return to_response(authenticate(db, credentials, tokens))


@router.post(
    "/verify",
    responses={
        200: {"model": VerifyResponse},
        401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
    },
    summary="Verify a bearer token and return the identity it carries",
)
def verify(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service)
) -> JSONResponse:
    result = tokens.verify(extract_bearer(authorization))
    if isinstance(result, Failure):
        return to_response(result)
    return to_response(Ok({"user": result.model_dump()}))

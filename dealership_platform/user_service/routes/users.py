"""
User CRUD endpoints
"""
from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Any, Dict, Optional

from ...common.results import to_response
from ...common.schemas import ErrorResponse
from ..controller import user_controller
from ..db import get_db
from ..schemas import UserListResponse

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid payload", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Create a user",
)
def create_user(payload: Optional[Dict[str, Any]] = Body(default=None), db: Session = Depends(get_db)) -> JSONResponse:
    return to_response(user_controller.create(db, payload))


@router.get(
    "",
    responses={200: {"model": UserListResponse}, 400: {"model": ErrorResponse}},
    summary="List users, newest first",
)
def list_users(
    page: int = Query(1, description="Page number, starting at 1"),
    limit: int = Query(10, description="Page size"),
    db: Session = Depends(get_db)
) -> JSONResponse:
    return to_response(user_controller.list(db, page=page, limit=limit))


@router.get("/{user_id}", responses={404: {"model": ErrorResponse}}, summary="Get a user")
def get_user(user_id: int, db: Session = Depends(get_db)) -> JSONResponse:
    return to_response(user_controller.get(db, user_id))


@router.put(
    "/{user_id}",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Update a user's name and/or email",
)
def update_user(
    user_id: int,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db)
) -> JSONResponse:
    return to_response(user_controller.update(db, user_id, payload))


@router.delete("/{user_id}", responses={404: {"model": ErrorResponse}}, summary="Delete a user")
def delete_user(user_id: int, db: Session = Depends(get_db)) -> JSONResponse:
    return to_response(user_controller.delete(db, user_id))

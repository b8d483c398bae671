"""
Vehicle CRUD endpoints. Every route sits behind the authorization gate.
"""
from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Any, Dict, Optional

from ...common.results import to_response
from ...common.schemas import ErrorResponse, Identity
from ..controller import mutation_guard, vehicle_controller, vehicle_filters
from ..db import get_db
from ..gate import require_identity
from ..schemas import VehicleListResponse, VehicleStatus

router = APIRouter(
    prefix="/api/vehicles",
    tags=["vehicles"],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"description": "Plate already registered", "model": ErrorResponse}},
    summary="Register a vehicle",
)
def create_vehicle(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db)
) -> JSONResponse:
    return to_response(vehicle_controller.create(db, payload, created_by=identity.id))


@router.get(
    "",
    responses={200: {"model": VehicleListResponse}, 400: {"model": ErrorResponse}},
    summary="List vehicles, newest first",
)
def list_vehicles(
    vehicle_status: Optional[VehicleStatus] = Query(None, alias="status"),
    brand: Optional[str] = Query(None, description="Substring match on brand"),
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    page: int = Query(1, description="Page number, starting at 1"),
    limit: int = Query(10, description="Page size"),
    _identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db)
) -> JSONResponse:
    filters = vehicle_filters(status=vehicle_status, brand=brand, min_price=min_price, max_price=max_price)
    return to_response(vehicle_controller.list(db, page=page, limit=limit, filters=filters))


@router.get("/{vehicle_id}", responses={404: {"model": ErrorResponse}}, summary="Get a vehicle")
def get_vehicle(
    vehicle_id: int,
    _identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db)
) -> JSONResponse:
    return to_response(vehicle_controller.get(db, vehicle_id))


@router.put(
    "/{vehicle_id}",
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update a vehicle",
)
def update_vehicle(
    vehicle_id: int,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db)
) -> JSONResponse:
    return to_response(vehicle_controller.update(db, vehicle_id, payload, authorize=mutation_guard(identity)))


@router.delete(
    "/{vehicle_id}",
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete a vehicle",
)
def delete_vehicle(
    vehicle_id: int,
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db)
) -> JSONResponse:
    return to_response(vehicle_controller.delete(db, vehicle_id, authorize=mutation_guard(identity)))

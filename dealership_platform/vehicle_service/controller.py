"""
Vehicle CRUD controller, listing filters and the mutation policy.
"""
from typing import Any, List, Optional

from ..common.crud import Authorizer, CrudController
from ..common.results import ErrorKind, Failure
from ..common.schemas import Identity
from .config import settings
from .models import Vehicle
from .schemas import VehicleCreate, VehicleUpdate

vehicle_controller = CrudController(
    Vehicle,
    resource="vehicle",
    collection="vehicles",
    create_schema=VehicleCreate,
    update_schema=VehicleUpdate,
    unique_field="plate",
    serialize=Vehicle.to_dict,
    partial_update=settings.VEHICLE_PARTIAL_UPDATE,
    max_limit=settings.MAX_PAGE_LIMIT,
)


def vehicle_filters(
    status: Optional[str] = None,
    brand: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> List[Any]:
    """Build listing criteria: status equality, brand substring, price range."""
    filters = []
    if status:
        filters.append(Vehicle.status == status)
    if brand:
        filters.append(Vehicle.brand.contains(brand, autoescape=True))
    if min_price is not None:
        filters.append(Vehicle.price >= min_price)
    if max_price is not None:
        filters.append(Vehicle.price <= max_price)
    return filters


def mutation_guard(identity: Identity, policy: Optional[str] = None) -> Optional[Authorizer]:
    """
    Return the check applied before a vehicle is updated or deleted.

    Under the ``any`` policy there is no check. Under ``owner_or_admin`` only
    the identity that created the vehicle, or an admin, may change it.
    """
    policy = policy or settings.VEHICLE_MUTATION_POLICY
    if policy == "any":
        return None

    def authorize(vehicle: Vehicle) -> Optional[Failure]:
        if identity.role == "admin" or vehicle.created_by == identity.id:
            return None
        return Failure(ErrorKind.FORBIDDEN, "Not allowed to modify this vehicle")

    return authorize

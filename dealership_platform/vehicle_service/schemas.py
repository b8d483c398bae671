from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from typing import List, Literal, Optional

from ..common.schemas import Pagination

PLATE_PATTERN = r"^[A-Z]{3}[0-9][A-Z0-9][0-9]{2}$"

VehicleStatus = Literal["available", "sold", "maintenance"]


def check_price_precision(v):
    """Prices are stored as DECIMAL(12, 2); refuse values the column would round."""
    if v is not None and Decimal(str(v)).as_tuple().exponent < -2:
        raise ValueError("price must have at most 2 decimal places")
    return v


class VehicleCreate(BaseModel):
    """Full vehicle payload, used for creation and for full updates."""
    model_config = ConfigDict(extra="forbid")

    brand: str = Field(..., min_length=2, max_length=50)
    model: str = Field(..., min_length=2, max_length=100)
    year: int = Field(..., ge=1900, le=2030)
    color: str = Field(..., min_length=3, max_length=30)
    plate: str = Field(..., pattern=PLATE_PATTERN, description="e.g. ABC1D23")
    price: float = Field(..., gt=0)
    status: VehicleStatus = "available"

    _price_precision = field_validator("price")(check_price_precision)


class VehicleUpdate(BaseModel):
    """Partial update, used when VEHICLE_PARTIAL_UPDATE is enabled."""
    model_config = ConfigDict(extra="forbid")

    brand: Optional[str] = Field(None, min_length=2, max_length=50)
    model: Optional[str] = Field(None, min_length=2, max_length=100)
    year: Optional[int] = Field(None, ge=1900, le=2030)
    color: Optional[str] = Field(None, min_length=3, max_length=30)
    plate: Optional[str] = Field(None, pattern=PLATE_PATTERN)
    price: Optional[float] = Field(None, gt=0)
    status: Optional[VehicleStatus] = None

    _price_precision = field_validator("price")(check_price_precision)

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class VehicleOut(BaseModel):
    id: int
    brand: str
    model: str
    year: int
    color: str
    plate: str
    price: float
    status: VehicleStatus
    created_by: int
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class VehicleListResponse(BaseModel):
    vehicles: List[VehicleOut]
    pagination: Pagination

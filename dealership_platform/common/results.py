"""
Explicit result types returned by controller operations.

Controllers never raise for expected outcomes (bad input, missing rows,
duplicates). They return either an ``Ok`` carrying the response body or a
``Failure`` carrying an ``ErrorKind``; the HTTP layer turns both into a
response with ``to_response``.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTH = "auth"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTH: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


def status_for(kind: ErrorKind) -> int:
    return STATUS_BY_KIND[kind]


@dataclass(frozen=True)
class Ok:
    body: Dict[str, Any] = field(default_factory=dict)
    status_code: int = status.HTTP_200_OK


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return status_for(self.kind)

    def to_body(self) -> Dict[str, str]:
        return {"error": self.message}


Result = Union[Ok, Failure]


def internal_failure() -> Failure:
    """Failure returned for store or network errors; never carries detail."""
    return Failure(ErrorKind.INTERNAL, INTERNAL_ERROR_MESSAGE)


def to_response(result: Result) -> JSONResponse:
    if isinstance(result, Failure):
        return JSONResponse(status_code=result.status_code, content=result.to_body())
    return JSONResponse(status_code=result.status_code, content=jsonable_encoder(result.body))

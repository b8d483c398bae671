"""
Generic create/list/get/update/delete controller.

One ``CrudController`` is instantiated per resource (users, vehicles). It
validates payloads with pydantic schemas, enforces a single uniqueness
constraint, shapes paginated listings and returns explicit ``Ok``/``Failure``
results instead of raising.
"""
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Optional, Type, Union
import logging
import math

from pydantic import BaseModel, ValidationError
from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import first_error_message
from .results import ErrorKind, Failure, Ok, Result, internal_failure

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
# Largest row offset/limit every supported backend accepts as a signed 32-bit integer
MAX_ROW_OFFSET = 2 ** 31 - 1

Authorizer = Callable[[Any], Optional[Failure]]


class CrudController:
    """
    CRUD operations for one SQLAlchemy model.

    Args:
        model: Declarative model with ``id``, ``created_at`` and ``updated_at``
        resource: Singular key used in response bodies ("user")
        collection: Plural key used in listings ("users")
        create_schema: Schema validating create payloads (and full updates)
        update_schema: Schema validating partial updates
        unique_field: Column that must be unique across records
        serialize: Turns a record into its public representation
        prepare: Maps validated values to column values (e.g. hashes secrets)
        partial_update: Validate updates against ``update_schema`` with only
            the supplied fields; otherwise require a full ``create_schema``
        max_limit: Largest page size accepted by ``list``; None for no bound
    """

    def __init__(
        self,
        model,
        *,
        resource: str,
        collection: str,
        create_schema: Type[BaseModel],
        update_schema: Type[BaseModel],
        unique_field: str,
        serialize: Callable[[Any], Dict[str, Any]],
        prepare: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
        partial_update: bool = True,
        max_limit: Optional[int] = None,
        label: Optional[str] = None,
    ):
        self.model = model
        self.resource = resource
        self.collection = collection
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.unique_field = unique_field
        self.serialize = serialize
        self.prepare = prepare or (lambda values: values)
        self.partial_update = partial_update
        self.max_limit = max_limit
        self.label = label or resource.capitalize()

    @property
    def not_found(self) -> Failure:
        return Failure(ErrorKind.NOT_FOUND, f"{self.label} not found")

    @property
    def conflict(self) -> Failure:
        return Failure(ErrorKind.CONFLICT, f"{self.label} with this {self.unique_field} already exists")

    def validate(self, schema: Type[BaseModel], payload: Any, partial: bool) -> Union[Dict[str, Any], Failure]:
        """Validate ``payload``; on failure report only the first violated rule."""
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            return Failure(ErrorKind.VALIDATION, "Request body must be a JSON object")
        try:
            data = schema.model_validate(payload)
        except ValidationError as exc:
            return Failure(ErrorKind.VALIDATION, first_error_message(exc.errors()))
        values = data.model_dump(exclude_unset=partial)
        if partial and not values:
            return Failure(ErrorKind.VALIDATION, "At least one field must be provided")
        return values

    def _find(self, db: Session, record_id: int):
        return db.query(self.model).filter(self.model.id == record_id).first()

    def _is_duplicate(self, db: Session, value: Any, exclude_id: Optional[int] = None) -> bool:
        column = getattr(self.model, self.unique_field)
        query = db.query(self.model.id).filter(column == value)
        if exclude_id is not None:
            query = query.filter(self.model.id != exclude_id)
        return query.first() is not None

    def create(self, db: Session, payload: Any, **stamps: Any) -> Result:
        values = self.validate(self.create_schema, payload, partial=False)
        if isinstance(values, Failure):
            return values

        try:
            if self._is_duplicate(db, values[self.unique_field]):
                return self.conflict

            now = datetime.utcnow()
            record = self.model(**self.prepare(values), **stamps, created_at=now, updated_at=now)
            db.add(record)
            db.commit()
            db.refresh(record)
        except IntegrityError:
            # Lost a race against a concurrent insert of the same key
            db.rollback()
            logger.info("%s create rejected by unique constraint on %s", self.label, self.unique_field)
            return self.conflict
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to create {self.resource}: {e}", exc_info=True)
            return internal_failure()

        logger.info("%s created: id=%s", self.label, record.id)
        return Ok({"message": f"{self.label} created successfully", self.resource: self.serialize(record)}, 201)

    def list(
        self,
        db: Session,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        filters: Iterable[Any] = (),
    ) -> Result:
        """
        Return one page of records, newest first, with pagination metadata.

        ``total`` counts every record matching ``filters``; ``totalPages`` is
        ``ceil(total / limit)``.
        """
        if page < 1 or limit < 1:
            return Failure(ErrorKind.VALIDATION, "page and limit must be positive integers")
        if self.max_limit is not None and limit > self.max_limit:
            return Failure(ErrorKind.VALIDATION, f"limit must not exceed {self.max_limit}")
        if limit > MAX_ROW_OFFSET or (page - 1) * limit > MAX_ROW_OFFSET:
            return Failure(ErrorKind.VALIDATION, "page is out of range")

        filters = list(filters)
        try:
            query = db.query(self.model)
            if filters:
                query = query.filter(and_(*filters))
            total = query.count()
            records = (
                query.order_by(self.model.created_at.desc(), self.model.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to list {self.collection}: {e}", exc_info=True)
            return internal_failure()

        return Ok({
            self.collection: [self.serialize(record) for record in records],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "totalPages": math.ceil(total / limit),
            },
        })

    def get(self, db: Session, record_id: int) -> Result:
        try:
            record = self._find(db, record_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch {self.resource} {record_id}: {e}", exc_info=True)
            return internal_failure()
        if record is None:
            return self.not_found
        return Ok({self.resource: self.serialize(record)})

    def update(self, db: Session, record_id: int, payload: Any, authorize: Optional[Authorizer] = None) -> Result:
        if self.partial_update:
            values = self.validate(self.update_schema, payload, partial=True)
        else:
            values = self.validate(self.create_schema, payload, partial=False)
        if isinstance(values, Failure):
            return values

        try:
            record = self._find(db, record_id)
            if record is None:
                return self.not_found
            if authorize is not None:
                denied = authorize(record)
                if denied is not None:
                    return denied
            if self.unique_field in values and self._is_duplicate(db, values[self.unique_field], exclude_id=record_id):
                return self.conflict

            for column, value in self.prepare(values).items():
                setattr(record, column, value)
            record.updated_at = datetime.utcnow()
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info("%s %s update rejected by unique constraint on %s", self.label, record_id, self.unique_field)
            return self.conflict
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to update {self.resource} {record_id}: {e}", exc_info=True)
            return internal_failure()

        logger.info("%s updated: id=%s fields=%s", self.label, record_id, sorted(values))
        return Ok({"message": f"{self.label} updated successfully"})

    def delete(self, db: Session, record_id: int, authorize: Optional[Authorizer] = None) -> Result:
        try:
            record = self._find(db, record_id)
            if record is None:
                return self.not_found
            if authorize is not None:
                denied = authorize(record)
                if denied is not None:
                    return denied
            db.delete(record)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to delete {self.resource} {record_id}: {e}", exc_info=True)
            return internal_failure()

        logger.info("%s deleted: id=%s", self.label, record_id)
        return Ok({"message": f"{self.label} deleted successfully"})

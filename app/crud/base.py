"""
Storage adapter base.

Every entity is reached through a CRUD object built on this class. Query
filters are passed as ``Filter(field, op, value)`` tuples and translated
here into SQLAlchemy expressions, so callers never assemble query text.

Writes only ``flush``; committing is the caller's unit of work
(``app.core.db.transaction``).
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.db import Base
from app.core.errors import ValidationError

ModelType = TypeVar("ModelType", bound=Base)


@dataclass(frozen=True)
class Filter:
    field: str
    op: str = "eq"  # eq, ne, lt, le, gt, ge, in, contains
    value: Any = None


_OPERATORS = {
    "eq": lambda column, value: column == value,
    "ne": lambda column, value: column != value,
    "lt": lambda column, value: column < value,
    "le": lambda column, value: column <= value,
    "gt": lambda column, value: column > value,
    "ge": lambda column, value: column >= value,
    "in": lambda column, value: column.in_(list(value)),
    "contains": lambda column, value: column.contains(value),
}


class CRUDBase(Generic[ModelType]):
    def __init__(self, model: Type[ModelType]):
        self.model = model

    def _expression(self, flt: Filter):
        column = getattr(self.model, flt.field, None)
        if column is None:
            raise ValidationError(f"Unknown filter field '{flt.field}' for {self.model.__tablename__}")
        operator = _OPERATORS.get(flt.op)
        if operator is None:
            raise ValidationError(f"Unsupported filter operator '{flt.op}'")
        return operator(column, flt.value)

    def _filtered(self, db: Session, filters: Sequence[Filter]):
        q = db.query(self.model)
        for flt in filters:
            q = q.filter(self._expression(flt))
        return q

    def get(self, db: Session, id: int) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def get_by(self, db: Session, *filters: Filter) -> Optional[ModelType]:
        return self._filtered(db, filters).first()

    def query(
        self,
        db: Session,
        filters: Sequence[Filter] = (),
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[ModelType]:
        q = self._filtered(db, filters)
        if order_by:
            column = getattr(self.model, order_by)
            q = q.order_by(column.desc() if descending else column.asc())
        if skip:
            q = q.offset(skip)
        if limit is not None:
            q = q.limit(limit)
        return q.all()

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return self.query(db, order_by="created_at", descending=True, skip=skip, limit=limit)

    def count(self, db: Session, filters: Sequence[Filter] = ()) -> int:
        q = db.query(func.count(self.model.id))
        for flt in filters:
            q = q.filter(self._expression(flt))
        return q.scalar() or 0

    def count_by(self, db: Session, field: str, filters: Sequence[Filter] = ()) -> Dict[Any, int]:
        """Row counts grouped by one column."""
        column = getattr(self.model, field)
        q = db.query(column, func.count(self.model.id))
        for flt in filters:
            q = q.filter(self._expression(flt))
        return {value: count for value, count in q.group_by(column).all()}

    def sum(self, db: Session, field: str, filters: Sequence[Filter] = ()) -> Any:
        q = db.query(func.coalesce(func.sum(getattr(self.model, field)), 0))
        for flt in filters:
            q = q.filter(self._expression(flt))
        return q.scalar()

    def create(self, db: Session, *, obj_in: Union[Dict[str, Any], BaseModel]) -> ModelType:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        db_obj = self.model(**data)
        db.add(db_obj)
        db.flush()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, *, db_obj: ModelType, obj_in: Union[Dict[str, Any], BaseModel]) -> ModelType:
        """Update a record with new data."""
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        db.add(db_obj)
        db.flush()
        db.refresh(db_obj)
        return db_obj

    def remove(self, db: Session, *, id: int) -> Optional[ModelType]:
        obj = self.get(db, id)
        if obj is not None:
            db.delete(obj)
            db.flush()
        return obj

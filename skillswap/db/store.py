"""
Storage primitives used by every component.

The core never builds queries of its own: it reads and writes through
``select`` / ``insert`` / ``update`` / ``delete``, all filtering by exact match.
Failures come back as ``StoreResult.error`` instead of raising, so each caller
decides whether a failed call aborts the operation (``unwrap``) or degrades it.

Outside ``Store.atomic()`` every primitive commits on its own.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, NamedTuple, Optional, Sequence, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from skillswap.core.errors import StorageError

logger = logging.getLogger(__name__)

OrderBy = Union[str, Sequence[str]]


class StoreResult(NamedTuple):
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self):
        """Return ``data`` or raise ``StorageError`` with the store's message."""
        if self.error is not None:
            raise StorageError(self.error)
        return self.data


class Store:
    def __init__(self, db: Session):
        self.db = db
        self._depth = 0

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    @contextmanager
    def atomic(self):
        """Group several primitives into one transaction."""
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                self.db.rollback()
            raise
        self._depth -= 1
        if self._depth == 0:
            try:
                self.db.commit()
            except SQLAlchemyError as exc:
                self.db.rollback()
                logger.error("[DB] commit failed: %s", exc)
                raise StorageError(str(exc)) from exc

    # ------------------------------------------------------------------
    # primitives
    # ------------------------------------------------------------------

    def select(
        self,
        model,
        *,
        order_by: Optional[OrderBy] = None,
        limit: Optional[int] = None,
        for_update: bool = False,
        **filters,
    ) -> StoreResult:
        """Rows matching every ``field=value`` filter.

        ``order_by`` takes column names; a leading ``-`` sorts descending.
        """
        try:
            # Always reload from the database: a write through another session
            # must be visible to the next read.
            query = self._filtered(model, filters).populate_existing()
            if order_by:
                query = query.order_by(*self._ordering(model, order_by))
            if limit is not None:
                query = query.limit(limit)
            if for_update:
                query = query.with_for_update()
            return StoreResult(query.all())
        except SQLAlchemyError as exc:
            return self._failed("select", model, exc)

    def insert(self, model, values: Dict[str, Any]) -> StoreResult:
        try:
            row = model(**values)
            self.db.add(row)
            self.db.flush()
            self._commit()
            return StoreResult(row)
        except SQLAlchemyError as exc:
            return self._failed("insert", model, exc)

    def update(self, model, filters: Dict[str, Any], patch: Dict[str, Any]) -> StoreResult:
        """Apply ``patch`` to matching rows; ``data`` is the matched row count.

        Patch values may be SQL expressions, e.g. ``{"karma_points": User.karma_points + 5}``.
        """
        try:
            count = self._filtered(model, filters).update(patch, synchronize_session=False)
            self._commit()
            self.db.expire_all()
            return StoreResult(count)
        except SQLAlchemyError as exc:
            return self._failed("update", model, exc)

    def delete(self, model, **filters) -> StoreResult:
        try:
            count = self._filtered(model, filters).delete(synchronize_session=False)
            self._commit()
            self.db.expire_all()
            return StoreResult(count)
        except SQLAlchemyError as exc:
            return self._failed("delete", model, exc)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _filtered(self, model, filters: Dict[str, Any]):
        query = self.db.query(model)
        for name, value in filters.items():
            query = query.filter(getattr(model, name) == value)
        return query

    @staticmethod
    def _ordering(model, order_by: OrderBy):
        names = (order_by,) if isinstance(order_by, str) else order_by
        clauses = []
        for name in names:
            column = getattr(model, name.lstrip("-"))
            clauses.append(column.desc() if name.startswith("-") else column.asc())
        return clauses

    def _commit(self) -> None:
        if self._depth == 0:
            self.db.commit()

    def _failed(self, op: str, model, exc: SQLAlchemyError) -> StoreResult:
        if self._depth == 0:
            self.db.rollback()
        logger.error("[DB] %s on %s failed: %s", op, model.__tablename__, exc)
        return StoreResult(error=str(exc))

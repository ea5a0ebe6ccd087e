"""
Parcel Server — Document Store Adapter
=======================================

What:  Collection-style access (find / insert / update / delete / aggregate)
       over the five persisted entities.
Why:   Services think in documents and filters ("parcels where created_by = x"),
       not in SQL. Keeping the query construction here means each service
       method is a few lines of business rules.
How:   Collection wraps one ORM model over the request's AsyncSession.
       DocumentStore bundles the five collections and is injected into
       auth dependencies and route handlers through get_store().

Filter convention:
    Keyword filters are equality matches, and a filter whose value is None is
    skipped. Optional query parameters therefore pass straight through:

        await store.parcels.find(created_by=email, payment_status=None)
        → WHERE created_by = :email

    Positional criteria are ready-made SQLAlchemy expressions for anything
    else (IN, !=, ILIKE).

Write semantics:
    update_one / delete_by_id return the number of documents affected, so
    "zero documents modified" can be mapped to 404 by the caller. Writes are
    flushed immediately; the commit happens once per request in
    get_db_session(). insert_if_absent relies on a unique index and the
    dialect's ON CONFLICT DO NOTHING (PostgreSQL in production, SQLite in
    tests): of two concurrent inserts on one key, one writes and neither raises.
"""

import logging
import uuid
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from fastapi import Depends
from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_server.database import Base, get_db_session
from parcel_server.exceptions import DatabaseError, ValidationError
from parcel_server.models import Parcel, Payment, Rider, TrackingEvent, User

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def parse_object_id(value: Any, resource: str = "document") -> uuid.UUID:
    """
    Validate a client-supplied identifier before it reaches a query.

    Raises:
        ValidationError: The value is not a well-formed id (→ 400), which is
            distinct from a well-formed id that matches nothing (→ 404).
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError(
            message=f"Invalid {resource} id",
            field=f"{resource}_id",
            context={"value": str(value)[:64]},
        )


class Collection(Generic[ModelT]):
    """One named collection backed by an ORM model."""

    def __init__(self, session: AsyncSession, model: Type[ModelT], name: str):
        self.session = session
        self.model = model
        self.name = name

    # ── Query construction ────────────────────────────────────────────────

    def _where(self, criteria: tuple, filters: Dict[str, Any]) -> list:
        clauses = list(criteria)
        for field, value in filters.items():
            if value is None:
                continue
            clauses.append(getattr(self.model, field) == value)
        return clauses

    def _fail(self, action: str, exc: Exception) -> DatabaseError:
        logger.error(
            "Document store failure: %s %s: %s", action, self.name, str(exc),
            exc_info=True,
        )
        return DatabaseError(
            message=f"Failed to {action} {self.name}",
            context={"collection": self.name, "error_type": type(exc).__name__},
        )

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find(
        self,
        *criteria,
        order_by: Any = None,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> List[ModelT]:
        query = select(self.model).where(*self._where(criteria, filters))
        if order_by is not None:
            if isinstance(order_by, (list, tuple)):
                query = query.order_by(*order_by)
            else:
                query = query.order_by(order_by)
        if limit is not None:
            query = query.limit(limit)
        # populate_existing: a document updated earlier in this request is re-read
        query = query.execution_options(populate_existing=True)
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            raise self._fail("find", e)
        return list(result.scalars().all())

    async def find_one(self, *criteria, **filters: Any) -> Optional[ModelT]:
        documents = await self.find(*criteria, limit=1, **filters)
        return documents[0] if documents else None

    async def find_by_id(self, doc_id: uuid.UUID) -> Optional[ModelT]:
        return await self.find_one(self.model.id == doc_id)

    async def count_by(self, column_name: str) -> Dict[Any, int]:
        """Group every document by one column and count each group."""
        column = getattr(self.model, column_name)
        query = select(column, func.count()).group_by(column).order_by(column)
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            raise self._fail("aggregate", e)
        return {value: count for value, count in result.all()}

    # ── Writes ────────────────────────────────────────────────────────────

    async def insert_one(self, document: ModelT) -> ModelT:
        self.session.add(document)
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            raise self._fail("insert", e)
        logger.debug("Inserted %s %s", self.name, document.id)
        return document

    async def insert_if_absent(self, values: Dict[str, Any], *key_columns: str) -> bool:
        """
        INSERT ... ON CONFLICT (key_columns) DO NOTHING.

        Returns False when a document with the same key already exists,
        including one committed by a concurrent request after our last read.
        """
        dialect = self.session.get_bind().dialect.name
        insert_factory = sqlite_insert if dialect == "sqlite" else postgresql_insert
        statement = (
            insert_factory(self.model)
            .values(**values)
            .on_conflict_do_nothing(index_elements=list(key_columns))
        )
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise self._fail("insert", e)
        return (result.rowcount or 0) > 0

    async def update_one(
        self,
        *criteria,
        values: Dict[str, Any],
        **filters: Any,
    ) -> int:
        """Apply `values` to the documents matching the filters; returns the count."""
        statement = (
            update(self.model)
            .where(*self._where(criteria, filters))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise self._fail("update", e)
        return result.rowcount or 0

    async def update_by_id(self, doc_id: uuid.UUID, values: Dict[str, Any]) -> int:
        return await self.update_one(self.model.id == doc_id, values=values)

    async def delete_by_id(self, doc_id: uuid.UUID, *criteria) -> int:
        statement = (
            delete(self.model)
            .where(self.model.id == doc_id, *criteria)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise self._fail("delete", e)
        return result.rowcount or 0


class DocumentStore:
    """
    The five collections over one request-scoped session.

    Attributes:
        parcels, payments, users, riders, trackings: Collection instances
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.parcels: Collection[Parcel] = Collection(session, Parcel, "parcels")
        self.payments: Collection[Payment] = Collection(session, Payment, "payments")
        self.users: Collection[User] = Collection(session, User, "users")
        self.riders: Collection[Rider] = Collection(session, Rider, "riders")
        self.trackings: Collection[TrackingEvent] = Collection(
            session, TrackingEvent, "trackings"
        )


async def get_store(
    session: AsyncSession = Depends(get_db_session),
) -> DocumentStore:
    """FastAPI dependency: the document store for the current request."""
    return DocumentStore(session)

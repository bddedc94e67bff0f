"""Generic repository for scoped template records.

Provides the criteria-based record store operations used by the template and
layout services. Criteria are exact matches; a None criterion matches NULL.
"""

import copy
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dynatemplates.core.exceptions import TemplateConflictError
from dynatemplates.core.logging import get_logger
from dynatemplates.infrastructure.persistence.models.scoped_record import ScopedRecordMixin

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=ScopedRecordMixin)

# Fields a merge never touches.
IMMUTABLE_FIELDS = frozenset({"id", "created_at", "updated_at"})


class RecordRepository(Generic[ModelT]):
    """Repository for scoped record database operations.

    Subclasses bind ``model`` to a concrete SQLAlchemy model.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    def _where(self, criteria: dict[str, Any]) -> list[Any]:
        clauses = []
        for field, value in criteria.items():
            column = getattr(self.model, field)
            clauses.append(column.is_(None) if value is None else column == value)
        return clauses

    async def get_by_id(self, record_id: str) -> ModelT | None:
        """Get a record by ID.

        Args:
            record_id: Record ID (UUID string).

        Returns:
            The record if found, None otherwise.
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def find(
        self,
        exclude_names: Sequence[str] | None = None,
        order_by_created: bool = False,
        **criteria: Any,
    ) -> list[ModelT]:
        """Find every record matching the criteria.

        Args:
            exclude_names: Names to leave out of the result.
            order_by_created: Order by creation time, newest first.
            **criteria: Column name to exact value. None matches NULL.

        Returns:
            List of matching records.
        """
        query = select(self.model).where(*self._where(criteria))
        if exclude_names:
            query = query.where(self.model.name.notin_(list(exclude_names)))
        if order_by_created:
            query = query.order_by(self.model.created_at.desc(), self.model.name)
        else:
            query = query.order_by(self.model.name, self.model.locale)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_one(self, **criteria: Any) -> ModelT | None:
        """Find the first record matching the criteria.

        Args:
            **criteria: Column name to exact value. None matches NULL.

        Returns:
            The record if found, None otherwise.
        """
        result = await self.session.execute(
            select(self.model).where(*self._where(criteria)).limit(1)
        )
        return result.scalars().first()

    def create(self, **fields: Any) -> ModelT:
        """Build a new, unsaved record.

        Args:
            **fields: Column values.

        Returns:
            The transient record instance.
        """
        return self.model(**fields)

    def _mutable_columns(self) -> set[str]:
        return {
            attr.key
            for attr in inspect(self.model).column_attrs
            if attr.key not in IMMUTABLE_FIELDS
        }

    def clone(self, record: ModelT, **overrides: Any) -> ModelT:
        """Build an unsaved copy of a record.

        Every column is copied except identity and timestamps.

        Args:
            record: Record to copy.
            **overrides: Column values replacing the copied ones.

        Returns:
            The transient copy.
        """
        fields = {key: copy.deepcopy(getattr(record, key)) for key in self._mutable_columns()}
        fields.update(overrides)
        return self.create(**fields)

    def merge(self, record: ModelT, updates: dict[str, Any]) -> ModelT:
        """Apply updates onto a record field by field.

        Only mapped columns are written; immutable fields, properties and
        unknown keys are ignored.

        Args:
            record: Record to update in place.
            updates: Field values to apply.

        Returns:
            The same record instance.
        """
        columns = self._mutable_columns()
        for field, value in updates.items():
            if field in columns:
                setattr(record, field, value)
        return record

    async def save(self, record: ModelT) -> ModelT:
        """Persist a new or modified record.

        Args:
            record: Record to persist.

        Returns:
            The refreshed record.

        Raises:
            TemplateConflictError: If the unique key is already taken.
        """
        # Read before flushing: a rollback expires persistent instances.
        key = {"name": record.name, "scope": record.scope, "locale": record.locale}
        self.session.add(record)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(
                "Duplicate record rejected by the store",
                table=self.model.__tablename__,
                **key,
            )
            raise TemplateConflictError(
                f"Record '{key['name']}' already exists in scope '{key['scope']}' "
                f"for locale '{key['locale']}'",
                **key,
            ) from e
        await self.session.refresh(record)
        return record

    async def remove(self, record: ModelT) -> None:
        """Delete a record.

        Args:
            record: Record to delete.
        """
        await self.session.delete(record)
        await self.session.flush()

"""Scope and locale resolution with copy-on-write overrides.

System records (scope "system", no scope id) are the tenant-independent
defaults. A tenant scope inherits every system record and may shadow any
(name, locale) pair by overwriting the system record into its own scope.
System records are protected from direct update and deletion unless the
caller explicitly allows it.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from dynatemplates.core.exceptions import (
    TemplateConflictError,
    TemplateForbiddenError,
    TemplateNotFoundError,
    TemplateValidationError,
)
from dynatemplates.core.logging import get_logger
from dynatemplates.domain.entities.template import (
    DEFAULT_LOCALE,
    SYSTEM_SCOPE,
    TEMPLATE_NAME_PATTERN,
    TemplateFilter,
    candidate_locales,
    is_system_scope,
)
from dynatemplates.domain.services.render_pipeline import RenderPipeline
from dynatemplates.infrastructure.engines import EngineRegistry
from dynatemplates.infrastructure.persistence.models.scoped_record import ScopedRecordMixin
from dynatemplates.infrastructure.persistence.repositories.record_repository import (
    IMMUTABLE_FIELDS,
    RecordRepository,
)

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=ScopedRecordMixin)

# Overwrites keep the identity of the record they land on.
OVERWRITE_OMITTED_FIELDS = IMMUTABLE_FIELDS | {"name"}


class ScopedRecordService(RenderPipeline, Generic[ModelT]):
    """Resolution, listing and protected CRUD over one kind of scoped record.

    Subclasses bind ``repository_class`` and a human-readable ``record_label``.
    """

    repository_class: type[RecordRepository[ModelT]]
    record_label: str = "Record"

    def __init__(self, session: AsyncSession, engine_registry: EngineRegistry) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
            engine_registry: Registry of enabled providers.
        """
        super().__init__(engine_registry)
        self.session = session
        self.repository = self.repository_class(session)

    async def get_by_id(self, record_id: str) -> ModelT | None:
        """Get a record by ID, or None if it does not exist."""
        return await self.repository.get_by_id(record_id)

    async def _get_or_404(self, record_id: str) -> ModelT:
        record = await self.repository.get_by_id(record_id)
        if record is None:
            raise TemplateNotFoundError(
                f"{self.record_label} not found: {record_id}", id=record_id
            )
        return record

    async def _find_in_scope(
        self,
        name: str,
        scope: str,
        scope_id: str | None,
        locales: list[str],
    ) -> ModelT | None:
        for locale in locales:
            record = await self.repository.find_one(
                name=name,
                scope=scope,
                scope_id=None if is_system_scope(scope) else scope_id,
                locale=locale,
            )
            if record is not None:
                return record
        return None

    async def resolve_record(
        self,
        name: str,
        scope: str | None = None,
        scope_id: str | None = None,
        locale: str | None = None,
    ) -> ModelT | None:
        """Find the most specific record for a name.

        The requested scope is searched first for the requested locale, then
        for the default locale. A non-system scope then falls back to the
        system scope in the same locale order.

        Args:
            name: Record name.
            scope: Requested scope (defaults to "system").
            scope_id: Tenant discriminator; ignored for the system scope.
            locale: Requested locale (defaults to "en").

        Returns:
            The best matching record, or None.
        """
        scope = scope or SYSTEM_SCOPE
        locales = candidate_locales(locale)

        record = await self._find_in_scope(name, scope, scope_id, locales)
        if record is None and not is_system_scope(scope):
            logger.debug(
                "No scoped record, falling back to system scope",
                name=name,
                scope=scope,
                scope_id=scope_id,
            )
            record = await self._find_in_scope(name, SYSTEM_SCOPE, None, locales)

        if record is not None:
            logger.debug(
                "Record resolved",
                name=name,
                resolved_scope=record.scope,
                resolved_locale=record.locale,
            )
        return record

    async def list_records(self, filters: TemplateFilter | None = None) -> list[ModelT]:
        """List the effective records for a scope.

        System records come first. For a non-system scope, scoped records
        replace system records sharing the same (type, name, locale) key.

        Args:
            filters: Scope, type, locale and excluded-name filters.

        Returns:
            Effective records, never both a system record and its shadow.
        """
        filters = filters or TemplateFilter()
        criteria: dict[str, Any] = {}
        if filters.type:
            criteria["type"] = filters.type
        if filters.locale:
            criteria["locale"] = filters.locale

        system_records = await self.repository.find(
            exclude_names=filters.exclude_names,
            scope=SYSTEM_SCOPE,
            scope_id=None,
            **criteria,
        )
        if not filters.scope or is_system_scope(filters.scope):
            return system_records

        scoped_records = await self.repository.find(
            exclude_names=filters.exclude_names,
            order_by_created=True,
            scope=filters.scope,
            scope_id=filters.scope_id,
            **criteria,
        )

        effective: dict[tuple[str | None, str, str], ModelT] = {}
        for record in system_records:
            effective[(record.type, record.name, record.locale)] = record
        for record in scoped_records:
            effective[(record.type, record.name, record.locale)] = record
        return list(effective.values())

    def _validate_name(self, name: Any) -> None:
        if not name or not isinstance(name, str) or not TEMPLATE_NAME_PATTERN.match(name):
            raise TemplateValidationError(
                f"Invalid {self.record_label.lower()} name format: {name!r}", name=name
            )

    async def create_record(self, data: dict[str, Any]) -> ModelT:
        """Create a system record.

        Only system records can be created directly; tenant records are
        reached through an overwrite.

        Args:
            data: Record fields.

        Returns:
            The created record.

        Raises:
            TemplateForbiddenError: If the scope is not "system".
            TemplateValidationError: If the name is malformed.
            TemplateConflictError: If the system record already exists.
        """
        scope = data.get("scope") or SYSTEM_SCOPE
        if not is_system_scope(scope):
            raise TemplateForbiddenError(
                f"Only system {self.record_label.lower()}s can be created directly",
                scope=scope,
            )

        name = data.get("name")
        self._validate_name(name)
        locale = data.get("locale") or DEFAULT_LOCALE

        existing = await self.repository.find_one(
            name=name, scope=SYSTEM_SCOPE, scope_id=None, locale=locale
        )
        if existing is not None:
            raise TemplateConflictError(
                f"System {self.record_label.lower()} already exists: {name} ({locale})",
                name=name,
                locale=locale,
            )

        fields = {key: value for key, value in data.items() if key not in IMMUTABLE_FIELDS}
        fields.update(scope=SYSTEM_SCOPE, scope_id=None, locale=locale)
        record = await self.repository.save(self.repository.create(**fields))
        logger.info(
            "System record created",
            record_type=self.record_label,
            record_id=record.id,
            name=record.name,
            locale=record.locale,
        )
        return record

    async def overwrite_system_record(self, record_id: str, updates: dict[str, Any]) -> ModelT:
        """Overwrite a system record into a tenant scope.

        The first overwrite for a (scope, scope id) clones the system record
        into that scope; later overwrites update the same shadow. The system
        record itself is never modified. A non-system record is updated in
        place.

        Args:
            record_id: ID of the record to overwrite.
            updates: Fields to apply; must include ``scope`` for system records.

        Returns:
            The shadow (or updated) record.

        Raises:
            TemplateNotFoundError: If the record does not exist.
            TemplateValidationError: If ``scope`` is missing or is "system".
        """
        record = await self._get_or_404(record_id)
        target = record

        if record.is_system:
            target_scope = updates.get("scope")
            if not target_scope:
                raise TemplateValidationError(
                    f"Scope is required when overwriting a system {self.record_label.lower()}"
                )
            if is_system_scope(target_scope):
                raise TemplateValidationError(
                    f"A system {self.record_label.lower()} cannot be overwritten into the system scope"
                )
            target_scope_id = updates.get("scope_id")

            existing = await self.repository.find_one(
                name=record.name,
                locale=record.locale,
                scope=target_scope,
                scope_id=target_scope_id,
            )
            if existing is not None:
                target = existing
            else:
                target = self.repository.clone(
                    record, scope=target_scope, scope_id=target_scope_id
                )
            logger.info(
                "Overwriting system record",
                record_type=self.record_label,
                record_id=record.id,
                name=record.name,
                scope=target_scope,
                scope_id=target_scope_id,
                existing_shadow=existing is not None,
            )

        merged = {
            key: value for key, value in updates.items() if key not in OVERWRITE_OMITTED_FIELDS
        }
        self.repository.merge(target, merged)
        return await self.repository.save(target)

    async def update_record(
        self,
        record_id: str,
        updates: dict[str, Any],
        can_update_system: bool = False,
    ) -> ModelT:
        """Update a record.

        A protected system record is redirected into an overwrite when the
        updates name a target scope.

        Args:
            record_id: ID of the record to update.
            updates: Fields to apply.
            can_update_system: Allow editing system records in place.

        Returns:
            The updated record, or the shadow record for a redirected update.

        Raises:
            TemplateNotFoundError: If the record does not exist.
            TemplateForbiddenError: If a protected system record is updated without a scope.
            TemplateValidationError: If a new name is malformed.
        """
        record = await self._get_or_404(record_id)

        if record.is_system and not can_update_system:
            if updates.get("scope"):
                return await self.overwrite_system_record(record_id, updates)
            raise TemplateForbiddenError(
                f"Cannot update system {self.record_label.lower()}s", id=record_id
            )

        if "name" in updates:
            self._validate_name(updates["name"])

        self.repository.merge(record, updates)
        if record.is_system:
            record.scope_id = None
        record = await self.repository.save(record)
        logger.info(
            "Record updated",
            record_type=self.record_label,
            record_id=record.id,
            name=record.name,
            scope=record.scope,
        )
        return record

    async def delete_record(self, record_id: str, can_delete_system: bool = False) -> None:
        """Delete a record.

        Args:
            record_id: ID of the record to delete.
            can_delete_system: Allow deleting system records.

        Raises:
            TemplateNotFoundError: If the record does not exist.
            TemplateForbiddenError: If a protected system record is deleted.
        """
        record = await self._get_or_404(record_id)

        if record.is_system and not can_delete_system:
            raise TemplateForbiddenError(
                f"Cannot delete system {self.record_label.lower()}s", id=record_id
            )

        name, scope = record.name, record.scope
        await self.repository.remove(record)
        logger.info(
            "Record deleted",
            record_type=self.record_label,
            record_id=record_id,
            name=name,
            scope=scope,
        )

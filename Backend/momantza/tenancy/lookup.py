"""
Tenant lookup collaborator.

The resolver turns host and path hints into tenant records through the
TenantLookup protocol. Lookups return an explicit LookupResult so that
"not found" and "lookup failed" stay distinguishable, even though the
resolver currently treats both as "no match".
"""

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..models import Organization


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TenantRecord:
    """The slice of an organization row the resolver needs."""

    id: uuid.UUID
    domain: str
    name: str = ""


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class LookupResult:
    status: LookupStatus
    record: Optional[TenantRecord] = None
    error: Optional[Exception] = None

    @classmethod
    def found(cls, record: TenantRecord) -> "LookupResult":
        return cls(status=LookupStatus.FOUND, record=record)

    @classmethod
    def not_found(cls) -> "LookupResult":
        return cls(status=LookupStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: Exception) -> "LookupResult":
        return cls(status=LookupStatus.FAILED, error=error)

    @property
    def is_found(self) -> bool:
        return self.status is LookupStatus.FOUND and self.record is not None

    @property
    def is_failed(self) -> bool:
        return self.status is LookupStatus.FAILED


class TenantLookup(Protocol):
    """Data-access interface queried by the tenant resolver."""

    async def find_by_domain_prefix(self, prefix: str) -> LookupResult:
        """Case-insensitive prefix match against default or custom domain."""
        ...

    async def find_by_id(self, tenant_id: uuid.UUID) -> LookupResult:
        """Exact identifier match."""
        ...


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so a prefix only matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def record_from_organization(org: Organization) -> TenantRecord:
    """
    Build a TenantRecord from an organization row.

    Raises:
        ValueError: if the stored id is not a UUID
    """
    return TenantRecord(
        id=uuid.UUID(str(org.id)),
        domain=org.custom_domain or org.default_domain or "",
        name=org.name or "",
    )


class SqlTenantLookup:
    """
    TenantLookup backed by the ``organization`` table.

    Each call opens its own session from the given factory; connection
    pooling is left to the engine.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def find_by_domain_prefix(self, prefix: str) -> LookupResult:
        pattern = f"{escape_like(prefix.lower())}%"
        stmt = (
            select(Organization)
            .where(
                or_(
                    Organization.default_domain.ilike(pattern, escape="\\"),
                    Organization.custom_domain.ilike(pattern, escape="\\"),
                )
            )
            .limit(1)
        )
        return await self._fetch_one(stmt, f"prefix '{prefix}'")

    async def find_by_id(self, tenant_id: uuid.UUID) -> LookupResult:
        stmt = select(Organization).where(Organization.id == str(tenant_id)).limit(1)
        return await self._fetch_one(stmt, f"id '{tenant_id}'")

    async def _fetch_one(self, stmt, description: str) -> LookupResult:
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                org = result.scalars().first()
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Organization lookup by {description} failed: {e}")
            return LookupResult.failed(e)

        if org is None:
            return LookupResult.not_found()

        try:
            record = record_from_organization(org)
        except ValueError as e:
            logger.warning(f"Organization row for {description} has malformed id {org.id!r}")
            return LookupResult.failed(e)

        logger.debug(f"Organization found for {description}: {record.id}")
        return LookupResult.found(record)

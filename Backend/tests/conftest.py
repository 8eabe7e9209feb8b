"""
Pytest configuration and fixtures.

Tenant lookups run against an in-memory collaborator and the database
session dependency is replaced, so no PostgreSQL instance is needed.
"""
import uuid
from typing import Iterable, Optional
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient, ASGITransport

from momantza.models import Organization
from momantza.tenancy import LookupResult, TenantRecord


ACME_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")
GLOBEX_ID = uuid.UUID("22222222-2222-2222-2222-222222222222")


class InMemoryTenantLookup:
    """
    TenantLookup over a list of (record, domains) pairs.

    Records every call so tests can assert which attempts were made.
    Set fail_prefix / fail_id to make that lookup raise.
    """

    def __init__(
        self,
        tenants: Iterable[tuple[TenantRecord, tuple[str, ...]]] = (),
        fail_prefix: bool = False,
        fail_id: bool = False,
    ):
        self.tenants = list(tenants)
        self.fail_prefix = fail_prefix
        self.fail_id = fail_id
        self.calls: list[tuple[str, str]] = []

    async def find_by_domain_prefix(self, prefix: str) -> LookupResult:
        self.calls.append(("prefix", prefix))
        if self.fail_prefix:
            raise ConnectionError("organization store unreachable")
        for record, domains in self.tenants:
            if any(d.lower().startswith(prefix.lower()) for d in domains):
                return LookupResult.found(record)
        return LookupResult.not_found()

    async def find_by_id(self, tenant_id: uuid.UUID) -> LookupResult:
        self.calls.append(("id", str(tenant_id)))
        if self.fail_id:
            raise ConnectionError("organization store unreachable")
        for record, _ in self.tenants:
            if record.id == tenant_id:
                return LookupResult.found(record)
        return LookupResult.not_found()


def make_organization(
    organization_id: uuid.UUID,
    name: str,
    default_domain: str,
    custom_domain: Optional[str] = None,
) -> Organization:
    return Organization(
        id=str(organization_id),
        name=name,
        default_domain=default_domain,
        custom_domain=custom_domain,
        theme={"primaryColor": "#112233", "secondaryColor": "#445566"},
    )


@pytest.fixture
def acme_record() -> TenantRecord:
    return TenantRecord(id=ACME_ID, domain="acme.momantza.com", name="Acme Halls")


@pytest.fixture
def globex_record() -> TenantRecord:
    return TenantRecord(id=GLOBEX_ID, domain="globex.momantza.com", name="Globex Venues")


@pytest.fixture
def lookup(acme_record, globex_record) -> InMemoryTenantLookup:
    return InMemoryTenantLookup(
        [
            (acme_record, ("acme.momantza.com",)),
            (globex_record, ("globex.momantza.com", "venues.globex.example")),
        ]
    )


@pytest.fixture
def organizations() -> dict[str, Organization]:
    return {
        str(ACME_ID): make_organization(ACME_ID, "Acme Halls", "acme.momantza.com"),
        str(GLOBEX_ID): make_organization(
            GLOBEX_ID, "Globex Venues", "globex.momantza.com", "venues.globex.example"
        ),
    }


@pytest.fixture
def mock_db_session(organizations):
    """Async session whose get() serves the organizations fixture."""
    session = AsyncMock()

    async def get(model, key):
        return organizations.get(key)

    session.get = AsyncMock(side_effect=get)
    return session


@pytest.fixture
def app(lookup, mock_db_session):
    from momantza.core.db import get_session
    from momantza.main import create_app

    application = create_app(lookup=lookup)

    async def override_get_session():
        yield mock_db_session

    application.dependency_overrides[get_session] = override_get_session
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    """AsyncClient against the app; redirects are not followed."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

"""
Organization read endpoints.

These are the routes that consume the tenant resolved by
TenantResolverMiddleware. The router carries no prefix; main.py mounts it
under /api/organizations, /api/v1/organizations and /api/orgs.
"""

import logging
import uuid
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from .core.db import get_session
from .core.responses import ErrorCodes, error_response
from .models import Organization
from .tenancy import (
    RequestTenancy,
    TenantContext,
    get_request_tenancy,
    require_tenant_context,
)


logger = logging.getLogger(__name__)

router = APIRouter(tags=["organizations"])


# ────────────────────────────────────────────────────────────────
# Response Models
# ────────────────────────────────────────────────────────────────

class OrganizationTheme(BaseModel):
    primaryColor: str = "#8B5CF6"
    secondaryColor: str = "#F3F4F6"


class OrganizationOut(BaseModel):
    """Organization as served to the admin app and the public site."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    name: str
    contact_person: Optional[str] = None
    contact_no: Optional[str] = None
    address: Optional[str] = None
    about: Optional[str] = None
    default_domain: str
    custom_domain: Optional[str] = None
    logo: Optional[str] = None
    theme: Optional[OrganizationTheme] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SubdomainOrganizationOut(BaseModel):
    """Shape consumed by the public booking site on tenant subdomains."""

    organizationId: str
    organizationName: str
    customDomain: Optional[str] = None
    defaultDomain: str
    logo: Optional[str] = None
    theme: OrganizationTheme
    subdomain: Optional[str] = None


# ────────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────────

def organization_not_found(message: str, details: Optional[dict] = None) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error_response(ErrorCodes.ORGANIZATION_NOT_FOUND, message, details),
    )


async def load_organization(session: AsyncSession, organization_id: uuid.UUID) -> Organization:
    organization = await session.get(Organization, str(organization_id))
    if organization is None:
        logger.info(f"Organization not found for ID: {organization_id}")
        raise organization_not_found(
            "Organization not found", {"organization_id": str(organization_id)}
        )
    return organization


def to_out(organization: Organization) -> OrganizationOut:
    out = OrganizationOut.model_validate(organization)
    if out.theme is None:
        out.theme = OrganizationTheme()
    return out


# ────────────────────────────────────────────────────────────────
# Endpoints
# ────────────────────────────────────────────────────────────────

@router.get(
    "/current",
    response_model=OrganizationOut,
    summary="Organization of the current request",
)
async def get_current_organization(
    ctx: TenantContext = Depends(require_tenant_context),
    session: AsyncSession = Depends(get_session),
) -> OrganizationOut:
    """Full details of the tenant resolved from the subdomain or URL path."""
    logger.debug(f"Using organization from middleware context: {ctx.tenant_id} ({ctx.source.value})")
    organization = await load_organization(session, ctx.tenant_id)
    return to_out(organization)


@router.get(
    "/subdomain",
    response_model=SubdomainOrganizationOut,
    summary="Organization for the requesting subdomain",
)
async def get_subdomain_organization(
    ctx: TenantContext = Depends(require_tenant_context),
    tenancy: RequestTenancy = Depends(get_request_tenancy),
    session: AsyncSession = Depends(get_session),
) -> SubdomainOrganizationOut:
    organization = await load_organization(session, ctx.tenant_id)
    return SubdomainOrganizationOut(
        organizationId=organization.id,
        organizationName=organization.name,
        customDomain=organization.custom_domain,
        defaultDomain=organization.default_domain,
        logo=organization.logo,
        theme=OrganizationTheme(**(organization.theme or {})),
        subdomain=tenancy.raw_subdomain,
    )


@router.get("/by-id/{organization_id}", response_model=OrganizationOut)
@router.get("/id/{organization_id}", response_model=OrganizationOut, include_in_schema=False)
async def get_organization_by_id(
    organization_id: str,
    session: AsyncSession = Depends(get_session),
) -> OrganizationOut:
    """Organization by identifier, independent of the resolved tenant."""
    try:
        parsed_id = uuid.UUID(organization_id)
    except ValueError:
        raise organization_not_found(
            "Organization not found", {"organization_id": organization_id}
        )
    organization = await load_organization(session, parsed_id)
    return to_out(organization)

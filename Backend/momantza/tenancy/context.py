"""
Request-scoped tenant context.

TenantResolverMiddleware publishes a RequestTenancy on
``request.state.tenancy`` for every request it lets through. Route handlers
read it through the FastAPI dependencies below instead of touching
request.state directly.
"""

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fastapi import HTTPException, Request, status

from ..core.responses import ErrorCodes, error_response


logger = logging.getLogger(__name__)

REQUEST_STATE_KEY = "tenancy"


class TenantResolutionSource(str, Enum):
    """How the tenant context was determined."""

    SUBDOMAIN = "subdomain"   # From the leftmost label of the Host header
    URL_PATH = "url_path"     # From /org/{id} or a bare /{uuid} path


@dataclass(frozen=True)
class TenantContext:
    """
    Immutable record of which tenant the current request belongs to.

    Attributes:
        tenant_id: Organization identifier
        domain_hint: Registered domain of the organization, for diagnostics only
        source: How this context was determined
        tenant_name: Organization display name, for diagnostics only
    """

    tenant_id: uuid.UUID
    domain_hint: str = ""
    source: TenantResolutionSource = TenantResolutionSource.SUBDOMAIN
    tenant_name: Optional[str] = None


@dataclass(frozen=True)
class RequestTenancy:
    """
    Everything the resolver learned about a request.

    path_tenant_id is kept even when its lookup failed, so handlers can tell
    "no path hint" apart from "path hint present but not resolved".
    """

    tenant_context: Optional[TenantContext] = None
    raw_subdomain: Optional[str] = None
    base_domain: Optional[str] = None
    path_tenant_id: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.tenant_context is not None


# ────────────────────────────────────────────────────────────────
# FastAPI Dependencies
# ────────────────────────────────────────────────────────────────

def get_request_tenancy(request: Request) -> RequestTenancy:
    """
    FastAPI dependency returning the resolver's findings for this request.

    Returns an empty RequestTenancy when the middleware is not installed.
    """
    tenancy = getattr(request.state, REQUEST_STATE_KEY, None)
    if isinstance(tenancy, RequestTenancy):
        return tenancy
    return RequestTenancy()


def get_tenant_context_or_none(request: Request) -> Optional[TenantContext]:
    """Like require_tenant_context but returns None when no tenant was resolved."""
    return get_request_tenancy(request).tenant_context


def require_tenant_context(request: Request) -> TenantContext:
    """
    Strict tenant context for tenant-scoped routes.

    Usage:
        @router.get("/halls")
        async def list_halls(ctx: TenantContext = Depends(require_tenant_context)):
            ...

    Raises:
        HTTPException 404: if the request carries no resolved tenant
    """
    tenancy = get_request_tenancy(request)
    if tenancy.tenant_context is not None:
        return tenancy.tenant_context

    details = {}
    if tenancy.raw_subdomain:
        details["subdomain"] = tenancy.raw_subdomain
    if tenancy.path_tenant_id:
        details["path_tenant_id"] = tenancy.path_tenant_id

    logger.debug(f"No tenant resolved for {request.url.path} ({details or 'no hints'})")
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error_response(
            ErrorCodes.TENANT_NOT_FOUND,
            "No organization found for this request",
            details or None,
        ),
    )

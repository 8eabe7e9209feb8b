"""
Multi-tenancy package for Momantza.

Modules:
    host: Syntactic host/path parsing (subdomain, base domain, path tenant id)
    lookup: TenantLookup protocol, LookupResult and the SQL implementation
    resolver: TenantResolver, the subdomain-then-path resolution order
    middleware: Starlette middleware publishing request.state.tenancy
    context: TenantContext, RequestTenancy and FastAPI dependencies
"""

from .context import (
    RequestTenancy,
    TenantContext,
    TenantResolutionSource,
    get_request_tenancy,
    get_tenant_context_or_none,
    require_tenant_context,
)
from .host import HostParts, extract_tenant_id_from_path, is_valid_uuid, split_host
from .lookup import LookupResult, LookupStatus, SqlTenantLookup, TenantLookup, TenantRecord
from .middleware import TenantResolverMiddleware
from .resolver import TenantResolution, TenantResolver

__all__ = [
    # Context
    "RequestTenancy",
    "TenantContext",
    "TenantResolutionSource",
    "get_request_tenancy",
    "get_tenant_context_or_none",
    "require_tenant_context",
    # Host parsing
    "HostParts",
    "extract_tenant_id_from_path",
    "is_valid_uuid",
    "split_host",
    # Lookup
    "LookupResult",
    "LookupStatus",
    "SqlTenantLookup",
    "TenantLookup",
    "TenantRecord",
    # Resolution
    "TenantResolverMiddleware",
    "TenantResolution",
    "TenantResolver",
]

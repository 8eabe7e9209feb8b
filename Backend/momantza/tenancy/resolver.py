"""
Tenant resolver.

Resolution order (first match wins):
    1. Subdomain of the Host header, by domain prefix
    2. Tenant id in the URL path (/org/{id} or a bare /{uuid})

Lookup failures never fail the request: they are logged and treated as
"no match" for that attempt. After a successful resolution, a request for
exactly "/" on a subdomain is redirected to the front-end origin.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from .context import RequestTenancy, TenantContext, TenantResolutionSource
from .host import extract_tenant_id_from_path, is_valid_uuid, split_host
from .lookup import LookupResult, TenantLookup, TenantRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TenantResolution:
    """Outcome of resolving one request."""

    tenancy: RequestTenancy
    redirect_url: Optional[str] = None

    @property
    def context(self) -> Optional[TenantContext]:
        return self.tenancy.tenant_context

    @property
    def should_redirect(self) -> bool:
        return self.redirect_url is not None


class TenantResolver:
    """
    Maps (host, path) to a tenant through a TenantLookup.

    Holds no per-request state; one instance serves all requests.
    """

    def __init__(self, lookup: TenantLookup, frontend_origin: str):
        self._lookup = lookup
        self._frontend_origin = frontend_origin.rstrip("/")

    async def resolve(self, host: str, path: str) -> TenantResolution:
        parts = split_host(host)
        subdomain = parts.subdomain
        path_tenant_id: Optional[str] = None
        context: Optional[TenantContext] = None

        if subdomain:
            record = await self._attempt(
                lambda: self._lookup.find_by_domain_prefix(subdomain),
                f"subdomain '{subdomain}'",
            )
            if record is not None:
                context = self._to_context(record, TenantResolutionSource.SUBDOMAIN)

        if context is None:
            path_tenant_id = extract_tenant_id_from_path(path)
            if path_tenant_id:
                context = await self._resolve_path_tenant(path_tenant_id)

        tenancy = RequestTenancy(
            tenant_context=context,
            raw_subdomain=subdomain,
            base_domain=parts.base_domain,
            path_tenant_id=path_tenant_id,
        )

        redirect_url = None
        if context is not None and subdomain and path == "/":
            redirect_url = f"{self._frontend_origin}/{context.tenant_id}"
            logger.info(
                f"Subdomain '{subdomain}' resolved to organization '{context.tenant_id}', "
                f"redirecting to {redirect_url}"
            )

        return TenantResolution(tenancy=tenancy, redirect_url=redirect_url)

    async def _resolve_path_tenant(self, raw_id: str) -> Optional[TenantContext]:
        if not is_valid_uuid(raw_id):
            logger.debug(f"Ignoring malformed organization id in URL: {raw_id!r}")
            return None
        tenant_id = uuid.UUID(raw_id)

        logger.debug(f"Organization id found in URL: {raw_id}")
        record = await self._attempt(
            lambda: self._lookup.find_by_id(tenant_id),
            f"URL id '{raw_id}'",
        )
        if record is None:
            return None
        return self._to_context(record, TenantResolutionSource.URL_PATH)

    async def _attempt(
        self,
        call: Callable[[], Awaitable[LookupResult]],
        description: str,
    ) -> Optional[TenantRecord]:
        """Run one lookup, collapsing failures and misses into None."""
        try:
            result = await call()
        except Exception as e:
            logger.warning(f"Error resolving organization for {description}: {e}")
            return None

        if result.is_failed:
            logger.warning(f"Error resolving organization for {description}: {result.error}")
            return None
        if not result.is_found:
            logger.debug(f"No organization for {description}")
            return None

        logger.debug(f"Organization found for {description}: {result.record.id}")
        return result.record

    @staticmethod
    def _to_context(record: TenantRecord, source: TenantResolutionSource) -> TenantContext:
        return TenantContext(
            tenant_id=record.id,
            domain_hint=record.domain,
            source=source,
            tenant_name=record.name or None,
        )

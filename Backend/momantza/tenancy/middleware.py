"""
Tenant resolution middleware.

Runs the TenantResolver before routing and publishes its findings on
``request.state.tenancy``. Root-path requests on a tenant subdomain are
answered with a redirect to the front-end and never reach the routes.
"""

import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from .context import REQUEST_STATE_KEY
from .resolver import TenantResolver


logger = logging.getLogger(__name__)


def request_host(request: Request) -> str:
    """Host header of the request, falling back to the URL host."""
    return request.headers.get("host") or request.url.hostname or ""


class TenantResolverMiddleware(BaseHTTPMiddleware):
    """
    Usage:
        app.add_middleware(TenantResolverMiddleware, resolver=resolver)
    """

    def __init__(self, app: ASGIApp, resolver: TenantResolver):
        super().__init__(app)
        self.resolver = resolver

    async def dispatch(self, request: Request, call_next) -> Response:
        resolution = await self.resolver.resolve(request_host(request), request.url.path)

        if resolution.should_redirect:
            return RedirectResponse(url=resolution.redirect_url, status_code=302)

        if resolution.context is None:
            logger.debug(f"No organization resolved for {request_host(request)}{request.url.path}")

        setattr(request.state, REQUEST_STATE_KEY, resolution.tenancy)
        return await call_next(request)

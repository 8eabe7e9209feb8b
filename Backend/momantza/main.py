import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import get_settings
from .core.db import AsyncSessionLocal
from .organizations import router as organizations_router
from .tenancy import SqlTenantLookup, TenantLookup, TenantResolver, TenantResolverMiddleware


settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(lookup: Optional[TenantLookup] = None) -> FastAPI:
    """
    Build the API application.

    The tenant lookup defaults to the organization table; tests pass an
    in-memory lookup instead.
    """
    app = FastAPI(title="Momantza Backend")

    resolver = TenantResolver(
        lookup=lookup or SqlTenantLookup(AsyncSessionLocal),
        frontend_origin=settings.frontend_origin_base,
    )

    # Last added runs outermost: CORS wraps tenant resolution and its redirects
    app.add_middleware(TenantResolverMiddleware, resolver=resolver)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for prefix in ("/api/organizations", "/api/v1/organizations", "/api/orgs"):
        app.include_router(organizations_router, prefix=prefix)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    logger.debug(f"Redirecting tenant root requests to {settings.frontend_origin_base}")
    return app


app = create_app()

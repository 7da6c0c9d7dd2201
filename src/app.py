"""Cartwheel FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalogue.domain import catalogue
from identity.domain import identity
from ordering.domain import ordering
from shared.logging import bind_request_context
from shared.settings import Settings

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV controls which config overlay is applied:
#   - unset / "test" → in-memory providers
#   - "production"   → sqlite providers (run `manage.py setup-db` first)
_DOMAINS = (identity, catalogue, ordering)
_initialized = False


def init_domains():
    """Initialize every domain once per process."""
    global _initialized
    if _initialized:
        return
    for domain in _DOMAINS:
        domain.init()
    _initialized = True


def seed_catalogue(force: bool = False) -> int:
    from catalogue.product.seeding import SeedCatalogue

    with catalogue.domain_context():
        return catalogue.process(SeedCatalogue(force=force), asynchronous=False)


# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/api/auth": identity,
    "/api/products": catalogue,
    "/api/cart": ordering,
    "/api/checkout": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(settings: Settings | None = None, catalog=None) -> FastAPI:
    """Build the API with its services bound to ``settings``.

    ``catalog`` replaces the catalogue-backed Catalog Store, for tests that
    need to control which products exist.
    """
    from catalogue.api import product_router
    from identity.api.routes import router as identity_router
    from identity.provider import IdentityProvider
    from identity.tokens import TokenIssuer
    from ordering.api.routes import cart_router, checkout_router
    from ordering.cart.ledger import CartLedger
    from ordering.cart.service import CartService
    from ordering.catalog import CatalogueStore
    from ordering.checkout.order_numbers import OrderNumberMinter
    from ordering.checkout.processor import CheckoutProcessor
    from shared.errors import register_error_handlers

    settings = settings or Settings.from_env()
    init_domains()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.seed_catalogue:
            seeded = seed_catalogue()
            if seeded:
                logger.info("Catalogue seeded", products=seeded)
        yield

    app = FastAPI(
        title="Cartwheel API",
        description="Shopping cart and checkout over Identity, Catalogue and Ordering domains",
        lifespan=lifespan,
    )

    catalog = catalog or CatalogueStore(catalogue)
    ledger = CartLedger(ordering, catalog, write_retries=settings.cart_write_retries)

    app.state.settings = settings
    app.state.identity_provider = IdentityProvider(identity, TokenIssuer.from_settings(settings))
    app.state.cart_service = CartService(ledger, catalog)
    app.state.checkout_processor = CheckoutProcessor(ledger, OrderNumberMinter())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the correct Protean domain context for each request."""
        domain = _resolve_domain(request.url.path)
        bind_request_context(method=request.method, path=request.url.path, domain=getattr(domain, "name", None))
        if domain is not None:
            with domain.domain_context():
                response = await call_next(request)
            return response
        # No domain match: health check, docs, etc.
        return await call_next(request)

    app.include_router(identity_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domains": {domain.name: {"name": domain.name} for domain in _DOMAINS},
            }
        )

    return app


app = create_app()

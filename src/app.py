"""StoreForge logistics API.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from notifications.domain import notifications
from recovery.domain import recovery
from shared.logging import add_context, clear_context, configure_logging
from shipping.domain import shipping

configure_logging()

shipping.init()
notifications.init()
recovery.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/shipping": shipping,
    "/notifications": notifications,
    "/recovery": recovery,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


app = FastAPI(
    title="StoreForge Logistics API",
    description="Shipping rates, courier integrations, notifications and cart recovery",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    clear_context()
    add_context(path=request.url.path, method=request.method)
    if domain is not None:
        add_context(domain=domain.name)
        with domain.domain_context():
            response = await call_next(request)
        return response
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from notifications.api.routes import router as notifications_router  # noqa: E402
from recovery.api.routes import router as recovery_router  # noqa: E402
from shipping.api.routes import router as shipping_router  # noqa: E402

app.include_router(shipping_router)
app.include_router(notifications_router)
app.include_router(recovery_router)


@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "shipping": {"name": shipping.name},
                "notifications": {"name": notifications.name},
                "recovery": {"name": recovery.name},
            },
        }
    )

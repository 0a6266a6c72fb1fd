import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from igilife.config import settings
from igilife.middleware.logging_config import configure_logging

configure_logging(settings.log_level, settings.log_format)

from igilife.api.admin_users import router as admin_users_router  # noqa: E402
from igilife.api.auth import router as auth_router  # noqa: E402
from igilife.api.clients import router as clients_router  # noqa: E402
from igilife.api.leads import router as leads_router  # noqa: E402
from igilife.api.roles import router as roles_router  # noqa: E402
from igilife.api.user_services import router as user_services_router  # noqa: E402
from igilife.middleware.request_context import RequestContextMiddleware  # noqa: E402
from igilife.middleware.security_headers import SecurityHeadersMiddleware  # noqa: E402
from igilife.portal import build_portal  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: open the store and seed it before the first request is served
    if getattr(app.state, "portal", None) is None:
        app.state.portal = build_portal()
    yield


app = FastAPI(
    title="IGI Life Insurance Portal",
    description="Role-based identity, access and client records for the insurance portal",
    version="0.1.0",
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────
origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestContextMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures; include a short traceback only in development."""
    tb = traceback.format_exc()
    logging.getLogger("igilife").error(
        "Unhandled %s on %s %s: %s\n%s",
        type(exc).__name__, request.method, request.url.path, exc, tb,
    )
    if settings.environment == "development":
        return JSONResponse(
            status_code=500,
            content={"detail": f"{type(exc).__name__}: {exc}", "traceback": tb.splitlines()[-5:]},
        )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


app.include_router(auth_router)
app.include_router(roles_router)
app.include_router(admin_users_router)
app.include_router(clients_router)
app.include_router(leads_router)
app.include_router(user_services_router)


@app.get("/api/health")
async def health_check(request: Request):
    portal = request.app.state.portal
    store_ok = portal.store.ping()
    return {
        "status": "healthy" if store_ok else "degraded",
        "components": {"store": {"status": "connected" if store_ok else "disconnected"}},
        "authenticated": portal.sessions.is_authenticated,
    }

"""
main.py

Application entrypoint for the BauCrew API.
- Initializes structured logging
- Sets up FastAPI application and middlewares
- Registers all API routers
- Integrates rate limiting via SlowAPI
- Adds common security headers
- Configures CORS
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware
from starlette.responses import Response

from baucrew.core.logging import init_logging
from baucrew.core.config import settings
from baucrew.core.limiter import limiter
from baucrew.core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from baucrew.database.init_db import create_tables
from baucrew.database.session import engine

from baucrew.admin.routes import router as admin_router
from baucrew.booking.routes import router as booking_router
from baucrew.job_request.routes import router as job_request_router
from baucrew.messaging.routes import router as messaging_router
from baucrew.offer.routes import router as offer_router
from baucrew.payment.routes import router as payment_router
from baucrew.users.routes import onboarding_router, router as users_router


# -----------------------------
# Lifespan
# -----------------------------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if settings.AUTO_CREATE_TABLES:
        await create_tables(engine)
    yield
    await engine.dispose()


# -----------------------------
# FastAPI App Initialization
# -----------------------------
app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# -----------------------------
# Middleware Configuration
# -----------------------------
init_logging()
app.state.limiter = limiter


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> Response:
    return _rate_limit_exceeded_handler(request, exc)  # type: ignore[arg-type]


app.add_exception_handler(429, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# -----------------------------
# CORSMiddleware Configuration
# -----------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------
# API Router Registration
# -----------------------------
app.include_router(users_router)
app.include_router(onboarding_router)
app.include_router(job_request_router)
app.include_router(offer_router)
app.include_router(booking_router)
app.include_router(payment_router)
app.include_router(messaging_router)
app.include_router(admin_router)


# -----------------------------
# Root Endpoint
# -----------------------------
@app.get("/health")
async def health() -> Any:
    return {"status": "ok", "app": settings.APP_NAME}

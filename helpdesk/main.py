"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from helpdesk.config import get_settings
from helpdesk.infrastructure.database import SessionLocal, init_db
from helpdesk.core.logging import configure_logging
from helpdesk.core.middleware import setup_middleware
from helpdesk.core.exceptions import register_exception_handlers

# Import routers
from helpdesk.interfaces.api.auth import router as auth_router
from helpdesk.interfaces.api.users import router as users_router
from helpdesk.interfaces.api.orders import router as orders_router
from helpdesk.interfaces.api.support_requests import router as support_requests_router
from helpdesk.interfaces.api.service_requests import router as service_requests_router
from helpdesk.interfaces.api.reports import router as reports_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting helpdesk API", env=settings.ENVIRONMENT)

    # Create DB tables (no migrations yet)
    init_db()
    logger.info("Database tables created/verified")

    from helpdesk.application.services.auth_service import ensure_default_admin
    from helpdesk.domain.models.user import User
    from helpdesk.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

    db = SessionLocal()
    try:
        admin = ensure_default_admin(SQLAlchemyUserRepository(db, User))
        if admin:
            logger.info("Default admin user created", email=admin.email)
    finally:
        db.close()

    yield

    logger.info("Helpdesk API stopped")


app = FastAPI(
    title="Helpdesk API",
    description="Orders, support requests, service requests and staff reports",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup Middleware (Correlation ID, Logging)
setup_middleware(app)

register_exception_handlers(app)

# Starlette runs the last added middleware first, so CORS wraps everything
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(orders_router)
app.include_router(support_requests_router)
app.include_router(service_requests_router)
app.include_router(reports_router)


@app.get("/")
def root():
    return {
        "name": "Helpdesk API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}

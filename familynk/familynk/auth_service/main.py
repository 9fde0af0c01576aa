"""
Familynk auth service - login, registration and token refresh over a
relational users table.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from .config import settings, validate_runtime_config
from .db import init_db
from .errors import register_exception_handlers
from .routes import auth, health
from .utils.log_setup import configure_logging

configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Validate configuration and create tables on startup"""
    validate_runtime_config(settings)
    init_db()
    logger.info("Auth service started (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Familynk Auth Service",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(health.router)

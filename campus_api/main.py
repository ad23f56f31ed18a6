import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campus_api import __version__
from campus_api.config import settings
from campus_api.database import Base, engine
from campus_api.errors import register_exception_handlers
from campus_api.logging_config import configure_logging
from campus_api.middleware import RequestContextMiddleware
from campus_api.routers import current_user, resource_routers

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if settings.AUTO_CREATE_SCHEMA:
        logger.info("AUTO_CREATE_SCHEMA enabled; creating missing tables")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    logger.info("Campus API started (env=%s)", settings.APP_ENV)
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="Campus Records API",
    description="List/get/create/update/delete for campus record resources, gated by user and admin roles",
    version=__version__,
    lifespan=lifespan,
)

register_exception_handlers(app)

# Middleware
app.add_middleware(RequestContextMiddleware)

# CORS - never combine wildcard origins with credentials
allow_credentials = settings.CORS_ORIGINS != ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
for router in resource_routers:
    app.include_router(router)
app.include_router(current_user.router)


@app.get("/health")
async def health():
    return {"status": "healthy", "version": __version__}

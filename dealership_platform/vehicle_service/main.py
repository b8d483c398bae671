"""
Vehicle Service - dealership inventory, protected by the Auth Service
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import uvicorn

from ..common.errors import install_error_handlers
from ..common.log_config import configure_logging
from ..common.routes.health import build_health_router
from .client import AuthServiceClient
from .config import settings
from .db import check_db_connection, init_db
from .routes import vehicles

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database and the verifier client on startup, close the client on shutdown"""
    init_db()
    client = AuthServiceClient(settings.AUTH_SERVICE_URL, timeout=settings.AUTH_VERIFY_TIMEOUT_SECONDS)
    app.state.auth_client = client
    logger.info("Verifying tokens against %s", settings.AUTH_SERVICE_URL)
    yield
    await client.aclose()


app = FastAPI(
    title="Vehicle Service",
    description="Vehicle inventory CRUD behind remote token verification",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

app.include_router(vehicles.router)
app.include_router(build_health_router(settings.SERVICE_NAME, check_db_connection))


def run() -> None:
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()

"""
User Service - CRUD for dealership user accounts
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import uvicorn

from ..common.errors import install_error_handlers
from ..common.log_config import configure_logging
from ..common.routes.health import build_health_router
from .config import settings
from .db import check_db_connection, init_db
from .routes import users

configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Initialize database on startup"""
    init_db()
    yield


app = FastAPI(
    title="User Service",
    description="User registration and profile management",
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

app.include_router(users.router)
app.include_router(build_health_router(settings.SERVICE_NAME, check_db_connection))


def run() -> None:
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()

"""
Pytest configuration shared by all service tests.

Each service runs against its own in-memory SQLite database. The vehicle
service reaches the real auth app in-process through ``httpx.ASGITransport``
unless a test swaps the transport out.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["AUTH_SERVICE_URL"] = "http://auth-service"
os.environ["VEHICLE_PARTIAL_UPDATE"] = "false"
os.environ["VEHICLE_MUTATION_POLICY"] = "any"

import httpx
import pytest
from fastapi.testclient import TestClient

from dealership_platform.auth_service import db as auth_db
from dealership_platform.auth_service.auth import get_token_service
from dealership_platform.auth_service.main import app as auth_app
from dealership_platform.auth_service.models import Credential
from dealership_platform.common.schemas import Identity
from dealership_platform.common.security import hash_password
from dealership_platform.user_service import db as user_db
from dealership_platform.user_service.main import app as user_app
from dealership_platform.vehicle_service import db as vehicle_db
from dealership_platform.vehicle_service.client import AuthServiceClient
from dealership_platform.vehicle_service.gate import get_auth_client
from dealership_platform.vehicle_service.main import app as vehicle_app

AUTH_BASE_URL = "http://auth-service"


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    for module in (auth_db, user_db, vehicle_db):
        module.Base.metadata.drop_all(bind=module.engine)
        module.Base.metadata.create_all(bind=module.engine)
    yield


@pytest.fixture
def auth_client():
    with TestClient(auth_app) as c:
        yield c


@pytest.fixture
def user_client():
    with TestClient(user_app) as c:
        yield c


def use_verifier_transport(transport: httpx.AsyncBaseTransport) -> AuthServiceClient:
    """Point the vehicle service's gate at one client that sends through ``transport``."""
    client = AuthServiceClient(AUTH_BASE_URL, timeout=1.0, transport=transport)
    vehicle_app.dependency_overrides[get_auth_client] = lambda: client
    return client


@pytest.fixture
def vehicle_client():
    use_verifier_transport(httpx.ASGITransport(app=auth_app))
    with TestClient(vehicle_app) as c:
        yield c
    vehicle_app.dependency_overrides.clear()


def create_credential(email="seller@example.com", password="secret123", role="user", name="Seller"):
    """Insert a user straight into the auth service's users table."""
    db = auth_db.SessionLocal()
    try:
        credential = Credential(name=name, email=email, password=hash_password(password), role=role)
        db.add(credential)
        db.commit()
        db.refresh(credential)
        return credential.id
    finally:
        db.close()


def auth_header_for(user_id: int, role: str = "user") -> dict:
    token = get_token_service().issue(Identity(id=user_id, role=role))
    return {"Authorization": f"Bearer {token}"}

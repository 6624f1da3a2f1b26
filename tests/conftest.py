"""
Shared fixtures

Every test runs against a fresh SQLite database in a temporary directory,
recreated and reseeded with the demo catalog.
"""
import asyncio
import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="storefront-tests-")

os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'storefront.db')}"
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_EMAIL"] = "admin@relojesangel.com"
os.environ["ADMIN_PASSWORD"] = "Password123"

import pytest
from fastapi.testclient import TestClient

from storefront.core.config import settings
from storefront.core.database import AsyncSessionLocal, drop_db, init_db
from storefront.core.security import build_admin_account
from storefront.db.seed import seed_products
from storefront.main import app
from tests.helpers import ADMIN_EMAIL, ADMIN_PASSWORD, login, register


@pytest.fixture
def client():
    """HTTP client over a freshly created and seeded database"""
    asyncio.run(drop_db())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def other_client(client):
    """A second browser sharing the same application and database"""
    return TestClient(app)


@pytest.fixture
def admin_client(client):
    response = login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    assert response.status_code == 200
    return client


@pytest.fixture
def customer_client(client):
    assert register(client, "jane@example.com").status_code == 201
    response = login(client, "jane@example.com", "Secret123")
    assert response.status_code == 200
    return client


@pytest.fixture
async def db():
    """Async database session for service-level tests"""
    await drop_db()
    await init_db()
    async with AsyncSessionLocal() as session:
        await seed_products(session)
        yield session


@pytest.fixture
def admin_account():
    return build_admin_account(settings)

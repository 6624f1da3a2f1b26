"""Helpers shared by the HTTP-level tests"""
import asyncio

from fastapi.testclient import TestClient
from itsdangerous import BadSignature, TimestampSigner
from sqlalchemy import func, select, update

from storefront.core.config import settings
from storefront.core.database import AsyncSessionLocal
from storefront.main import app
from storefront.models import CartItem, Product

ADMIN_EMAIL = "admin@relojesangel.com"
ADMIN_PASSWORD = "Password123"


async def _count_cart_rows(user_id=None):
    async with AsyncSessionLocal() as session:
        query = select(func.count(CartItem.id))
        if user_id is not None:
            query = query.where(CartItem.user_id == user_id)
        return (await session.execute(query)).scalar_one()


async def _set_product_price(product_id, price):
    async with AsyncSessionLocal() as session:
        await session.execute(
            update(Product).where(Product.id == product_id).values(price=price)
        )
        await session.commit()


def count_cart_rows(user_id=None):
    """Number of persistent cart rows, optionally for one user"""
    return asyncio.run(_count_cart_rows(user_id))


def set_product_price(product_id, price):
    """Change a catalog price behind the application's back"""
    asyncio.run(_set_product_price(product_id, price))


def session_cookie(client: TestClient):
    return client.cookies.get(settings.SESSION_COOKIE)


def stored_session(cookie: str) -> dict:
    """Server-side state a session cookie points at, empty if none"""
    if not cookie:
        return {}
    try:
        session_id = TimestampSigner(settings.SECRET_KEY).unsign(cookie).decode("utf-8")
    except BadSignature:
        return {}
    return app.state.session_store.load(session_id) or {}


def session_payload(client: TestClient) -> dict:
    """Server-side state behind the session cookie held by a test client"""
    return stored_session(session_cookie(client))


def replay(client: TestClient, cookie: str, method: str = "GET", path: str = "/api/v1/cart"):
    """Send a request carrying a previously captured session cookie"""
    return client.request(method, path, headers={"Cookie": f"{settings.SESSION_COOKIE}={cookie}"})


def register(client: TestClient, email: str, password: str = "Secret123", name: str = "Test User"):
    return client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": password, "name": name},
    )


def login(client: TestClient, email: str, password: str):
    return client.post("/api/v1/auth/login", json={"email": email, "password": password})

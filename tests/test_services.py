"""
Service-level tests

Exercise AuthService, CartService, the two cart stores and OrderService
directly against the database, without the HTTP layer.
"""
import pytest
from sqlalchemy import func, select

from storefront.api.v1.auth.services import AuthService
from storefront.api.v1.cart.services import CartService
from storefront.api.v1.cart.stores import (
    EphemeralCartStore,
    PersistentCartStore,
    cart_store_for,
)
from storefront.api.v1.orders.services import OrderService, cart_total
from storefront.api.v1.products.services import ProductService
from storefront.core.exceptions import (
    AuthenticationException,
    ConflictException,
    NotFoundException,
    ValidationException,
)
from storefront.core.security import SecurityUtils
from storefront.core.session import Principal, PrincipalKind
from storefront.core.session_store import ServerSession, SessionStore
from storefront.models import CartItem, Order, User
from storefront.utils.validators import MAX_CART_QUANTITY

ADMIN_EMAIL = "admin@relojesangel.com"


async def cart_rows(db):
    return (await db.execute(select(func.count(CartItem.id)))).scalar_one()


class TestAuthService:
    async def test_register_normalizes_email(self, db, admin_account):
        service = AuthService(db, admin_account)

        user_id = await service.register("  Jane@Example.com ", "Secret123", "Jane")

        user = await db.get(User, user_id)
        assert user.email == "jane@example.com"
        assert user.is_active is True
        assert user.created_at is not None
        assert SecurityUtils.verify_password("Secret123", user.password_hash)
        assert user.password_hash != "Secret123"

    async def test_register_strips_markup_from_name(self, db, admin_account):
        service = AuthService(db, admin_account)

        user_id = await service.register("jane@example.com", "Secret123", "<b>Jane</b>  Doe", phone=" 600 ")

        user = await db.get(User, user_id)
        assert user.name == "Jane Doe"
        assert user.phone == "600"

    async def test_register_admin_email_conflicts_without_row(self, db, admin_account):
        service = AuthService(db, admin_account)

        with pytest.raises(ConflictException):
            await service.register(ADMIN_EMAIL.upper(), "Secret123", "Impostor")

        assert (await db.execute(select(func.count(User.id)))).scalar_one() == 0

    @pytest.mark.parametrize(
        "email, password, name",
        [
            ("bad", "Secret123", "Jane"),
            ("jane@example.com", "1234567", "Jane"),
            ("jane@example.com", "Secret123", ""),
        ],
    )
    async def test_register_validation(self, db, admin_account, email, password, name):
        with pytest.raises(ValidationException):
            await AuthService(db, admin_account).register(email, password, name)

    async def test_admin_login_ignores_store_contents(self, db, admin_account):
        """A stray row with the admin email does not shadow the built-in account"""
        db.add(User(
            email=ADMIN_EMAIL,
            password_hash=SecurityUtils.hash_password("SomethingElse1"),
            name="Stray",
        ))
        await db.commit()

        principal = await AuthService(db, admin_account).login(ADMIN_EMAIL, "Password123")

        assert principal.kind == PrincipalKind.ADMINISTRATIVE
        assert principal.id == "default-001"

    async def test_inactive_user_cannot_login(self, db, admin_account):
        service = AuthService(db, admin_account)
        user_id = await service.register("jane@example.com", "Secret123", "Jane")
        user = await db.get(User, user_id)
        user.is_active = False
        await db.commit()

        with pytest.raises(AuthenticationException) as exc_info:
            await service.login("jane@example.com", "Secret123")

        assert exc_info.value.detail == "Invalid credentials"

    async def test_login_failures_share_one_error(self, db, admin_account):
        service = AuthService(db, admin_account)
        await service.register("jane@example.com", "Secret123", "Jane")

        errors = []
        for email, password in [
            (ADMIN_EMAIL, "nope-nope"),
            ("ghost@example.com", "Secret123"),
            ("jane@example.com", "nope-nope"),
        ]:
            with pytest.raises(AuthenticationException) as exc_info:
                await service.login(email, password)
            errors.append((exc_info.value.status_code, exc_info.value.error_code, exc_info.value.detail))

        assert len(set(errors)) == 1

    def test_current_session_never_raises(self):
        assert AuthService.current_session({}) == {"authenticated": False, "user": None}
        assert AuthService.current_session({"user": {"id": 1}}) == {"authenticated": False, "user": None}
        assert AuthService.current_session({"user": "garbage"})["authenticated"] is False

        state = AuthService.current_session(
            {"user": {"id": 7, "email": "a@example.com", "name": "A", "kind": "registered"}}
        )
        assert state["authenticated"] is True
        assert state["user"].id == 7


class TestCartStores:
    def test_store_selected_by_principal_kind(self, admin_account):
        session = {}
        admin = Principal(id="default-001", email=ADMIN_EMAIL, name="Administrator", kind="administrative")
        customer = Principal(id=3, email="c@example.com", name="C", kind="registered")

        assert isinstance(cart_store_for(admin, session, db=None), EphemeralCartStore)
        store = cart_store_for(customer, session, db=None)
        assert isinstance(store, PersistentCartStore)
        assert store.user_id == 3

    async def test_ephemeral_merge_and_remove(self, db):
        session = {}
        service = CartService(db, EphemeralCartStore(session))

        await service.add_item(1, 1)
        await service.add_item(1, 2)
        await service.add_item(2, 1)

        lines = await service.list_items()
        assert [(line["product_id"], line["quantity"]) for line in lines] == [(1, 3), (2, 1)]
        assert session["cart"] == lines
        assert await cart_rows(db) == 0

        await service.remove_item(1)
        await service.remove_item(1)
        assert [line["product_id"] for line in await service.list_items()] == [2]

    async def test_ephemeral_list_is_a_copy(self, db):
        session = {}
        store = EphemeralCartStore(session)
        await CartService(db, store).add_item(1)

        lines = await store.list()
        lines[0]["quantity"] = 99

        assert session["cart"][0]["quantity"] == 1

    async def test_persistent_merge_is_single_row(self, db, admin_account):
        user_id = await AuthService(db, admin_account).register("jane@example.com", "Secret123", "Jane")
        service = CartService(db, PersistentCartStore(db, user_id))

        await service.add_item(1, 1)
        await service.add_item(1, 2)

        lines = await service.list_items()
        assert len(lines) == 1
        assert lines[0]["quantity"] == 3
        assert await cart_rows(db) == 1

    async def test_persistent_clear(self, db, admin_account):
        user_id = await AuthService(db, admin_account).register("jane@example.com", "Secret123", "Jane")
        service = CartService(db, PersistentCartStore(db, user_id))
        await service.add_item(1)
        await service.add_item(2)

        await service.clear()

        assert await service.list_items() == []

    async def test_deleting_user_cascades_to_cart(self, db, admin_account):
        user_id = await AuthService(db, admin_account).register("jane@example.com", "Secret123", "Jane")
        await CartService(db, PersistentCartStore(db, user_id)).add_item(1)

        await db.delete(await db.get(User, user_id))
        await db.commit()

        assert await cart_rows(db) == 0

    async def test_missing_product(self, db):
        with pytest.raises(NotFoundException):
            await CartService(db, EphemeralCartStore({})).add_item(404)

    @pytest.mark.parametrize("quantity", [0, -3, True, MAX_CART_QUANTITY + 1])
    async def test_rejects_bad_quantity(self, db, quantity):
        with pytest.raises(ValidationException):
            await CartService(db, EphemeralCartStore({})).add_item(1, quantity)


class _FailingClearStore(PersistentCartStore):
    async def clear(self) -> None:
        raise RuntimeError("clear failed")


class TestOrderService:
    def test_cart_total_rounds_to_cents(self):
        lines = [{"price": 0.1, "quantity": 3}, {"price": 2499.99, "quantity": 2}]

        assert str(cart_total(lines)) == "5000.28"

    async def test_failed_checkout_leaves_cart_untouched(self, db, admin_account):
        user_id = await AuthService(db, admin_account).register("jane@example.com", "Secret123", "Jane")
        principal = Principal(id=user_id, email="jane@example.com", name="Jane", kind="registered")
        await CartService(db, PersistentCartStore(db, user_id)).add_item(1, 2)

        with pytest.raises(RuntimeError):
            await OrderService(db).place_order(principal, _FailingClearStore(db, user_id))

        assert (await db.execute(select(func.count(Order.id)))).scalar_one() == 0
        assert await cart_rows(db) == 1

    async def test_place_order_does_not_touch_stock(self, db, admin_account):
        user_id = await AuthService(db, admin_account).register("jane@example.com", "Secret123", "Jane")
        principal = Principal(id=user_id, email="jane@example.com", name="Jane", kind="registered")
        store = PersistentCartStore(db, user_id)
        await CartService(db, store).add_item(1, 2)

        order = await OrderService(db).place_order(principal, store)

        assert order.total == 4999.98
        product = await ProductService(db).get_product(1)
        assert product.stock == 5


class TestSessionStore:
    def test_load_returns_a_copy(self):
        store = SessionStore(max_age=60)
        store.save("abc", {"cart": [{"product_id": 1, "quantity": 1}]})

        loaded = store.load("abc")
        loaded["cart"][0]["quantity"] = 5

        assert store.load("abc")["cart"][0]["quantity"] == 1

    def test_delete_forgets_state(self):
        store = SessionStore(max_age=60)
        store.save("abc", {"user": {"id": 1}})

        store.delete("abc")
        store.delete("abc")

        assert store.load("abc") is None
        assert "abc" not in store

    def test_expired_sessions_are_dropped(self):
        store = SessionStore(max_age=-1)
        store.save("abc", {"user": {"id": 1}})

        assert store.load("abc") is None
        assert len(store) == 0

    def test_clear_retires_session_id(self):
        session = ServerSession("abc", {"user": {"id": 1}, "cart": []})

        session.clear()
        session["user"] = {"id": 2}

        assert session.rotated is True
        assert session.session_id == "abc"

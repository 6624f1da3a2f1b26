"""
Cart storage regimes

The administrative account keeps its cart in the session, registered users
keep theirs in the cart_items table. Both expose the same interface and the
regime is picked from the principal kind recorded at login.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, MutableMapping
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, and_
from sqlalchemy.dialects import postgresql, sqlite

from storefront.models import CartItem, Product
from storefront.core.session import Principal, PrincipalKind, SESSION_CART_KEY

CartLine = Dict[str, Any]


class CartStore(ABC):
    """Common interface of both cart regimes"""

    kind: PrincipalKind

    @abstractmethod
    async def add(self, product: Product, quantity: int) -> None:
        """Add quantity of product, merging with an existing line"""

    @abstractmethod
    async def list(self) -> List[CartLine]:
        """Current cart lines"""

    @abstractmethod
    async def remove(self, product_id: int) -> None:
        """Delete the line for product_id if there is one"""

    @abstractmethod
    async def clear(self) -> None:
        """Delete every line"""


class EphemeralCartStore(CartStore):
    """Cart held in the session; lines carry a snapshot of the product"""

    kind = PrincipalKind.ADMINISTRATIVE

    def __init__(self, session: MutableMapping[str, Any]):
        self.session = session

    def _lines(self) -> List[CartLine]:
        return [dict(line) for line in self.session.get(SESSION_CART_KEY) or []]

    async def add(self, product: Product, quantity: int) -> None:
        lines = self._lines()

        for line in lines:
            if line["product_id"] == product.id:
                line["quantity"] += quantity
                break
        else:
            lines.append({
                "product_id": product.id,
                "quantity": quantity,
                "name": product.name,
                "price": product.price,
                "image": product.image,
                "brand": product.brand,
            })

        self.session[SESSION_CART_KEY] = lines

    async def list(self) -> List[CartLine]:
        return self._lines()

    async def remove(self, product_id: int) -> None:
        lines = self._lines()
        self.session[SESSION_CART_KEY] = [
            line for line in lines if line["product_id"] != product_id
        ]

    async def clear(self) -> None:
        self.session.pop(SESSION_CART_KEY, None)


class PersistentCartStore(CartStore):
    """
    Cart rows in the database, keyed by user id.

    Changes are made on the given session and committed by the caller, so
    checkout can clear the cart in the same transaction as the order insert.
    """

    kind = PrincipalKind.REGISTERED

    def __init__(self, db: AsyncSession, user_id: int):
        self.db = db
        self.user_id = user_id

    async def add(self, product: Product, quantity: int) -> None:
        dialect = self.db.get_bind().dialect.name

        if dialect in ("sqlite", "postgresql"):
            insert = sqlite.insert if dialect == "sqlite" else postgresql.insert
            stmt = insert(CartItem).values(
                user_id=self.user_id,
                product_id=product.id,
                quantity=quantity,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "product_id"],
                set_={"quantity": CartItem.quantity + stmt.excluded.quantity},
            )
            await self.db.execute(stmt)
            return

        # No native upsert: lock the (user, product) row before deciding
        result = await self.db.execute(
            select(CartItem.id)
            .where(and_(CartItem.user_id == self.user_id, CartItem.product_id == product.id))
            .with_for_update()
        )
        item_id = result.scalar_one_or_none()

        if item_id is None:
            self.db.add(CartItem(user_id=self.user_id, product_id=product.id, quantity=quantity))
            await self.db.flush()
        else:
            await self.db.execute(
                update(CartItem)
                .where(CartItem.id == item_id)
                .values(quantity=CartItem.quantity + quantity)
            )

    async def list(self) -> List[CartLine]:
        # Joined at read time: name and price follow the current catalog
        result = await self.db.execute(
            select(
                CartItem.id,
                CartItem.user_id,
                CartItem.product_id,
                CartItem.quantity,
                CartItem.added_at,
                Product.name,
                Product.price,
                Product.image,
                Product.brand,
            )
            .join(Product, CartItem.product_id == Product.id)
            .where(CartItem.user_id == self.user_id)
            .order_by(CartItem.id)
        )
        return [dict(row) for row in result.mappings().all()]

    async def remove(self, product_id: int) -> None:
        await self.db.execute(
            delete(CartItem).where(
                and_(CartItem.user_id == self.user_id, CartItem.product_id == product_id)
            )
        )

    async def clear(self) -> None:
        await self.db.execute(delete(CartItem).where(CartItem.user_id == self.user_id))


def cart_store_for(
    principal: Principal,
    session: MutableMapping[str, Any],
    db: AsyncSession,
) -> CartStore:
    """Select the storage regime from the principal kind"""
    if principal.kind == PrincipalKind.ADMINISTRATIVE:
        return EphemeralCartStore(session)
    return PersistentCartStore(db, int(principal.id))

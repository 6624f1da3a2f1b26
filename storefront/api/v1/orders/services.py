"""
Order service layer
Turns a cart into an immutable order snapshot
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy import select, desc
import logging

from storefront.models import Order, OrderItem
from storefront.core.exceptions import ValidationException
from storefront.core.session import Principal
from storefront.middleware.security import sanitize_text
from storefront.api.v1.cart.stores import CartLine, CartStore

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def cart_total(lines: List[CartLine]) -> Decimal:
    """Sum of price x quantity, rounded to cents"""
    total = sum(
        (Decimal(str(line["price"])) * line["quantity"] for line in lines),
        Decimal("0"),
    )
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


class OrderService:
    """Order placement and history"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def place_order(
        self,
        principal: Principal,
        store: CartStore,
        shipping_address: Optional[str] = None
    ) -> Order:
        """
        Place an order from the current cart

        The order and its lines are inserted and the cart is cleared in one
        transaction; if anything fails the transaction is rolled back and the
        cart is left as it was.

        Raises:
            ValidationException: For the administrative account or an empty cart
        """
        if principal.is_admin:
            raise ValidationException(
                "Orders cannot be placed with the built-in administrative account",
                error_code="ORDER_NOT_ALLOWED",
            )

        lines = await store.list()
        if not lines:
            raise ValidationException("Cart is empty", error_code="EMPTY_CART")

        order = Order(
            user_id=int(principal.id),
            total=float(cart_total(lines)),
            shipping_address=sanitize_text(shipping_address) or None,
            items=[
                OrderItem(
                    product_id=line["product_id"],
                    quantity=line["quantity"],
                    unit_price=line["price"],
                )
                for line in lines
            ],
        )

        try:
            self.db.add(order)
            await self.db.flush()
            await store.clear()
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"User {principal.id} placed order {order.id} for {order.total}")
        return await self.get_order(principal, order.id)

    async def get_order(self, principal: Principal, order_id: int) -> Optional[Order]:
        result = await self.db.execute(
            select(Order)
            .options(selectinload(Order.items))
            .where(Order.id == order_id, Order.user_id == int(principal.id))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_orders(self, principal: Principal) -> List[Order]:
        """Orders of the principal, newest first"""
        if principal.is_admin:
            return []

        result = await self.db.execute(
            select(Order)
            .options(selectinload(Order.items))
            .where(Order.user_id == int(principal.id))
            .order_by(desc(Order.id))
        )
        return list(result.scalars().all())

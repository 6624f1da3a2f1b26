"""
Cart service layer
Handles shopping cart business logic on top of a CartStore
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from storefront.core.exceptions import ValidationException
from storefront.utils.validators import MAX_CART_QUANTITY
from storefront.api.v1.products.services import ProductService
from .stores import CartLine, CartStore

logger = logging.getLogger(__name__)


class CartService:
    """Shopping cart service"""

    def __init__(self, db: AsyncSession, store: CartStore):
        self.db = db
        self.store = store

    async def add_item(self, product_id: int, quantity: int = 1) -> None:
        """
        Add item to cart

        Repeated adds of the same product increase the quantity of the
        existing line. Stock is informational and is not checked.

        Raises:
            ValidationException: If quantity is not a positive integer or is too large
            NotFoundException: If product not found
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationException("Quantity must be a positive integer")
        if quantity > MAX_CART_QUANTITY:
            raise ValidationException(f"Quantity cannot exceed {MAX_CART_QUANTITY}")

        product = await ProductService(self.db).get_product(product_id)

        await self.store.add(product, quantity)
        await self.db.commit()

        logger.debug(f"Added {quantity} x product {product_id} to {self.store.kind.value} cart")

    async def list_items(self) -> List[CartLine]:
        """Get cart lines"""
        return await self.store.list()

    async def remove_item(self, product_id: int) -> None:
        """Remove a product from the cart; a missing line is not an error"""
        await self.store.remove(product_id)
        await self.db.commit()

    async def clear(self) -> None:
        """Empty the cart"""
        await self.store.clear()
        await self.db.commit()

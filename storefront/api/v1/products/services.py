"""
Product service layer
Read-only access to the catalog
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc

from storefront.models import Product
from storefront.core.exceptions import NotFoundException


class ProductService:
    """Catalog reads"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_products(self) -> List[Product]:
        """All products, featured first, newest first within each group"""
        result = await self.db.execute(
            select(Product).order_by(desc(Product.is_featured), desc(Product.id))
        )
        return list(result.scalars().all())

    async def get_product(self, product_id: int) -> Product:
        """
        Get a single product

        Raises:
            NotFoundException: If no product has this id
        """
        product = await self.db.get(Product, product_id)
        if product is None:
            raise NotFoundException("Product not found")
        return product

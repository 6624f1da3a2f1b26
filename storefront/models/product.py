"""Product model"""

from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, Index

from .base import Base, CreatedAtModel


class Product(Base, CreatedAtModel):
    """Catalog product, read-only for the storefront"""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Pricing
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    previous_price = Column(Numeric(10, 2, asdecimal=False), nullable=True)

    # Categorization
    brand = Column(String(100), nullable=False)
    category = Column(String(50), nullable=False, default="classic", server_default="classic")

    # Media and inventory
    image = Column(String(500), nullable=True)
    stock = Column(Integer, nullable=False, default=10, server_default="10")
    is_featured = Column(Boolean, nullable=False, default=False, server_default="0")

    __table_args__ = (
        Index("idx_products_featured_id", "is_featured", "id"),
    )

    @property
    def on_sale(self) -> bool:
        """A previous price marks the product as discounted"""
        return self.previous_price is not None

"""Models package initialization"""

from .base import Base
from .user import User
from .product import Product
from .cart import CartItem
from .order import Order, OrderItem, OrderStatus

__all__ = [
    "Base",
    "User",
    "Product",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderStatus",
]

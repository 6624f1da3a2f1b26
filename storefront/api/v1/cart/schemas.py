"""
Cart schemas for request/response validation
"""

from pydantic import AliasChoices, BaseModel, Field
from typing import Optional
from datetime import datetime

from storefront.utils.validators import MAX_CART_QUANTITY, MAX_DB_INTEGER


class CartItemCreate(BaseModel):
    """Schema for adding item to cart"""
    product_id: int = Field(
        ...,
        ge=1,
        le=MAX_DB_INTEGER,
        validation_alias=AliasChoices("product_id", "productId"),
    )
    quantity: int = Field(1, ge=1, le=MAX_CART_QUANTITY)


class CartLineResponse(BaseModel):
    """
    One cart line

    Session carts return a snapshot taken at first add, persistent carts
    return the stored row joined with the current product, so id, user_id
    and added_at are present only for the latter.
    """
    id: Optional[int] = None
    user_id: Optional[int] = None
    product_id: int
    quantity: int
    name: str
    price: float
    image: Optional[str] = None
    brand: str
    added_at: Optional[datetime] = None


class CartMessage(BaseModel):
    message: str

"""
Order schemas for request/response validation
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class OrderCreate(BaseModel):
    """Checkout request"""
    shipping_address: Optional[str] = Field(None, max_length=500)


class OrderItemResponse(BaseModel):
    product_id: int
    quantity: int
    unit_price: float

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    id: int
    total: float
    status: str
    shipping_address: Optional[str] = None
    created_at: Optional[datetime] = None
    items: List[OrderItemResponse]

    model_config = {"from_attributes": True}

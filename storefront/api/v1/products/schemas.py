"""Product Pydantic schemas"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ProductResponse(BaseModel):
    """Catalog product as stored"""
    id: int
    name: str
    description: Optional[str] = None
    price: float
    previous_price: Optional[float] = None
    on_sale: bool
    brand: str
    category: str
    image: Optional[str] = None
    stock: int
    is_featured: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

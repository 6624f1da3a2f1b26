"""Orders router"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from storefront.core.database import get_db
from storefront.core.session import Principal, get_current_principal
from storefront.api.v1.cart.router import get_cart_store
from storefront.api.v1.cart.stores import CartStore
from .schemas import OrderCreate, OrderResponse
from .services import OrderService

router = APIRouter()


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def place_order(
    order_data: Optional[OrderCreate] = None,
    principal: Principal = Depends(get_current_principal),
    store: CartStore = Depends(get_cart_store),
    db: AsyncSession = Depends(get_db),
):
    """Place an order with the current cart contents"""
    shipping_address = order_data.shipping_address if order_data else None
    return await OrderService(db).place_order(principal, store, shipping_address)


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Order history of the current user"""
    return await OrderService(db).list_orders(principal)

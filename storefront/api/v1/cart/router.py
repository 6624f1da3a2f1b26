"""Cart router; every route requires a logged-in session"""

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from storefront.core.database import get_db
from storefront.core.session import Principal, get_current_principal
from storefront.utils.validators import MAX_DB_INTEGER
from .schemas import CartItemCreate, CartLineResponse, CartMessage
from .services import CartService
from .stores import CartStore, cart_store_for

router = APIRouter()


def get_cart_store(
    request: Request,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
) -> CartStore:
    return cart_store_for(principal, request.session, db)


def get_cart_service(
    store: CartStore = Depends(get_cart_store),
    db: AsyncSession = Depends(get_db),
) -> CartService:
    return CartService(db, store)


@router.get("", response_model=List[CartLineResponse], response_model_exclude_unset=True)
async def get_cart(service: CartService = Depends(get_cart_service)):
    """Get cart"""
    return await service.list_items()


@router.post("", response_model=CartMessage)
async def add_to_cart(
    item_data: CartItemCreate,
    service: CartService = Depends(get_cart_service),
):
    """Add item to cart"""
    await service.add_item(item_data.product_id, item_data.quantity)
    return CartMessage(message="Product added to cart")


@router.delete("/{product_id}", response_model=CartMessage)
async def remove_from_cart(
    product_id: int = Path(..., ge=1, le=MAX_DB_INTEGER),
    service: CartService = Depends(get_cart_service),
):
    """Remove item from cart"""
    await service.remove_item(product_id)
    return CartMessage(message="Product removed from cart")

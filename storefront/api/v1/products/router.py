"""Products API router"""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from storefront.core.database import get_db
from storefront.utils.validators import MAX_DB_INTEGER
from .schemas import ProductResponse
from .services import ProductService

router = APIRouter()


@router.get("", response_model=List[ProductResponse])
async def list_products(db: AsyncSession = Depends(get_db)):
    """Get the full catalog"""
    return await ProductService(db).list_products()


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int = Path(..., ge=1, le=MAX_DB_INTEGER),
    db: AsyncSession = Depends(get_db),
):
    """Get a single product"""
    return await ProductService(db).get_product(product_id)

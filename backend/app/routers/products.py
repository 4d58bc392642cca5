import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_session
from app.schemas.product import (
    MessageResponse,
    PageMeta,
    ProductCreate,
    ProductList,
    ProductOut,
    ProductUpdate,
    ReorderRequest,
    ReorderResponse,
)
from app.services import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductList)
async def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: str = "",
    session: AsyncSession = Depends(get_session),
):
    products, total = await product_service.list_products(session, page=page, limit=limit, search=search)
    return ProductList(
        data=[ProductOut.from_model(p) for p in products],
        meta=PageMeta(total=total, page=page, limit=limit),
    )


@router.get("/categories", response_model=list[str])
async def list_categories(session: AsyncSession = Depends(get_session)):
    return await product_service.list_categories(session)


@router.post("", response_model=ProductOut, status_code=201)
async def create_product(payload: ProductCreate, session: AsyncSession = Depends(get_session)):
    product = await product_service.create_product(session, payload)
    return ProductOut.from_model(product)


@router.post("/reorder", response_model=ReorderResponse)
async def reorder_products(payload: ReorderRequest, session: AsyncSession = Depends(get_session)):
    try:
        await product_service.reorder_products(session, payload.category, payload.ids)
    except SQLAlchemyError as e:
        logger.error(f"Reorder failed: {e}")
        raise HTTPException(status_code=500, detail="Reorder failed")
    return ReorderResponse(ok=True)


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: str, session: AsyncSession = Depends(get_session)):
    product = await product_service.get_product(session, product_id)
    return ProductOut.from_model(product)


@router.put("/{product_id}", response_model=ProductOut)
async def update_product(product_id: str, payload: ProductUpdate, session: AsyncSession = Depends(get_session)):
    product = await product_service.update_product(session, product_id, payload)
    return ProductOut.from_model(product)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str, session: AsyncSession = Depends(get_session)):
    await product_service.soft_delete_product(session, product_id)
    return MessageResponse(message="Deleted")

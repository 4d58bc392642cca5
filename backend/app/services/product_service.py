"""
Product store operations.
Every function takes the request's AsyncSession; callers own its lifetime.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy import bindparam, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ErrorType
from app.exceptions import AppException, field_error
from app.models.product import Product, DEFAULT_CATEGORY
from app.schemas.product import ProductCreate, ProductUpdate
from app.utils.text import slugify

logger = logging.getLogger(__name__)

_SORT_LAST = float("inf")


def _normalize_category(category: str | None) -> str:
    category = (category or "").strip()
    return category or DEFAULT_CATEGORY


def _checked_slug(value: str) -> str:
    slug = slugify(value)
    if not slug:
        raise AppException(
            ErrorType.VALIDATION,
            "Slug is empty",
            errors=[field_error("slug", "Slug must contain at least one letter or digit")],
        )
    return slug


async def _ensure_slug_available(session: AsyncSession, slug: str, exclude_id: str | None = None):
    # Soft-deleted products keep their slug
    query = select(Product.id).where(Product.slug == slug)
    if exclude_id:
        query = query.where(Product.id != exclude_id)
    if (await session.execute(query.limit(1))).scalar() is not None:
        raise AppException(
            ErrorType.VALIDATION,
            "Slug already exists",
            errors=[field_error("slug", f"Slug '{slug}' is already in use", "unique")],
        )


async def _commit(session: AsyncSession, slug: str):
    try:
        await session.commit()
    except IntegrityError:
        # Lost a race with a concurrent write of the same slug
        await session.rollback()
        raise AppException(
            ErrorType.VALIDATION,
            "Slug already exists",
            errors=[field_error("slug", f"Slug '{slug}' is already in use", "unique")],
        )


def _active():
    return Product.deleted_at.is_(None)


async def list_products(session: AsyncSession, page: int = 1, limit: int = 20, search: str = "") -> tuple[list[Product], int]:
    """Non-deleted products, manual order first (unranked last), newest first on ties."""
    conditions = [_active()]
    search = search.strip()
    if search:
        conditions.append(or_(
            Product.title.icontains(search, autoescape=True),
            Product.category.icontains(search, autoescape=True),
        ))

    total = (await session.execute(
        select(func.count()).select_from(Product).where(*conditions)
    )).scalar_one()

    result = await session.execute(
        select(Product)
        .where(*conditions)
        .order_by(Product.order.is_(None), Product.order.asc(), Product.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def list_categories(session: AsyncSession) -> list[str]:
    result = await session.execute(
        select(Product.category).where(_active()).distinct().order_by(Product.category)
    )
    return [category for category in result.scalars().all() if category]


async def next_order(session: AsyncSession, category: str) -> int:
    """One past the highest rank in the category, or 0 for an empty category."""
    current = (await session.execute(
        select(func.max(Product.order)).where(Product.category == category, _active())
    )).scalar()
    return 0 if current is None else current + 1


async def get_product(session: AsyncSession, product_id: str) -> Product:
    """Fetch by id, including soft-deleted products."""
    product = await session.get(Product, product_id)
    if product is None:
        raise AppException(ErrorType.NOT_FOUND, "Not found")
    return product


async def create_product(session: AsyncSession, payload: ProductCreate) -> Product:
    slug = _checked_slug(payload.slug or payload.title)
    await _ensure_slug_available(session, slug)

    category = _normalize_category(payload.category)
    order = payload.order
    if order is None:
        order = await next_order(session, category)

    product = Product(
        title=payload.title,
        slug=slug,
        description=payload.description,
        price_selling=payload.price.selling,
        price_original=payload.price.original,
        images=list(payload.images),
        category=category,
        stock=payload.stock,
        status=payload.status,
        notes=payload.notes,
        order=order,
    )
    session.add(product)
    await _commit(session, slug)
    await session.refresh(product)

    logger.info(f"Created product {product.id} ({product.slug}) in '{category}' at order {order}")
    return product


async def update_product(session: AsyncSession, product_id: str, payload: ProductUpdate) -> Product:
    product = await get_product(session, product_id)
    data = payload.model_dump(exclude_unset=True)

    if data.get("slug"):
        data["slug"] = _checked_slug(data["slug"])
    elif "title" in data:
        data["slug"] = _checked_slug(data["title"])
    else:
        data.pop("slug", None)

    if "slug" in data and data["slug"] != product.slug:
        await _ensure_slug_available(session, data["slug"], exclude_id=product.id)

    price = data.pop("price", None)
    if price is not None:
        product.price_selling = price["selling"]
        product.price_original = price.get("original")

    if "category" in data:
        data["category"] = _normalize_category(data["category"])

    for field, value in data.items():
        setattr(product, field, value)

    await _commit(session, product.slug)
    await session.refresh(product)

    logger.info(f"Updated product {product.id}: {', '.join(sorted(payload.model_fields_set))}")
    return product


async def soft_delete_product(session: AsyncSession, product_id: str) -> Product:
    """Hide the product from listings. Repeat deletes keep the first timestamp."""
    product = await get_product(session, product_id)
    if product.deleted_at is None:
        product.deleted_at = datetime.now(timezone.utc)
        await session.commit()
        logger.info(f"Soft-deleted product {product.id}")
    return product


async def reorder_products(session: AsyncSession, category: str, ids: list[str]):
    """Set each id's order to its index, only for live products in ``category``."""
    category = _normalize_category(category)
    table = Product.__table__
    stmt = (
        update(table)
        .where(
            table.c.id == bindparam("b_id"),
            table.c.category == category,
            table.c.deleted_at.is_(None),
        )
        .values(order=bindparam("b_order"))
    )
    await session.execute(stmt, [{"b_id": product_id, "b_order": index} for index, product_id in enumerate(ids)])
    await session.commit()
    logger.info(f"Reordered {len(ids)} products in '{category}'")


def group_by_category(products: list[Product]) -> dict[str, list[Product]]:
    """Group in first-appearance order; within a group sort by order, unranked last."""
    grouped: dict[str, list[Product]] = {}
    for product in products:
        grouped.setdefault(product.category or DEFAULT_CATEGORY, []).append(product)

    for items in grouped.values():
        items.sort(key=lambda p: p.order if p.order is not None else _SORT_LAST)
    return grouped

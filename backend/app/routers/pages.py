import json
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import safe_redirect_target
from app.config import Config
from app.db.database import get_session
from app.errors import ErrorType
from app.exceptions import AppException
from app.schemas.product import ProductOut
from app.services import product_service
from app.services.image_service import image_service
from app.utils.text import format_currency

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["currency"] = format_currency
templates.env.globals["selling_currency"] = Config.SELLING_CURRENCY
templates.env.globals["original_currency"] = Config.ORIGINAL_CURRENCY

router = APIRouter(include_in_schema=False)


def _form_context(product: ProductOut | None, categories: list[str]) -> dict:
    return {
        "product": product,
        # Embedded in a <script> block
        "product_json": json.dumps(product.model_dump(mode="json", by_alias=True) if product else None).replace("</", "<\\/"),
        "categories": categories,
        "can_upload": image_service.can_upload(),
    }


@router.get("/")
async def dashboard(request: Request, session: AsyncSession = Depends(get_session)):
    products, total = await product_service.list_products(session, page=1, limit=Config.DASHBOARD_LIMIT)
    grouped = product_service.group_by_category(products)
    return templates.TemplateResponse(request, "dashboard.html", {
        "grouped": grouped,
        "categories": list(grouped.keys()),
        "total": total,
    })


@router.get("/login")
async def login_page(request: Request, redirect: str = "/"):
    return templates.TemplateResponse(request, "login.html", {
        "redirect": safe_redirect_target(redirect),
    })


@router.get("/products/new")
async def new_product_page(request: Request, session: AsyncSession = Depends(get_session)):
    categories = await product_service.list_categories(session)
    return templates.TemplateResponse(request, "product_form.html", _form_context(None, categories))


@router.get("/products/{product_id}")
async def edit_product_page(product_id: str, request: Request, session: AsyncSession = Depends(get_session)):
    try:
        product = await product_service.get_product(session, product_id)
    except AppException as e:
        if e.error_type != ErrorType.NOT_FOUND:
            raise
        return templates.TemplateResponse(request, "not_found.html", {"product_id": product_id}, status_code=404)

    categories = await product_service.list_categories(session)
    return templates.TemplateResponse(request, "product_form.html", _form_context(ProductOut.from_model(product), categories))

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import (
    AfterValidator,
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
    field_validator,
)

Status = Literal["draft", "active", "archived"]
Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

_url_adapter = TypeAdapter(AnyHttpUrl)


def _check_image_url(value: str) -> str:
    # Validate, but keep the string exactly as submitted
    _url_adapter.validate_python(value)
    return value


ImageUrl = Annotated[str, AfterValidator(_check_image_url)]


class PriceIn(BaseModel):
    selling: float = Field(..., ge=0)
    original: float | None = Field(None, ge=0)


class ProductCreate(BaseModel):
    title: Title
    slug: str | None = None
    description: str | None = None
    price: PriceIn
    images: list[ImageUrl] = Field(default_factory=list)
    category: str | None = None
    stock: int = Field(0, ge=0)
    status: Status = "draft"
    notes: str | None = None
    order: int | None = Field(None, ge=0)


class ProductUpdate(BaseModel):
    """Partial update. Omitted fields are left alone; required fields may not be null."""

    title: Title | None = None
    slug: str | None = None
    description: str | None = None
    price: PriceIn | None = None
    images: list[ImageUrl] | None = None
    category: str | None = None
    stock: int | None = Field(None, ge=0)
    status: Status | None = None
    notes: str | None = None

    @field_validator("title", "price", "images", "stock", "status")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("Field may not be null")
        return value


class Price(BaseModel):
    selling: float
    original: float | None = None


class ProductOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    slug: str
    description: str | None = None
    price: Price
    images: list[str]
    category: str
    stock: int
    status: str
    notes: str | None = None
    order: int | None = None
    deleted_at: datetime | None = Field(None, alias="deletedAt")
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_model(cls, product: Any) -> "ProductOut":
        return cls(
            id=product.id,
            title=product.title,
            slug=product.slug,
            description=product.description,
            price=Price(selling=product.price_selling, original=product.price_original),
            images=list(product.images or []),
            category=product.category,
            stock=product.stock,
            status=product.status,
            notes=product.notes,
            order=product.order,
            deleted_at=product.deleted_at,
            created_at=product.created_at,
        )


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int


class ProductList(BaseModel):
    data: list[ProductOut]
    meta: PageMeta


class ReorderRequest(BaseModel):
    category: str = "Uncategorized"
    ids: list[Annotated[str, StringConstraints(min_length=1)]] = Field(..., min_length=1)


class ReorderResponse(BaseModel):
    ok: bool = True


class MessageResponse(BaseModel):
    message: str

import pytest
from pydantic import ValidationError

from app.schemas.product import ProductCreate, ProductUpdate, ReorderRequest


class TestProductCreate:
    """Tests for create payload validation."""

    def test_defaults(self):
        product = ProductCreate(title="Tote", price={"selling": 100})

        assert product.images == []
        assert product.stock == 0
        assert product.status == "draft"
        assert product.order is None
        assert product.price.original is None

    def test_title_is_trimmed(self):
        assert ProductCreate(title="  Tote  ", price={"selling": 1}).title == "Tote"

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            ProductCreate(title="   ", price={"selling": 1})

    def test_negative_selling_price_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ProductCreate(title="Tote", price={"selling": -1})

        assert exc_info.value.errors()[0]["loc"] == ("price", "selling")

    def test_selling_price_required(self):
        with pytest.raises(ValidationError):
            ProductCreate(title="Tote", price={"original": 10})

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            ProductCreate(title="Tote", price={"selling": 1}, status="sold")

    def test_stock_must_be_non_negative_integer(self):
        with pytest.raises(ValidationError):
            ProductCreate(title="Tote", price={"selling": 1}, stock=-2)
        with pytest.raises(ValidationError):
            ProductCreate(title="Tote", price={"selling": 1}, stock=1.5)

    def test_image_urls_kept_verbatim(self):
        url = "https://res.cloudinary.com/demo/image/upload/v1/sample.jpg"
        product = ProductCreate(title="Tote", price={"selling": 1}, images=[url])
        assert product.images == [url]

    def test_invalid_image_url_rejected(self):
        with pytest.raises(ValidationError):
            ProductCreate(title="Tote", price={"selling": 1}, images=["not a url"])


class TestProductUpdate:
    """Tests for partial update validation."""

    def test_only_sent_fields_are_set(self):
        update = ProductUpdate(stock=4)
        assert update.model_dump(exclude_unset=True) == {"stock": 4}

    def test_null_for_required_field_rejected(self):
        with pytest.raises(ValidationError):
            ProductUpdate(title=None)
        with pytest.raises(ValidationError):
            ProductUpdate(price=None)

    def test_optional_text_can_be_cleared(self):
        update = ProductUpdate(notes=None, description=None)
        assert update.model_dump(exclude_unset=True) == {"notes": None, "description": None}

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            ProductUpdate(price={"selling": -5})


class TestReorderRequest:
    def test_category_defaults(self):
        assert ReorderRequest(ids=["a"]).category == "Uncategorized"

    def test_ids_required_and_non_empty(self):
        with pytest.raises(ValidationError):
            ReorderRequest(category="Shoes", ids=[])
        with pytest.raises(ValidationError):
            ReorderRequest(category="Shoes", ids=[""])

import pytest
from app.utils.text import slugify, format_currency


class TestSlugify:
    """Tests for slug generation."""

    @pytest.mark.parametrize("value,expected", [
        ("Hello World!", "hello-world"),
        ("  Running   Shoes  ", "running-shoes"),
        ("--Already-a-slug--", "already-a-slug"),
        ("Matcha Powder 100g", "matcha-powder-100g"),
        ("Café & Crème", "caf-cr-me"),
        ("!!!", ""),
        (42, "42"),
    ])
    def test_slugify(self, value, expected):
        assert slugify(value) == expected

    @pytest.mark.parametrize("value", [
        "Hello World!",
        "  A__B  c ",
        "UPPER lower 123",
        "ümlaut-ß",
        "",
    ])
    def test_slugify_is_idempotent(self, value):
        assert slugify(slugify(value)) == slugify(value)

    def test_no_leading_trailing_or_double_hyphens(self):
        slug = slugify("  ** Big -- Sale ** ")
        assert slug == "big-sale"
        assert "--" not in slug


class TestFormatCurrency:
    """Tests for price display."""

    def test_known_symbols(self):
        assert format_currency(1200, "JPY") == "¥1,200"
        assert format_currency(250000, "VND") == "₫250,000"

    def test_rounds_to_whole_units(self):
        assert format_currency(1999.6, "JPY") == "¥2,000"

    def test_unknown_currency_uses_code(self):
        assert format_currency(5, "gbp") == "GBP 5"

    def test_none_is_blank(self):
        assert format_currency(None) == ""

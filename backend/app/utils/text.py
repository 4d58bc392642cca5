import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

CURRENCY_SYMBOLS = {
    "JPY": "¥",
    "VND": "₫",
    "USD": "$",
    "EUR": "€",
}


def slugify(value) -> str:
    """Lowercase, collapse non-alphanumeric runs to one hyphen, trim hyphens.

    >>> slugify("Hello World!")
    'hello-world'
    """
    return _NON_ALNUM.sub("-", str(value).strip().lower()).strip("-")


def format_currency(value, currency: str = "JPY") -> str:
    """Whole-unit price with a currency symbol, e.g. ``¥1,200``."""
    if value is None:
        return ""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        amount = 0.0
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.0f}"

import os

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./inventory.db")

    # Shared staff PIN. Empty disables the auth gate.
    APP_PIN = os.getenv("APP_PIN", "")
    COOKIE_NAME = "inventory_auth"
    COOKIE_SECURE = _as_bool(os.getenv("COOKIE_SECURE", "true"))
    SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(60 * 60 * 24 * 7)))

    # Cloudinary (direct browser uploads)
    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_UPLOAD_PRESET = os.getenv("CLOUDINARY_UPLOAD_PRESET", "")
    CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY", "")
    CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET", "")
    CLOUDINARY_FOLDER = os.getenv("CLOUDINARY_FOLDER", "inventory")

    # Public site URL, used as the CORS origin when set
    SITE_URL = os.getenv("SITE_URL", "")

    # Display
    SELLING_CURRENCY = os.getenv("SELLING_CURRENCY", "VND")
    ORIGINAL_CURRENCY = os.getenv("ORIGINAL_CURRENCY", "JPY")
    DASHBOARD_LIMIT = int(os.getenv("DASHBOARD_LIMIT", "100"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

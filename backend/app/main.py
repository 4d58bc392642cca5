import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError

from app.auth import PinAuthMiddleware
from app.config import Config
from app.db.database import db
from app.routers import auth, health, pages, products, uploads
from app.exceptions import (
    AppException,
    app_exception_handler,
    database_exception_handler,
    generic_exception_handler,
    validation_exception_handler,
)

# Configure logging
logging.basicConfig(
    level=Config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not Config.APP_PIN:
        logger.warning("APP_PIN is not set; the auth gate is disabled and every request is allowed")
    await db.connect()
    await db.create_all()
    yield
    await db.disconnect()


app = FastAPI(
    title="Inventory Manager",
    version="1.0.0",
    description="Mobile-first inventory management for retail staff",
    lifespan=lifespan
)

# Register exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SQLAlchemyError, database_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.add_middleware(PinAuthMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[Config.SITE_URL] if Config.SITE_URL else ["*"],
    allow_credentials=bool(Config.SITE_URL),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(products.router)
app.include_router(uploads.router)
app.include_router(pages.router)

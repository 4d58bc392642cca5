import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, JSON
from app.db.database import Base

DEFAULT_CATEGORY = "Uncategorized"


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=_new_id)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text)
    price_selling = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    price_original = Column(Numeric(14, 2, asdecimal=False))
    images = Column(JSON, nullable=False, default=list)
    category = Column(String(100), nullable=False, default=DEFAULT_CATEGORY, index=True)
    stock = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="draft")
    notes = Column(Text)
    order = Column(Integer)
    deleted_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

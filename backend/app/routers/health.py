from fastapi import APIRouter

from app.db.database import db

router = APIRouter(tags=["health"])


@router.get("/api/health")
async def health():
    """Health check endpoint."""
    database_ok = await db.ping()
    return {"status": "ok" if database_ok else "degraded", "database": "ok" if database_ok else "unavailable"}

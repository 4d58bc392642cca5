import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from app.auth import clear_session_cookie, pin_matches, set_session_cookie
from app.config import Config
from app.schemas.auth import LoginRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
async def login(request: LoginRequest):
    if not Config.APP_PIN:
        raise HTTPException(status_code=500, detail="PIN not configured")

    if not pin_matches(request.pin, Config.APP_PIN):
        logger.warning("Rejected login with incorrect PIN")
        raise HTTPException(status_code=401, detail="Unauthorized")

    response = JSONResponse(content={"message": "ok"})
    set_session_cookie(response, Config.APP_PIN)
    return response


@router.post("/logout")
async def logout():
    response = JSONResponse(content={"message": "ok"})
    clear_session_cookie(response)
    return response

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from app.db import session
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health():
    try:
        await session.ping_db()
    except Exception:
        logger.exception("health check could not reach the database")
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ok"}

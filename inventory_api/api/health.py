import logging

from inventory_api.db import engine
from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", tags=["health"])
def health():
    db_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database", exc_info=True)

    return {
        "status": "ok" if db_ok else "degraded",
        "db": db_ok,
    }

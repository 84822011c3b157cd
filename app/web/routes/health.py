import logging

from fastapi import APIRouter, Depends

from app.core.errors import StorageError
from app.domain.logins.services import LoginRecordStore
from app.web.dependencies import get_login_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", summary="Health check")
async def health(store: LoginRecordStore = Depends(get_login_store)) -> dict[str, str]:
    """Simple health check that also touches the database."""
    try:
        await store.ping()
        db_status = "ok"
    except StorageError as exc:
        db_status = "error"
        logger.exception("Database healthcheck failed", exc_info=exc)

    return {"status": "ok", "database": db_status}

"""API routes for recording and reviewing login attempts."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status

from app.domain.logins.models import LoginRecord
from app.domain.logins.schemas import ErrorOut, LoginCreate, LoginCreated, LoginOut, MessageOut
from app.domain.logins.services import LoginRecordStore
from app.web.dependencies import get_login_store

router = APIRouter()

STORAGE_ERROR = {status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorOut}}


def _as_text(value: object) -> Optional[str]:
    """Render a present value as stored text; empty values stay empty."""
    return str(value) if value else None


@router.post(
    "/login",
    response_model=LoginCreated,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorOut}, **STORAGE_ERROR},
)
async def create_login(
    payload: LoginCreate,
    store: LoginRecordStore = Depends(get_login_store),
) -> LoginCreated:
    """Record a login attempt; the server assigns the timestamp."""
    record_id = await store.insert(_as_text(payload.email), _as_text(payload.phone), payload.user_agent)
    return LoginCreated(message="Login salvo com sucesso!", id=record_id)


@router.get("/logins", response_model=list[LoginOut], responses=STORAGE_ERROR)
async def list_logins(store: LoginRecordStore = Depends(get_login_store)) -> list[LoginRecord]:
    """Return every recorded login, most recent first."""
    return await store.list_all()


@router.delete("/logins", response_model=MessageOut, responses=STORAGE_ERROR)
async def purge_logins(store: LoginRecordStore = Depends(get_login_store)) -> MessageOut:
    """Delete all recorded logins and restart the id sequence."""
    await store.purge_all()
    return MessageOut(message="Todos os dados foram limpos com sucesso.")

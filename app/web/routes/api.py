"""JSON API routes."""
from __future__ import annotations

from fastapi import APIRouter

from app.web.routes import logins

router = APIRouter()

router.include_router(logins.router, tags=["logins"])

"""Recorded login attempts: model, schemas and store."""

from .models import LoginRecord
from .services import LoginRecordStore

__all__ = ["LoginRecord", "LoginRecordStore"]

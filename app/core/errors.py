"""Error types raised by the login record store.

Each error carries a ``public_message`` that is safe to return to clients and
the HTTP status it maps to. The underlying cause is chained with ``raise ...
from exc`` and only ever reaches the logs.
"""
from __future__ import annotations

from fastapi import status


class LoginStoreError(Exception):
    """Base class for login record store failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Erro interno do servidor."

    def __init__(self, message: str | None = None, public_message: str | None = None) -> None:
        self.public_message = public_message or self.default_message
        super().__init__(message or self.public_message)


class ValidationError(LoginStoreError):
    """A required input field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email e telefone são obrigatórios."


class StorageError(LoginStoreError):
    """The backing store could not be read or written."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StartupError(LoginStoreError):
    """The backing store could not be opened or its schema created.

    Fatal only: it aborts startup and never reaches a client, so the
    inherited status code and public message go unused.
    """

    default_message = "Falha crítica ao iniciar o servidor."


__all__ = ["LoginStoreError", "StartupError", "StorageError", "ValidationError"]

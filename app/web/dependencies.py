from fastapi import Request

from app.domain.logins.services import LoginRecordStore


def get_login_store(request: Request) -> LoginRecordStore:
    """Return the store opened by the application lifespan."""
    return request.app.state.login_store

import os

# Keep test runs from writing logs/app.log into the working tree.
os.environ.setdefault("LOG_DIR", "")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.config import Settings  # noqa: E402
from app.domain.logins.services import LoginRecordStore  # noqa: E402
from main import create_app  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def app_settings(tmp_path) -> Settings:
    return Settings(DATA_DIR=tmp_path / "data", LOG_DIR="")


@pytest.fixture
def client(app_settings):
    with TestClient(create_app(app_settings)) as test_client:
        yield test_client


@pytest.fixture
async def store(app_settings):
    login_store = LoginRecordStore.from_settings(app_settings)
    await login_store.initialize()
    yield login_store
    await login_store.close()

import re

import pytest
from sqlalchemy import text

from app.core.errors import StartupError, StorageError, ValidationError
from app.domain.logins import services
from app.domain.logins.services import LoginRecordStore

pytestmark = pytest.mark.anyio

ISO_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


async def test_insert_returns_increasing_ids(store):
    first = await store.insert("a@x.com", "555")
    second = await store.insert("b@x.com", "666")
    third = await store.insert("c@x.com", "777", "curl/8.0")

    assert first == 1
    assert second > first
    assert third > second


@pytest.mark.parametrize(
    "email, phone",
    [
        ("", "555"),
        (None, "555"),
        ("a@x.com", ""),
        ("a@x.com", None),
        (None, None),
    ],
)
async def test_insert_requires_email_and_phone(store, email, phone):
    with pytest.raises(ValidationError) as exc_info:
        await store.insert(email, phone)

    assert exc_info.value.status_code == 400
    assert await store.list_all() == []


async def test_round_trip_keeps_values_and_assigns_timestamp(store):
    record_id = await store.insert("Ana@Example.com ", "+55 (11) 9999-0000", "Mozilla/5.0 (X11; Linux)")

    [record] = await store.list_all()
    assert record.id == record_id
    assert record.email == "Ana@Example.com "
    assert record.phone == "+55 (11) 9999-0000"
    assert record.user_agent == "Mozilla/5.0 (X11; Linux)"
    assert ISO_UTC.match(record.timestamp)


async def test_missing_user_agent_is_stored_as_null(store):
    await store.insert("a@x.com", "555")

    [record] = await store.list_all()
    assert record.user_agent is None


async def test_list_all_is_most_recent_first(store, monkeypatch):
    stamps = iter(
        [
            "2025-01-01T10:00:00.000Z",
            "2025-03-01T10:00:00.000Z",
            "2025-02-01T10:00:00.000Z",
        ]
    )
    monkeypatch.setattr(services, "utc_timestamp", lambda: next(stamps))

    for n in range(3):
        await store.insert(f"user{n}@x.com", str(n))

    records = await store.list_all()
    assert [r.email for r in records] == ["user1@x.com", "user2@x.com", "user0@x.com"]
    timestamps = [r.timestamp for r in records]
    assert timestamps == sorted(timestamps, reverse=True)


async def test_equal_timestamps_fall_back_to_id_descending(store, monkeypatch):
    monkeypatch.setattr(services, "utc_timestamp", lambda: "2025-01-01T00:00:00.000Z")

    ids = [await store.insert(f"user{n}@x.com", str(n)) for n in range(4)]

    records = await store.list_all()
    assert [r.id for r in records] == sorted(ids, reverse=True)


async def test_purge_all_empties_table_and_restarts_ids(store):
    for n in range(3):
        await store.insert(f"user{n}@x.com", str(n))

    removed = await store.purge_all()

    assert removed == 3
    assert await store.list_all() == []
    assert await store.insert("again@x.com", "1") == 1


async def test_purge_all_twice_is_a_no_op(store):
    await store.insert("a@x.com", "555")

    await store.purge_all()
    assert await store.purge_all() == 0
    assert await store.list_all() == []


async def test_purge_on_fresh_table(store):
    assert await store.purge_all() == 0
    assert await store.insert("a@x.com", "555") == 1


async def test_initialize_is_idempotent_and_data_persists(app_settings):
    first = LoginRecordStore.from_settings(app_settings)
    await first.initialize()
    await first.insert("a@x.com", "555")
    await first.initialize()
    await first.close()

    second = LoginRecordStore.from_settings(app_settings)
    await second.initialize()
    try:
        records = await second.list_all()
        assert [r.email for r in records] == ["a@x.com"]
        assert await second.insert("b@x.com", "666") == 2
    finally:
        await second.close()

    assert app_settings.database_path.exists()


async def test_initialize_fails_when_data_dir_is_a_file(tmp_path):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("")
    login_store = LoginRecordStore(
        f"sqlite+aiosqlite:///{blocker / 'database.db'}",
        data_dir=blocker,
    )

    with pytest.raises(StartupError):
        await login_store.initialize()

    await login_store.close()


async def test_storage_failures_raise_storage_error(store):
    async with store._engine.begin() as conn:
        await conn.execute(text("DROP TABLE logins"))

    with pytest.raises(StorageError) as insert_error:
        await store.insert("a@x.com", "555")
    assert insert_error.value.public_message == "Erro ao salvar os dados."
    assert insert_error.value.__cause__ is not None

    with pytest.raises(StorageError) as list_error:
        await store.list_all()
    assert list_error.value.public_message == "Erro ao buscar os dados."

    with pytest.raises(StorageError) as purge_error:
        await store.purge_all()
    assert purge_error.value.public_message == "Erro ao limpar os dados."


async def test_store_used_before_initialize(app_settings):
    login_store = LoginRecordStore.from_settings(app_settings)

    with pytest.raises(StorageError):
        await login_store.list_all()
    with pytest.raises(StorageError):
        await login_store.ping()


async def test_ping(store):
    await store.ping()


def test_utc_timestamp_format():
    assert ISO_UTC.match(services.utc_timestamp())


async def test_unencodable_text_raises_storage_error(store):
    with pytest.raises(StorageError) as exc_info:
        await store.insert("\ud800", "555")

    assert exc_info.value.public_message == "Erro ao salvar os dados."
    assert exc_info.value.__cause__ is not None
    assert await store.list_all() == []

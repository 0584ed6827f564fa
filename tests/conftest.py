import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from gymlog.core.config import Settings
from gymlog.core.db import Store


def _sqlite_url(path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=_sqlite_url(tmp_path / "test_workout.db"),
        SEED_EXERCISES=True,
        APP_ENV="test",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def client(settings: Settings):
    # Import after settings are built so the app picks up the test database
    from gymlog.main import create_app

    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def exercise_ids(client: TestClient) -> dict[str, int]:
    r = client.get("/api/exercises")
    assert r.status_code == 200
    return {e["name"]: e["id"] for e in r.json()}


@pytest_asyncio.fixture()
async def store(tmp_path):
    s = Store(_sqlite_url(tmp_path / "test_store.db"))
    await s.open(seed=True)
    yield s
    await s.close()

"""
Shared fixtures: every test gets its own SQLite file and upload directory,
and bcrypt runs at its minimum cost so signup/login stay fast.
"""
from __future__ import annotations

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from regs_insight.config import Settings
from regs_insight.db.bootstrap import ensure_tables
from regs_insight.db.session import Database
from regs_insight.main import create_app
from regs_insight.uploads.storage import BlobStorage

TEST_SECRET = "test-secret"


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        "UPLOAD_DIR": str(tmp_path / "uploads"),
        "PUBLIC_DIR": str(tmp_path / "public"),
        "JWT_SECRET": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
        "LOG_LEVEL": "INFO",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def storage(tmp_path) -> BlobStorage:
    s = BlobStorage(tmp_path / "blobs")
    s.ensure_root()
    return s


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings.sqlalchemy_url())
    assert await ensure_tables(db)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as s:
        yield s


def signup(client: TestClient, email: str = "a@x.com", password: str = "pw1", name: str | None = None) -> dict:
    body = {"email": email, "password": password}
    if name is not None:
        body["name"] = name
    resp = client.post("/api/signup", json=body)
    assert resp.status_code == 200, resp.text
    return resp.json()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def upload(client: TestClient, token: str, filename: str = "report.pdf", content: bytes = b"%PDF-1.4 test", **fields):
    return client.post(
        "/api/upload",
        headers=auth_header(token),
        files={"file": (filename, content, "application/octet-stream")},
        data={k: v for k, v in fields.items() if v is not None},
    )

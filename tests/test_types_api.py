import uuid

import httpx
import pytest

from betsmoke.auth.deps import require_admin
from betsmoke.auth.jwt import mint_access
from betsmoke.core.db import get_session
from betsmoke.main import app
from betsmoke.services.sportsmonks import SportsMonksError
from betsmoke.services.types import TypeNode, TypesCache, TypesSyncService
from betsmoke.services.types import store
from tests.fixtures.types_fixtures import FakeSource, raw_type

API_BASE = "http://test"


class FakeResult:
    def __init__(self, value):
        self.value = value

    def scalar_one_or_none(self):
        return self.value


class FakeSession:
    """Answers the admin-flag query with a fixed value (None = unknown user)."""

    def __init__(self, is_admin):
        self.is_admin = is_admin

    async def execute(self, stmt):
        return FakeResult(self.is_admin)


@pytest.fixture
def source():
    return FakeSource([raw_type(1), raw_type(2, model_type="event"), raw_type(3, parent_id=2, model_type="event")])


@pytest.fixture
async def client(sessionmaker, source):
    cache = TypesCache(sessionmaker)
    cache.replace(
        [
            TypeNode(id=34, parent_id=None, name="Corners", code="corners", developer_name="CORNERS", model_type="statistic"),
            TypeNode(id=14, parent_id=None, name="Goal", code="goal", developer_name="GOAL", model_type="event"),
        ]
    )
    app.state.types_cache = cache
    app.state.types_sync = TypesSyncService(lambda: source, sessionmaker)
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url=API_BASE) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def as_admin():
    app.dependency_overrides[require_admin] = lambda: "admin-user"
    yield
    app.dependency_overrides.pop(require_admin, None)


def _auth(user_id: str | None = None) -> dict:
    return {"Authorization": f"Bearer {mint_access(user_id or str(uuid.uuid4()))}"}


@pytest.mark.asyncio
async def test_health(client: httpx.AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_types_status(client: httpx.AsyncClient):
    resp = await client.get("/types/status")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["cache"]["count"] == 2
    assert data["cache"]["loaded"] is True
    assert data["cache"]["loadedAt"]
    assert data["cache"]["ageSeconds"] >= 0
    assert data["cache"]["modelTypes"] == ["event", "statistic"]


@pytest.mark.asyncio
async def test_get_type_by_id_and_code(client: httpx.AsyncClient):
    resp = await client.get("/types/34")
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Corners"
    assert body["developerName"] == "CORNERS"
    assert body["parentId"] is None

    resp = await client.get("/types/code/goal")
    assert resp.status_code == 200
    assert resp.json()["id"] == 14


@pytest.mark.asyncio
async def test_get_unknown_type_is_404(client: httpx.AsyncClient):
    resp = await client.get("/types/424242")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "type_not_found"
    assert (await client.get("/types/code/nope")).status_code == 404


@pytest.mark.asyncio
async def test_list_types_by_model_type(client: httpx.AsyncClient):
    resp = await client.get("/types", params={"model_type": "event"})
    assert resp.status_code == 200
    assert [t["id"] for t in resp.json()] == [14]
    assert (await client.get("/types")).status_code == 422


@pytest.mark.asyncio
async def test_admin_sync_replaces_cache(client: httpx.AsyncClient, as_admin):
    resp = await client.post("/admin/types/sync")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    result = data["result"]
    assert result["fetched"] == 3
    assert result["roots"] == 2
    assert result["children"] == 1
    assert result["stored"] == 3
    assert result["byModelType"] == {"event": 2, "statistic": 1}

    status = (await client.get("/types/status")).json()
    assert status["cache"]["count"] == 3
    assert (await client.get("/types/34")).status_code == 404
    assert (await client.get("/types/3")).json()["parentId"] == 2


@pytest.mark.asyncio
async def test_admin_sync_failure_returns_500_and_keeps_cache(client: httpx.AsyncClient, as_admin, source):
    source.error = SportsMonksError("API error: 502 Bad Gateway page=1")
    resp = await client.post("/admin/types/sync")
    assert resp.status_code == 500
    body = resp.json()
    assert body["status"] == "error"
    assert body["message"] == "Failed to sync types"
    assert "502" in body["error"]
    assert (await client.get("/types/status")).json()["cache"]["count"] == 2


@pytest.mark.asyncio
async def test_admin_sync_reload_failure_returns_500(client: httpx.AsyncClient, as_admin, sessionmaker, monkeypatch):
    async def failing_load():
        raise RuntimeError("cache reload failed")

    monkeypatch.setattr(app.state.types_cache, "load", failing_load)
    resp = await client.post("/admin/types/sync")
    assert resp.status_code == 500
    body = resp.json()
    assert body["message"] == "Failed to sync types"
    assert body["error"] == "cache reload failed"

    async with sessionmaker() as session:
        assert {n.id for n in await store.find_all(session)} == {1, 2, 3}
    assert (await client.get("/types/34")).status_code == 200
    assert (await client.get("/types/1")).status_code == 404


@pytest.mark.asyncio
async def test_admin_sync_while_running_is_409(client: httpx.AsyncClient, as_admin):
    service = app.state.types_sync
    await service._lock.acquire()
    try:
        resp = await client.post("/admin/types/sync")
    finally:
        service._lock.release()
    assert resp.status_code == 409
    assert resp.json()["detail"] == "sync_in_progress"


@pytest.mark.asyncio
async def test_admin_reload_reads_store(client: httpx.AsyncClient, as_admin):
    # store is empty until a sync runs
    resp = await client.post("/admin/types/reload")
    assert resp.status_code == 200
    assert resp.json()["cache"]["count"] == 0


@pytest.mark.asyncio
async def test_admin_sync_requires_token(client: httpx.AsyncClient):
    app.dependency_overrides[get_session] = lambda: FakeSession(True)
    resp = await client.post("/admin/types/sync")
    assert resp.status_code == 401
    resp = await client.post("/admin/types/sync", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_admin_sync_unknown_user_is_401(client: httpx.AsyncClient):
    app.dependency_overrides[get_session] = lambda: FakeSession(None)
    resp = await client.post("/admin/types/sync", headers=_auth())
    assert resp.status_code == 401
    assert resp.json()["detail"] == "user_not_found"


@pytest.mark.asyncio
async def test_admin_sync_non_admin_is_403(client: httpx.AsyncClient, source):
    app.dependency_overrides[get_session] = lambda: FakeSession(False)
    resp = await client.post("/admin/types/sync", headers=_auth())
    assert resp.status_code == 403
    assert resp.json()["detail"] == "admin_required"
    assert source.calls == 0


@pytest.mark.asyncio
async def test_admin_sync_with_admin_token(client: httpx.AsyncClient):
    app.dependency_overrides[get_session] = lambda: FakeSession(True)
    resp = await client.post("/admin/types/sync", headers=_auth())
    assert resp.status_code == 200
    assert resp.json()["result"]["stored"] == 3

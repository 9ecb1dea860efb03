import copy
import json
from typing import AsyncIterator, Optional

import httpx
import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from httpx import AsyncClient, ASGITransport

STORE_URL = "http://store.test"
ANON_KEY = "anon-key"

USERS = {
    "token-u1": "U1",
    "token-u2": "U2",
    "token-u3": "U3",
}


class FakeStore:
    """In-memory stand-in for the store's auth and table APIs."""

    def __init__(self) -> None:
        self.users = dict(USERS)
        self.tables: dict[str, dict[str, dict]] = {"games": {}}
        self.requests: list[httpx.Request] = []
        self.rest_error: Optional[str] = None
        # Called between a PATCH's arrival and its application
        self.before_update = None

    @property
    def games(self) -> dict[str, dict]:
        return self.tables["games"]

    @property
    def mutations(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method in ("POST", "PATCH", "DELETE")]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.headers.get("apikey") != ANON_KEY:
            return httpx.Response(401, json={"message": "Invalid API key"})

        path = request.url.path
        if path == "/auth/v1/user":
            return self._get_user(request)

        if path.startswith("/rest/v1/"):
            table = path.removeprefix("/rest/v1/")
            if table not in self.tables:
                return httpx.Response(404, json={"code": "42P01", "message": f'relation "{table}" does not exist'})
            if self.rest_error:
                return httpx.Response(500, json={"code": "XX000", "message": self.rest_error})
            rows = self.tables[table]
            if request.method == "POST":
                return self._insert(request, rows)
            if request.method == "GET":
                return httpx.Response(200, json=[copy.deepcopy(r) for r in rows.values() if _matches(r, request)])
            if request.method == "PATCH":
                return self._update(request, rows)

        return httpx.Response(404, json={"message": "Not Found"})

    def _get_user(self, request: httpx.Request) -> httpx.Response:
        scheme, _, token = request.headers.get("Authorization", "").partition(" ")
        user_id = self.users.get(token) if scheme == "Bearer" else None
        if user_id is None:
            return httpx.Response(401, json={"code": 401, "error_code": "bad_jwt", "msg": "invalid JWT"})
        return httpx.Response(200, json={"id": user_id, "aud": "authenticated", "role": "authenticated"})

    def _insert(self, request: httpx.Request, rows: dict) -> httpx.Response:
        new_rows = json.loads(request.content)
        for row in new_rows:
            if row["id"] in rows:
                return httpx.Response(409, json={
                    "code": "23505",
                    "message": 'duplicate key value violates unique constraint "games_pkey"',
                })
        for row in new_rows:
            rows[row["id"]] = copy.deepcopy(row)
        if "return=representation" in request.headers.get("Prefer", ""):
            return httpx.Response(201, json=new_rows)
        return httpx.Response(201)

    def _update(self, request: httpx.Request, rows: dict) -> httpx.Response:
        values = json.loads(request.content)
        if self.before_update is not None:
            self.before_update()
        changed = []
        for row in rows.values():
            if _matches(row, request):
                row.update(values)
                changed.append(copy.deepcopy(row))
        return httpx.Response(200, json=changed)


def _matches(row: dict, request: httpx.Request) -> bool:
    for column, expr in request.url.params.multi_items():
        if column == "select":
            continue
        op, _, value = expr.partition(".")
        if op == "eq" and str(row.get(column)) != value:
            return False
        if op == "is" and value == "null" and row.get(column) is not None:
            return False
    return True


@pytest.fixture()
def store_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", STORE_URL)
    monkeypatch.setenv("SUPABASE_ANON_KEY", ANON_KEY)
    monkeypatch.delenv("STORE_TIMEOUT", raising=False)


@pytest.fixture()
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture()
def app(store_env, fake_store: FakeStore):
    from lobby.main import create_app
    return create_app(store_transport=fake_store.transport)


@pytest_asyncio.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            yield ac

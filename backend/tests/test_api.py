import threading
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from org_graph.main import app
from org_graph.services.directory import DirectoryError

CHAIN = [
    {"id": 1, "displayName": "Alice", "manager": None},
    {"id": 2, "displayName": "Bob", "manager": {"id": 1}},
    {"id": 3, "displayName": "Carol", "manager": {"id": 2}},
]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def directory_url(monkeypatch):
    monkeypatch.setenv("ORG_GRAPH_DIRECTORY_URL", "https://intranet.example.com/directory.json")


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


@pytest.mark.anyio
async def test_render_inline_chain(client: AsyncClient):
    resp = await client.post("/api/graph", json={"employees": CHAIN, "ticks": 3})
    assert resp.status_code == 200
    data = resp.json()
    assert [(e["source"], e["target"]) for e in data["edges"]] == [(1, 0), (2, 1)]
    assert [n["radius_multiplier"] for n in data["nodes"]] == [1.6, 1.5, 1.0]
    assert all(n["x"] is not None for n in data["nodes"])
    assert data["group_mode"] == "none"
    assert data["match_count_text"] == ""


@pytest.mark.anyio
async def test_render_inline_with_search(client: AsyncClient):
    resp = await client.post(
        "/api/graph",
        json={"employees": CHAIN, "query": "carol", "ticks": 0},
    )
    data = resp.json()
    assert [n["non_match"] for n in data["nodes"]] == [True, True, False]
    assert data["selected_id"] == 3
    assert data["match_count_text"] == "(1 matches)"
    assert data["detail"]["name"] == "Carol"


@pytest.mark.anyio
async def test_render_inline_reports_missing_manager(client: AsyncClient):
    employees = CHAIN + [{"id": 4, "displayName": "Dan", "manager": {"id": 42}}]
    resp = await client.post("/api/graph", json={"employees": employees, "ticks": 0})
    data = resp.json()
    assert len(data["edges"]) == 2
    assert data["missing_managers"] == [4]


@pytest.mark.anyio
async def test_render_inline_unknown_selection(client: AsyncClient):
    resp = await client.post(
        "/api/graph", json={"employees": CHAIN, "selected_id": 99, "ticks": 0}
    )
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_render_inline_bad_group_mode(client: AsyncClient):
    resp = await client.post(
        "/api/graph", json={"employees": CHAIN, "group_by": "team", "ticks": 0}
    )
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_graph_requires_directory_url(client: AsyncClient, monkeypatch):
    monkeypatch.delenv("ORG_GRAPH_DIRECTORY_URL", raising=False)
    resp = await client.get("/api/graph")
    assert resp.status_code == 503


@pytest.mark.anyio
async def test_graph_from_directory(client: AsyncClient, directory_url):
    from org_graph.models.employee_models import Employee

    employees = [Employee.model_validate(e) for e in CHAIN]
    with patch(
        "org_graph.routers.directory.Directory.get_users",
        new=AsyncMock(return_value=employees),
    ):
        resp = await client.get(
            "/api/graph",
            params={"group_by": "department", "selected": "2", "ticks": 0},
        )
    assert resp.status_code == 200
    data = resp.json()
    assert data["group_mode"] == "department"
    assert data["selected_id"] == 2
    assert data["detail"]["name"] == "Bob"
    assert [n["selected"] for n in data["nodes"]] == [False, True, False]


@pytest.mark.anyio
async def test_directory_failure_is_bad_gateway(client: AsyncClient, directory_url):
    with patch(
        "org_graph.routers.directory.Directory.get_users",
        new=AsyncMock(side_effect=DirectoryError("Failed to fetch directory: boom")),
    ):
        resp = await client.get("/api/directory")
    assert resp.status_code == 502
    assert "boom" in resp.json()["detail"]


@pytest.mark.anyio
async def test_directory_passes_filter(client: AsyncClient, directory_url):
    from org_graph.models.employee_models import Employee

    employees = [
        Employee.model_validate({"id": 1, "displayName": "Alice", "department": "Sales"}),
        Employee.model_validate({"id": 2, "displayName": "Bob", "department": "Legal"}),
    ]

    async def fake_get_users(self, url, filter_function=None):
        return [e for e in employees if filter_function is None or filter_function(e)]

    with patch("org_graph.routers.directory.Directory.get_users", new=fake_get_users):
        resp = await client.get("/api/directory", params={"department": "sales"})
    assert resp.status_code == 200
    assert resp.json() == [
        {
            "id": 1,
            "displayName": "Alice",
            "jobTitle": None,
            "department": "Sales",
            "city": None,
            "state": None,
            "telephoneNumber": None,
            "mobileNumber": None,
            "email": None,
            "manager": None,
        }
    ]


@pytest.mark.anyio
async def test_graph_html_inline(client: AsyncClient):
    resp = await client.post(
        "/api/graph/html", json={"employees": CHAIN, "group_by": "department", "ticks": 2}
    )
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "<svg" in resp.text
    assert 'id="js-group-by-department" checked' in resp.text


def test_rate_limit_disabled_in_tests():
    from org_graph.rate_limit import limiter

    assert limiter.enabled is False


@pytest.mark.anyio
async def test_layout_runs_off_the_event_loop(client: AsyncClient):
    from org_graph.services.graph_service import build_graph_view

    threads = []

    def recording_build(*args, **kwargs):
        threads.append(threading.get_ident())
        return build_graph_view(*args, **kwargs)

    with patch("org_graph.routers.graph.build_graph_view", side_effect=recording_build):
        resp = await client.post("/api/graph", json={"employees": CHAIN, "ticks": 1})

    assert resp.status_code == 200
    assert threads and threads[0] != threading.get_ident()


@pytest.mark.anyio
async def test_render_inline_tolerates_empty_manager_reference(client: AsyncClient):
    employees = CHAIN + [{"id": 4, "displayName": "Dan", "manager": {}}]
    resp = await client.post("/api/graph", json={"employees": employees, "ticks": 0})
    assert resp.status_code == 200
    data = resp.json()
    assert data["missing_managers"] == [4]
    assert len(data["edges"]) == 2

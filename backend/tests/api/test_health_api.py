"""Health, DB gate, and simulated failure.

Invariants:
    - /health is 200 {"status": "ok"} whatever the store or liveness state
    - With the store unreachable, every data route is 503 and no session is opened
"""

import pytest


async def test_health_ok(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


async def test_health_ok_when_store_down(down_client):
    res = await down_client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


async def test_db_health_up(client):
    res = await client.get("/db-health")
    assert res.status_code == 200
    assert res.json() == {"status": "db_up"}


async def test_db_health_down(down_client):
    res = await down_client.get("/db-health")
    assert res.status_code == 500
    assert res.json()["status"] == "db_down"


@pytest.mark.parametrize(
    "method,path,body",
    [
        ("GET", "/expenses", None),
        ("POST", "/expenses", {
            "description": "Lunch", "amount": 12, "date": "2024-01-02", "category": "Food",
        }),
        ("GET", "/salary", None),
        ("POST", "/salary", {"amount": 5000}),
    ],
)
async def test_data_routes_gated_when_store_down(
    down_client, unreachable_store, method, path, body,
):
    res = await down_client.request(method, path, json=body)

    assert res.status_code == 503
    assert res.json() == {"error": "Database connection not established"}
    assert unreachable_store.probes == 1
    assert unreachable_store.sessions_opened == 0


async def test_fail_marks_app_down(client, api_app):
    res = await client.get("/fail")
    assert res.status_code == 200
    assert res.json()["status"] == "app_down"
    assert api_app.state.liveness.is_up is False


async def test_health_still_ok_after_fail(client):
    await client.get("/fail")
    res = await client.get("/health")
    assert res.json() == {"status": "ok"}


async def test_cors_preflight_allows_post_with_content_type(client):
    res = await client.options(
        "/expenses",
        headers={
            "Origin": "http://frontend.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "*"
    assert "POST" in res.headers["access-control-allow-methods"]


async def test_cors_preflight_rejects_delete(client):
    res = await client.options(
        "/expenses",
        headers={
            "Origin": "http://frontend.example",
            "Access-Control-Request-Method": "DELETE",
        },
    )
    assert res.status_code == 400

"""Salary API: singleton read/replace, amount validation, store failures."""

from app.models.salary import Salary


async def test_salary_defaults_to_zero(client):
    res = await client.get("/salary")
    assert res.status_code == 200
    assert res.json() == 0


async def test_last_write_wins(client, count_rows):
    first = await client.post("/salary", json={"amount": 5000})
    assert first.status_code == 201
    assert first.json() == {"amount": 5000}

    second = await client.post("/salary", json={"amount": 6000})
    assert second.status_code == 201

    res = await client.get("/salary")
    assert res.json() == 6000
    assert await count_rows(Salary) == 1


async def test_numeric_string_amount_accepted(client):
    res = await client.post("/salary", json={"amount": "7000.50"})
    assert res.status_code == 201
    assert res.json() == {"amount": 7000.5}


async def test_non_numeric_amount_rejected_and_salary_unchanged(client):
    await client.post("/salary", json={"amount": 5000})

    res = await client.post("/salary", json={"amount": "abc"})

    assert res.status_code == 400
    assert res.json()["error"] == "Invalid amount provided"
    assert (await client.get("/salary")).json() == 5000


async def test_missing_amount_rejected(client, count_rows):
    res = await client.post("/salary", json={})
    assert res.status_code == 400
    assert await count_rows(Salary) == 0


async def test_null_amount_rejected(client, count_rows):
    res = await client.post("/salary", json={"amount": None})
    assert res.status_code == 400
    assert await count_rows(Salary) == 0


async def test_store_failure_returns_generic_500(broken_client):
    res = await broken_client.get("/salary")
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to fetch salary"}

    res = await broken_client.post("/salary", json={"amount": 100})
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to update salary"}


async def test_post_echoes_stored_amount(client):
    res = await client.post("/salary", json={"amount": 1234.567})
    assert res.status_code == 201
    assert res.json() == {"amount": 1234.57}
    assert (await client.get("/salary")).json() == 1234.57

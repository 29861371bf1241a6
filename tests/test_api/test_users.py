from httpx import AsyncClient


async def test_create_user(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/users", json={"name": "Tina", "email": "tina@example.com", "role": "trainer"}
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["role"] == "trainer"
    assert data["id"] > 0


async def test_role_defaults_to_client(client: AsyncClient) -> None:
    resp = await client.post("/api/users", json={"name": "Carl", "email": "carl@example.com"})
    assert resp.json()["role"] == "client"


async def test_duplicate_email(client: AsyncClient) -> None:
    payload = {"name": "Carl", "email": "carl@example.com"}
    await client.post("/api/users", json=payload)
    resp = await client.post("/api/users", json=payload)
    assert resp.status_code == 409


async def test_invalid_role(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/users", json={"name": "Al", "email": "al@example.com", "role": "admin"}
    )
    assert resp.status_code == 422


async def test_list_by_role(client: AsyncClient) -> None:
    await client.post("/api/users", json={"name": "T", "email": "t@example.com", "role": "trainer"})
    await client.post("/api/users", json={"name": "C", "email": "c@example.com"})

    resp = await client.get("/api/users", params={"role": "trainer"})
    assert [u["email"] for u in resp.json()] == ["t@example.com"]

    resp = await client.get("/api/users")
    assert len(resp.json()) == 2


async def test_get_missing_user(client: AsyncClient) -> None:
    resp = await client.get("/api/users/42")
    assert resp.status_code == 404

from httpx import AsyncClient

from tests.conftest import test_session
from tests.factories import create_trainer_and_client


async def _client_id() -> int:
    async with test_session() as session:
        _, client_id = await create_trainer_and_client(session)
    return client_id


async def test_log_metric_with_default_unit(client: AsyncClient) -> None:
    user_id = await _client_id()
    resp = await client.post(
        "/api/metrics",
        json={"user_id": user_id, "metric_type": "weight", "value": 80.5, "entry_date": "2024-01-08"},
    )
    assert resp.status_code == 201
    assert resp.json()["unit"] == "kg"


async def test_unit_required_for_unknown_metric(client: AsyncClient) -> None:
    user_id = await _client_id()
    resp = await client.post(
        "/api/metrics",
        json={"user_id": user_id, "metric_type": "grip", "value": 40, "entry_date": "2024-01-08"},
    )
    assert resp.status_code == 422


async def test_unknown_user(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/metrics",
        json={"user_id": 9, "metric_type": "weight", "value": 80, "entry_date": "2024-01-08"},
    )
    assert resp.status_code == 422


async def test_history_grouped_by_week(client: AsyncClient) -> None:
    user_id = await _client_id()
    for day, value in (("2024-01-07", 81.0), ("2024-01-09", 80.0), ("2024-01-15", 79.0)):
        await client.post(
            "/api/metrics",
            json={"user_id": user_id, "metric_type": "weight", "value": value, "entry_date": day},
        )

    resp = await client.get(
        "/api/metrics/history", params={"user_id": user_id, "metric_type": "weight"}
    )
    assert resp.status_code == 200
    groups = resp.json()
    assert [g["label"] for g in groups] == ["Week of Jan 14", "Week of Jan 7"]
    assert groups[1]["average_value"] == 80.5
    assert groups[1]["latest_value"] == 80.0


async def test_history_rejects_unknown_period(client: AsyncClient) -> None:
    resp = await client.get(
        "/api/metrics/history",
        params={"user_id": 1, "metric_type": "weight", "period": "decade"},
    )
    assert resp.status_code == 422


async def test_update_and_delete_entry(client: AsyncClient) -> None:
    user_id = await _client_id()
    created = await client.post(
        "/api/metrics",
        json={"user_id": user_id, "metric_type": "weight", "value": 80, "entry_date": "2024-01-08"},
    )
    entry_id = created.json()["id"]

    resp = await client.put(f"/api/metrics/{entry_id}", json={"value": 79.5, "notes": "after run"})
    assert resp.status_code == 200
    assert resp.json()["value"] == 79.5
    assert resp.json()["unit"] == "kg"
    assert resp.json()["notes"] == "after run"

    assert (await client.delete(f"/api/metrics/{entry_id}")).status_code == 204
    resp = await client.get("/api/metrics", params={"user_id": user_id})
    assert resp.json() == []

    assert (await client.put(f"/api/metrics/{entry_id}", json={"value": 1})).status_code == 404

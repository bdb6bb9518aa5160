"""
API endpoint tests.

Exercises the equipment, sensor, maintenance and prediction routes end to
end against the in-memory database.
"""

import pytest
from sqlalchemy import func, select

from db.models import Equipment, MaintenanceLog, Prediction, SensorReading

pytestmark = pytest.mark.asyncio


async def create_equipment(client, name="Feed Pump #1", type_="Pump") -> dict:
    response = await client.post("/equipment", json={"name": name, "type": type_})
    assert response.status_code == 201
    return response.json()


async def post_reading(client, equipment_id, value, type_="temperature"):
    return await client.post(
        "/sensors",
        json={"equipment_id": equipment_id, "type": type_, "value": value},
    )


async def count(session, model, equipment_id=None) -> int:
    query = select(func.count()).select_from(model)
    if equipment_id is not None:
        column = model.id if model is Equipment else model.equipment_id
        query = query.where(column == equipment_id)
    return await session.scalar(query)


# =============================================================================
# Equipment
# =============================================================================

class TestEquipment:

    async def test_create_equipment(self, client):
        body = await create_equipment(client, "Compressor A", "Compressor")

        assert body["name"] == "Compressor A"
        assert body["type"] == "Compressor"
        assert len(body["id"]) == 36
        assert body["created_at"] is not None

    async def test_create_requires_name_and_type(self, client):
        response = await client.post("/equipment", json={"name": "No type"})
        assert response.status_code == 422

    async def test_get_equipment(self, client):
        created = await create_equipment(client)

        response = await client.get(f"/equipment/{created['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    async def test_timestamps_identical_on_create_and_read(self, client):
        created = await create_equipment(client)

        fetched = (await client.get(f"/equipment/{created['id']}")).json()
        listed = (await client.get("/equipment")).json()[0]

        assert fetched["created_at"] == created["created_at"]
        assert listed["updated_at"] == created["updated_at"]
        assert fetched["created_at"].endswith("Z")

    async def test_get_unknown_equipment(self, client):
        response = await client.get("/equipment/does-not-exist")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "ResourceNotFound"
        assert body["details"]["resource_id"] == "does-not-exist"

    async def test_list_equipment_with_pagination(self, client):
        for index in range(3):
            await create_equipment(client, f"Pump {index}")

        everything = await client.get("/equipment")
        first_page = await client.get("/equipment", params={"limit": 2})
        second_page = await client.get("/equipment", params={"skip": 2, "limit": 2})

        assert len(everything.json()) == 3
        assert len(first_page.json()) == 2
        assert len(second_page.json()) == 1

    async def test_list_rejects_invalid_limit(self, client):
        response = await client.get("/equipment", params={"limit": 0})
        assert response.status_code == 422


# =============================================================================
# Sensor ingestion
# =============================================================================

class TestSensorIngestion:

    async def test_reading_triggers_prediction(self, client):
        equipment = await create_equipment(client)

        response = await post_reading(client, equipment["id"], 85.0)

        assert response.status_code == 201
        reading = response.json()
        assert reading["equipment_id"] == equipment["id"]
        assert reading["value"] == 85.0

        predictions = (await client.get(f"/predictions/{equipment['id']}")).json()
        assert len(predictions) == 1
        assert predictions[0]["failure_probability"] == 0.8
        assert predictions[0]["equipment"]["id"] == equipment["id"]

    async def test_each_reading_appends_a_prediction(self, client):
        equipment = await create_equipment(client)
        for value in (10, 20, 30):
            await post_reading(client, equipment["id"], value)

        predictions = (await client.get(f"/predictions/{equipment['id']}")).json()

        assert len(predictions) == 3
        assert {prediction["failure_probability"] for prediction in predictions} == {0.0}

    async def test_prediction_uses_full_history(self, client):
        equipment = await create_equipment(client)
        for value in (60, 75, 90):
            await post_reading(client, equipment["id"], value)
        await post_reading(client, equipment["id"], 95)

        latest = (await client.get(f"/predictions/{equipment['id']}")).json()[0]

        # median of 60, 75, 90, 95 is 82.5
        assert latest["failure_probability"] == 0.8

    async def test_boundary_reading_is_low_risk(self, client):
        equipment = await create_equipment(client)
        await post_reading(client, equipment["id"], 70.0)

        predictions = (await client.get(f"/predictions/{equipment['id']}")).json()

        assert predictions[0]["failure_probability"] == 0.0

    async def test_unknown_equipment_rejected(self, client, db_session):
        response = await post_reading(client, "missing-equipment", 50.0)

        assert response.status_code == 404
        assert await count(db_session, SensorReading) == 0
        assert await count(db_session, Prediction) == 0

    async def test_non_finite_value_rejected(self, client, db_session):
        equipment = await create_equipment(client)

        response = await client.post(
            "/sensors",
            content=f'{{"equipment_id": "{equipment["id"]}", "type": "temperature", "value": NaN}}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert await count(db_session, SensorReading) == 0

    async def test_reading_kept_when_prediction_fails(self, app, client, db_session, fake_predictions):
        from dependencies import DbSession, get_predictor
        from services import MaintenancePredictor, SqlSensorRepository

        def failing_predictor(db: DbSession) -> MaintenancePredictor:
            return MaintenancePredictor(SqlSensorRepository(db), fake_predictions(fail=True))

        app.dependency_overrides[get_predictor] = failing_predictor
        equipment = await create_equipment(client)

        response = await post_reading(client, equipment["id"], 88.0)

        assert response.status_code == 500
        assert response.json()["error"] == "StoreError"
        assert await count(db_session, SensorReading, equipment["id"]) == 1
        assert await count(db_session, Prediction, equipment["id"]) == 0
        app.dependency_overrides.clear()


# =============================================================================
# Maintenance logs
# =============================================================================

class TestMaintenanceLogs:

    async def test_create_log(self, client):
        equipment = await create_equipment(client)

        response = await client.post(
            "/maintenance",
            json={"equipment_id": equipment["id"], "description": "Replaced bearing"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["description"] == "Replaced bearing"
        assert body["date"] is not None

    async def test_stored_timestamps_are_utc(self, client):
        equipment = await create_equipment(client)
        reading = (await post_reading(client, equipment["id"], 42.0)).json()
        log = (await client.post(
            "/maintenance",
            json={"equipment_id": equipment["id"], "description": "Inspection"},
        )).json()

        prediction = (await client.get(f"/predictions/{equipment['id']}")).json()[0]

        assert reading["created_at"].endswith("Z")
        assert log["date"].endswith("Z")
        assert prediction["created_at"].endswith("Z")
        assert prediction["predicted_failure_date"].endswith("Z")
        assert prediction["equipment"]["created_at"] == equipment["created_at"]

    async def test_explicit_date_is_kept(self, client):
        equipment = await create_equipment(client)

        response = await client.post(
            "/maintenance",
            json={
                "equipment_id": equipment["id"],
                "description": "Oil change",
                "date": "2026-01-15T08:30:00Z",
            },
        )

        assert response.status_code == 201
        assert response.json()["date"].startswith("2026-01-15T08:30:00")

    async def test_log_does_not_create_prediction(self, client):
        equipment = await create_equipment(client)
        await client.post(
            "/maintenance",
            json={"equipment_id": equipment["id"], "description": "Inspection"},
        )

        predictions = await client.get(f"/predictions/{equipment['id']}")

        assert predictions.json() == []

    async def test_unknown_equipment_rejected(self, client):
        response = await client.post(
            "/maintenance",
            json={"equipment_id": "missing", "description": "Inspection"},
        )
        assert response.status_code == 404


# =============================================================================
# Predictions
# =============================================================================

class TestPredictions:

    async def test_unknown_equipment_has_empty_history(self, client):
        response = await client.get("/predictions/missing")

        assert response.status_code == 200
        assert response.json() == []

    async def test_history_is_most_recent_first(self, client):
        equipment = await create_equipment(client)
        for value in (10, 90, 95):
            await post_reading(client, equipment["id"], value)

        predictions = (await client.get(f"/predictions/{equipment['id']}")).json()

        created = [prediction["created_at"] for prediction in predictions]
        assert created == sorted(created, reverse=True)
        # latest history is 10, 90, 95 with median 90
        assert predictions[0]["failure_probability"] == 0.8

    async def test_forecast_is_thirty_hours_after_creation(self, client):
        from datetime import datetime, timedelta

        equipment = await create_equipment(client)
        await post_reading(client, equipment["id"], 40)

        prediction = (await client.get(f"/predictions/{equipment['id']}")).json()[0]

        created = datetime.fromisoformat(prediction["created_at"].replace("Z", "+00:00"))
        forecast = datetime.fromisoformat(prediction["predicted_failure_date"].replace("Z", "+00:00"))
        assert forecast - created == timedelta(hours=30)

    async def test_recompute(self, client):
        equipment = await create_equipment(client)
        await post_reading(client, equipment["id"], 75)

        response = await client.post(f"/predictions/{equipment['id']}")

        assert response.status_code == 201
        assert response.json()["failure_probability"] == 0.8
        history = (await client.get(f"/predictions/{equipment['id']}")).json()
        assert len(history) == 2

    async def test_recompute_without_readings(self, client, db_session):
        equipment = await create_equipment(client)

        response = await client.post(f"/predictions/{equipment['id']}")

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "NoDataError"
        assert body["details"]["equipment_id"] == equipment["id"]
        assert await count(db_session, Prediction) == 0

    async def test_recompute_unknown_equipment(self, client):
        response = await client.post("/predictions/missing")
        assert response.status_code == 404

    async def test_pagination(self, client):
        equipment = await create_equipment(client)
        for value in (1, 2, 3, 4):
            await post_reading(client, equipment["id"], value)

        page = await client.get(f"/predictions/{equipment['id']}", params={"skip": 1, "limit": 2})

        assert len(page.json()) == 2


# =============================================================================
# Cascading delete
# =============================================================================

class TestDeleteEquipment:

    async def test_delete_removes_all_dependents(self, client, db_session):
        equipment = await create_equipment(client)
        other = await create_equipment(client, "Compressor", "Compressor")
        for value in (50, 80):
            await post_reading(client, equipment["id"], value)
        await post_reading(client, other["id"], 20)
        await client.post(
            "/maintenance",
            json={"equipment_id": equipment["id"], "description": "Inspection"},
        )

        response = await client.delete(f"/equipment/{equipment['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Equipment deleted successfully"}
        assert (await client.get(f"/equipment/{equipment['id']}")).status_code == 404
        for model in (SensorReading, Prediction, MaintenanceLog, Equipment):
            assert await count(db_session, model, equipment["id"]) == 0

        # other equipment untouched
        assert await count(db_session, SensorReading, other["id"]) == 1
        assert await count(db_session, Prediction, other["id"]) == 1

    async def test_delete_unknown_equipment(self, client):
        response = await client.delete("/equipment/missing")

        assert response.status_code == 404
        assert response.json()["error"] == "ResourceNotFound"

    async def test_delete_twice(self, client):
        equipment = await create_equipment(client)

        first = await client.delete(f"/equipment/{equipment['id']}")
        second = await client.delete(f"/equipment/{equipment['id']}")

        assert first.status_code == 200
        assert second.status_code == 404

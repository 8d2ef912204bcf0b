"""Tests for breeding events and litter predictions."""

from fastapi.testclient import TestClient

from breeding.main import app
from breeding.models.animal import Animal
from breeding.services.event_service import (
    predict_litter_size,
    predict_offspring_health,
    predict_roi,
)

client = TestClient(app)


def _rabbit(animal_id: int, gender: str, **fields) -> Animal:
    return Animal(id=animal_id, animal_id=f"R{animal_id}", name="R", gender=gender, **fields)


class TestPredictions:
    """Litter, health and ROI predictions."""

    def test_litter_size_defaults_to_six(self):
        assert predict_litter_size(_rabbit(1, "male"), _rabbit(2, "female")) == 6

    def test_litter_size_scaled_by_fertility(self):
        doe = _rabbit(2, "female", litter_size=8, fertility=95)
        assert predict_litter_size(_rabbit(1, "male"), doe) == 9

    def test_health_is_parent_mean(self):
        buck = _rabbit(1, "male", health=95, breed="Rex")
        doe = _rabbit(2, "female", health=92, breed="Rex")
        assert predict_offspring_health(buck, doe, risky=False) == 94

    def test_health_related_crossbred(self):
        buck = _rabbit(1, "male", health=90, breed="Rex")
        doe = _rabbit(2, "female", health=90, breed="Californian")
        assert predict_offspring_health(buck, doe, risky=True) == 80

    def test_health_floor(self):
        buck = _rabbit(1, "male", health=40)
        doe = _rabbit(2, "female", health=40)
        assert predict_offspring_health(buck, doe, risky=True) == 60

    def test_roi(self):
        assert predict_roi(9, 94) == 191
        assert predict_roi(0, 85) == 0


class TestCreateEvent:
    """POST /api/v1/breeding-events tests."""

    def test_derived_fields(self, seeded_store):
        response = client.post("/api/v1/breeding-events", json={
            "maleId": 1, "femaleId": 2, "breedingDate": "2025-03-01T00:00:00Z",
        })
        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 1
        assert body["eventId"].startswith("BE-1-2-")
        assert body["pairId"] == "PAIR-1-2"
        assert body["expectedBirthDate"].startswith("2025-04-01")
        assert body["nestBoxDate"].startswith("2025-03-29")
        assert body["status"] == "pending"
        assert body["geneticCompatibilityScore"] == 90
        assert body["predictedLitterSize"] == 9
        assert body["predictedOffspringHealth"] == 94
        assert body["predictedRoi"] == 191
        assert body["breedingPurpose"] == "commercial"

    def test_cross_breed_score(self, seeded_store):
        body = client.post("/api/v1/breeding-events", json={"maleId": 1, "femaleId": 4}).json()
        assert body["geneticCompatibilityScore"] == 92

    def test_supplied_values_kept(self, seeded_store):
        body = client.post("/api/v1/breeding-events", json={
            "maleId": 3, "femaleId": 4, "eventId": "BE-001", "predictedLitterSize": 5, "notes": "trial",
        }).json()
        assert body["eventId"] == "BE-001"
        assert body["predictedLitterSize"] == 5
        assert body["notes"] == "trial"

    def test_incompatible_pair_refused(self, seeded_store):
        response = client.post("/api/v1/breeding-events", json={"maleId": 5, "femaleId": 6})
        assert response.status_code == 409
        detail = response.json()["detail"]
        assert detail["error"]["code"] == "incompatible_pair"
        assert detail["verdict"]["riskLevel"] == "high"
        assert client.get("/api/v1/breeding-events").json()["total"] == 0

    def test_unknown_animal(self, seeded_store):
        response = client.post("/api/v1/breeding-events", json={"maleId": 1, "femaleId": 99})
        assert response.status_code == 404


class TestEventCrud:
    """GET/PUT/DELETE /api/v1/breeding-events tests."""

    def _create(self, male_id, female_id):
        return client.post("/api/v1/breeding-events", json={"maleId": male_id, "femaleId": female_id}).json()

    def test_list_filtered_by_animal(self, seeded_store):
        self._create(1, 2)
        self._create(3, 4)
        assert client.get("/api/v1/breeding-events").json()["total"] == 2
        body = client.get("/api/v1/breeding-events?animalId=4").json()
        assert [e["maleId"] for e in body["events"]] == [3]

    def test_get_and_update(self, seeded_store):
        event = self._create(1, 2)
        response = client.put(f"/api/v1/breeding-events/{event['id']}", json={
            "status": "successful", "actualOffspringCount": 7,
        })
        assert response.status_code == 200
        assert response.json()["status"] == "successful"
        fetched = client.get(f"/api/v1/breeding-events/{event['id']}").json()
        assert fetched["actualOffspringCount"] == 7
        assert fetched["pairId"] == "PAIR-1-2"

    def test_delete(self, seeded_store):
        event = self._create(1, 2)
        assert client.delete(f"/api/v1/breeding-events/{event['id']}").status_code == 204
        assert client.get(f"/api/v1/breeding-events/{event['id']}").status_code == 404
        assert client.delete(f"/api/v1/breeding-events/{event['id']}").status_code == 404

    def test_update_missing(self):
        response = client.put("/api/v1/breeding-events/42", json={"status": "cancelled"})
        assert response.status_code == 404

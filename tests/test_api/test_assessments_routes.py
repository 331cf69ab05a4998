"""Tests for assessment scoring and save routes."""

from ot_tracker.assessments.validation import (
    PROGRAM_INCOMPLETE_MESSAGE,
    ROM_NO_REGION_MESSAGE,
)


class TestScoreProgram:
    def test_complete(self, client, complete_responses):
        response = client.post("/api/v1/assessments/program/score", json={"responses": complete_responses})

        assert response.status_code == 200
        data = response.json()
        assert data["total_score"] == 68
        assert data["max_total_score"] == 85
        assert data["is_complete"] is True
        assert data["domain_averages"]["play"] == "4.00"

    def test_partial(self, client):
        response = client.post("/api/v1/assessments/program/score", json={"responses": {"q1": 5, "q2": "4"}})

        assert response.status_code == 200
        data = response.json()
        assert data["domain_averages"]["play"] == "4.50"
        assert data["domain_averages"]["self_care"] is None
        assert data["answered_count"] == 2
        assert data["is_complete"] is False

    def test_out_of_scale_rating(self, client):
        response = client.post("/api/v1/assessments/program/score", json={"responses": {"q1": "1e30"}})

        assert response.status_code == 200
        assert response.json()["domain_averages"]["play"] == "1000000000000000000000000000000.00"


class TestSaveProgram:
    def test_save_complete(self, client, complete_responses):
        response = client.post(
            "/api/v1/assessments/program",
            json={"patientId": "p1", "type": "post", "status": "complete", "responses": complete_responses},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["patientId"] == "p1"
        assert data["status"] == "complete"
        assert data["totalScore"] == 68
        assert data["domainAverages"]["self_care"] == "4.00"
        assert data["createdAt"] is not None

    def test_incomplete_rejected(self, client):
        response = client.post(
            "/api/v1/assessments/program",
            json={"patientId": "p1", "status": "complete", "responses": {"q1": 4}},
        )

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["message"] == PROGRAM_INCOMPLETE_MESSAGE
        assert len(detail["missing"]) == 16

    def test_draft_allowed_incomplete(self, client):
        response = client.post(
            "/api/v1/assessments/program",
            json={"patientId": "p1", "responses": {"q1": 4}},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "in_progress"
        assert response.json()["totalScore"] == 4

    def test_edit_keeps_id(self, client):
        response = client.post(
            "/api/v1/assessments/program",
            json={
                "patientId": "p1",
                "responses": {},
                "existing": {"id": "pe-1", "patientId": "p1", "createdAt": "2024-01-01T00:00:00Z"},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "pe-1"
        assert data["createdAt"].startswith("2024-01-01")

    def test_missing_patient_id(self, client):
        response = client.post("/api/v1/assessments/program", json={"responses": {}})
        assert response.status_code == 422


class TestScoreROM:
    def test_score(self, client, rom_pre):
        response = client.post(
            "/api/v1/assessments/rom/score",
            json={"selectedRegions": ["shoulder", "elbow"], "measurements": rom_pre.measurements},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["overall_percentage"] == 58
        assert data["overall_status"] == "moderate"
        assert [r["percentage"] for r in data["regions"]] == [63, 50]

    def test_unknown_region(self, client):
        response = client.post(
            "/api/v1/assessments/rom/score",
            json={"selectedRegions": ["neck"], "measurements": {}},
        )
        assert response.status_code == 422


class TestSaveROM:
    def test_save_prunes(self, client):
        response = client.post(
            "/api/v1/assessments/rom",
            json={
                "patientId": "p1",
                "status": "complete",
                "selectedRegions": ["knee"],
                "measurements": {"knee_flexion_left": 120, "hip_flexion_left": 100},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["selectedRegions"] == ["knee"]
        assert data["measurements"] == {"knee_flexion_left": 120}

    def test_no_regions_rejected(self, client):
        response = client.post("/api/v1/assessments/rom", json={"patientId": "p1", "status": "complete"})

        assert response.status_code == 422
        assert response.json()["detail"] == {
            "message": ROM_NO_REGION_MESSAGE,
            "missing": ["selected_regions"],
        }

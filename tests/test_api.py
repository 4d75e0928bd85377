"""HTTP API tests through FastAPI's TestClient with an in-memory engine."""

import pytest
from fastapi.testclient import TestClient

from attendance_rewards.api import create_app
from tests.conftest import current_url, denver

API = "/api/v1"


@pytest.fixture
def client(engine) -> TestClient:
    return TestClient(create_app(engine))


@pytest.fixture
def employee_id(client) -> str:
    response = client.post(
        f"{API}/employees",
        json={"name": "Sarah Johnson", "email": "sarah@company.com"},
    )
    assert response.status_code == 201
    return response.json()["employee_id"]


def fund(client: TestClient, employee_id: str, points: int) -> None:
    response = client.post(
        f"{API}/employees/{employee_id}/bonuses",
        json={"points": points, "reason": "Setup", "granted_by": "admin"},
    )
    assert response.status_code == 201


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert data["check_in_window"] == "open"
        assert data["timezone"] == "America/Denver"

    def test_health_reports_closed_window(self, client, clock):
        clock.set(denver(2026, 3, 2, 12, 0))
        assert client.get("/health").json()["check_in_window"] == "closed"

    def test_ready_and_live(self, client):
        assert client.get("/ready").json() == {"status": "ready"}
        assert client.get("/live").json() == {"status": "alive"}

    def test_not_ready_without_storage(self, client, repository, monkeypatch):
        monkeypatch.setattr(repository, "ping", lambda: False)
        response = client.get("/ready")
        assert response.status_code == 503
        assert client.get("/health").json()["status"] == "degraded"


class TestEmployees:
    def test_create_and_get(self, client, employee_id):
        response = client.get(f"{API}/employees/{employee_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Sarah Johnson"
        assert data["total_points"] == 0
        assert data["badges"] == []

    def test_blank_name_rejected(self, client):
        response = client.post(f"{API}/employees", json={"name": " ", "email": "a@b.co"})
        assert response.status_code == 400

    def test_missing_fields_rejected(self, client):
        response = client.post(f"{API}/employees", json={"name": "Ann"})
        assert response.status_code == 422

    def test_unknown_employee(self, client):
        response = client.get(f"{API}/employees/missing")
        assert response.status_code == 404
        assert response.json() == {"detail": "Employee not found", "code": "employee_not_found"}

    def test_stats(self, client, engine, employee_id):
        client.post(
            f"{API}/check-ins",
            json={"employee_id": employee_id, "token": current_url(engine)},
        )
        response = client.get(f"{API}/employees/{employee_id}/stats")
        assert response.status_code == 200
        data = response.json()
        assert data["today_points"] == 2
        assert data["as_of"] == "2026-03-02"
        assert data["recent_check_ins"][0]["tier"] == "early"

    def test_stats_unknown_employee(self, client):
        assert client.get(f"{API}/employees/missing/stats").status_code == 404


class TestBonuses:
    def test_grant(self, client, employee_id):
        response = client.post(
            f"{API}/employees/{employee_id}/bonuses",
            json={"points": 120, "reason": "Covered a shift"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["points_awarded"] == 120
        assert data["total_points"] == 120
        assert data["new_badges"] == ["point_collector"]

    @pytest.mark.parametrize("points,reason", [(0, "x"), (-5, "x"), (10, "  ")])
    def test_invalid_bonus(self, client, employee_id, points, reason):
        response = client.post(
            f"{API}/employees/{employee_id}/bonuses",
            json={"points": points, "reason": reason},
        )
        assert response.status_code == 422
        assert response.json()["code"] == "invalid_bonus"

    def test_unknown_employee(self, client):
        response = client.post(
            f"{API}/employees/missing/bonuses",
            json={"points": 5, "reason": "x"},
        )
        assert response.status_code == 404


class TestCheckIns:
    def test_successful_check_in(self, client, engine, employee_id):
        response = client.post(
            f"{API}/check-ins",
            json={"employee_id": employee_id, "token": current_url(engine)},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["tier"] == "early"
        assert data["points_earned"] == 2
        assert data["current_streak"] == 1
        assert data["affirmation"]

    def test_duplicate(self, client, engine, employee_id):
        payload = {"employee_id": employee_id, "token": current_url(engine)}
        client.post(f"{API}/check-ins", json=payload)
        response = client.post(f"{API}/check-ins", json=payload)
        assert response.status_code == 409
        assert response.json()["code"] == "duplicate_check_in"

    def test_invalid_token(self, client, employee_id):
        response = client.post(
            f"{API}/check-ins",
            json={"employee_id": employee_id, "token": "not-a-code"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_token"

    def test_outside_window_reports_reason(self, client, engine, clock, employee_id):
        clock.set(denver(2026, 3, 2, 5, 30))
        response = client.post(
            f"{API}/check-ins",
            json={"employee_id": employee_id, "token": current_url(engine)},
        )
        assert response.status_code == 403
        data = response.json()
        assert data["code"] == "outside_time_window"
        assert data["context"] == {"window_reason": "too_early"}

    def test_check_in_code(self, client):
        response = client.get(f"{API}/check-in-code", params={"strategy": "weekly"})
        assert response.status_code == 200
        data = response.json()
        assert data["period"] == "week-2026-03-02"
        assert data["strategy"] == "weekly"
        assert data["timezone"] == "America/Denver"
        assert data["url"].startswith("https://rewards.company.com/checkin?")


class TestRewards:
    def test_catalogs(self, client):
        rewards = client.get(f"{API}/rewards").json()
        assert len(rewards) == 11
        assert rewards[2] == {
            "reward_id": "m1",
            "name": "$25 Gift Card",
            "description": "Choose from popular retailers",
            "points_cost": 25,
            "category": "monthly",
            "icon": "gift",
            "available": True,
        }
        assert len(client.get(f"{API}/badges").json()) == 5

    def test_redeem_and_approve(self, client, employee_id):
        fund(client, employee_id, 30)

        response = client.post(
            f"{API}/redemptions",
            json={"employee_id": employee_id, "reward_id": "m1"},
        )
        assert response.status_code == 201
        created = response.json()
        assert created["total_points"] == 5
        assert created["redemption"]["status"] == "pending"
        redemption_id = created["redemption"]["redemption_id"]

        pending = client.get(f"{API}/redemptions/pending").json()
        assert [p["redemption"]["redemption_id"] for p in pending] == [redemption_id]
        assert pending[0]["employee_name"] == "Sarah Johnson"

        response = client.post(
            f"{API}/redemptions/{redemption_id}/approve",
            json={"decided_by": "manager"},
        )
        assert response.status_code == 200
        assert response.json()["redemption"]["status"] == "approved"
        assert response.json()["redemption"]["decided_by"] == "manager"
        assert client.get(f"{API}/redemptions/pending").json() == []

        response = client.post(f"{API}/redemptions/{redemption_id}/reject")
        assert response.status_code == 409
        assert response.json()["code"] == "invalid_redemption_state"

    def test_reject_refunds(self, client, employee_id):
        fund(client, employee_id, 30)
        created = client.post(
            f"{API}/redemptions",
            json={"employee_id": employee_id, "reward_id": "m1"},
        ).json()

        response = client.post(
            f"{API}/redemptions/{created['redemption']['redemption_id']}/reject"
        )

        assert response.status_code == 200
        assert response.json()["total_points"] == 30

    def test_insufficient_points(self, client, employee_id):
        response = client.post(
            f"{API}/redemptions",
            json={"employee_id": employee_id, "reward_id": "w1"},
        )
        assert response.status_code == 409
        assert response.json()["code"] == "insufficient_points"

    def test_unknown_reward_and_redemption(self, client, employee_id):
        response = client.post(
            f"{API}/redemptions",
            json={"employee_id": employee_id, "reward_id": "zz"},
        )
        assert response.status_code == 404
        assert response.json()["code"] == "reward_not_found"
        assert client.post(f"{API}/redemptions/missing/approve").status_code == 404


class TestLeaderboard:
    def test_ranked(self, client, employee_id):
        other = client.post(
            f"{API}/employees",
            json={"name": "Mike Chen", "email": "mike@company.com"},
        ).json()["employee_id"]
        fund(client, other, 10)
        fund(client, employee_id, 4)

        response = client.get(f"{API}/leaderboard", params={"period": "weekly"})

        assert response.status_code == 200
        data = response.json()
        assert data["period"] == "weekly"
        assert [(e["rank"], e["name"], e["points"]) for e in data["entries"]] == [
            (1, "Mike Chen", 10),
            (2, "Sarah Johnson", 4),
        ]

    def test_limit_bounds(self, client):
        assert client.get(f"{API}/leaderboard", params={"limit": 0}).status_code == 422

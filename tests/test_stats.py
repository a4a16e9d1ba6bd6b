"""Tests for game statistics endpoints."""

import pytest
from fastapi.testclient import TestClient

from app.services.jwt import JWTService, get_jwt_service
from app.services.stats import _to_float, _to_int


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class TestBearerGate:
    """Tests for token-protected routes."""

    def test_missing_header(self, client: TestClient):
        response = client.get("/stats/me")
        assert response.status_code == 401
        assert response.json() == {"msg": "Access denied."}

    def test_non_bearer_header(self, client: TestClient, test_user: dict):
        response = client.get("/stats/me", headers={"Authorization": f"Basic {test_user['token']}"})
        assert response.status_code == 401

    def test_invalid_token(self, client: TestClient):
        response = client.get("/stats/me", headers=_auth("invalid.token.here"))
        assert response.status_code == 403
        assert response.json() == {"msg": "Invalid token."}

    def test_expired_token(self, client: TestClient, test_user: dict):
        expired = JWTService(secret_key=get_jwt_service().secret_key, expire_minutes=-1).create_token(
            user_id=test_user["id"], email=test_user["email"]
        )
        response = client.get("/stats/me", headers=_auth(expired))
        assert response.status_code == 403

    def test_login_token_is_accepted(self, client: TestClient, test_user: dict):
        login = client.post("/auth/login", json={"email": "ana@x.com", "password": "secret1"})
        response = client.get("/stats/me", headers=_auth(login.json()["token"]))
        assert response.status_code == 200


class TestStatsUpdate:
    """Tests for recording game sessions."""

    def test_first_play_creates_row(self, client: TestClient, test_user: dict):
        response = client.post(
            "/stats/update",
            json={"gameType": "matematica", "score": 40, "duration": 0.5},
            headers=_auth(test_user["token"]),
        )
        assert response.status_code == 200
        assert response.json() == {"msg": "Stats updated"}

        stats = client.get("/stats/me", headers=_auth(test_user["token"])).json()
        assert stats["scores"]["matematica"] == 40
        assert stats["highScores"]["matematica"] == 40
        assert stats["hours"]["matematica"] == 0.5

    def test_accumulates_and_keeps_max(self, client: TestClient, test_user: dict):
        headers = _auth(test_user["token"])
        client.post("/stats/update", json={"gameType": "historia", "score": 70, "duration": 1}, headers=headers)
        client.post("/stats/update", json={"gameType": "historia", "score": "30", "duration": "0.25"}, headers=headers)

        stats = client.get("/stats/me", headers=headers).json()
        assert stats["scores"]["historia"] == 100
        assert stats["highScores"]["historia"] == 70
        assert stats["hours"]["historia"] == 1.25

    def test_non_numeric_values_count_as_zero(self, client: TestClient, test_user: dict):
        headers = _auth(test_user["token"])
        response = client.post(
            "/stats/update", json={"gameType": "portugues", "score": "abc", "duration": None}, headers=headers
        )
        assert response.status_code == 200
        stats = client.get("/stats/me", headers=headers).json()
        assert stats["scores"]["portugues"] == 0
        assert stats["hours"]["portugues"] == 0

    def test_leading_number_is_used(self, client: TestClient, test_user: dict):
        """Values like "12pts" or "0.5h" keep their leading number."""
        headers = _auth(test_user["token"])
        client.post(
            "/stats/update", json={"gameType": "computacao", "score": "12pts", "duration": "0.5h"}, headers=headers
        )
        stats = client.get("/stats/me", headers=headers).json()
        assert stats["scores"]["computacao"] == 12
        assert stats["hours"]["computacao"] == 0.5

    def test_unknown_game_type(self, client: TestClient, test_user: dict):
        response = client.post(
            "/stats/update",
            json={"gameType": "quimica", "score": 10, "duration": 1},
            headers=_auth(test_user["token"]),
        )
        assert response.status_code == 400

    def test_requires_auth(self, client: TestClient):
        response = client.post("/stats/update", json={"gameType": "matematica", "score": 10, "duration": 1})
        assert response.status_code == 401


class TestUserStats:
    def test_zero_filled(self, client: TestClient, test_user: dict):
        stats = client.get("/stats/me", headers=_auth(test_user["token"])).json()
        for key in ("scores", "highScores", "hours"):
            assert set(stats[key]) == {"matematica", "computacao", "portugues", "historia"}
            assert all(value == 0 for value in stats[key].values())


class TestRanking:
    def test_empty_ranking(self, client: TestClient):
        response = client.get("/stats/ranking")
        assert response.status_code == 200
        assert response.json()["matematica"] == {"name": "---", "high_score": 0}

    def test_top_player_per_game(self, client: TestClient, test_user: dict):
        client.post("/auth/register", json={"name": "Bia", "email": "bia@x.com", "password": "pass123"})
        bia_token = client.post("/auth/login", json={"email": "bia@x.com", "password": "pass123"}).json()["token"]

        client.post(
            "/stats/update", json={"gameType": "computacao", "score": 50, "duration": 1}, headers=_auth(test_user["token"])
        )
        client.post("/stats/update", json={"gameType": "computacao", "score": 80, "duration": 1}, headers=_auth(bia_token))
        client.post("/stats/update", json={"gameType": "portugues", "score": 20, "duration": 1}, headers=_auth(test_user["token"]))

        ranking = client.get("/stats/ranking").json()
        assert ranking["computacao"] == {"name": "Bia", "high_score": 80}
        assert ranking["portugues"] == {"name": "Ana", "high_score": 20}
        assert ranking["historia"] == {"name": "---", "high_score": 0}


class TestNumericCoercion:
    """Tests for lenient parsing of client-supplied numbers."""

    @pytest.mark.parametrize(
        "value,expected",
        [("12abc", 12), (" 7 ", 7), ("12.9", 12), (12.9, 12), ("-3x", -3), (40, 40), ("abc", 0), ("", 0), (None, 0), (True, 0)],
    )
    def test_score(self, value, expected):
        assert _to_int(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [("0.25h", 0.25), ("1e2", 100.0), (".5", 0.5), (2, 2.0), ("x1", 0.0), ("1e999", 0.0), (None, 0.0)],
    )
    def test_duration(self, value, expected):
        assert _to_float(value) == expected

"""HTTP-level tests for the SerenSpace API (routers, envelopes, error mapping)."""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from api import app
from serenspace.dependencies import (
    require_auth,
    get_mood_repository,
    get_insight_repository,
    get_profile_repository,
    get_mood_aggregator,
    get_streak_tracker,
)
from serenspace.services.mood.mood_aggregator import MoodAggregator
from serenspace.services.profile.streak_tracker import StreakTracker


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def current_user(sample_user_id):
    return {"uid": sample_user_id, "email": "alice@example.com", "name": "Alice"}


@pytest.fixture
def client(current_user, mood_repository, insight_repository, profile_repository):
    aggregator = MoodAggregator(mood_repository, insight_repository)
    tracker = StreakTracker(profile_repository)

    app.dependency_overrides[require_auth] = lambda: current_user
    app.dependency_overrides[get_mood_repository] = lambda: mood_repository
    app.dependency_overrides[get_insight_repository] = lambda: insight_repository
    app.dependency_overrides[get_profile_repository] = lambda: profile_repository
    app.dependency_overrides[get_mood_aggregator] = lambda: aggregator
    app.dependency_overrides[get_streak_tracker] = lambda: tracker

    # No context manager: the lifespan (MongoDB connect) is not run
    yield TestClient(app)

    app.dependency_overrides.clear()


# ─────────────────────────────────────────────────────────────────
# Moods
# ─────────────────────────────────────────────────────────────────


class TestMoodsApi:
    def test_create_mood(self, client, profile_repository, sample_user_id):
        resp = client.post("/api/moods", json={"score": 7, "emotion": "happy", "note": "good day"})

        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Mood entry created successfully"
        assert body["data"]["score"] == 7
        assert body["data"]["userId"] == sample_user_id
        assert profile_repository.profiles[sample_user_id]["streakDays"] == 1

    @pytest.mark.parametrize("payload,code", [
        ({"score": 11, "emotion": "happy"}, "INVALID_SCORE"),
        ({"score": "seven", "emotion": "happy"}, "INVALID_SCORE"),
        ({"score": 5}, "MISSING_EMOTION"),
        ({"score": 5, "emotion": "elated"}, "INVALID_EMOTION"),
    ])
    def test_create_mood_validation(self, client, mood_repository, payload, code):
        resp = client.post("/api/moods", json=payload)

        assert resp.status_code == 422
        body = resp.json()
        assert body["success"] is False
        assert body["error"]["code"] == code
        assert mood_repository.moods == []

    def test_stats(self, client):
        for score, emotion in [(8, "happy"), (4, "sad"), (8, "happy")]:
            client.post("/api/moods", json={"score": score, "emotion": emotion})

        resp = client.get("/api/moods/stats")

        assert resp.status_code == 200
        assert resp.json()["data"] == {
            "averageScore": 6.7,
            "totalEntries": 3,
            "topEmotion": "happy",
            "trend": "stable",
        }

    def test_stats_empty(self, client):
        data = client.get("/api/moods/stats").json()["data"]
        assert data["totalEntries"] == 0
        assert data["topEmotion"] is None

    def test_list_moods(self, client):
        client.post("/api/moods", json={"score": 4, "emotion": "sad"})

        body = client.get("/api/moods", params={"days": 7}).json()

        assert body["count"] == 1
        assert body["data"][0]["emotion"] == "sad"

    def test_foreign_mood_not_found(self, client, mood_repository, other_user_id):
        mood_repository.moods.append({
            "id": "foreign", "userId": other_user_id, "score": 3, "emotion": "sad",
            "note": "", "tags": [], "createdAt": datetime.now(timezone.utc),
        })

        for method in ("get", "delete"):
            resp = getattr(client, method)("/api/moods/foreign")
            assert resp.status_code == 404
            assert resp.json()["error"]["code"] == "MOOD_NOT_FOUND"

    def test_update_mood(self, client):
        mood_id = client.post("/api/moods", json={"score": 4, "emotion": "sad"}).json()["data"]["id"]

        resp = client.put(f"/api/moods/{mood_id}", json={"emotion": "calm"})

        assert resp.status_code == 200
        assert resp.json()["data"]["emotion"] == "calm"
        assert resp.json()["data"]["score"] == 4


# ─────────────────────────────────────────────────────────────────
# Insights & profile
# ─────────────────────────────────────────────────────────────────


class TestInsightsApi:
    def test_generate_and_list(self, client):
        client.post("/api/moods", json={"score": 7, "emotion": "happy"})

        generated = client.post("/api/insights/generate").json()
        client.post("/api/insights/generate")
        listed = client.get("/api/insights").json()

        assert generated["count"] == 3
        assert listed["count"] == 3

    def test_generate_without_entries(self, client):
        body = client.post("/api/insights/generate").json()
        assert body["data"] == []

    def test_mark_read(self, client):
        client.post("/api/moods", json={"score": 7, "emotion": "happy"})
        insight_id = client.post("/api/insights/generate").json()["data"][0]["id"]

        resp = client.put(f"/api/insights/{insight_id}/read")

        assert resp.status_code == 200
        assert resp.json()["data"] == {"id": insight_id, "isRead": True}

    def test_mark_read_unknown(self, client):
        resp = client.put("/api/insights/unknown/read")
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "INSIGHT_NOT_FOUND"


class TestProfileApi:
    def test_profile_defaults(self, client, sample_user_id):
        data = client.get("/api/profile").json()["data"]

        assert data["uid"] == sample_user_id
        assert data["streakDays"] == 0
        assert data["email"] == "alice@example.com"

    def test_profile_after_check_in(self, client):
        client.post("/api/moods", json={"score": 7, "emotion": "happy"})

        data = client.get("/api/profile").json()["data"]

        assert data["streakDays"] == 1
        assert data["totalCheckIns"] == 1


# ─────────────────────────────────────────────────────────────────
# Auth & error mapping
# ─────────────────────────────────────────────────────────────────


class TestErrors:
    def test_missing_token(self):
        resp = TestClient(app).get("/api/moods")

        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "AUTH_REQUIRED"

    def test_wrong_scheme(self):
        resp = TestClient(app).get("/api/moods", headers={"Authorization": "Basic abc"})

        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "INVALID_AUTH_SCHEME"

    def test_store_failure_is_503(self, client):
        failing = AsyncMock()
        failing.list_all.side_effect = ServerSelectionTimeoutError("no servers")
        app.dependency_overrides[get_mood_aggregator] = lambda: MoodAggregator(failing, AsyncMock())

        resp = client.get("/api/moods/stats")

        assert resp.status_code == 503
        assert resp.json()["error"] == {"message": "Operation failed", "code": "STORE_UNAVAILABLE"}

    def test_unexpected_failure_is_500(self, current_user):
        failing = AsyncMock()
        failing.get_stats.side_effect = RuntimeError("boom")
        app.dependency_overrides[require_auth] = lambda: current_user
        app.dependency_overrides[get_mood_aggregator] = lambda: failing

        try:
            resp = TestClient(app, raise_server_exceptions=False).get("/api/moods/stats")
        finally:
            app.dependency_overrides.clear()

        assert resp.status_code == 500
        assert resp.json()["error"]["message"] == "Operation failed"

    def test_health(self):
        body = TestClient(app).get("/health").json()

        assert body["success"] is True
        assert body["data"]["status"] == "ok"

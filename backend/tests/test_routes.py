"""
HTTP-level tests for the review API.

The ReviewService is injected with a fake client factory, so no Gemini
calls or API keys are involved.
"""

import pytest
from fastapi.testclient import TestClient

from fakes import FakeFactory, not_found, quota, server_error
from gemini.errors import ConfigurationError
from gemini.fallback import ReviewService
from main import create_app


def _client(outcomes, models=None):
    factory = FakeFactory(outcomes)
    service = ReviewService(models or list(outcomes), factory)
    return TestClient(create_app(service=service)), factory


class TestGetReview:
    def test_success(self):
        client, factory = _client({"m1": not_found("m1"), "m2": "## Review\nLooks fine."})
        with client:
            resp = client.post("/ai/get-review", json={"code": "def f(): return 1"})

        assert resp.status_code == 200
        assert resp.json() == {"review": "## Review\nLooks fine.", "model": "m2"}
        assert factory.bound == ["m1", "m2"]

    @pytest.mark.parametrize("code", ["", "   \n\t"])
    def test_empty_code_rejected(self, code):
        client, factory = _client({"m1": "never"})
        with client:
            resp = client.post("/ai/get-review", json={"code": code})

        assert resp.status_code == 400
        assert resp.json()["detail"] == "Code is required"
        assert factory.bound == []

    def test_missing_field_is_validation_error(self):
        client, _ = _client({"m1": "never"})
        with client:
            resp = client.post("/ai/get-review", json={})

        assert resp.status_code == 422

    def test_total_failure_maps_to_502(self):
        client, factory = _client({"m1": quota("m1"), "m2": server_error(), "m3": "never"})
        with client:
            resp = client.post("/ai/get-review", json={"code": "x = 1"})

        assert resp.status_code == 502
        detail = resp.json()["detail"]
        assert detail.startswith("500 INTERNAL")
        assert detail.endswith("Tried: m1, m2, m3")
        assert factory.bound == ["m1", "m2"]


class TestModelsAndHealth:
    def test_lists_preference_order(self):
        client, _ = _client({"b": "x", "a": "y"}, models=["b", "a"])
        with client:
            resp = client.get("/ai/models")

        assert resp.json() == {"models": ["b", "a"]}

    def test_health(self):
        client, _ = _client({"m": "x"})
        with client:
            resp = client.get("/")

        assert resp.json() == {"status": "ok", "service": "code-review"}


class TestStartup:
    def test_missing_key_aborts_startup(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_GEMINI_KEY", raising=False)
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

        with pytest.raises(ConfigurationError):
            with TestClient(create_app()):
                pass

    def test_settings_loaded_from_environment(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_GEMINI_KEY", "test-key")
        monkeypatch.setenv("GOOGLE_GEMINI_MODEL", "gemini-custom")

        with TestClient(create_app()) as client:
            resp = client.get("/ai/models")

        assert resp.json()["models"][0] == "gemini-custom"

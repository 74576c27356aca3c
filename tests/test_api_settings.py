"""Tests for Settings API: generation settings and prerequisites.

Run: pytest tests/test_api_settings.py -v
Markers: api
"""
import pytest

import config

pytestmark = [pytest.mark.api]


class TestAppSettings:
    def test_get_defaults(self, client):
        r = client.get("/api/app-settings")
        assert r.status_code == 200
        data = r.get_json()
        assert data["default_model"] == config.DEFAULT_MODEL
        assert data["temperature"] == config.GENERATION_TEMPERATURE
        assert "sonnet" in data["model_choices"]

    def test_update_persists(self, client):
        r = client.post("/api/app-settings", json={
            "default_model": "claude-custom",
            "temperature": 0.2,
        })
        assert r.status_code == 200
        assert r.get_json()["settings"]["default_model"] == "claude-custom"
        assert config.load_app_settings()["temperature"] == 0.2

        data = client.get("/api/app-settings").get_json()
        assert data["default_model"] == "claude-custom"

    def test_update_rebuilds_generator(self, client, app, fake_provider):
        client.post("/api/app-settings", json={
            "default_model": "claude-new",
            "backup_model": "",
            "max_tokens": 800,
        })
        assert app.generator.provider is fake_provider
        assert app.generator.primary_model == "claude-new"
        assert app.generator.backup_model is None
        assert app.generator.params["max_tokens"] == 800

        client.post("/api/generate", json={
            "story": "協助客人比較兩款耳機", "competency": "service", "storeCategory": "digital",
        })
        assert fake_provider.models_called == ["claude-new"]

    def test_unknown_keys_ignored(self, client):
        client.post("/api/app-settings", json={"evil": True})
        assert "evil" not in config.load_app_settings()

    @pytest.mark.parametrize("payload,field", [
        ({"temperature": 3}, "temperature"),
        ({"temperature": True}, "temperature"),
        ({"max_tokens": 0}, "max_tokens"),
        ({"max_tokens": "many"}, "max_tokens"),
        ({"default_model": ""}, "default_model"),
    ])
    def test_invalid_values(self, client, payload, field):
        r = client.post("/api/app-settings", json=payload)
        assert r.status_code == 400
        assert r.get_json()["fields"] == [field]

    def test_corrupt_settings_file_falls_back(self, client):
        config.APP_SETTINGS_FILE.write_text("{not json")
        data = client.get("/api/app-settings").get_json()
        assert data["default_model"] == config.DEFAULT_MODEL


class TestPrerequisites:
    def test_prerequisites(self, client):
        r = client.get("/api/prerequisites")
        assert r.status_code == 200
        data = r.get_json()
        assert data["anthropic_api_key"]["configured"] is True
        assert "installed" in data["claude_cli"]
        assert data["models"]["primary"] == config.DEFAULT_MODEL
        assert data["app_version"] == config.APP_VERSION

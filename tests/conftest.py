"""Shared test fixtures for pytest suite.

Provides fixtures for:
- tmp_db: Fresh database instance per test
- make_report: Factory for valid report fields
- seeded_reports: Five saved reports across two store categories
- fake_provider: Scriptable completion provider (no network, no CLI)
- app: Flask test app with isolated database, settings file and provider
- client: Flask test client
"""
import json
import os
import tempfile

import pytest

# Keep config's data dir (logs, default DB) out of the source tree
os.environ.setdefault("STAR_DATA_DIR", tempfile.mkdtemp(prefix="star-test-"))

import config  # noqa: E402
from core.errors import ProviderError  # noqa: E402
from core.generation import GenerationService  # noqa: E402
from core.llm import CompletionProvider  # noqa: E402
from storage.db import Database  # noqa: E402
from web.app import create_app  # noqa: E402

STAR_JSON = json.dumps({
    "situation": "週末午後香水櫃位湧入大量旅客，一位客人急著登機卻找不到想送人的香水。",
    "task": "我需要在十分鐘內了解客人需求，推薦合適商品並完成結帳。",
    "action": "我先詢問收禮對象與喜好，快速試香兩款，並同步請同事準備包裝與退稅單。",
    "result": "客人在登機前完成購買並留下好評，當天櫃位業績也比前一週成長一成。",
}, ensure_ascii=False)


def _report_fields(**overrides):
    """Valid report fields, with *overrides* applied."""
    fields = {
        "name": "香水櫃位的登機前救援",
        "situation": "旅客登機前臨時需要禮物",
        "task": "十分鐘內完成推薦與結帳",
        "action": "快速了解需求並協調同事包裝",
        "result": "客人準時登機並留下好評",
        "competency": "service",
        "storeCategory": "fragrance",
        "originalStory": "有位客人趕飛機...",
    }
    fields.update(overrides)
    return fields


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_db(tmp_path):
    """Create a fresh Database backed by a temp file."""
    db_path = tmp_path / "test.db"
    db = Database(db_path=db_path)
    return db


@pytest.fixture
def make_report():
    """Factory for valid report fields: make_report(storeCategory="makeup")."""
    return _report_fields


@pytest.fixture
def seeded_reports(tmp_db):
    """Three skincare + two makeup reports.

    Returns dict with skincare_ids, makeup_ids (in insertion order) and db.
    """
    skincare = [
        tmp_db.create_report(_report_fields(name=f"保養 {i}", storeCategory="skincare",
                                            competency="service"))
        for i in range(3)
    ]
    makeup = [
        tmp_db.create_report(_report_fields(name=f"彩妝 {i}", storeCategory="makeup",
                                            competency="teamwork"))
        for i in range(2)
    ]
    return {"skincare_ids": skincare, "makeup_ids": makeup, "db": tmp_db}


# ---------------------------------------------------------------------------
# Completion provider fixtures
# ---------------------------------------------------------------------------

class FakeProvider(CompletionProvider):
    """Returns scripted output per model and records every call.

    ``responses`` maps model name -> text, or an exception to raise.
    Models not in the map get ``default``.
    """

    name = "fake"

    def __init__(self, responses=None, default=STAR_JSON):
        self.responses = dict(responses or {})
        self.default = default
        self.calls = []

    def complete(self, prompt, model, params=None):
        self.calls.append({"prompt": prompt, "model": model, "params": params})
        outcome = self.responses.get(model, self.default)
        if isinstance(outcome, ProviderError):
            raise outcome
        return outcome

    @property
    def models_called(self):
        return [c["model"] for c in self.calls]


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def generator(fake_provider):
    """GenerationService over the fake provider with models 'primary'/'backup'."""
    return GenerationService(
        provider=fake_provider,
        primary_model="primary",
        backup_model="backup",
        params={"temperature": 0.7, "max_tokens": 1000, "timeout": 5},
    )


# ---------------------------------------------------------------------------
# Flask app fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def app(tmp_path, monkeypatch, generator):
    """Create a Flask test app with a temp database and the fake provider."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    monkeypatch.delenv("STAR_MODEL", raising=False)
    monkeypatch.delenv("STAR_BACKUP_MODEL", raising=False)
    monkeypatch.setattr(config, "APP_SETTINGS_FILE", tmp_path / "app_settings.json")

    application = create_app()
    application.db = Database(db_path=tmp_path / "test.db")
    application.generator = generator
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    return app.test_client()

"""Shared configuration for the STAR report builder."""
import json
import os
import shutil
from pathlib import Path

import keyring
from keyring.errors import KeyringError

APP_VERSION = "1.0.0"

# Paths
BASE_DIR = Path(__file__).parent
DATA_DIR = Path(os.environ.get("STAR_DATA_DIR", BASE_DIR / "data"))

# Ensure DATA_DIR exists with restricted permissions (owner-only access)
DATA_DIR.mkdir(parents=True, exist_ok=True)
try:
    os.chmod(DATA_DIR, 0o700)
except OSError:
    pass

PROMPTS_DIR = BASE_DIR / "prompts"
LOGS_DIR = DATA_DIR / "logs"
DB_PATH = DATA_DIR / "star_reports.db"
APP_SETTINGS_FILE = DATA_DIR / ".app_settings.json"

# Generation
DEFAULT_MODEL = os.environ.get("STAR_MODEL", "claude-sonnet-4-5-20250929")
# Substituted once when the provider reports DEFAULT_MODEL as unavailable
BACKUP_MODEL = os.environ.get("STAR_BACKUP_MODEL", "claude-haiku-4-5-20251001")

MODEL_CHOICES = {
    "haiku": "claude-haiku-4-5-20251001",
    "sonnet": "claude-sonnet-4-5-20250929",
    "opus": "claude-opus-4-6",
}

GENERATION_TEMPERATURE = 0.7
GENERATION_MAX_TOKENS = 1000
GENERATION_TIMEOUT = 60  # seconds per provider call

# "sdk" (Anthropic Python SDK) or "cli" (claude binary); empty = auto
LLM_BACKEND = os.environ.get("LLM_BACKEND", "").lower()
CLAUDE_BIN = "claude"
CLAUDE_COMMON_FLAGS = ["--output-format", "json"]

# Report listing
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Web server
WEB_HOST = "127.0.0.1"
WEB_PORT = int(os.environ.get("PORT", "5000"))

KEYRING_SERVICE = "STAR Report Builder"


# --- App Settings (persisted JSON) ---

_DEFAULT_APP_SETTINGS = {
    "default_model": DEFAULT_MODEL,
    "backup_model": BACKUP_MODEL,
    "temperature": GENERATION_TEMPERATURE,
    "max_tokens": GENERATION_MAX_TOKENS,
}


def load_app_settings():
    """Load app settings from JSON file, merging with defaults."""
    settings = _DEFAULT_APP_SETTINGS.copy()
    if APP_SETTINGS_FILE.exists():
        try:
            saved = json.loads(APP_SETTINGS_FILE.read_text())
        except (OSError, json.JSONDecodeError):
            return settings
        if isinstance(saved, dict):
            settings.update(saved)
    return settings


def save_app_settings(settings):
    """Save app settings to JSON file."""
    APP_SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
    APP_SETTINGS_FILE.write_text(json.dumps(settings, indent=2))


def get_model_config():
    """Resolve generation settings: environment > settings file > defaults.

    Returns dict with primary_model, backup_model and the provider params
    (temperature, max_tokens, timeout).
    """
    settings = load_app_settings()
    primary = os.environ.get("STAR_MODEL") or settings.get("default_model") or DEFAULT_MODEL
    backup = os.environ.get("STAR_BACKUP_MODEL", settings.get("backup_model"))
    return {
        "primary_model": primary,
        "backup_model": backup or None,
        "params": {
            "temperature": settings.get("temperature", GENERATION_TEMPERATURE),
            "max_tokens": settings.get("max_tokens", GENERATION_MAX_TOKENS),
            "timeout": GENERATION_TIMEOUT,
        },
    }


def get_api_key():
    """Get the Anthropic API key from the environment, falling back to the Keychain."""
    key = os.environ.get("ANTHROPIC_API_KEY", "")
    if key:
        return key
    try:
        return keyring.get_password(KEYRING_SERVICE, "anthropic_api_key") or ""
    except KeyringError:
        return ""


def check_prerequisites():
    """Check system prerequisites and return status dict."""
    results = {}

    claude_path = shutil.which(CLAUDE_BIN)
    results["claude_cli"] = {
        "installed": claude_path is not None,
        "path": claude_path or "",
    }

    results["anthropic_api_key"] = {
        "configured": bool(get_api_key()),
    }

    model_config = get_model_config()
    results["models"] = {
        "primary": model_config["primary_model"],
        "backup": model_config["backup_model"],
    }

    results["data_dir"] = {
        "path": str(DATA_DIR),
        "exists": DATA_DIR.exists(),
    }

    results["app_version"] = APP_VERSION

    return results

"""Application settings.

Timer defaults and brand colors are plain constants. Per-user settings come
from environment variables first (ESTUDA_DB_FILE, ESTUDA_LOG_LEVEL,
ESTUDA_USER_EMAIL, ESTUDA_USER_NAME), then an optional settings.json in the user
data dir, then the defaults below.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from BackEnd.core.paths import db_path, settings_path

# --- Timer (seconds) ---
DEFAULT_TARGET_SECONDS = 25 * 60
TARGET_STEP_SECONDS = 5 * 60
MIN_TARGET_SECONDS = 60
TICK_INTERVAL_MS = 1000

# --- Session records ---
STATUS_DONE = "Concluído"
DEFAULT_SUBJECT_COLOR = "#008080"
DEFAULT_SUBJECT_ICON = "book"
PLACEHOLDER_COLOR = "#f3f4f6"
NO_DATA_LABEL = "Nenhuma sessão hoje"

# --- Dashboard ---
RECENT_SESSIONS_LIMIT = 5


@dataclass
class Settings:
	db_file: Path = field(default_factory=db_path)
	log_level: str = "INFO"
	user_email: str = ""
	user_name: str = ""
	default_target_seconds: int = DEFAULT_TARGET_SECONDS
	recent_sessions_limit: int = RECENT_SESSIONS_LIMIT


def _read_settings_file(path):
	if not path.exists():
		return {}
	with open(path, encoding="utf-8") as f:
		data = json.load(f)
	if not isinstance(data, dict):
		raise ValueError(f"{path} must hold a JSON object")
	return data


def load_settings(path=None) -> Settings:
	"""Build Settings from env vars, settings.json and defaults, in that order."""
	stored = _read_settings_file(Path(path) if path else settings_path())
	user = os.environ.get("USER") or os.environ.get("USERNAME") or "estudante"

	settings = Settings()
	if os.environ.get("ESTUDA_DB_FILE") or stored.get("db_file"):
		settings.db_file = Path(os.environ.get("ESTUDA_DB_FILE") or stored["db_file"])
	settings.log_level = os.environ.get("ESTUDA_LOG_LEVEL", stored.get("log_level", settings.log_level))
	settings.user_email = os.environ.get("ESTUDA_USER_EMAIL", stored.get("user_email", f"{user}@localhost"))
	settings.user_name = os.environ.get("ESTUDA_USER_NAME", stored.get("user_name", user))

	target = int(stored.get("default_target_seconds", DEFAULT_TARGET_SECONDS))
	settings.default_target_seconds = max(MIN_TARGET_SECONDS, target)
	settings.recent_sessions_limit = int(stored.get("recent_sessions_limit", RECENT_SESSIONS_LIMIT))
	return settings

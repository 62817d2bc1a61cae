"""
VoiceGrade configuration.

Non-secret settings come from a YAML file (VOICEGRADE_CONFIG, or config.yaml
at the project root); anything missing falls back to the defaults below.
Secrets are read from the environment only. The AI provider and model are
not configured here but in the Settings table (see voicegrade.core.settings_db).
"""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8090
    debug: bool = False
    # Origins of the submission wizard / results frontend
    cors_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]


class DatabaseConfig(BaseModel):
    # Only the filename is used; see get_database_path()
    path: str = "data/voicegrade.db"


class LoggingConfig(BaseModel):
    file: str = "app.log"
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size: int = 10  # MB per file before rotation
    backup_count: int = 5


class AuthConfig(BaseModel):
    """Session token settings and the operator allow-list."""

    cookie_name: str = "vg_session"
    session_ttl: int = 7 * 24 * 3600  # seconds
    # Session user ids allowed to read and change the AI provider settings
    admin_user_ids: List[str] = []


class GoogleConfig(BaseModel):
    """Google Docs / Drive endpoints used by the document import."""

    docs_api_base: str = "https://docs.googleapis.com/v1"
    drive_api_base: str = "https://www.googleapis.com/drive/v3"
    timeout: float = 15.0


class AppConfig(BaseModel):
    server: ServerConfig = ServerConfig()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    auth: AuthConfig = AuthConfig()
    google: GoogleConfig = GoogleConfig()


class SecretSettings(BaseSettings):
    """
    Secrets from the environment. VOICEGRADE_SECRET_KEY encrypts stored API
    keys and must match the key the identity provider signs sessions with.
    """

    model_config = SettingsConfigDict(env_prefix="VOICEGRADE_")

    secret_key: str = "default_key_for_local_use"


_config: Optional[AppConfig] = None
_secrets: Optional[SecretSettings] = None


def get_project_root() -> Path:
    """Repository root (the directory holding backend/)."""
    return Path(__file__).resolve().parents[3]


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Read the YAML config file into an AppConfig.

    Args:
        config_path: Explicit file; otherwise VOICEGRADE_CONFIG, then
            <project root>/config.yaml. A missing file yields the defaults.
    """
    path = Path(
        config_path
        or os.environ.get("VOICEGRADE_CONFIG")
        or get_project_root() / "config.yaml"
    )
    if not path.exists():
        return AppConfig()
    with open(path, "r", encoding="utf-8") as f:
        return AppConfig(**(yaml.safe_load(f) or {}))


def get_config() -> AppConfig:
    """Process-wide configuration, loaded on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_secrets() -> SecretSettings:
    global _secrets
    if _secrets is None:
        _secrets = SecretSettings()
    return _secrets


def _env_or_root_dir(env_name: str, default_subdir: str) -> Path:
    """Directory from an environment variable (containers) or under the project root."""
    value = os.environ.get(env_name)
    directory = Path(value) if value else get_project_root() / default_subdir
    directory = directory.resolve()
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def get_database_path() -> Path:
    """SQLite file: $DATA_DIR/<name> or <root>/data/<name>, name from database.path."""
    return _env_or_root_dir("DATA_DIR", "data") / Path(get_config().database.path).name


def get_log_path() -> Path:
    """Log file: $LOGS_DIR/<name> or <root>/logs/<name>, name from logging.file."""
    name = Path(get_config().logging.file).name or "app.log"
    return _env_or_root_dir("LOGS_DIR", "logs") / name

from __future__ import annotations
from typing import Optional, Dict, Any, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path
import tomllib
from dotenv import load_dotenv

# Project root: the directory holding app.py and config/
BASE_DIR = Path(__file__).resolve().parents[1]

# Force-load .env from project root, then fall back to CWD
load_dotenv(BASE_DIR / ".env")
load_dotenv()  # no-op if already loaded

class Settings(BaseSettings):
    # backend
    api_base_url: str = Field(default="https://immu-backend.up.railway.app")
    auth_base_url: str = Field(default="https://immi-backend.up.railway.app")
    request_timeout: Optional[float] = None  # None keeps the transport default

    # app
    app_storage_dir: str = Field(default="./storage")
    session_backend: Literal["file", "memory"] = "memory"  # storage is per browser session either way
    error_notice_ttl_seconds: float = 5.0
    log_level: str = "INFO"
    debug_panel: bool = False

    # pydantic v2 settings config
    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
        env_file=[str(BASE_DIR / ".env"), ".env"],  # try both absolute and CWD .env
        env_file_encoding="utf-8",
    )

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        # environment and .env win over values passed in from config/app.toml
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    def api_url(self, path: str) -> str:
        return f"{self.api_base_url.rstrip('/')}{path}"

    def auth_url(self, path: str) -> str:
        return f"{self.auth_base_url.rstrip('/')}{path}"


def load_settings(cfg_path: Optional[Path] = None) -> Settings:
    cfg_path = cfg_path or BASE_DIR / "config" / "app.toml"
    data: Dict[str, Any] = {}
    if cfg_path.exists():
        with cfg_path.open("rb") as f:
            data = tomllib.load(f)
    # TOML defaults + env override
    return Settings(**data.get("app", {}), **data.get("backend", {}))

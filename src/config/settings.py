import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _getenv(key: str, default: str) -> str:
    """Return environment value or the provided default if unset or empty.

    This makes .env truly optional and also guards against empty-string
    values (e.g., KEY="") which would otherwise override sensible defaults.
    """
    value = os.getenv(key)
    if value is None:
        return default
    value_str = str(value).strip()
    return value_str if value_str != "" else default


def _getlist(key: str, default: str) -> List[str]:
    return [item.strip() for item in _getenv(key, default).split(",") if item.strip()]


@dataclass
class Settings:
    """Application configuration settings."""

    # Locale settings
    default_locale: str = field(default_factory=lambda: _getenv("DEFAULT_LOCALE", "en"))
    supported_locales: List[str] = field(default_factory=lambda: _getlist("SUPPORTED_LOCALES", "en,my"))
    locale_key: str = field(default_factory=lambda: _getenv("LOCALE_KEY", "app_locale"))

    # Preference storage
    state_dir: str = field(default_factory=lambda: _getenv("STATE_DIR", ".app_state"))
    state_file: str = field(default_factory=lambda: _getenv("STATE_FILE", "preferences.json"))

    # UI settings
    page_title: str = "🌐 Locale Switcher"
    page_icon: str = "🌐"
    layout: str = "centered"

    # Logging
    log_level: str = field(default_factory=lambda: _getenv("LOG_LEVEL", "INFO"))

    def get_state_path(self) -> Path:
        """Get the preferences file path, creating its directory if necessary."""
        path = Path(self.state_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path / self.state_file


_settings = None


def get_settings() -> Settings:
    """Get singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

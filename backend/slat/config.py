"""
Application configuration.

All settings come from environment variables, read once into a Settings
object that is handed to create_app() and from there to the database layer,
the mailer and the logging setup. Nothing else in the package reads the
environment.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_levels(name: str) -> Dict[str, str]:
    """Parse "db=DEBUG,mail=WARNING" into {"db": "DEBUG", "mail": "WARNING"}."""
    levels = {}
    for item in _env_list(name, ""):
        channel, _, level = item.partition("=")
        if channel.strip() and level.strip():
            levels[channel.strip()] = level.strip().upper()
    return levels


@dataclass
class Settings:
    """Runtime settings for the attendance API."""

    # Fallback to SQLite for local development when PostgreSQL is not available
    database_url: str = "sqlite:///./slat.db"
    log_level: str = "INFO"
    # Per-channel overrides of log_level, keyed by channel name
    log_channel_levels: Dict[str, str] = field(default_factory=dict)
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_allowed_origins: List[str] = field(default_factory=lambda: ["*"])

    # Outgoing mail (access codes)
    mail_host: str = "smtp.outlook.com"
    mail_port: int = 587
    mail_username: str = ""
    mail_password: str = ""
    mail_sender_name: str = "Slat | Yaba College of Technology"
    mail_use_tls: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            log_channel_levels=_env_levels("LOG_CHANNEL_LEVELS"),
            api_host=os.getenv("API_HOST", cls.api_host),
            api_port=int(os.getenv("API_PORT", str(cls.api_port))),
            cors_allowed_origins=_env_list("CORS_ALLOWED_ORIGINS", "*"),
            mail_host=os.getenv("MAIL_HOST", cls.mail_host),
            mail_port=int(os.getenv("MAIL_PORT", str(cls.mail_port))),
            mail_username=os.getenv("MAIL_USERNAME", ""),
            mail_password=os.getenv("MAIL_PASSWORD", ""),
            mail_sender_name=os.getenv("MAIL_SENDER_NAME", cls.mail_sender_name),
            mail_use_tls=_env_bool("MAIL_USE_TLS", cls.mail_use_tls),
        )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def mail_configured(self) -> bool:
        return bool(self.mail_host and self.mail_username and self.mail_password)

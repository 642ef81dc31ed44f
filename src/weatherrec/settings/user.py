"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import ClassVar, Final, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

# Load environment variables from .env file(s)
load_dotenv()

logger: Final = logging.getLogger(__name__)

# Placeholder keys shipped in sample configs; treated as "no key"
PLACEHOLDER_API_KEYS: Final = frozenset({"demo_key", "your_api_key_here"})


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


def _default_port() -> int:
    return int(os.getenv("PORT", "3001"))


class UserSettings(BaseModel):
    """Settings for the record store, weather lookups and the HTTP server.

    Every value has a default, so the application runs in demo mode with
    no config file at all. Values can be overridden in config.yaml, which
    may reference environment variables as ``${NAME}``.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/weatherrec/config.yaml").expanduser(),
        Path("/etc/weatherrec/config.yaml"),
    ]

    # Weather lookups
    api_key: str | None = Field(
        default_factory=lambda: os.getenv("WEATHER_API_KEY") or None,
        description="OpenWeatherMap API key; demo mode when unset",
    )
    units: Literal["metric", "imperial", "standard"] = "metric"
    request_timeout: float = Field(10.0, gt=0, description="HTTP timeout for API calls (seconds)")

    # Storage
    database_path: Path = Field(Path("database.json"), description="Record store JSON document")

    # HTTP server
    host: str = Field("127.0.0.1", description="Interface to bind")
    port: int = Field(default_factory=_default_port, ge=1, le=65535, description="Port to bind")
    static_dir: Path | None = Field(None, description="Built front end to serve at /")

    # ---- validators ----
    @field_validator("api_key")
    @classmethod
    def blank_key_is_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    # ---- convenience methods ----
    @property
    def has_valid_api_key(self) -> bool:
        """Whether live OpenWeatherMap calls can be made."""
        return bool(self.api_key) and self.api_key not in PLACEHOLDER_API_KEYS

    @property
    def api_mode(self) -> Literal["live", "demo"]:
        """``live`` with a usable API key, otherwise ``demo``."""
        return "live" if self.has_valid_api_key else "demo"

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated UserSettings object

        Raises:
            FileNotFoundError: If no config file is found
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        # Try to find config file
        if path is None:
            # Check environment variable first
            env_path = os.environ.get("WEATHERREC_CONFIG")
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Config file from WEATHERREC_CONFIG not found: {path}")
            else:
                # Try default paths
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    raise FileNotFoundError(
                        "No configuration file found. Create config.yaml or set WEATHERREC_CONFIG."
                    )
        elif not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        # Load and parse config
        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw) or {}
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err

    @classmethod
    def discover(cls, path: Path | None = None) -> UserSettings:
        """Load configuration, falling back to defaults when no file exists.

        An explicit ``path`` must exist; only the implicit search may come
        up empty.
        """
        if (
            path is None
            and not os.environ.get("WEATHERREC_CONFIG")
            and not any(p.exists() for p in cls.DEFAULT_CONFIG_PATHS)
        ):
            logger.info("No configuration file found, using defaults")
            return cls()
        return cls.load(path)

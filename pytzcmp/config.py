from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path

import tzlocal

from .catalog import TimezoneCatalog
from .state import FALLBACK_TIMEZONE

logger = logging.getLogger(__name__)

CONFIG_ENV = "PYTZCMP_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".pytzcmp.json"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def config_path() -> Path:
    override = os.getenv(CONFIG_ENV)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


@dataclass(frozen=True)
class Settings:
    local_timezone: str | None = None
    log_level: str = "WARNING"

    @classmethod
    def load(cls, path: Path | None = None) -> Settings:
        path = path or config_path()
        local_timezone = None
        log_level = "WARNING"
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                tz = data.get("local_timezone")
                if isinstance(tz, str) and tz.strip():
                    local_timezone = tz.strip()
                level = data.get("log_level")
                if isinstance(level, str) and level.upper() in LOG_LEVELS:
                    log_level = level.upper()
        except FileNotFoundError:
            pass
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return cls(local_timezone=local_timezone, log_level=log_level)

    def save(self, path: Path | None = None) -> Path:
        path = path or config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(asdict(self), f, indent=2)
        return path


def resolve_local_timezone(settings: Settings, catalog: TimezoneCatalog) -> str:
    """Configured zone, else the zone this machine runs in, else UTC."""
    if settings.local_timezone in catalog:
        return settings.local_timezone
    if settings.local_timezone:
        logger.warning("Configured local zone %r is not a known zone", settings.local_timezone)
    try:
        detected = tzlocal.get_localzone_name()
    except Exception as exc:  # noqa: BLE001
        logger.debug("Local zone detection failed: %s", exc)
        detected = None
    if detected in catalog:
        return detected
    return FALLBACK_TIMEZONE

"""Persistent user settings for the cyanpdf command line interface."""

from __future__ import annotations

import json
import logging
import tempfile
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import click

from .cache import CacheKeyPolicy
from .job import RenderIntent

_LOGGER = logging.getLogger("cyanpdf.settings")

APP_NAME = "cyanpdf"
SETTINGS_FILE = "settings.json"


@dataclass
class Settings:
    """Values remembered between runs."""

    rgb: Optional[str] = None
    cmyk: Optional[str] = None
    gray: Optional[str] = None
    output: Optional[str] = None
    intent: int = int(RenderIntent.RELATIVE_COLORIMETRIC)
    black_point: bool = True
    cache_key: str = CacheKeyPolicy.DOCUMENT.value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Build settings from *data*, raising :class:`ValueError` for invalid values."""

        known = {item.name for item in fields(cls)}
        settings = cls(**{key: value for key, value in data.items() if key in known})
        if isinstance(settings.intent, bool) or not isinstance(settings.intent, int):
            raise ValueError(f"Invalid rendering intent: {settings.intent!r}")
        settings.intent = int(RenderIntent(settings.intent))
        settings.cache_key = CacheKeyPolicy(settings.cache_key).value
        if not isinstance(settings.black_point, bool):
            raise ValueError(f"Invalid black point setting: {settings.black_point!r}")
        for name in ("rgb", "cmyk", "gray", "output"):
            value = getattr(settings, name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Invalid {name} profile path: {value!r}")
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def default_settings_path() -> Path:
    return Path(click.get_app_dir(APP_NAME)) / SETTINGS_FILE


class SettingsStore:
    """Load, update, and persist :class:`Settings`."""

    VERSION = 1

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or default_settings_path()
        self.settings = Settings()

    def load(self) -> Settings:
        if not self.path.exists():
            self.settings = Settings()
            return self.settings
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if data.get("version", 0) != self.VERSION:
                raise ValueError(f"Unsupported settings version: {data.get('version')}")
            self.settings = Settings.from_dict(data.get("settings", {}))
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            _LOGGER.warning("Ignoring unreadable settings file %s: %s", self.path, exc)
            self.settings = Settings()
        return self.settings

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"version": self.VERSION, "settings": self.settings.to_dict()}
        with tempfile.NamedTemporaryFile(
            "w", delete=False, dir=self.path.parent, suffix=".tmp", encoding="utf-8"
        ) as handle:
            json.dump(payload, handle, indent=2, sort_keys=True)
            temp_path = Path(handle.name)
        temp_path.replace(self.path)

    def update(self, **changes: Any) -> Settings:
        """Apply *changes*, skipping ``None`` values, and persist the result."""

        known = {item.name for item in fields(Settings)}
        for key, value in changes.items():
            if key not in known:
                raise KeyError(f"Unknown setting: {key}")
            if value is None:
                continue
            setattr(self.settings, key, value)
        self.save()
        return self.settings


__all__ = ["APP_NAME", "Settings", "SettingsStore", "default_settings_path"]

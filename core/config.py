"""
core.config
~~~~~~~~~~~
Reads the optional application config from a JSON file in the
platform's standard config directory, then applies environment
overrides.

Config location
---------------
  Windows  : %APPDATA%\\Compressum\\config.json
  macOS    : ~/Library/Application Support/Compressum/config.json
  Linux    : ~/.config/Compressum/config.json

Recognised keys::

    {
      "ffmpeg_path":     "/opt/homebrew/bin/ffmpeg",
      "timeout_seconds": 3600,
      "theme":           "auto"          // "auto", "dark" or "light"
    }

Environment overrides: COMPRESSUM_FFMPEG, COMPRESSUM_TIMEOUT.

The app only ever reads this file. Form values (paths, format, speed)
are never written back, so nothing the user picks survives a restart.
"""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path

THEMES = ("auto", "dark", "light")

ENV_FFMPEG  = "COMPRESSUM_FFMPEG"
ENV_TIMEOUT = "COMPRESSUM_TIMEOUT"


# ── Config directory ──────────────────────────────────────────────────────────

def _config_dir() -> Path:
    if sys.platform == "win32":
        base = Path.home() / "AppData" / "Roaming"
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path.home() / ".config"

    return base / "Compressum"


CONFIG_DIR  = _config_dir()
CONFIG_FILE = CONFIG_DIR / "config.json"


# ── Public API ────────────────────────────────────────────────────────────────

@dataclass
class AppConfig:
    ffmpeg_path: str | None = None
    timeout_seconds: float | None = None   # None = wait forever
    theme: str = "auto"


def load_config(path: Path | None = None, environ=None) -> AppConfig:
    """
    Build an AppConfig from *path* (default CONFIG_FILE) and *environ*
    (default os.environ).

    A missing, empty or malformed file yields the defaults; invalid
    individual values are ignored.
    """
    path = path or CONFIG_FILE
    environ = os.environ if environ is None else environ

    payload = _read_json(path)
    config = _dict_to_config(payload)

    if environ.get(ENV_FFMPEG):
        config.ffmpeg_path = environ[ENV_FFMPEG]
    if environ.get(ENV_TIMEOUT):
        config.timeout_seconds = _parse_timeout(environ[ENV_TIMEOUT])

    print(f"[CONFIG] ffmpeg_path={config.ffmpeg_path!r} "
          f"timeout={config.timeout_seconds} theme={config.theme}")
    return config


# ── Parsing helpers ───────────────────────────────────────────────────────────

def _read_json(path: Path) -> dict:
    if not path.is_file():
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        print(f"[CONFIG] Ignoring unreadable config '{path}': {exc}")
        return {}
    return payload if isinstance(payload, dict) else {}


def _dict_to_config(d: dict) -> AppConfig:
    ffmpeg_path = d.get("ffmpeg_path")
    theme = d.get("theme", "auto")
    return AppConfig(
        ffmpeg_path     = ffmpeg_path if isinstance(ffmpeg_path, str) and ffmpeg_path else None,
        timeout_seconds = _parse_timeout(d.get("timeout_seconds")),
        theme           = theme if theme in THEMES else "auto",
    )


def _parse_timeout(value) -> float | None:
    """Positive number of seconds, or None for anything else."""
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if seconds > 0 else None

"""
core.paths
~~~~~~~~~~
Single source of truth for filesystem paths used across the app.
Import these instead of hard-coding strings anywhere else.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Project root = the directory that contains main.py
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# A frozen app bundle unpacks its resources somewhere else
RESOURCE_ROOT = Path(getattr(sys, "_MEIPASS", PROJECT_ROOT))

BIN_DIR         = RESOURCE_ROOT / "bin"
BUNDLED_FFMPEG  = BIN_DIR / "ffmpeg"
FALLBACK_FFMPEG = Path("/usr/local/bin/ffmpeg")


def resolve_ffmpeg(override: str | Path | None = None) -> Path:
    """
    Pick the ffmpeg executable to run.

    Order:
        1. *override* (config file / environment), used as-is
        2. the bundled binary in BIN_DIR, if present
        3. FALLBACK_FFMPEG

    The returned path is not checked for existence; a missing binary
    surfaces as a SpawnFailure when the runner launches it.
    """
    if override:
        return Path(override).expanduser()
    if BUNDLED_FFMPEG.is_file():
        return BUNDLED_FFMPEG
    return FALLBACK_FFMPEG


def validate_binary(binary: Path) -> list[str]:
    """
    Return a list of error strings if *binary* is missing/non-executable.
    Empty list means all good.

    Call this at startup and show a dialog if errors is non-empty.
    """
    errors: list[str] = []
    if not binary.exists():
        errors.append(f"Binary not found: {binary}")
    elif not binary.is_file():
        errors.append(f"Not a file: {binary}")
    elif not binary.stat().st_mode & 0o111:
        errors.append(f"Not executable: {binary}")
    return errors

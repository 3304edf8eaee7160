"""
core.intake
~~~~~~~~~~~
Pure functions for turning picker / drag-and-drop results into an
input path. No Qt; the UI hands over plain strings.
"""

from __future__ import annotations

from pathlib import Path

# What the input picker offers; dropped files are not filtered by type.
VIDEO_EXTENSIONS: frozenset[str] = frozenset({
    ".mp4", ".mov", ".m4v", ".avi", ".mkv",
    ".flv", ".webm", ".mpg", ".mpeg", ".wmv", ".ts",
})


def path_from_drop(paths: list[str]) -> str | None:
    """
    Accept a drop only when it carries exactly one existing local file.
    Returns its absolute path, or None to reject the drop.
    """
    if len(paths) != 1 or not paths[0]:
        return None

    candidate = Path(paths[0]).expanduser()
    if not candidate.is_file():
        return None
    return str(candidate.resolve())


def picker_result(selected: str, current: str) -> str:
    """
    File/folder dialogs return "" on cancel. That means "no selection",
    so keep whatever the field already held.
    """
    return selected if selected else current


def picker_filter() -> str:
    """Name filter for the input file dialog."""
    patterns = " ".join(f"*{ext}" for ext in sorted(VIDEO_EXTENSIONS))
    return f"Movies ({patterns});;All files (*)"

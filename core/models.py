"""
core.models
~~~~~~~~~~~
Pure dataclasses. No Qt, no I/O.
These travel freely between core and ui.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path

from core.errors import NonZeroExit


# ── Enums ─────────────────────────────────────────────────────────────────────

class JobState(Enum):
    IDLE      = auto()  # nothing submitted yet, or ready for the next submit
    RUNNING   = auto()  # ffmpeg child process is alive
    SUCCEEDED = auto()  # exit code 0
    FAILED    = auto()  # non-zero exit, spawn error or timeout
    CANCELLED = auto()  # terminated on request


class SpeedPreset(Enum):
    FAST = auto()   # "Fast Compression" toggle on
    SLOW = auto()

    @classmethod
    def from_toggle(cls, fast_enabled: bool) -> "SpeedPreset":
        return cls.FAST if fast_enabled else cls.SLOW


class SampleKind(Enum):
    DURATION = auto()   # "Duration: 00:01:23.45", total length of the input
    TIME     = auto()   # "time=00:00:05.10", current encode position


# ── Request ───────────────────────────────────────────────────────────────────

@dataclass
class TranscodeRequest:
    """
    One press of the Compress button.

    `output_directory` may be empty, in which case the output lands next
    to the input file. `target_format` is one of presets.EXPORT_FORMATS,
    compared case-insensitively.
    """
    input_path: str
    output_directory: str = ""
    target_format: str = "MP4"
    speed: SpeedPreset = SpeedPreset.SLOW


# ── Progress sample (returned by core.progress) ───────────────────────────────

@dataclass(frozen=True)
class ProgressSample:
    """A timestamp scraped from ffmpeg's human-readable output."""
    kind: SampleKind
    seconds: float
    text: str = ""     # the matched text, e.g. "time=00:00:05.10"


# ── Result ────────────────────────────────────────────────────────────────────

@dataclass
class TranscodeResult:
    exit_code: int
    output_path: Path
    captured_output: str = ""
    command: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def check(self) -> "TranscodeResult":
        """Return self on success, raise NonZeroExit otherwise."""
        if not self.succeeded:
            raise NonZeroExit(self)
        return self

"""
core.errors
~~~~~~~~~~~
Everything the runner can raise. All of them are terminal for the
submission that raised them; nothing is retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.models import TranscodeResult


class TranscodeError(Exception):
    """Base class for all transcode failures."""


class InvalidRequest(TranscodeError):
    """The request was rejected before any process was spawned."""


class RunnerBusy(TranscodeError):
    """A job is already running; only one job at a time is allowed."""


class SpawnFailure(TranscodeError):
    """The ffmpeg executable could not be found or launched."""


class NonZeroExit(TranscodeError):
    """ffmpeg ran but exited with a non-zero status."""

    def __init__(self, result: "TranscodeResult"):
        self.result = result
        super().__init__(
            f"ffmpeg exited with code {result.exit_code} "
            f"for {result.output_path.name}"
        )


class TranscodeCancelled(TranscodeError):
    """The child process was terminated by cancel()."""


class TranscodeTimeout(TranscodeError):
    """The child process ran past the configured timeout and was killed."""

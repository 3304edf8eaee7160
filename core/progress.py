"""
core.progress
~~~~~~~~~~~~~
Scrapes ffmpeg's human-readable stderr for timestamps.

ffmpeg announces the input length once:

    Duration: 00:01:23.45, start: 0.000000, bitrate: 1205 kb/s

and then keeps rewriting a status line, separated by '\\r' rather than
'\\n':

    frame=  120 fps= 60 q=28.0 size=   256kB time=00:00:05.10 bitrate=...

The format belongs to ffmpeg and may change, so everything here is
advisory: text that doesn't match is simply ignored.
"""

from __future__ import annotations

import re

from core.models import ProgressSample, SampleKind

_SAMPLE_RE = re.compile(
    r"(?P<label>Duration: |time=)(?P<h>\d{2}):(?P<m>\d{2}):(?P<s>\d{2}\.\d+)"
)

# Longest text we carry between chunks, enough for one split timestamp.
MAX_TAIL = 32


class ProgressScanner:
    """
    Feed it raw output chunks in arrival order; get back the samples
    found in each. Chunks may cut a timestamp anywhere, so the unmatched
    tail of one chunk is prepended to the next.

    A match that runs up to the very end of a chunk may still be missing
    fraction digits; it is held back until more text arrives or
    feed(..., final=True) says nothing more will.
    """

    def __init__(self):
        self._tail = ""

    def feed(self, chunk: str, final: bool = False) -> list[ProgressSample]:
        buffer = self._tail + chunk
        samples: list[ProgressSample] = []
        last_end = 0
        held = None

        for match in _SAMPLE_RE.finditer(buffer):
            if match.end() == len(buffer) and not final:
                held = match
                break
            samples.append(_to_sample(match))
            last_end = match.end()

        if held is not None:
            self._tail = buffer[held.start():]
        elif final:
            self._tail = ""
        else:
            self._tail = buffer[last_end:][-MAX_TAIL:]
        return samples


class ProgressTracker:
    """Turns DURATION + TIME samples into a 0.0 – 1.0 fraction."""

    def __init__(self):
        self.duration: float = 0.0
        self.position: float = 0.0

    def update(self, sample: ProgressSample) -> float | None:
        if sample.kind is SampleKind.DURATION:
            self.duration = sample.seconds
        else:
            self.position = sample.seconds
        return self.fraction

    @property
    def fraction(self) -> float | None:
        """None while the duration is unknown."""
        if self.duration <= 0:
            return None
        return max(0.0, min(self.position / self.duration, 1.0))


def hhmmss_to_seconds(time_str: str) -> float:
    """
    "00:01:23.45" → 83.45. Returns 0.0 for anything unparsable.
    """
    try:
        parts = time_str.split(":")
        h, m, s = float(parts[0]), float(parts[1]), float(parts[2])
        return h * 3600 + m * 60 + s
    except (ValueError, IndexError):
        return 0.0


def seconds_to_hhmmss(seconds: float) -> str:
    """83.45 → "00:01:23.45"."""
    seconds = max(seconds, 0.0)
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    return f"{int(h):02d}:{int(m):02d}:{s:05.2f}"


def _to_sample(match: re.Match) -> ProgressSample:
    kind = SampleKind.DURATION if match["label"] == "Duration: " else SampleKind.TIME
    seconds = hhmmss_to_seconds(f"{match['h']}:{match['m']}:{match['s']}")
    return ProgressSample(kind=kind, seconds=seconds, text=match.group(0))

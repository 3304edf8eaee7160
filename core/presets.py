# core/presets.py

from core.models import SpeedPreset

# Format picker order, left to right.
EXPORT_FORMATS: list[str] = ["MP4", "MOV", "AVI", "MKV", "FLV", "WEBM", "MPEG", "WMV"]

SPEED_PRESETS: dict[SpeedPreset, str] = {
    SpeedPreset.FAST: "ultrafast",
    SpeedPreset.SLOW: "fast",
}


def preset_name(speed: SpeedPreset) -> str:
    """ffmpeg `-preset` value for the given speed toggle."""
    return SPEED_PRESETS[speed]


def normalize_format(fmt: str) -> str | None:
    """
    Return the canonical (upper-case) entry from EXPORT_FORMATS matching
    *fmt*, ignoring case and a leading dot. None if it is not supported.
    """
    wanted = fmt.strip().lstrip(".").upper()
    return wanted if wanted in EXPORT_FORMATS else None


def format_extension(fmt: str) -> str:
    """File extension (no dot) written for *fmt*, e.g. "MP4" → "mp4"."""
    return fmt.strip().lstrip(".").lower()

from .models import (
    JobState, ProgressSample, SampleKind, SpeedPreset,
    TranscodeRequest, TranscodeResult,
)
from .errors import (
    TranscodeError, InvalidRequest, RunnerBusy, SpawnFailure,
    NonZeroExit, TranscodeCancelled, TranscodeTimeout,
)
from .presets import EXPORT_FORMATS
from .progress import ProgressScanner, ProgressTracker
from .command_builder import build_output_path, build_transcode_command
from .runner import TranscodeRunner
from .overseer import JobOverseer

__all__ = [
    "JobState", "ProgressSample", "SampleKind", "SpeedPreset",
    "TranscodeRequest", "TranscodeResult",
    "TranscodeError", "InvalidRequest", "RunnerBusy", "SpawnFailure",
    "NonZeroExit", "TranscodeCancelled", "TranscodeTimeout",
    "EXPORT_FORMATS",
    "ProgressScanner", "ProgressTracker",
    "build_output_path", "build_transcode_command",
    "TranscodeRunner",
    "JobOverseer",
]

"""
core.command_builder
~~~~~~~~~~~~~~~~~~~~
Builds ffmpeg CLI commands as plain list[str].

Keeping command construction separate means you can:
  - log / print the exact command before running it
  - paste it straight into a terminal for debugging
  - unit-test flag generation without running any process

Commands are never joined into a shell string for execution, so paths
with spaces or quotes reach ffmpeg verbatim.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from core.errors import InvalidRequest
from core.models import TranscodeRequest
from core.presets import format_extension, normalize_format, preset_name

OUTPUT_SUFFIX = "_compressed"


def validate_request(request: TranscodeRequest) -> None:
    """
    Raise InvalidRequest if *request* can't be submitted.
    Runs before anything is spawned.
    """
    if not request.input_path or not str(request.input_path).strip():
        raise InvalidRequest("Input file path must be specified.")

    if not Path(request.input_path).expanduser().is_file():
        raise InvalidRequest(f"Input file not found: {request.input_path}")

    if normalize_format(request.target_format) is None:
        raise InvalidRequest(f"Unsupported export format: {request.target_format}")


def build_output_path(request: TranscodeRequest) -> Path:
    """
    Where ffmpeg will write the result.

    Example:
        input_path       = "/Movies/clip 01.mov"
        output_directory = ""            (→ next to the input)
        target_format    = "MP4"
        → Path("/Movies/clip 01_compressed.mp4")
    """
    input_file = Path(request.input_path).expanduser()

    if request.output_directory:
        output_dir = Path(request.output_directory).expanduser()
    else:
        output_dir = input_file.parent

    name = f"{input_file.stem}{OUTPUT_SUFFIX}.{format_extension(request.target_format)}"
    return output_dir / name


def build_transcode_command(
    request: TranscodeRequest,
    ffmpeg_bin: Path,
    output_file: Path | None = None,
) -> list[str]:
    """
    Build the full ffmpeg command for one request.

    The command structure is:
        ffmpeg
          -i <input>
          -preset <ultrafast|fast>   ← from the Fast Compression toggle
          <output>

    Example output:
        ['/usr/local/bin/ffmpeg', '-i', '/Movies/clip 01.mov',
         '-preset', 'fast', '/Movies/clip 01_compressed.mp4']
    """
    if output_file is None:
        output_file = build_output_path(request)

    return [
        str(ffmpeg_bin),
        "-i", str(Path(request.input_path).expanduser()),
        "-preset", preset_name(request.speed),
        str(output_file),
    ]


def command_as_string(cmd: list[str]) -> str:
    """Human-readable, shell-quoted version of the command for logging."""
    return shlex.join(cmd)

"""
core.runner
~~~~~~~~~~~
TranscodeRunner turns a TranscodeRequest into one ffmpeg child process
and reports how it ended. No Qt; core.worker wraps it in a QThread.

State machine
-------------
    IDLE ──submit──▶ RUNNING ──exit 0─────────▶ SUCCEEDED
                        │  ──exit ≠ 0 / spawn ─▶ FAILED
                        │  ──timeout──────────▶ FAILED
                        └──cancel()───────────▶ CANCELLED

Any terminal state accepts the next submit. A submit while RUNNING is
rejected with RunnerBusy and leaves the running job untouched.

submit() blocks the calling thread until ffmpeg exits; callbacks run on
that same thread.
"""

from __future__ import annotations

import codecs
import subprocess
import threading
from pathlib import Path
from typing import Callable

from core.command_builder import (
    build_output_path,
    build_transcode_command,
    command_as_string,
    validate_request,
)
from core.errors import RunnerBusy, SpawnFailure, TranscodeCancelled, TranscodeTimeout
from core.models import JobState, ProgressSample, TranscodeRequest, TranscodeResult
from core.paths import resolve_ffmpeg
from core.progress import ProgressScanner

CHUNK_SIZE = 4096

SampleCallback = Callable[[ProgressSample], None]
OutputCallback = Callable[[str], None]


class TranscodeRunner:

    def __init__(self, ffmpeg_bin: str | Path | None = None, timeout: float | None = None):
        self.ffmpeg_bin = resolve_ffmpeg(ffmpeg_bin)
        self.timeout = timeout

        self._lock = threading.Lock()
        self._state = JobState.IDLE
        self._process: subprocess.Popen | None = None
        self._cancel_requested = False
        self._timed_out = False

    # ── State ─────────────────────────────────────────────────────────────────

    @property
    def state(self) -> JobState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state is JobState.RUNNING

    # ── Public API ────────────────────────────────────────────────────────────

    def submit(
        self,
        request: TranscodeRequest,
        on_sample: SampleCallback | None = None,
        on_output: OutputCallback | None = None,
    ) -> TranscodeResult:
        """
        Run ffmpeg for *request* and return its result.

        Raises:
            InvalidRequest      – before anything is spawned
            RunnerBusy          – another job is still RUNNING
            SpawnFailure        – ffmpeg could not be launched
            TranscodeCancelled  – cancel() was called while running
            TranscodeTimeout    – ffmpeg outlived self.timeout

        A non-zero exit is *not* raised: the result comes back with
        succeeded=False and the captured output. Call result.check() to
        turn it into NonZeroExit.
        """
        validate_request(request)
        self._claim()

        output_file = build_output_path(request)
        cmd = build_transcode_command(request, self.ffmpeg_bin, output_file)
        print(f"[RUNNER] Command:\n  {command_as_string(cmd)}")

        try:
            process = self._spawn(cmd)
        except OSError as exc:
            print(f"[RUNNER] ❌ Could not launch '{cmd[0]}': {exc}")
            self._set_state(JobState.FAILED)
            raise SpawnFailure(f"Could not launch {cmd[0]}: {exc}") from exc

        timer = self._start_timer()
        try:
            captured, sample_count = self._drain(process, on_sample, on_output)
            process.wait()
        except BaseException:
            # Callback raised: kill ffmpeg before re-raising.
            self._kill(process)
            self._set_state(JobState.FAILED)
            raise
        finally:
            if timer:
                timer.cancel()
            with self._lock:
                self._process = None

        print(f"[RUNNER] ffmpeg exited with code {process.returncode} "
              f"({sample_count} progress samples)")

        result = TranscodeResult(
            exit_code=process.returncode,
            output_path=output_file,
            captured_output=captured,
            command=cmd,
        )

        # A child that still exited 0 finished its work before the signal
        interrupted = process.returncode != 0

        if self._cancel_requested and interrupted:
            self._set_state(JobState.CANCELLED)
            raise TranscodeCancelled(f"Cancelled: {Path(request.input_path).name}")

        if self._timed_out and interrupted:
            self._set_state(JobState.FAILED)
            raise TranscodeTimeout(
                f"ffmpeg did not finish within {self.timeout:g}s "
                f"for {Path(request.input_path).name}"
            )

        if result.succeeded:
            print(f"[RUNNER] ✅ Wrote '{output_file}'")
            self._set_state(JobState.SUCCEEDED)
        else:
            print("[RUNNER] ffmpeg output:\n"
                  + "\n".join(f"  {l}" for l in captured.splitlines()[-20:]))
            self._set_state(JobState.FAILED)
        return result

    def cancel(self) -> bool:
        """
        Terminate the running child, if any. Returns False when there is
        nothing to cancel.
        """
        with self._lock:
            if self._state is not JobState.RUNNING:
                print("[RUNNER] cancel() — no running job")
                return False
            process = self._process
            if process is not None and process.poll() is not None:
                print(f"[RUNNER] cancel() — ffmpeg already exited ({process.returncode})")
                return False
            self._cancel_requested = True

        print("[RUNNER] cancel() called")
        if process is not None:
            self._terminate(process)
        return True

    def kill(self) -> bool:
        """
        SIGKILL the running child, for one that ignored cancel(). The job
        ends CANCELLED like any other cancel.
        """
        with self._lock:
            process = self._process
            if process is None or process.poll() is not None:
                return False
            self._cancel_requested = True
        print("[RUNNER] kill() called")
        process.kill()
        return True

    # ── Internal ──────────────────────────────────────────────────────────────

    def _claim(self) -> None:
        with self._lock:
            if self._state is JobState.RUNNING:
                raise RunnerBusy("A compression is already running.")
            self._cancel_requested = False
            self._timed_out = False
            self._process = None
            self._set_state(JobState.RUNNING)

    def _spawn(self, cmd: list[str]) -> subprocess.Popen:
        process = subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
        print(f"[RUNNER] PID = {process.pid}")

        with self._lock:
            self._process = process
            cancel_early = self._cancel_requested
        # cancel() may have landed between _claim() and Popen
        if cancel_early:
            self._terminate(process)
        return process

    def _drain(
        self,
        process: subprocess.Popen,
        on_sample: SampleCallback | None,
        on_output: OutputCallback | None,
    ) -> tuple[str, int]:
        """
        Read merged stdout/stderr in raw chunks until EOF.
        ffmpeg separates its status updates with '\\r', so line
        iteration would sit on them until the very end.
        """
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        scanner = ProgressScanner()
        parts: list[str] = []
        sample_count = 0

        def _handle(text: str, final: bool = False) -> None:
            nonlocal sample_count
            if text:
                parts.append(text)
                if on_output:
                    on_output(text)
            for sample in scanner.feed(text, final=final):
                sample_count += 1
                if on_sample:
                    on_sample(sample)

        while True:
            data = process.stdout.read1(CHUNK_SIZE)
            if not data:
                break
            text = decoder.decode(data)
            if text:
                _handle(text)

        # EOF: anything still held by the scanner is complete now
        _handle(decoder.decode(b"", final=True), final=True)

        process.stdout.close()
        return "".join(parts), sample_count

    def _start_timer(self) -> threading.Timer | None:
        if not self.timeout:
            return None
        timer = threading.Timer(self.timeout, self._on_timeout)
        timer.daemon = True
        timer.start()
        return timer

    def _on_timeout(self) -> None:
        with self._lock:
            process = self._process
            if process is None or process.poll() is not None:
                return
            self._timed_out = True
        print(f"[RUNNER] Timeout after {self.timeout:g}s — terminating")
        self._terminate(process)

    def _set_state(self, state: JobState) -> None:
        if state is not self._state:
            print(f"[RUNNER] State: {self._state.name} → {state.name}")
        self._state = state

    @staticmethod
    def _terminate(process: subprocess.Popen) -> None:
        if process.poll() is None:
            process.terminate()
            print("[RUNNER] Process terminated")

    @staticmethod
    def _kill(process: subprocess.Popen) -> None:
        if process.poll() is None:
            process.kill()
        process.wait()

"""
core.overseer
~~~~~~~~~~~~~
JobOverseer owns the single in-flight compression job. The UI calls
submit() and listens to signals; it never holds job state itself.
"""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from core.command_builder import build_output_path, validate_request
from core.errors import RunnerBusy, TranscodeCancelled, TranscodeError
from core.models import JobState, ProgressSample, SampleKind, TranscodeRequest, TranscodeResult
from core.progress import ProgressTracker
from core.runner import TranscodeRunner
from core.worker import TranscodeWorker


class JobOverseer(QObject):

    state_changed    = Signal(object)   # JobState
    job_started      = Signal(object, object)   # (TranscodeRequest, output Path)
    duration_known   = Signal(float)
    time_changed     = Signal(float)
    progress_changed = Signal(float)    # 0.0 – 1.0, only once the duration is known
    output_received  = Signal(str)
    job_finished     = Signal(object)   # TranscodeResult, exit code 0 or not
    job_failed       = Signal(object)   # TranscodeError (spawn failure, timeout)
    job_cancelled    = Signal()

    def __init__(self, runner: TranscodeRunner | None = None, parent=None):
        super().__init__(parent)
        self._runner  = runner or TranscodeRunner()
        self._worker: TranscodeWorker | None = None
        self._tracker = ProgressTracker()
        self._state   = JobState.IDLE

    # ── State ─────────────────────────────────────────────────────────────────

    @property
    def state(self) -> JobState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._worker is not None

    @property
    def runner(self) -> TranscodeRunner:
        return self._runner

    # ── Job management ────────────────────────────────────────────────────────

    def submit(self, request: TranscodeRequest) -> None:
        """
        Start *request* on a worker thread and return immediately.

        Raises (synchronously, nothing started):
            RunnerBusy      – a job is already running
            InvalidRequest  – missing input, unknown format
        """
        if self.is_busy:
            print("[OVERSEER] submit rejected — already running")
            raise RunnerBusy("A compression is already running.")

        validate_request(request)
        output_file = build_output_path(request)
        print(f"[OVERSEER] submit: '{request.input_path}' → '{output_file}' "
              f"| speed={request.speed.name}")

        self._tracker = ProgressTracker()

        worker = TranscodeWorker(self._runner, request, parent=self)
        worker.sample_received.connect(self._on_sample)
        worker.output_received.connect(self.output_received)
        worker.result_ready.connect(self._on_result)
        worker.error_occurred.connect(self._on_error)
        worker.finished.connect(worker.deleteLater)
        self._worker = worker

        self._set_state(JobState.RUNNING)
        self.job_started.emit(request, output_file)
        worker.start()

    def cancel(self) -> None:
        if self._worker is None:
            print("[OVERSEER] cancel() — nothing running")
            return
        print("[OVERSEER] cancel() requested")
        self._worker.cancel()

    def shutdown(self, msecs: int = 5000) -> bool:
        """
        Cancel the running job and block until its thread exits. ffmpeg
        gets *msecs* to honour SIGTERM before it is killed.
        """
        if self._worker is None:
            return True
        self.cancel()
        if self.wait(msecs):
            return True
        print(f"[OVERSEER] ffmpeg still running after {msecs} ms — killing")
        self._runner.kill()
        return self.wait()

    def wait(self, msecs: int = -1) -> bool:
        """Block until the current worker thread exits. True if it did."""
        if self._worker is None:
            return True
        if msecs < 0:
            return self._worker.wait()
        return self._worker.wait(msecs)

    # ── Worker callbacks (GUI thread) ─────────────────────────────────────────

    def _on_sample(self, sample: ProgressSample) -> None:
        if sample.kind is SampleKind.DURATION:
            self.duration_known.emit(sample.seconds)
        else:
            self.time_changed.emit(sample.seconds)

        fraction = self._tracker.update(sample)
        if fraction is not None:
            self.progress_changed.emit(fraction)

    def _on_result(self, result: TranscodeResult) -> None:
        print(f"[OVERSEER] Job finished: exit={result.exit_code}")
        self._release_worker()
        if result.succeeded:
            self.progress_changed.emit(1.0)
        self._set_state(JobState.SUCCEEDED if result.succeeded else JobState.FAILED)
        self.job_finished.emit(result)

    def _on_error(self, exc: TranscodeError) -> None:
        self._release_worker()
        if isinstance(exc, TranscodeCancelled):
            print("[OVERSEER] Job cancelled")
            self._set_state(JobState.CANCELLED)
            self.job_cancelled.emit()
            return

        print(f"[OVERSEER] Job failed: {exc}")
        self._set_state(JobState.FAILED)
        self.job_failed.emit(exc)

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _release_worker(self) -> None:
        # run() has already emitted its last signal; the thread is only unwinding
        worker, self._worker = self._worker, None
        if worker is not None:
            worker.wait()

    def _set_state(self, state: JobState) -> None:
        print(f"[OVERSEER] State: {self._state.name} → {state.name}")
        self._state = state
        self.state_changed.emit(state)

"""
core.worker
~~~~~~~~~~~
QThread that runs a single TranscodeRunner.submit() and emits signals
the UI can connect to directly.

The runner's callbacks fire on this worker thread. Signals crossing
into objects that live on the GUI thread are queued by Qt, which is
what keeps widgets from being touched off the main thread.

Signals
-------
sample_received(object)   ProgressSample, as soon as it is scraped
output_received(str)      raw ffmpeg output chunk
result_ready(object)      TranscodeResult (success *or* non-zero exit)
error_occurred(object)    TranscodeError raised by the runner
"""

from __future__ import annotations

from PySide6.QtCore import QThread, Signal

from core.errors import TranscodeError
from core.models import TranscodeRequest
from core.runner import TranscodeRunner


class TranscodeWorker(QThread):

    sample_received = Signal(object)
    output_received = Signal(str)
    result_ready    = Signal(object)
    error_occurred  = Signal(object)

    def __init__(self, runner: TranscodeRunner, request: TranscodeRequest, parent=None):
        super().__init__(parent)
        self._runner  = runner
        self._request = request
        print(f"[WORKER] Created for '{request.input_path}'")

    # ── QThread entry point ───────────────────────────────────────────────────

    def run(self):
        print("[WORKER] Thread started")
        try:
            result = self._runner.submit(
                self._request,
                on_sample=self.sample_received.emit,
                on_output=self.output_received.emit,
            )
        except TranscodeError as exc:
            print(f"[WORKER] ❌ {type(exc).__name__}: {exc}")
            self.error_occurred.emit(exc)
            return

        print(f"[WORKER] Done — exit code {result.exit_code}")
        self.result_ready.emit(result)

    # ── Cancel ────────────────────────────────────────────────────────────────

    def cancel(self):
        self._runner.cancel()

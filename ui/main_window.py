from PySide6.QtWidgets import QMainWindow, QWidget, QHBoxLayout, QMessageBox

from core import JobOverseer, TranscodeRunner
from core.config import AppConfig
from core.errors import TranscodeError
from core.intake import path_from_drop
from core.paths import validate_binary
from ui.pages import CompressPage, DetailsPanel


# ── Main Window ───────────────────────────────────────────────────────────────

class MainWindow(QMainWindow):
    """Top-level application window. Accepts a single dropped video file."""

    def __init__(self, config: AppConfig | None = None):
        super().__init__()
        config = config or AppConfig()

        runner = TranscodeRunner(config.ffmpeg_path, timeout=config.timeout_seconds)
        self.overseer = JobOverseer(runner, parent=self)

        self.setWindowTitle("Compressum")
        self.resize(880, 460)
        self.setMinimumSize(500, 400)
        self.setContentsMargins(0, 0, 0, 0)
        self.setAcceptDrops(True)

        central = QWidget()
        self.setCentralWidget(central)

        outer = QHBoxLayout(central)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.setSpacing(0)

        self._compress_page = CompressPage(self.overseer)

        self._details = DetailsPanel()
        self._details.setFixedWidth(300)

        separator = QWidget()
        separator.setFixedWidth(1)
        separator.setStyleSheet("background-color: #2e2e2e;")

        outer.addWidget(self._compress_page, 1)
        outer.addWidget(separator)
        outer.addWidget(self._details)

        # ── Wire detail panel signals ─────────────────────────────────────────
        self.overseer.job_started.connect(self._details.show_job)
        self.overseer.state_changed.connect(self._details.set_state)
        self.overseer.duration_known.connect(self._details.set_duration)
        self.overseer.time_changed.connect(self._details.set_position)
        self.overseer.output_received.connect(self._details.append_output)
        self.overseer.job_finished.connect(self._details.set_result)
        self.overseer.job_failed.connect(self._on_job_failed)

    # ── Startup check ─────────────────────────────────────────────────────────

    def check_ffmpeg(self) -> None:
        """Warn (once, at startup) when ffmpeg can't be found."""
        errors = validate_binary(self.overseer.runner.ffmpeg_bin)
        if errors:
            print(f"[UI] ffmpeg check failed: {errors}")
            QMessageBox.warning(
                self,
                "ffmpeg not found",
                "\n".join(errors)
                + "\n\nInstall ffmpeg or set COMPRESSUM_FFMPEG to its location.",
            )

    # ── Drag and drop ─────────────────────────────────────────────────────────

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls() and not self.overseer.is_busy:
            event.acceptProposedAction()

    def dragMoveEvent(self, event):
        if event.mimeData().hasUrls() and not self.overseer.is_busy:
            event.acceptProposedAction()

    def dropEvent(self, event):
        paths = [url.toLocalFile() for url in event.mimeData().urls()]
        path = path_from_drop(paths)
        if path is None:
            print(f"[UI] Drop rejected: {paths}")
            event.ignore()
            return
        print(f"[UI] Dropped '{path}'")
        self._compress_page.set_input_path(path)
        event.acceptProposedAction()

    # ── Shutdown ──────────────────────────────────────────────────────────────

    def closeEvent(self, event):
        # Don't leave an orphaned ffmpeg behind
        if self.overseer.is_busy:
            self.overseer.shutdown(5000)
        super().closeEvent(event)

    def _on_job_failed(self, exc: TranscodeError):
        self._details.show_error(str(exc))

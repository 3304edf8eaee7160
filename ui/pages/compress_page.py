from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton,
    QCheckBox, QProgressBar, QStackedWidget, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt, Signal

from core.errors import InvalidRequest, NonZeroExit, RunnerBusy, TranscodeError
from core.intake import picker_filter, picker_result
from core.models import JobState, SpeedPreset, TranscodeRequest, TranscodeResult
from core.overseer import JobOverseer
from ui.widgets import FormatPicker

PROGRESS_STEPS = 1000


class _PathRow(QWidget):
    """Browse button + editable path field."""

    browse_clicked = Signal()

    def __init__(self, button_text: str, placeholder: str, parent=None):
        super().__init__(parent)
        row = QHBoxLayout(self)
        row.setContentsMargins(0, 0, 0, 0)
        row.setSpacing(10)

        self.button = QPushButton(button_text)
        self.button.setFixedWidth(190)
        self.button.setCursor(Qt.CursorShape.PointingHandCursor)
        self.button.clicked.connect(self.browse_clicked)
        row.addWidget(self.button)

        self.field = QLineEdit()
        self.field.setPlaceholderText(placeholder)
        self.field.setClearButtonEnabled(True)
        row.addWidget(self.field, 1)

    def text(self) -> str:
        return self.field.text().strip()

    def set_text(self, text: str) -> None:
        self.field.setText(text)


class CompressPage(QWidget):
    """
    The whole form: input file, output directory, format, speed and the
    Compress button. Owns no job state; it renders what the overseer
    reports.
    """

    def __init__(self, overseer: JobOverseer, parent=None):
        super().__init__(parent)
        self.overseer = overseer

        self.overseer.state_changed.connect(self._on_state_changed)
        self.overseer.duration_known.connect(self._on_duration_known)
        self.overseer.progress_changed.connect(self._on_progress)
        self.overseer.job_finished.connect(self._on_job_finished)
        self.overseer.job_failed.connect(self._on_job_failed)
        self.overseer.job_cancelled.connect(self._on_job_cancelled)

        root = QVBoxLayout(self)
        root.setContentsMargins(24, 24, 24, 24)
        root.setSpacing(16)

        # ── Paths ─────────────────────────────────────────────────────────────
        self.input_row = _PathRow("Select Input File", "Input file path")
        self.input_row.browse_clicked.connect(self._browse_input)
        root.addWidget(self.input_row)

        self.output_row = _PathRow(
            "Select Output Directory", "Output directory (defaults to the input's folder)"
        )
        self.output_row.browse_clicked.connect(self._browse_output)
        root.addWidget(self.output_row)

        # ── Format / speed ────────────────────────────────────────────────────
        format_row = QHBoxLayout()
        format_lbl = QLabel("Export Format")
        format_lbl.setStyleSheet("color: #cccccc; font-size: 10pt;")
        format_row.addWidget(format_lbl)
        format_row.addSpacing(12)
        self.format_picker = FormatPicker()
        format_row.addWidget(self.format_picker)
        format_row.addStretch()
        root.addLayout(format_row)

        self.fast_toggle = QCheckBox("Fast Compression")
        self.fast_toggle.setToolTip("Encode with the ultrafast preset — quicker, larger files.")
        root.addWidget(self.fast_toggle)

        root.addStretch()

        # ── Compress button ⇄ progress bar ────────────────────────────────────
        self._action_stack = QStackedWidget()
        self._action_stack.setFixedHeight(40)

        self.compress_btn = QPushButton("Compress Video")
        self.compress_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self.compress_btn.setStyleSheet("""
            QPushButton {
                background-color: #558B6E;
                color: white;
                border: none;
                border-radius: 6px;
                padding: 0 14px;
                font-size: 11pt;
                font-weight: 600;
            }
            QPushButton:hover  { background-color: #67a382; }
            QPushButton:pressed{ background-color: #446e58; }
            QPushButton:disabled { background-color: #3a3a3a; color: #777; }
        """)
        self.compress_btn.clicked.connect(self._compress)
        self._action_stack.addWidget(self.compress_btn)    # index 0

        running = QWidget()
        running_row = QHBoxLayout(running)
        running_row.setContentsMargins(0, 0, 0, 0)
        running_row.setSpacing(10)
        self.progress_bar = QProgressBar()
        self.progress_bar.setStyleSheet("""
            QProgressBar {
                border: 1px solid #444;
                border-radius: 4px;
                background-color: #1a1a1a;
                text-align: center;
                height: 18px;
            }
            QProgressBar::chunk { background-color: #558B6E; }
        """)
        running_row.addWidget(self.progress_bar, 1)
        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self.cancel_btn.clicked.connect(self.overseer.cancel)
        running_row.addWidget(self.cancel_btn)
        self._action_stack.addWidget(running)              # index 1

        root.addWidget(self._action_stack)

        # ── Status line ───────────────────────────────────────────────────────
        self.status_label = QLabel("Drop a video anywhere in the window, or pick one above.")
        self.status_label.setWordWrap(True)
        self.status_label.setStyleSheet("color: #888; font-size: 9pt;")
        root.addWidget(self.status_label)

    # ── Public API ────────────────────────────────────────────────────────────

    def set_input_path(self, path: str) -> None:
        """A dropped file replaces whatever was typed."""
        self.input_row.set_text(path)

    def build_request(self) -> TranscodeRequest:
        return TranscodeRequest(
            input_path       = self.input_row.text(),
            output_directory = self.output_row.text(),
            target_format    = self.format_picker.current_format(),
            speed            = SpeedPreset.from_toggle(self.fast_toggle.isChecked()),
        )

    # ── Browse helpers ────────────────────────────────────────────────────────

    def _browse_input(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Choose a video file", self.input_row.text(), picker_filter()
        )
        self.input_row.set_text(picker_result(path, self.input_row.text()))

    def _browse_output(self):
        path = QFileDialog.getExistingDirectory(self, "Choose a directory", self.output_row.text())
        self.output_row.set_text(picker_result(path, self.output_row.text()))

    # ── Compress ──────────────────────────────────────────────────────────────

    def _compress(self):
        request = self.build_request()
        print(f"[UI] Compress clicked: input='{request.input_path}' "
              f"output_dir='{request.output_directory}' format={request.target_format}")
        try:
            self.overseer.submit(request)
        except (InvalidRequest, RunnerBusy) as exc:
            QMessageBox.warning(self, "Compressum", str(exc))

    # ── Overseer signal handlers ──────────────────────────────────────────────

    def _on_state_changed(self, state: JobState):
        running = state is JobState.RUNNING
        self.compress_btn.setEnabled(not running)
        self.input_row.setEnabled(not running)
        self.output_row.setEnabled(not running)
        self.format_picker.setEnabled(not running)
        self.fast_toggle.setEnabled(not running)

        if running:
            # Busy indicator until ffmpeg tells us how long the input is
            self.progress_bar.setRange(0, 0)
            self.status_label.setText("Compressing…")
            self._action_stack.setCurrentIndex(1)
        else:
            self._action_stack.setCurrentIndex(0)

    def _on_duration_known(self, _seconds: float):
        self.progress_bar.setRange(0, PROGRESS_STEPS)
        self.progress_bar.setValue(0)

    def _on_progress(self, fraction: float):
        self.progress_bar.setValue(int(fraction * PROGRESS_STEPS))

    def _on_job_finished(self, result: TranscodeResult):
        try:
            result.check()
        except NonZeroExit as exc:
            self.status_label.setText(
                f"Compression failed: {exc}. See the ffmpeg output in the details panel."
            )
            return
        self.status_label.setText(f"Compression successful → {result.output_path}")

    def _on_job_failed(self, exc: TranscodeError):
        self.status_label.setText(f"Compression failed: {exc}")

    def _on_job_cancelled(self):
        self.status_label.setText("Compression cancelled.")

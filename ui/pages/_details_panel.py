from pathlib import Path

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QStackedWidget,
    QSizePolicy, QPlainTextEdit, QPushButton
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QTextCursor

from core.models import JobState, TranscodeRequest, TranscodeResult
from core.presets import preset_name
from core.progress import seconds_to_hhmmss


class StatusBadge(QLabel):
    """A colored job-state indicator badge."""

    def __init__(self, state: JobState = JobState.IDLE, parent=None):
        super().__init__(parent)
        self.set_state(state)

    def set_state(self, state: JobState):
        state_map = {
            JobState.IDLE:      ("Idle",         "#666666"),
            JobState.RUNNING:   ("Compressing…", "#27ae60"),
            JobState.SUCCEEDED: ("Done",         "#558B6E"),
            JobState.FAILED:    ("Failed",       "#e74c3c"),
            JobState.CANCELLED: ("Cancelled",    "#f39c12"),
        }
        text, color = state_map.get(state, ("Unknown", "#888888"))
        self.setText(text)
        self.setStyleSheet(f"""
            QLabel {{
                background-color: {color};
                color: white;
                padding: 4px 12px;
                border-radius: 4px;
                font-size: 8pt;
                font-weight: 600;
            }}
        """)


class _Row(QWidget):
    """A label/value pair for the details panel."""

    def __init__(self, label: str, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background: transparent;")
        col = QVBoxLayout(self)
        col.setContentsMargins(0, 0, 0, 0)
        col.setSpacing(1)

        lbl = QLabel(label.upper())
        lbl.setStyleSheet("color: #555; font-size: 8pt; font-weight: 700; letter-spacing: 1px;")
        col.addWidget(lbl)

        self.value = QLabel("—")
        self.value.setStyleSheet("color: #cccccc; font-size: 10pt;")
        self.value.setWordWrap(True)
        self.value.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        col.addWidget(self.value)

    def set(self, text: str):
        self.value.setText(text or "—")


class DetailsPanel(QWidget):
    """Right-hand panel. Describes the current (or last) job and its ffmpeg log."""

    MAX_LOG_LINES = 2000

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #1a1a1a;")
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Expanding)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 16, 0, 16)
        root.setSpacing(0)

        # ── Header ────────────────────────────────────────────────────────────
        title = QLabel("DETAILS")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet(
            "color: #666; font-size: 8pt; font-weight: 700; letter-spacing: 2px;"
        )
        root.addWidget(title)

        sep = QWidget()
        sep.setFixedHeight(1)
        sep.setStyleSheet("background-color: #2e2e2e; margin-top: 8px; margin-bottom: 12px;")
        root.addWidget(sep)

        # ── Stacked: placeholder vs content ───────────────────────────────────
        self._stack = QStackedWidget()
        root.addWidget(self._stack, 1)

        # Page 0: placeholder
        ph = QLabel("Nothing compressed\nyet.")
        ph.setAlignment(Qt.AlignmentFlag.AlignCenter)
        ph.setStyleSheet("color: #444; font-size: 9pt;")
        self._stack.addWidget(ph)

        # Page 1: job details
        content = QWidget()
        content.setStyleSheet("background: transparent;")
        col = QVBoxLayout(content)
        col.setContentsMargins(16, 0, 16, 0)
        col.setSpacing(12)

        badge_row = QHBoxLayout()
        badge_row.addStretch()
        self._badge = StatusBadge()
        badge_row.addWidget(self._badge)
        badge_row.addStretch()
        col.addLayout(badge_row)

        self._r_input    = _Row("Input File")
        self._r_output   = _Row("Output File")
        self._r_format   = _Row("Export Format")
        self._r_preset   = _Row("Preset")
        self._r_duration = _Row("Duration")
        self._r_position = _Row("Encoded")
        self._r_exit     = _Row("Exit Code")

        for row in (
            self._r_input, self._r_output, self._r_format, self._r_preset,
            self._r_duration, self._r_position, self._r_exit,
        ):
            col.addWidget(row)

        # ── ffmpeg log (collapsed by default) ─────────────────────────────────
        self._log_toggle = QPushButton("Show ffmpeg output")
        self._log_toggle.setCheckable(True)
        self._log_toggle.setCursor(Qt.CursorShape.PointingHandCursor)
        self._log_toggle.setStyleSheet("""
            QPushButton {
                background-color: transparent;
                color: #aaaaaa;
                border: 1px solid #444;
                border-radius: 6px;
                padding: 4px 10px;
                font-size: 9pt;
            }
            QPushButton:hover { color: #e0e0e0; border-color: #666; }
        """)
        self._log_toggle.toggled.connect(self._on_log_toggled)
        col.addWidget(self._log_toggle)

        self._log = QPlainTextEdit()
        self._log.setReadOnly(True)
        self._log.setMaximumBlockCount(self.MAX_LOG_LINES)
        self._log.setStyleSheet(
            "background-color: #121212; color: #999; font-family: Menlo, monospace; font-size: 8pt;"
        )
        self._log.setVisible(False)
        col.addWidget(self._log, 1)

        col.addStretch()
        self._stack.addWidget(content)

    # ── Public API ────────────────────────────────────────────────────────────

    def show_job(self, request: TranscodeRequest, output_file: Path) -> None:
        """Populate the panel for a freshly submitted job."""
        self._r_input.set(str(request.input_path))
        self._r_output.set(str(output_file))
        self._r_format.set(request.target_format.upper())
        self._r_preset.set(preset_name(request.speed))
        self._r_duration.set("")
        self._r_position.set("")
        self._r_exit.set("")
        self._log.clear()
        self._stack.setCurrentIndex(1)

    def set_state(self, state: JobState) -> None:
        self._badge.set_state(state)

    def set_duration(self, seconds: float) -> None:
        self._r_duration.set(seconds_to_hhmmss(seconds))

    def set_position(self, seconds: float) -> None:
        self._r_position.set(seconds_to_hhmmss(seconds))

    def set_result(self, result: TranscodeResult) -> None:
        self._r_exit.set(str(result.exit_code))
        if not result.succeeded:
            self._log_toggle.setChecked(True)

    def append_output(self, text: str) -> None:
        # ffmpeg's '\r' status updates would otherwise pile up on one line
        text = text.replace("\r", "\n")
        self._log.moveCursor(QTextCursor.MoveOperation.End)
        self._log.insertPlainText(text)
        self._log.ensureCursorVisible()

    def show_error(self, message: str) -> None:
        self._r_exit.set(message)
        self._log_toggle.setChecked(True)

    # ── Internal ──────────────────────────────────────────────────────────────

    def _on_log_toggled(self, checked: bool) -> None:
        self._log.setVisible(checked)
        self._log_toggle.setText("Hide ffmpeg output" if checked else "Show ffmpeg output")

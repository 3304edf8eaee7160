# ui/widgets/format_picker.py

from PySide6.QtWidgets import QWidget, QHBoxLayout, QPushButton, QButtonGroup
from PySide6.QtCore import Qt

from core.presets import EXPORT_FORMATS


class FormatPicker(QWidget):
    """Segmented row of exclusive buttons, one per export format."""

    _SEGMENT_STYLE = """
        QPushButton {{
            background-color: #2a2a2a;
            color: #cccccc;
            border: 1px solid #3a3a3a;
            border-radius: 0;
            padding: 4px 10px;
            font-size: 9pt;
            {corners}
        }}
        QPushButton:checked {{ background-color: #558B6E; color: white; }}
        QPushButton:hover:!checked {{ background-color: #333333; }}
    """

    def __init__(self, formats: list[str] | None = None, parent=None):
        super().__init__(parent)
        self._formats = list(formats or EXPORT_FORMATS)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._group = QButtonGroup(self)
        self._group.setExclusive(True)

        last = len(self._formats) - 1
        for index, fmt in enumerate(self._formats):
            btn = QPushButton(fmt)
            btn.setCheckable(True)
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.setStyleSheet(self._SEGMENT_STYLE.format(corners=_corners(index, last)))
            self._group.addButton(btn, index)
            layout.addWidget(btn)

        self.set_current_index(0)

    # ── Public API ────────────────────────────────────────────────────────────

    def current_index(self) -> int:
        return max(self._group.checkedId(), 0)

    def current_format(self) -> str:
        return self._formats[self.current_index()]

    def set_current_index(self, index: int) -> None:
        btn = self._group.button(index)
        if btn is not None:
            btn.setChecked(True)


def _corners(index: int, last: int) -> str:
    if index == 0:
        return "border-top-left-radius: 5px; border-bottom-left-radius: 5px;"
    if index == last:
        return "border-top-right-radius: 5px; border-bottom-right-radius: 5px;"
    return ""

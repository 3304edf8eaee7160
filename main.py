import sys
from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QFont
from PySide6.QtCore import Qt
from qt_material import apply_stylesheet

from core.config import load_config
from ui import MainWindow


def _theme_for(app: QApplication, theme: str) -> str:
    """Resolve "auto" against the system color scheme."""
    if theme == "auto":
        dark = app.styleHints().colorScheme() != Qt.ColorScheme.Light
        theme = "dark" if dark else "light"
    return f"{theme}_lightgreen.xml"


def main():
    app = QApplication(sys.argv)
    app.setApplicationName("Compressum")

    config = load_config()

    # Base font
    font = QFont("Helvetica Neue", 11)
    app.setFont(font)

    theme = _theme_for(app, config.theme)
    apply_stylesheet(app, theme=theme, invert_secondary=theme.startswith("light"))

    window = MainWindow(config)
    window.show()
    window.check_ffmpeg()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()

"""Shared fixtures: stand-in ffmpeg scripts and a headless Qt application."""

import os
import stat
import time

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture
def make_stub(tmp_path):
    """
    Write an executable /bin/sh script that plays the part of ffmpeg.

    The runner calls it as:  stub -i <input> -preset <name> <output>
    so inside the body $2 is the input and $5 the output path.
    """
    counter = iter(range(1000))

    def _make(body: str):
        path = tmp_path / f"ffmpeg-stub-{next(counter)}"
        path.write_text("#!/bin/sh\n" + body + "\n", encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make


@pytest.fixture
def video_file(tmp_path):
    """An (empty) input file whose name contains a space."""
    src = tmp_path / "movies"
    src.mkdir()
    path = src / "holiday clip.mov"
    path.write_bytes(b"\x00" * 16)
    return path


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def pump(qapp):
    """Process queued Qt events until *condition()* holds or *timeout* passes."""

    def _pump(condition, timeout=10.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            qapp.processEvents()
            if condition():
                return True
            time.sleep(0.01)
        qapp.processEvents()
        return condition()

    return _pump

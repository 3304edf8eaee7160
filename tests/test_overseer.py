"""Tests for JobOverseer: the asynchronous, Qt-facing side of the runner."""

import pytest

from core.errors import InvalidRequest, RunnerBusy, SpawnFailure
from core.models import JobState, TranscodeRequest
from core.overseer import JobOverseer
from core.runner import TranscodeRunner

PROGRESS_SCRIPT = (
    "printf 'Duration: 00:00:10.00, start: 0.000000\\n' >&2\n"
    "printf 'time=00:00:05.00 \\r' >&2\n"
    "printf 'time=00:00:10.00 \\r' >&2\n"
    'exit 0'
)


class _Recorder:
    """Collects everything a JobOverseer emits."""

    def __init__(self, overseer: JobOverseer):
        self.states    = []
        self.started   = []
        self.durations = []
        self.times     = []
        self.progress  = []
        self.output    = []
        self.finished  = []
        self.failed    = []
        self.cancelled = 0

        overseer.state_changed.connect(self.states.append)
        overseer.job_started.connect(lambda req, out: self.started.append((req, out)))
        overseer.duration_known.connect(self.durations.append)
        overseer.time_changed.connect(self.times.append)
        overseer.progress_changed.connect(self.progress.append)
        overseer.output_received.connect(self.output.append)
        overseer.job_finished.connect(self.finished.append)
        overseer.job_failed.connect(self.failed.append)
        overseer.job_cancelled.connect(self._on_cancelled)

    def _on_cancelled(self):
        self.cancelled += 1

    @property
    def done(self) -> bool:
        return bool(self.finished or self.failed or self.cancelled)


class TestSubmit:
    """Tests for JobOverseer.submit()."""

    def test_invalid_request_raised_synchronously(self, qapp, make_stub):
        overseer = JobOverseer(TranscodeRunner(make_stub("exit 0")))
        rec = _Recorder(overseer)
        with pytest.raises(InvalidRequest):
            overseer.submit(TranscodeRequest(input_path=""))
        assert not overseer.is_busy
        assert overseer.state is JobState.IDLE
        assert rec.states == []

    def test_success(self, qapp, pump, make_stub, video_file):
        overseer = JobOverseer(TranscodeRunner(make_stub(PROGRESS_SCRIPT)))
        rec = _Recorder(overseer)

        overseer.submit(TranscodeRequest(input_path=str(video_file)))
        assert overseer.is_busy
        assert overseer.state is JobState.RUNNING
        assert pump(lambda: rec.done)

        assert not overseer.is_busy
        assert rec.states == [JobState.RUNNING, JobState.SUCCEEDED]
        assert rec.started[0][1].name == "holiday clip_compressed.mp4"
        assert rec.durations == [10.0]
        assert rec.times == [5.0, 10.0]
        assert 0.5 in rec.progress
        assert rec.progress[-1] == 1.0
        assert rec.finished[0].succeeded
        assert "Duration" in "".join(rec.output)

    def test_non_zero_exit(self, qapp, pump, make_stub, video_file):
        overseer = JobOverseer(TranscodeRunner(make_stub("echo 'Conversion failed!' >&2\nexit 1")))
        rec = _Recorder(overseer)

        overseer.submit(TranscodeRequest(input_path=str(video_file)))
        assert pump(lambda: rec.done)

        assert overseer.state is JobState.FAILED
        assert rec.finished[0].exit_code == 1
        assert "Conversion failed!" in rec.finished[0].captured_output
        assert rec.failed == []

    def test_spawn_failure(self, qapp, pump, tmp_path, video_file):
        overseer = JobOverseer(TranscodeRunner(tmp_path / "missing"))
        rec = _Recorder(overseer)

        overseer.submit(TranscodeRequest(input_path=str(video_file)))
        assert pump(lambda: rec.done)

        assert overseer.state is JobState.FAILED
        assert isinstance(rec.failed[0], SpawnFailure)
        assert rec.finished == []

    def test_busy_rejected(self, qapp, pump, make_stub, video_file):
        overseer = JobOverseer(TranscodeRunner(make_stub("echo started\nexec sleep 30")))
        rec = _Recorder(overseer)

        overseer.submit(TranscodeRequest(input_path=str(video_file)))
        with pytest.raises(RunnerBusy):
            overseer.submit(TranscodeRequest(input_path=str(video_file)))

        assert pump(lambda: rec.output)
        overseer.cancel()
        assert pump(lambda: rec.done)
        assert len(rec.started) == 1


class TestCancel:
    """Tests for JobOverseer.cancel()."""

    def test_cancel_running_job(self, qapp, pump, make_stub, video_file):
        overseer = JobOverseer(TranscodeRunner(make_stub("echo started\nexec sleep 30")))
        rec = _Recorder(overseer)

        overseer.submit(TranscodeRequest(input_path=str(video_file)))
        assert pump(lambda: rec.output)
        overseer.cancel()
        assert overseer.wait(10000)
        assert pump(lambda: rec.done)

        assert rec.cancelled == 1
        assert rec.finished == []
        assert rec.failed == []
        assert rec.states[-1] is JobState.CANCELLED
        assert not overseer.is_busy

    def test_cancel_when_idle_is_harmless(self, qapp, make_stub):
        overseer = JobOverseer(TranscodeRunner(make_stub("exit 0")))
        overseer.cancel()
        assert overseer.wait(0)
        assert overseer.state is JobState.IDLE

    def test_shutdown_kills_child_ignoring_sigterm(self, qapp, pump, make_stub, video_file):
        overseer = JobOverseer(
            TranscodeRunner(make_stub("trap '' TERM\necho started\nexec sleep 30"))
        )
        rec = _Recorder(overseer)

        overseer.submit(TranscodeRequest(input_path=str(video_file)))
        assert pump(lambda: rec.output)
        assert overseer.shutdown(msecs=300)
        assert pump(lambda: rec.done)

        assert rec.cancelled == 1
        assert not overseer.is_busy

    def test_shutdown_when_idle(self, qapp, make_stub):
        assert JobOverseer(TranscodeRunner(make_stub("exit 0"))).shutdown()

    def test_resubmit_after_cancel(self, qapp, pump, make_stub, video_file):
        overseer = JobOverseer(TranscodeRunner(make_stub("echo started\nexec sleep 30")))
        rec = _Recorder(overseer)

        overseer.submit(TranscodeRequest(input_path=str(video_file)))
        assert pump(lambda: rec.output)
        overseer.cancel()
        assert pump(lambda: rec.done)

        overseer.runner.ffmpeg_bin = make_stub("exit 0")
        overseer.submit(TranscodeRequest(input_path=str(video_file)))
        assert pump(lambda: rec.finished)
        assert overseer.state is JobState.SUCCEEDED

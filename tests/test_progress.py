"""Tests for scraping progress timestamps out of ffmpeg output."""

import pytest

from core.models import ProgressSample, SampleKind
from core.progress import (
    ProgressScanner,
    ProgressTracker,
    hhmmss_to_seconds,
    seconds_to_hhmmss,
)


class TestProgressScanner:
    """Tests for ProgressScanner.feed()."""

    def test_duration_line(self):
        """A Duration announcement yields one DURATION sample."""
        samples = ProgressScanner().feed("Duration: 00:01:23.45", final=True)
        assert len(samples) == 1
        assert samples[0].kind is SampleKind.DURATION
        assert samples[0].seconds == pytest.approx(83.45)

    def test_time_line(self):
        """A time= status yields one TIME sample."""
        samples = ProgressScanner().feed("time=00:00:05.10", final=True)
        assert len(samples) == 1
        assert samples[0].kind is SampleKind.TIME
        assert samples[0].seconds == pytest.approx(5.10)

    def test_unrelated_text(self):
        """Text without timestamps yields nothing and raises nothing."""
        assert ProgressScanner().feed("random unrelated text") == []

    def test_real_ffmpeg_output(self):
        """Both kinds are found inside realistic ffmpeg chatter."""
        chunk = (
            "Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'in.mov':\n"
            "  Duration: 00:10:00.00, start: 0.000000, bitrate: 1205 kb/s\n"
            "frame=  120 fps= 60 q=28.0 size=     256kB time=00:00:04.00 bitrate= 524.3kbits/s\r"
            "frame=  240 fps= 60 q=28.0 size=     512kB time=00:00:08.00 bitrate= 524.3kbits/s\r"
        )
        samples = ProgressScanner().feed(chunk)
        assert [s.kind for s in samples] == [
            SampleKind.DURATION, SampleKind.TIME, SampleKind.TIME,
        ]
        assert [s.seconds for s in samples] == pytest.approx([600.0, 4.0, 8.0])

    def test_not_line_oriented(self):
        """Carriage-return separated updates are each recognised."""
        chunk = "time=00:00:01.00 x\rtime=00:00:02.00 x\rtime=00:00:03.00 x\r"
        assert len(ProgressScanner().feed(chunk)) == 3

    def test_timestamp_split_across_chunks(self):
        """A timestamp cut in half by the pipe is still found, once."""
        scanner = ProgressScanner()
        assert scanner.feed("frame=10 ti") == []
        samples = scanner.feed("me=00:00:07.50 bitrate=1k")
        assert len(samples) == 1
        assert samples[0].seconds == pytest.approx(7.5)
        assert scanner.feed(" more text") == []

    def test_no_double_reporting(self):
        """Matches already reported are not reported again on the next feed."""
        scanner = ProgressScanner()
        assert len(scanner.feed("time=00:00:01.00 ")) == 1
        assert len(scanner.feed("time=00:00:02.00 ")) == 1

    def test_fraction_digits_split_across_chunks(self):
        """A match touching the end of a chunk waits for the rest of its digits."""
        scanner = ProgressScanner()
        assert scanner.feed("size=256kB time=00:00:05.1") == []
        (sample,) = scanner.feed("5 bitrate=1k")
        assert sample.seconds == pytest.approx(5.15)
        assert sample.text == "time=00:00:05.15"

    def test_final_feed_releases_held_match(self):
        """At end of output the held match is reported as it stands."""
        scanner = ProgressScanner()
        assert scanner.feed("time=00:00:09.5") == []
        (sample,) = scanner.feed("", final=True)
        assert sample.seconds == pytest.approx(9.5)
        assert scanner.feed("", final=True) == []

    def test_na_time_ignored(self):
        """ffmpeg prints time=N/A before the first frame; that is no sample."""
        assert ProgressScanner().feed("size=N/A time=N/A bitrate=N/A") == []

    def test_matched_text_kept(self):
        """Samples carry the text they were parsed from."""
        (sample,) = ProgressScanner().feed("xx time=01:02:03.5 yy")
        assert sample.text == "time=01:02:03.5"
        assert sample.seconds == pytest.approx(3723.5)


class TestProgressTracker:
    """Tests for ProgressTracker."""

    def test_unknown_duration(self):
        """No fraction until a duration has been seen."""
        tracker = ProgressTracker()
        assert tracker.update(ProgressSample(SampleKind.TIME, 5.0)) is None

    def test_fraction(self):
        """Fraction is position / duration."""
        tracker = ProgressTracker()
        tracker.update(ProgressSample(SampleKind.DURATION, 100.0))
        assert tracker.update(ProgressSample(SampleKind.TIME, 25.0)) == pytest.approx(0.25)

    def test_fraction_clamped(self):
        """ffmpeg can overshoot the announced duration slightly."""
        tracker = ProgressTracker()
        tracker.update(ProgressSample(SampleKind.DURATION, 10.0))
        assert tracker.update(ProgressSample(SampleKind.TIME, 10.4)) == 1.0


class TestTimeHelpers:
    """Tests for the HH:MM:SS helpers."""

    def test_hhmmss_to_seconds(self):
        assert hhmmss_to_seconds("01:00:01.5") == pytest.approx(3601.5)

    def test_hhmmss_to_seconds_garbage(self):
        assert hhmmss_to_seconds("N/A") == 0.0

    def test_seconds_to_hhmmss(self):
        assert seconds_to_hhmmss(83.45) == "00:01:23.45"

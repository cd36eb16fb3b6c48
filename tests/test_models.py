from pathlib import Path

import pytest

from models.errors import DecodeFailure, MusixError, NoTracksFound
from models.playback import PlaybackMode, PlaybackState, PlayerSnapshot
from models.track import Track, format_time


class TestTrack:
    """Tests for the Track model."""

    def test_from_file_uses_stem_as_title(self):
        """Test that the title is the file name without extension."""
        track = Track.from_file(0, Path("/music/My Song.final.mp3"))

        assert track.title == "My Song.final"
        assert track.artist == "Unknown Artist"
        assert track.album == "Unknown Album"
        assert track.duration_seconds is None

    @pytest.mark.parametrize("duration", [0, -3.0, None])
    def test_non_positive_duration_is_unknown(self, duration):
        """Test that missing or non-positive durations become None."""
        track = Track.from_file(0, Path("/music/a.mp3"), {"duration": duration})

        assert track.duration_seconds is None


class TestFormatTime:
    """Tests for MM:SS formatting."""

    @pytest.mark.parametrize("seconds,expected", [
        (0, "00:00"),
        (5.9, "00:05"),
        (65, "01:05"),
        (3600, "60:00"),
        (-2, "00:00"),
        (None, "--:--"),
    ])
    def test_format_time(self, seconds, expected):
        """Test formatting of elapsed and total times."""
        assert format_time(seconds) == expected


class TestPlayerSnapshot:
    """Tests for derived snapshot values."""

    def test_progress(self):
        """Test progress as a fraction of the duration."""
        snapshot = PlayerSnapshot(0, PlaybackState.PLAYING, PlaybackMode.NORMAL, 30.0, 120.0)

        assert snapshot.is_playing
        assert snapshot.progress == 0.25

    def test_progress_without_duration(self):
        """Test that an unknown duration shows no progress."""
        snapshot = PlayerSnapshot(0, PlaybackState.PAUSED, PlaybackMode.NORMAL, 30.0, None)

        assert not snapshot.is_playing
        assert snapshot.progress == 0.0


class TestErrors:
    """Tests for error messages."""

    def test_decode_failure_message(self):
        """Test that decode failures name the file and reason."""
        error = DecodeFailure(Path("/music/broken.flac"), "bad header")

        assert isinstance(error, MusixError)
        assert str(error) == "Could not play 'broken.flac': bad header"

    def test_no_tracks_found_without_directories(self):
        """Test the message when no directories were searched."""
        assert str(NoTracksFound()) == "No music files found in no directories"

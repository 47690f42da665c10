"""
Unit tests for composer utils.
"""
import asyncio
import json
import pytest
from unittest.mock import patch, MagicMock, AsyncMock
from pathlib import Path

from modules.composer.utils import (
    check_ffmpeg_available,
    run_ffmpeg_command,
    parse_probe_output,
    probe_media,
    get_video_duration,
    escape_filter_path,
    escape_filter_value,
    write_concat_list,
)
from shared.errors import CompositionError


PROBE_JSON = json.dumps({
    "streams": [
        {"codec_type": "video", "codec_name": "h264", "width": 1080, "height": 1920, "r_frame_rate": "30/1"},
        {"codec_type": "audio", "codec_name": "aac", "sample_rate": "44100", "channels": 2, "r_frame_rate": "0/0"},
    ],
    "format": {"duration": "9.033000"}
})


def mock_process(returncode=0, stdout=b"", stderr=b""):
    process = MagicMock()
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    process.returncode = returncode
    process.kill = MagicMock()
    process.wait = AsyncMock()
    return process


class TestCheckFFmpegAvailable:
    """Tests for check_ffmpeg_available function."""

    @patch('modules.composer.utils.shutil.which')
    def test_ffmpeg_available(self, mock_which):
        mock_which.return_value = "/usr/bin/ffmpeg"
        assert check_ffmpeg_available() is True

    @patch('modules.composer.utils.shutil.which')
    def test_ffmpeg_not_available(self, mock_which):
        mock_which.return_value = None
        assert check_ffmpeg_available() is False


class TestRunFFmpegCommand:
    """Tests for run_ffmpeg_command function."""

    @pytest.mark.asyncio
    @patch('modules.composer.utils.asyncio.create_subprocess_exec')
    async def test_run_ffmpeg_success(self, mock_subprocess):
        mock_subprocess.return_value = mock_process()

        await run_ffmpeg_command(["ffmpeg", "-i", "in.mp4", "out.mp4"], job_id="r_test")

        mock_subprocess.assert_called_once()
        assert mock_subprocess.call_args[0][:2] == ("ffmpeg", "-i")

    @pytest.mark.asyncio
    @patch('modules.composer.utils.asyncio.create_subprocess_exec')
    async def test_run_ffmpeg_nonzero_exit(self, mock_subprocess):
        mock_subprocess.return_value = mock_process(returncode=1, stderr=b"Invalid data found")

        with pytest.raises(CompositionError, match="Invalid data found"):
            await run_ffmpeg_command(["ffmpeg", "-i", "in.mp4", "out.mp4"])

    @pytest.mark.asyncio
    @patch('modules.composer.utils.asyncio.create_subprocess_exec')
    async def test_run_ffmpeg_timeout_kills_process(self, mock_subprocess):
        process = mock_process()
        process.communicate = AsyncMock(side_effect=asyncio.TimeoutError())
        mock_subprocess.return_value = process

        with pytest.raises(CompositionError, match="timed out"):
            await run_ffmpeg_command(["ffmpeg", "-i", "in.mp4", "out.mp4"], timeout=1)
        process.kill.assert_called_once()

    @pytest.mark.asyncio
    @patch('modules.composer.utils.asyncio.create_subprocess_exec')
    async def test_run_ffmpeg_missing_binary(self, mock_subprocess):
        mock_subprocess.side_effect = FileNotFoundError("ffmpeg")

        with pytest.raises(CompositionError, match="not found"):
            await run_ffmpeg_command(["ffmpeg", "-version"])


class TestProbe:
    """Tests for ffprobe parsing and probing."""

    def test_parse_probe_output(self):
        info = parse_probe_output(PROBE_JSON)

        assert info.duration_s == pytest.approx(9.033)
        assert info.video_stream.width == 1080
        assert info.video_stream.height == 1920
        assert info.video_stream.fps == 30.0
        assert info.has_audio is True
        assert info.audio_stream.sample_rate == 44100
        assert info.audio_stream.fps is None

    def test_parse_probe_output_ntsc_rate(self):
        raw = json.dumps({
            "streams": [{"codec_type": "video", "r_frame_rate": "30000/1001"}],
            "format": {"duration": "1.0"}
        })
        assert parse_probe_output(raw).video_stream.fps == pytest.approx(29.97, abs=0.01)

    def test_parse_probe_output_without_duration(self):
        with pytest.raises(CompositionError):
            parse_probe_output(json.dumps({"streams": [], "format": {}}))

    def test_parse_probe_output_garbage(self):
        with pytest.raises(CompositionError):
            parse_probe_output("not json")

    @pytest.mark.asyncio
    async def test_probe_missing_file(self, tmp_path):
        with pytest.raises(CompositionError, match="not found"):
            await probe_media(tmp_path / "missing.mp4")

    @pytest.mark.asyncio
    @patch('modules.composer.utils.asyncio.create_subprocess_exec')
    async def test_get_video_duration(self, mock_subprocess, tmp_path):
        clip = tmp_path / "clip.mp4"
        clip.write_bytes(b"data")
        mock_subprocess.return_value = mock_process(stdout=PROBE_JSON.encode())

        duration = await get_video_duration(clip)

        assert duration == pytest.approx(9.033)
        assert mock_subprocess.call_args[0][0] == "ffprobe"


class TestPathHelpers:
    """Tests for filter path escaping and concat lists."""

    def test_escape_filter_path(self, tmp_path):
        escaped = escape_filter_path(tmp_path / "it's:here.ass")
        assert escaped.startswith("'")
        assert escaped.endswith("/it\\'\\''s\\:here.ass'")

    def test_escape_filter_value_leaves_percent_alone(self):
        assert escape_filter_value("50%20off") == "'50%20off'"

    def test_escape_filter_value_doubles_backslashes(self):
        assert escape_filter_value("a\\b") == "'a\\\\b'"

    def test_write_concat_list(self, tmp_path):
        a = tmp_path / "a.mp4"
        b = tmp_path / "b.mp4"
        list_path = write_concat_list([a, b], tmp_path / "list.txt")

        lines = list_path.read_text().splitlines()
        assert lines == [f"file '{a.resolve()}'", f"file '{b.resolve()}'"]

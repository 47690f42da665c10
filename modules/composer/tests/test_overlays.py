"""
Unit tests for caption overlays.
"""
import pytest
from unittest.mock import patch, AsyncMock
from pathlib import Path

from modules.composer.overlays import (
    hex_to_ass_color,
    format_ass_timestamp,
    caption_text,
    cue_times,
    build_subtitles,
    add_overlays,
)


async def fake_ffmpeg(cmd, job_id=None, timeout=None):
    Path(cmd[-1]).write_bytes(b"video")


class TestColorTransform:
    """Tests for hex_to_ass_color."""

    def test_reorders_to_alpha_blue_green_red(self):
        assert hex_to_ass_color("#0B5FFF", "AA") == "&HAAFF5F0B"

    def test_uses_configured_alpha(self):
        assert hex_to_ass_color("#0B5FFF").startswith("&HAA")

    def test_lowercase_input(self):
        assert hex_to_ass_color("#ff0000", "00") == "&H000000FF"

    def test_invalid_hex(self):
        with pytest.raises(ValueError):
            hex_to_ass_color("#FFF")


class TestTimestamps:
    """Tests for ASS timestamp formatting."""

    @pytest.mark.parametrize("seconds,expected", [
        (0, "0:00:00.00"),
        (7.0, "0:00:07.00"),
        (7.04, "0:00:07.04"),
        (65.5, "0:01:05.50"),
        (3725.25, "1:02:05.25"),
    ])
    def test_format(self, seconds, expected):
        assert format_ass_timestamp(seconds) == expected

    def test_cue_times_are_cumulative(self):
        cues = cue_times([7.04, 6.96, 7.5])
        flat = [t for cue in cues for t in cue]
        assert flat == pytest.approx([0.0, 7.04, 7.04, 14.0, 14.0, 21.5])


class TestCaptionText:
    """Tests for caption source priority."""

    def test_pitch_segment_wins(self, shot_plan, script):
        assert caption_text(0, shot_plan, script, ["Senior Engineer in Berlin"]) == "Senior Engineer in Berlin"

    def test_scene_overlay_without_pitch(self, shot_plan, script):
        assert caption_text(1, shot_plan, script) == "Real ownership"

    def test_on_screen_text_when_overlay_empty(self, shot_plan, script):
        shot_plan.scenes[0].overlay = ""
        assert caption_text(0, shot_plan, script) == "Millions of users"

    def test_beat_truncated_as_last_resort(self, shot_plan, script):
        shot_plan.scenes[0].overlay = ""
        script.on_screen_text = []
        script.beats[0] = "x" * 100
        assert caption_text(0, shot_plan, script) == "x" * 60

    def test_short_pitch_list_falls_through(self, shot_plan, script):
        assert caption_text(1, shot_plan, script, ["only one"]) == "Real ownership"


class TestBuildSubtitles:
    """Tests for the generated ASS document."""

    def test_last_cue_ends_at_measured_total(self, brand):
        durations = [7.04, 6.96, 7.5]
        ass = build_subtitles(durations, ["one", "two", "three"], brand)

        dialogues = [line for line in ass.splitlines() if line.startswith("Dialogue:")]
        assert len(dialogues) == 3
        assert dialogues[0].startswith("Dialogue: 0,0:00:00.00,0:00:07.04,")
        assert dialogues[-1].split(",")[2] == "0:00:21.50"

    def test_brand_color_in_style(self, brand):
        ass = build_subtitles([7.0], ["hello"], brand)
        assert "PlayResX: 1080" in ass
        assert "PlayResY: 1920" in ass
        assert "Style: LT,Inter,42" in ass
        assert "&HAAFF5F0B" in ass

    def test_override_tags_are_escaped(self, brand):
        ass = build_subtitles([7.0], ["{\\b1}bold\nline"], brand)
        dialogue = [line for line in ass.splitlines() if line.startswith("Dialogue:")][0]
        assert "\\{" in dialogue
        assert "\n" not in dialogue


class TestAddOverlays:
    """Tests for add_overlays."""

    @pytest.mark.asyncio
    @patch('modules.composer.overlays.run_ffmpeg_command', new_callable=AsyncMock)
    async def test_writes_subtitles_and_burns(self, mock_run, workdir, shot_plan, script, brand):
        mock_run.side_effect = fake_ffmpeg
        concat = workdir / "r_abc_concat.mp4"
        concat.write_bytes(b"video")

        result = await add_overlays(concat, [7.1, 6.9], shot_plan, script, brand, "r_abc")

        assert result == workdir / "r_abc_overlays.mp4"
        ass = (workdir / "r_abc_overlays.ass").read_text()
        assert "Millions of users" in ass
        assert "0:00:14.00" in ass
        cmd = mock_run.call_args[0][0]
        assert any(arg.startswith("subtitles=") for arg in cmd)
        assert cmd[cmd.index("-vf") + 1].endswith("r_abc_overlays.ass'")
        assert cmd[cmd.index("-c:a") + 1] == "copy"

"""
Utility functions for composer module.

FFmpeg command execution, ffprobe media inspection, and availability checks.
"""
import asyncio
import json
import shutil
from pathlib import Path
from typing import List, Optional

from shared.errors import CompositionError
from shared.logging import get_logger
from shared.models.media import MediaInfo, StreamInfo
from .config import FFMPEG_TIMEOUT, FFPROBE_TIMEOUT

logger = get_logger("composer.utils")


def check_ffmpeg_available() -> bool:
    """
    Check if FFmpeg and ffprobe are installed and available in PATH.

    Returns:
        True if both tools are available, False otherwise
    """
    return shutil.which("ffmpeg") is not None and shutil.which("ffprobe") is not None


async def _run(cmd: List[str], timeout: int) -> bytes:
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE
    )
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise CompositionError(f"{cmd[0]} timed out after {timeout}s")

    if process.returncode != 0:
        error_msg = stderr.decode(errors="replace").strip() if stderr else "Unknown error"
        # FFmpeg prints its banner first; the cause is at the end
        raise CompositionError(f"{cmd[0]} exited with code {process.returncode}: {error_msg[-2000:]}")
    return stdout


async def run_ffmpeg_command(
    cmd: List[str],
    job_id: Optional[str] = None,
    timeout: int = FFMPEG_TIMEOUT
) -> None:
    """
    Run an FFmpeg command.

    Args:
        cmd: FFmpeg command as list of strings
        job_id: Render id for logging
        timeout: Timeout in seconds

    Raises:
        CompositionError: If FFmpeg is missing, times out or exits non-zero
    """
    logger.info(
        f"Running FFmpeg command: {' '.join(cmd)}",
        extra={"job_id": job_id, "command": cmd}
    )

    try:
        await _run(cmd, timeout)
    except CompositionError as e:
        logger.error(
            f"FFmpeg command failed: {e}",
            extra={"job_id": job_id, "error": str(e), "command": cmd}
        )
        raise
    except FileNotFoundError as e:
        raise CompositionError("FFmpeg not found in PATH", job_id=job_id) from e


def _parse_rate(rate: Optional[str]) -> Optional[float]:
    """Parse an ffprobe frame rate such as '30/1' or '30000/1001'."""
    if not rate:
        return None
    if "/" in rate:
        num, den = rate.split("/", 1)
        return float(num) / float(den) if float(den) != 0 else None
    return float(rate)


def parse_probe_output(raw: str) -> MediaInfo:
    """
    Turn ffprobe JSON output into a MediaInfo.

    Raises:
        CompositionError: If the output has no usable duration
    """
    try:
        data = json.loads(raw)
        duration = float(data["format"]["duration"])
    except (ValueError, KeyError, TypeError) as e:
        raise CompositionError(f"Unreadable ffprobe output: {e}") from e

    streams = []
    for stream in data.get("streams", []):
        streams.append(
            StreamInfo(
                codec_type=stream.get("codec_type", "unknown"),
                codec_name=stream.get("codec_name"),
                width=stream.get("width"),
                height=stream.get("height"),
                fps=_parse_rate(stream.get("r_frame_rate")) if stream.get("codec_type") == "video" else None,
                sample_rate=int(stream["sample_rate"]) if stream.get("sample_rate") else None,
                channels=stream.get("channels"),
            )
        )
    return MediaInfo(duration_s=duration, streams=streams)


async def probe_media(path: Path) -> MediaInfo:
    """
    Inspect a media file with ffprobe.

    Raises:
        CompositionError: If the file is missing or ffprobe cannot parse it
    """
    if not Path(path).exists():
        raise CompositionError(f"Media file not found: {path}")

    cmd = [
        "ffprobe",
        "-v", "error",
        "-show_entries",
        "format=duration:stream=codec_type,codec_name,width,height,r_frame_rate,sample_rate,channels",
        "-of", "json",
        str(path)
    ]
    try:
        stdout = await _run(cmd, FFPROBE_TIMEOUT)
    except FileNotFoundError as e:
        raise CompositionError("ffprobe not found in PATH") from e
    return parse_probe_output(stdout.decode(errors="replace"))


async def get_video_duration(video_path: Path) -> float:
    """
    Get the measured duration of a media file in seconds.

    Raises:
        CompositionError: If the file cannot be probed
    """
    info = await probe_media(video_path)
    return info.duration_s


def escape_filter_value(value: str) -> str:
    """
    Quote a value for an FFmpeg filter option inside a -vf filtergraph.

    The value is unescaped twice: once by the filtergraph parser, which
    honours single quotes, and once by the option parser, which needs
    backslash escapes for ``\\``, ``'`` and ``:``. The returned string
    carries its own surrounding quotes.
    """
    escaped = value.replace("\\", "\\\\").replace(":", "\\:").replace("'", "\\'")
    return "'" + escaped.replace("'", "'\\''") + "'"


def escape_filter_path(path: Path) -> str:
    """Quote a filesystem path for use as an FFmpeg filter argument."""
    return escape_filter_value(str(Path(path).resolve()))


def write_concat_list(paths: List[Path], list_path: Path) -> Path:
    """Write an FFmpeg concat demuxer list with absolute paths."""
    lines = []
    for path in paths:
        resolved = str(Path(path).resolve()).replace("'", "'\\''")
        lines.append(f"file '{resolved}'")
    list_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return list_path

"""FFmpeg helper utilities."""

from __future__ import annotations

import asyncio
import json
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, List

from . import text
from ..errors import DecodeError
from ..logging import get_logger

LOGGER = get_logger("utils.ffmpeg")


class FFmpegError(DecodeError):
    """Raised when an FFmpeg or ffprobe invocation fails."""


def require_binary(name: str) -> str:
    """Return the absolute path to a binary or raise an informative error."""
    resolved = shutil.which(name)
    if resolved is None:
        raise FileNotFoundError(
            f"Required binary '{name}' was not found on PATH. Please install it or adjust PATH."
        )
    return resolved


async def run_command(command: Iterable[str], check: bool = True) -> subprocess.CompletedProcess[bytes]:
    """Run a subprocess to completion, killing it if the awaiting task is interrupted."""
    command_list: List[str] = list(command)
    LOGGER.debug("Running command: %s", text.redact_command(command_list))
    process = await asyncio.create_subprocess_exec(
        *command_list,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await process.communicate()
    except BaseException:
        if process.returncode is None:
            process.kill()
            await process.wait()
        raise
    result = subprocess.CompletedProcess(command_list, process.returncode, stdout, stderr)
    if check and result.returncode != 0:
        message = text.tail(stderr.decode("utf-8", errors="replace"))
        raise FFmpegError(f"{Path(command_list[0]).name} exited with status {result.returncode}: {message}")
    return result


async def probe_audio_stream(path: Path, ffprobe_binary: str = "ffprobe", stream_index: int = 0) -> dict:
    """Return metadata for an audio stream using ``ffprobe``."""

    try:
        require_binary(ffprobe_binary)
    except FileNotFoundError as exc:
        raise FFmpegError(str(exc)) from exc
    cmd = [
        ffprobe_binary,
        "-v",
        "error",
        "-select_streams",
        f"a:{stream_index}",
        "-show_streams",
        "-show_format",
        "-print_format",
        "json",
        str(path),
    ]
    result = await run_command(cmd)
    try:
        data = json.loads(result.stdout.decode("utf-8") or "{}")
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise FFmpegError(f"ffprobe returned unreadable metadata: {exc}") from exc
    streams = data.get("streams") or []
    if not streams:
        raise FFmpegError(f"No audio stream found in {path.name}")
    info = dict(streams[0])
    info.setdefault("format", data.get("format") or {})
    return info


async def decode_to_f32le(
    path: Path,
    sample_rate: int,
    channels: int,
    ffmpeg_binary: str = "ffmpeg",
) -> bytes:
    """Decode the first audio stream to interleaved little-endian float32 at ``sample_rate``."""

    try:
        require_binary(ffmpeg_binary)
    except FileNotFoundError as exc:
        raise FFmpegError(str(exc)) from exc
    cmd = [
        ffmpeg_binary,
        "-nostdin",
        "-hide_banner",
        "-loglevel",
        "error",
        "-i",
        str(path),
        "-map",
        "0:a:0",
        "-vn",
        "-ac",
        str(channels),
        "-ar",
        str(sample_rate),
        "-f",
        "f32le",
        "-c:a",
        "pcm_f32le",
        "pipe:1",
    ]
    result = await run_command(cmd)
    return result.stdout


__all__ = [
    "require_binary",
    "run_command",
    "probe_audio_stream",
    "decode_to_f32le",
    "FFmpegError",
]

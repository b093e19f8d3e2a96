"""Tests for the FFmpeg subprocess helpers."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from voiceprep.utils import ffmpeg


@pytest.mark.asyncio
async def test_run_command_raises_on_failure() -> None:
    cmd = [sys.executable, "-c", "import sys; sys.stderr.write('bad input'); sys.exit(3)"]
    with pytest.raises(ffmpeg.FFmpegError, match="status 3: bad input"):
        await ffmpeg.run_command(cmd)


@pytest.mark.asyncio
async def test_run_command_returns_output() -> None:
    result = await ffmpeg.run_command([sys.executable, "-c", "print('ok')"])
    assert result.returncode == 0
    assert result.stdout.strip() == b"ok"


@pytest.mark.asyncio
async def test_probe_reads_first_audio_stream(monkeypatch: pytest.MonkeyPatch) -> None:
    payload = {"streams": [{"channels": 2, "sample_rate": "48000"}], "format": {"duration": "3.2"}}
    recorded = {}

    async def fake_run(cmd, check=True):
        recorded["cmd"] = list(cmd)
        return subprocess.CompletedProcess(cmd, 0, json.dumps(payload).encode(), b"")

    monkeypatch.setattr(ffmpeg, "require_binary", lambda name: name)
    monkeypatch.setattr(ffmpeg, "run_command", fake_run)

    info = await ffmpeg.probe_audio_stream(Path("clip.webm"))
    assert info["channels"] == 2
    assert info["format"]["duration"] == "3.2"
    assert recorded["cmd"][0] == "ffprobe"
    assert recorded["cmd"][-1] == "clip.webm"


@pytest.mark.asyncio
async def test_probe_without_audio_is_a_decode_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_run(cmd, check=True):
        return subprocess.CompletedProcess(cmd, 0, b'{"streams": []}', b"")

    monkeypatch.setattr(ffmpeg, "require_binary", lambda name: name)
    monkeypatch.setattr(ffmpeg, "run_command", fake_run)
    with pytest.raises(ffmpeg.FFmpegError, match="No audio stream"):
        await ffmpeg.probe_audio_stream(Path("video-only.mp4"))


@pytest.mark.asyncio
async def test_decode_command_requests_float_pcm(monkeypatch: pytest.MonkeyPatch) -> None:
    recorded = {}

    async def fake_run(cmd, check=True):
        recorded["cmd"] = list(cmd)
        return subprocess.CompletedProcess(cmd, 0, b"\x00" * 8, b"")

    monkeypatch.setattr(ffmpeg, "require_binary", lambda name: name)
    monkeypatch.setattr(ffmpeg, "run_command", fake_run)

    out = await ffmpeg.decode_to_f32le(Path("in.webm"), 44100, 2)
    cmd = recorded["cmd"]
    assert out == b"\x00" * 8
    assert cmd[cmd.index("-ar") + 1] == "44100"
    assert cmd[cmd.index("-ac") + 1] == "2"
    assert cmd[cmd.index("-f") + 1] == "f32le"
    assert cmd[-1] == "pipe:1"


@pytest.mark.asyncio
async def test_missing_binary_surfaces_as_ffmpeg_error() -> None:
    with pytest.raises(ffmpeg.FFmpegError, match="was not found on PATH"):
        await ffmpeg.decode_to_f32le(Path("in.webm"), 44100, 1, ffmpeg_binary="definitely-not-ffmpeg-xyz")

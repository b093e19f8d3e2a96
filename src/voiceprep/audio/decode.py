"""Decode opaque recordings into float sample buffers."""

from __future__ import annotations

import io
import tempfile
import wave
from pathlib import Path
from typing import Optional

import numpy as np

from ..config import DecodeConfig
from ..errors import DecodeError, EmptyAudioError
from ..logging import get_logger
from ..utils import ffmpeg
from .buffers import RawAudioBuffer

LOGGER = get_logger("audio.decode")

_PCM_SCALE = {1: 128.0, 2: 32768.0, 3: 8388608.0, 4: 2147483648.0}


class DecodingContext:
    """Scratch space for one decode, released on every exit path.

    The input blob is spooled to a private temporary directory because
    several containers (MP4 in particular) cannot be demuxed from a pipe.
    """

    def __init__(self, prefix: str = "voiceprep-") -> None:
        self._prefix = prefix
        self._tempdir: Optional[tempfile.TemporaryDirectory[str]] = None

    async def __aenter__(self) -> "DecodingContext":
        self._tempdir = tempfile.TemporaryDirectory(prefix=self._prefix)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def workdir(self) -> Path:
        if self._tempdir is None:
            raise RuntimeError("Decoding context is not open")
        return Path(self._tempdir.name)

    @property
    def closed(self) -> bool:
        return self._tempdir is None

    def spool(self, blob: bytes, name: str = "input.bin") -> Path:
        target = self.workdir / name
        target.write_bytes(blob)
        return target

    def close(self) -> None:
        if self._tempdir is not None:
            self._tempdir.cleanup()
            self._tempdir = None


def is_riff_wave(blob: bytes) -> bool:
    return len(blob) >= 12 and blob[:4] == b"RIFF" and blob[8:12] == b"WAVE"


def decode_pcm_wav(blob: bytes) -> RawAudioBuffer:
    """Decode integer PCM WAV bytes in-process.

    Raises ``wave.Error`` or ``EOFError`` for WAV variants the stdlib reader
    does not handle (float PCM, WAVE_FORMAT_EXTENSIBLE, truncated headers).
    """
    with wave.open(io.BytesIO(blob), "rb") as wf:
        channels = wf.getnchannels()
        width = wf.getsampwidth()
        rate = wf.getframerate()
        pcm = wf.readframes(wf.getnframes())

    if rate <= 0:
        raise DecodeError(f"Invalid WAV sample rate: {rate} Hz")
    if width == 1:
        data = np.frombuffer(pcm, dtype=np.uint8).astype(np.float32) - 128.0
    elif width == 2:
        data = np.frombuffer(pcm, dtype="<i2").astype(np.float32)
    elif width == 3:
        raw = np.frombuffer(pcm, dtype=np.uint8)
        raw = raw[: len(raw) - len(raw) % 3].reshape(-1, 3).astype(np.int32)
        ints = raw[:, 0] | (raw[:, 1] << 8) | (raw[:, 2] << 16)
        ints = np.where(ints & 0x800000, ints - 0x1000000, ints)
        data = ints.astype(np.float32)
    elif width == 4:
        data = np.frombuffer(pcm, dtype="<i4").astype(np.float32)
    else:
        raise wave.Error(f"unsupported sample width: {width}")

    data = data / _PCM_SCALE[width]
    usable = len(data) - len(data) % channels
    frames = data[:usable].reshape(-1, channels).T.copy()
    return RawAudioBuffer(sample_rate=rate, channels=frames)


class AudioDecoder:
    """Turn a compressed-audio blob into a multi-channel float buffer.

    ``sample_rate=None`` keeps the source rate; otherwise FFmpeg resamples
    while decoding.
    """

    def __init__(self, config: Optional[DecodeConfig] = None) -> None:
        self._config = config or DecodeConfig()

    async def decode(self, blob: bytes, sample_rate: Optional[int] = None) -> RawAudioBuffer:
        if not blob:
            raise DecodeError("Audio blob is empty")

        if is_riff_wave(blob):
            try:
                buffer = decode_pcm_wav(blob)
            except (wave.Error, EOFError) as exc:
                LOGGER.debug("In-process WAV decode declined (%s); using FFmpeg", exc)
            else:
                if sample_rate is None or buffer.sample_rate == sample_rate:
                    return self._checked(buffer)

        async with DecodingContext() as context:
            source = context.spool(blob)
            info = await ffmpeg.probe_audio_stream(source, self._config.ffprobe_binary)
            channels = int(info.get("channels") or 1)
            rate = sample_rate or int(info.get("sample_rate") or self._config.sample_rate)
            LOGGER.debug(
                "Decoding %d bytes of %s audio (%d channel(s)) at %d Hz",
                len(blob),
                info.get("codec_name", "unknown"),
                channels,
                rate,
            )
            raw = await ffmpeg.decode_to_f32le(source, rate, channels, self._config.ffmpeg_binary)

        samples = np.frombuffer(raw, dtype="<f4")
        usable = len(samples) - len(samples) % channels
        frames = samples[:usable].reshape(-1, channels).T.copy()
        return self._checked(RawAudioBuffer(sample_rate=rate, channels=frames))

    @staticmethod
    def _checked(buffer: RawAudioBuffer) -> RawAudioBuffer:
        if buffer.frames == 0:
            raise EmptyAudioError("Audio decoding produced no samples")
        return buffer


__all__ = ["AudioDecoder", "DecodingContext", "decode_pcm_wav", "is_riff_wave"]

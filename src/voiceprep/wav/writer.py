"""Mono 16-bit PCM WAV encoding."""

from __future__ import annotations

import numpy as np

from ..audio.buffers import MonoSampleBuffer
from ..errors import EncodeIntegrityError
from ..logging import get_logger
from .header import HEADER_SIZE, pack_header

LOGGER = get_logger("wav.writer")


def float_to_pcm16(samples: np.ndarray) -> np.ndarray:
    """Clamp to [-1, 1] and scale asymmetrically onto the int16 range."""
    clipped = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 1.0)
    scaled = np.where(clipped < 0, clipped * 32768.0, clipped * 32767.0)
    return np.rint(scaled).astype("<i2")


def encode_wav(buffer: MonoSampleBuffer) -> bytes:
    """Serialize ``buffer`` as a canonical mono 16-bit WAV file."""
    pcm = float_to_pcm16(buffer.samples).tobytes()
    blob = pack_header(buffer.sample_rate, len(pcm)) + pcm
    verify_signature(blob)
    LOGGER.debug("Encoded %d samples at %d Hz into %d bytes", len(buffer), buffer.sample_rate, len(blob))
    return blob


def verify_signature(blob: bytes) -> None:
    if len(blob) < HEADER_SIZE or blob[0:4] != b"RIFF" or blob[8:12] != b"WAVE":
        raise EncodeIntegrityError("WAV encoding failed - invalid headers")


__all__ = ["encode_wav", "float_to_pcm16", "verify_signature"]

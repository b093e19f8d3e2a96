"""Shared fixtures for synthetic recordings."""

from __future__ import annotations

import io
import wave
from typing import Callable

import numpy as np
import pytest


def sine(seconds: float, rate: int, amplitude: float = 0.5, freq: float = 440.0) -> np.ndarray:
    t = np.arange(int(round(seconds * rate))) / rate
    return amplitude * np.sin(2 * np.pi * freq * t)


def pcm16_wav(samples: np.ndarray, rate: int) -> bytes:
    pcm = np.rint(np.clip(samples, -1.0, 1.0) * 32767).astype("<i2")
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(rate)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


@pytest.fixture
def make_wav() -> Callable[..., bytes]:
    """Return a factory producing mono 16-bit WAV bytes of a sine tone."""

    def factory(seconds: float, rate: int = 16000, amplitude: float = 0.5) -> bytes:
        return pcm16_wav(sine(seconds, rate, amplitude), rate)

    return factory

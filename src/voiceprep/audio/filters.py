"""Single-pole RC high-pass filter."""

from __future__ import annotations

import math

import numpy as np
from scipy import signal

from .buffers import MonoSampleBuffer


def rc_alpha(cutoff_hz: float, sample_rate: int) -> float:
    """Return the smoothing coefficient of an RC high-pass at ``cutoff_hz``."""
    if cutoff_hz <= 0:
        raise ValueError("Cutoff frequency must be positive")
    rc = 1.0 / (2.0 * math.pi * cutoff_hz)
    dt = 1.0 / sample_rate
    return rc / (rc + dt)


def high_pass(buffer: MonoSampleBuffer, cutoff_hz: float = 80.0) -> MonoSampleBuffer:
    """Remove rumble below ``cutoff_hz``.

    Computes ``y[0] = x[0]`` and ``y[n] = alpha * (y[n-1] + x[n] - x[n-1])``.
    """
    alpha = rc_alpha(cutoff_hz, buffer.sample_rate)
    x = buffer.samples
    if len(x) == 0:
        return buffer.with_samples(np.zeros(0, dtype=np.float64))
    # Initial state chosen so the first output equals the first input.
    zi = np.array([(1.0 - alpha) * x[0]])
    y, _ = signal.lfilter([alpha, -alpha], [1.0, -alpha], x, zi=zi)
    return buffer.with_samples(y)


__all__ = ["high_pass", "rc_alpha"]

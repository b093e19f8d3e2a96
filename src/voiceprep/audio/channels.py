"""Channel reduction."""

from __future__ import annotations

import numpy as np

from .buffers import MonoSampleBuffer, RawAudioBuffer


def downmix_to_mono(raw: RawAudioBuffer) -> MonoSampleBuffer:
    """Average every channel into one, sample by sample."""
    if raw.channel_count == 0:
        return MonoSampleBuffer(np.zeros(raw.frames, dtype=np.float64), raw.sample_rate)
    mono = raw.channels.mean(axis=0, dtype=np.float64)
    return MonoSampleBuffer(np.array(mono, dtype=np.float64, copy=True), raw.sample_rate)


__all__ = ["downmix_to_mono"]

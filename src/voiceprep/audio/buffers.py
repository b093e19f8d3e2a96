"""In-memory sample buffers passed between pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(slots=True)
class RawAudioBuffer:
    """Decoder output: one row of float samples per channel."""

    sample_rate: int
    channels: np.ndarray

    def __post_init__(self) -> None:
        if self.channels.ndim != 2:
            raise ValueError("Channel data must be shaped (channel_count, frames)")
        if self.sample_rate <= 0:
            raise ValueError("Sample rate must be positive")

    @property
    def channel_count(self) -> int:
        return int(self.channels.shape[0])

    @property
    def frames(self) -> int:
        return int(self.channels.shape[1])

    @property
    def duration(self) -> float:
        return self.frames / self.sample_rate


@dataclass(slots=True)
class MonoSampleBuffer:
    """A single channel of float samples, nominally within [-1, 1]."""

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self) -> None:
        self.samples = np.asarray(self.samples, dtype=np.float64)
        if self.samples.ndim != 1:
            raise ValueError("Mono samples must be one-dimensional")
        if self.sample_rate <= 0:
            raise ValueError("Sample rate must be positive")

    def __len__(self) -> int:
        return int(self.samples.shape[0])

    @property
    def duration(self) -> float:
        return len(self) / self.sample_rate

    def with_samples(self, samples: np.ndarray) -> "MonoSampleBuffer":
        """Return a new buffer at the same rate holding ``samples``."""
        return MonoSampleBuffer(samples=samples, sample_rate=self.sample_rate)


__all__ = ["RawAudioBuffer", "MonoSampleBuffer"]

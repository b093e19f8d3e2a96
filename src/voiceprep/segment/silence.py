"""Leading and trailing silence removal."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..audio.buffers import MonoSampleBuffer


@dataclass(slots=True)
class TrimResult:
    """Trimmed buffer plus the kept span, in samples, of the input."""

    buffer: MonoSampleBuffer
    start: int
    end: int
    skipped: bool


def margin_samples(margin_ms: float, sample_rate: int) -> int:
    return int(round(margin_ms / 1000.0 * sample_rate))


def trim_silence(
    buffer: MonoSampleBuffer,
    threshold: float = 0.01,
    margin_ms: float = 300.0,
    min_retention: float = 0.5,
) -> TrimResult:
    """Cut quiet regions off both ends, keeping ``margin_ms`` of lead-in and tail.

    Nothing is cut when no sample exceeds ``threshold`` or when the kept span
    would be shorter than ``min_retention`` of the input.
    """
    samples = buffer.samples
    total = len(samples)
    loud = np.flatnonzero(np.abs(samples) > threshold)
    if total == 0 or loud.size == 0:
        return TrimResult(buffer.with_samples(samples.copy()), 0, total, skipped=True)

    margin = margin_samples(margin_ms, buffer.sample_rate)
    start = max(0, int(loud[0]) - margin)
    end = min(total, int(loud[-1]) + 1 + margin)
    if end - start < min_retention * total:
        return TrimResult(buffer.with_samples(samples.copy()), 0, total, skipped=True)
    return TrimResult(buffer.with_samples(samples[start:end].copy()), start, end, skipped=False)


__all__ = ["TrimResult", "margin_samples", "trim_silence"]

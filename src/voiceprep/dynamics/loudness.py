"""RMS loudness normalization with a soft-knee peak limiter."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..audio.buffers import MonoSampleBuffer

# Below this RMS the signal is treated as silence and left untouched.
SILENCE_FLOOR = 1e-4


@dataclass(slots=True)
class LoudnessResult:
    buffer: MonoSampleBuffer
    gain: float
    input_rms: float
    input_peak: float
    skipped: bool
    peak_limited: bool


def db_to_linear(db: float) -> float:
    return 10.0 ** (db / 20.0)


def linear_to_db(value: float) -> float:
    """Convert amplitude to dBFS, flooring non-positive input at -100 dB."""
    if value <= 0:
        return -100.0
    return 20.0 * math.log10(value)


def measure_rms(samples: np.ndarray) -> float:
    if len(samples) == 0:
        return 0.0
    return float(np.sqrt(np.mean(np.square(samples, dtype=np.float64))))


def measure_peak(samples: np.ndarray) -> float:
    if len(samples) == 0:
        return 0.0
    return float(np.max(np.abs(samples)))


def soft_knee(samples: np.ndarray, ceiling: float, knee_start_ratio: float = 0.85, ratio: float = 4.0) -> np.ndarray:
    """Saturate magnitudes above the knee exponentially so they approach ``ceiling``."""
    knee_start = knee_start_ratio * ceiling
    knee_range = ceiling - knee_start
    magnitude = np.abs(samples)
    over = magnitude > knee_start
    if not np.any(over) or knee_range <= 0:
        return samples.copy()
    excess = magnitude[over] - knee_start
    compressed = knee_range * (1.0 - np.exp(-excess / knee_range * ratio))
    out = samples.copy()
    out[over] = np.sign(samples[over]) * (knee_start + compressed)
    return out


def normalize_loudness(
    buffer: MonoSampleBuffer,
    target_rms_db: float = -18.0,
    peak_ceiling_db: float = -3.0,
    silence_floor: float = SILENCE_FLOOR,
    knee_start_ratio: float = 0.85,
    compression_ratio: float = 4.0,
) -> LoudnessResult:
    """Scale ``buffer`` toward ``target_rms_db`` without letting any peak pass the ceiling.

    The gain is the smaller of the RMS-driven gain and the gain that puts the
    loudest sample exactly on the ceiling. Samples above 85% of the ceiling
    then go through a soft knee and a final hard clamp. Near-silent input is
    returned unchanged with ``skipped=True``.
    """
    samples = buffer.samples
    rms = measure_rms(samples)
    peak = measure_peak(samples)
    if rms < silence_floor:
        return LoudnessResult(buffer.with_samples(samples.copy()), 1.0, rms, peak, skipped=True, peak_limited=False)

    target = db_to_linear(target_rms_db)
    ceiling = db_to_linear(peak_ceiling_db)
    gain = target / rms
    peak_limited = peak * gain > ceiling
    if peak_limited:
        gain = ceiling / peak

    scaled = samples * gain
    limited = soft_knee(scaled, ceiling, knee_start_ratio, compression_ratio)
    np.clip(limited, -ceiling, ceiling, out=limited)
    return LoudnessResult(buffer.with_samples(limited), gain, rms, peak, skipped=False, peak_limited=peak_limited)


__all__ = [
    "LoudnessResult",
    "SILENCE_FLOOR",
    "db_to_linear",
    "linear_to_db",
    "measure_peak",
    "measure_rms",
    "normalize_loudness",
    "soft_knee",
]

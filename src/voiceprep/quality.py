"""Scored quality report for a voice-cloning sample."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .audio.buffers import MonoSampleBuffer
from .dynamics.loudness import linear_to_db, measure_peak, measure_rms

# Thresholds follow the instant-clone provider's level guidance.
_MIN_DURATION = 60.0
_OPTIMAL_MAX_DURATION = 120.0
_MAX_DURATION = 180.0
_CLIP_LEVEL = 0.99
_SILENCE_LEVEL = 0.001


@dataclass(slots=True)
class LevelMetrics:
    rms_db: float
    peak_db: float
    clipping_percent: float
    silence_percent: float


@dataclass(slots=True)
class QualityReport:
    valid: bool
    score: int
    duration: float
    metrics: LevelMetrics
    issues: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def analyze_quality(buffer: MonoSampleBuffer) -> QualityReport:
    """Grade duration, loudness, clipping and dead air on a 0-100 scale."""
    samples = buffer.samples
    duration = buffer.duration
    issues: List[str] = []
    warnings: List[str] = []
    score = 100

    if duration < _MIN_DURATION:
        issues.append(f"Recording too short ({duration:.0f}s). Need at least {_MIN_DURATION:.0f} seconds.")
        score -= 40
    elif duration > _MAX_DURATION:
        warnings.append(f"Recording longer than optimal ({duration:.0f}s). 60-120s is ideal.")
        score -= 10
    elif duration > _OPTIMAL_MAX_DURATION:
        warnings.append(f"Recording is {duration:.0f}s. 60-120s is optimal.")
        score -= 5

    rms_db = linear_to_db(measure_rms(samples))
    if rms_db < -35:
        issues.append(f"Audio too quiet ({rms_db:.1f}dB). Aim for -23 to -18 dB.")
        score -= 30
    elif rms_db < -30:
        warnings.append(f"Audio is quiet ({rms_db:.1f}dB). Optimal is -23 to -18 dB.")
        score -= 15
    elif rms_db < -23:
        warnings.append(f"Audio level {rms_db:.1f}dB is acceptable but below optimal (-23 to -18 dB).")
        score -= 5
    elif rms_db > -10:
        issues.append(f"Audio too loud ({rms_db:.1f}dB). Risk of distortion.")
        score -= 25
    elif rms_db > -18:
        warnings.append(f"Audio level {rms_db:.1f}dB is slightly above optimal (-23 to -18 dB).")
        score -= 3

    magnitude = np.abs(samples)
    count = max(1, len(samples))
    peak_db = linear_to_db(measure_peak(samples))
    clipping_percent = float(np.count_nonzero(magnitude > _CLIP_LEVEL)) / count * 100.0
    if clipping_percent > 1:
        issues.append(f"Significant clipping detected ({clipping_percent:.2f}%). Record at lower volume.")
        score -= 25
    elif clipping_percent > 0.1:
        warnings.append(f"Minor clipping detected ({clipping_percent:.2f}%). Consider recording at slightly lower volume.")
        score -= 10
    elif peak_db > -3:
        warnings.append(f"Peak level {peak_db:.1f}dB is close to clipping. Keep peaks below -3dB.")
        score -= 5

    silence_percent = float(np.count_nonzero(magnitude < _SILENCE_LEVEL)) / count * 100.0
    if silence_percent > 60:
        warnings.append(f"{silence_percent:.0f}% silence detected. More continuous speech recommended.")
        score -= 15
    elif silence_percent > 40:
        warnings.append(f"{silence_percent:.0f}% silence detected. Try to minimize pauses.")
        score -= 5

    return QualityReport(
        valid=not issues,
        score=max(0, min(100, score)),
        duration=duration,
        metrics=LevelMetrics(
            rms_db=rms_db,
            peak_db=peak_db,
            clipping_percent=clipping_percent,
            silence_percent=silence_percent,
        ),
        issues=issues,
        warnings=warnings,
    )


__all__ = ["LevelMetrics", "QualityReport", "analyze_quality"]

"""Tests for RMS normalization and peak limiting."""

from __future__ import annotations

import numpy as np
import pytest

from voiceprep.audio.buffers import MonoSampleBuffer
from voiceprep.dynamics.loudness import (
    db_to_linear,
    linear_to_db,
    measure_peak,
    measure_rms,
    normalize_loudness,
    soft_knee,
)

RATE = 16000
CEILING = db_to_linear(-3.0)
TARGET = db_to_linear(-18.0)


def _sine(amplitude: float, seconds: float = 1.0, freq: float = 220.0) -> np.ndarray:
    t = np.arange(int(RATE * seconds)) / RATE
    return amplitude * np.sin(2 * np.pi * freq * t)


def test_db_conversions() -> None:
    assert db_to_linear(0.0) == 1.0
    assert db_to_linear(-20.0) == pytest.approx(0.1)
    assert linear_to_db(0.1) == pytest.approx(-20.0)
    assert linear_to_db(0.0) == -100.0


def test_reaches_target_rms_when_peaks_allow() -> None:
    samples = _sine(0.5)
    result = normalize_loudness(MonoSampleBuffer(samples, RATE))
    assert not result.skipped
    assert not result.peak_limited
    assert result.gain == pytest.approx(TARGET / measure_rms(samples))
    assert len(result.buffer) == len(samples)
    assert measure_rms(result.buffer.samples) == pytest.approx(TARGET, rel=1e-9)


def test_peak_limits_gain_for_spiky_input() -> None:
    samples = _sine(0.01)
    samples[RATE // 2] = 0.9
    result = normalize_loudness(MonoSampleBuffer(samples, RATE))
    assert result.peak_limited
    assert result.gain == pytest.approx(CEILING / 0.9)
    peak = measure_peak(result.buffer.samples)
    assert peak <= CEILING
    assert peak == pytest.approx(CEILING, rel=5e-3)
    assert measure_rms(result.buffer.samples) < TARGET


def test_silent_input_is_returned_unchanged() -> None:
    for samples in (np.zeros(RATE), np.full(RATE, 5e-5)):
        result = normalize_loudness(MonoSampleBuffer(samples, RATE))
        assert result.skipped
        assert result.gain == 1.0
        np.testing.assert_array_equal(result.buffer.samples, samples)


def test_ceiling_holds_across_random_buffers() -> None:
    rng = np.random.default_rng(11)
    cases = [
        np.zeros(1000),
        rng.uniform(-1.0, 1.0, 5000),
        np.clip(rng.normal(0.0, 0.6, 5000), -1.0, 1.0),
        np.where(np.arange(3000) % 2, 0.999, -0.999),
        rng.uniform(-0.001, 0.001, 2000),
    ]
    for ceiling_db in (-3.0, -1.0, -6.0):
        ceiling = db_to_linear(ceiling_db)
        for samples in cases:
            result = normalize_loudness(MonoSampleBuffer(samples, RATE), peak_ceiling_db=ceiling_db)
            assert len(result.buffer) == len(samples)
            if not result.skipped:
                assert measure_peak(result.buffer.samples) <= ceiling + 1e-12


def test_soft_knee_is_smooth_and_bounded() -> None:
    ramp = np.linspace(-2.0, 2.0, 4001)
    shaped = soft_knee(ramp, ceiling=CEILING)
    knee = 0.85 * CEILING
    assert np.all(np.abs(shaped) <= CEILING + 1e-12)
    assert np.all(np.diff(shaped) >= 0)
    below = np.abs(ramp) <= knee
    np.testing.assert_array_equal(shaped[below], ramp[below])

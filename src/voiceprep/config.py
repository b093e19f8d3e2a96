"""Configuration models and loader utilities."""

from __future__ import annotations

import dataclasses
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml


@dataclass(slots=True)
class DecodeConfig:
    sample_rate: int = 44100
    ffmpeg_binary: str = "ffmpeg"
    ffprobe_binary: str = "ffprobe"


@dataclass(slots=True)
class HighPassConfig:
    enabled: bool = True
    cutoff_hz: float = 80.0


@dataclass(slots=True)
class TrimConfig:
    enabled: bool = True
    threshold: float = 0.01
    margin_ms: float = 300.0
    min_retention: float = 0.5


@dataclass(slots=True)
class LoudnessConfig:
    enabled: bool = True
    target_rms_db: float = -18.0
    peak_ceiling_db: float = -3.0
    silence_floor: float = 1e-4
    knee_start_ratio: float = 0.85
    compression_ratio: float = 4.0


@dataclass(slots=True)
class ValidationPolicy:
    """Acceptance thresholds for a finished voice sample."""

    min_bytes: int = 50_000
    min_duration: float = 6.0
    max_duration: float = 90.0


# Provider recommendations; durations are seconds.
POLICY_PRESETS: Dict[str, ValidationPolicy] = {
    "default": ValidationPolicy(),
    "instant-clone": ValidationPolicy(min_bytes=50_000, min_duration=60.0, max_duration=180.0),
    "short-form": ValidationPolicy(min_bytes=50_000, min_duration=10.0, max_duration=60.0),
}


@dataclass(slots=True)
class ValidationConfig:
    policy: Optional[str] = None
    min_bytes: int = 50_000
    min_duration: float = 6.0
    max_duration: float = 90.0

    def resolve(self) -> ValidationPolicy:
        """Return the effective policy, preferring a named preset when set."""
        if self.policy:
            try:
                preset = POLICY_PRESETS[self.policy]
            except KeyError:
                raise KeyError(f"Unknown validation policy: {self.policy}") from None
            return dataclasses.replace(preset)
        return ValidationPolicy(
            min_bytes=self.min_bytes,
            min_duration=self.min_duration,
            max_duration=self.max_duration,
        )


@dataclass(slots=True)
class PipelineConfig:
    decode: DecodeConfig = field(default_factory=DecodeConfig)
    highpass: HighPassConfig = field(default_factory=HighPassConfig)
    trim: TrimConfig = field(default_factory=TrimConfig)
    loudness: LoudnessConfig = field(default_factory=LoudnessConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)


def load_config(path: pathlib.Path) -> PipelineConfig:
    """Load configuration from a YAML file."""
    with path.open("r", encoding="utf-8") as handle:
        data: Dict[str, Any] = yaml.safe_load(handle) or {}
    return apply_overrides(PipelineConfig(), data)


def apply_overrides(config: PipelineConfig, overrides: Dict[str, Any]) -> PipelineConfig:
    """Apply dictionary overrides recursively to a configuration object."""

    def merge(target: Any, src: Dict[str, Any]) -> Any:
        if dataclasses.is_dataclass(target):
            for key, value in src.items():
                if not hasattr(target, key):
                    raise KeyError(f"Unknown configuration key: {key}")
                attr = getattr(target, key)
                if dataclasses.is_dataclass(attr) and isinstance(value, dict):
                    merge(attr, value)
                else:
                    setattr(target, key, value)
            return target
        raise TypeError("Target must be a dataclass instance")

    merge(config, overrides)
    return config


def validate_config(config: PipelineConfig) -> None:
    """Validate logical invariants of the pipeline configuration."""
    if config.decode.sample_rate <= 0:
        raise ValueError("Sample rate must be positive")
    if config.highpass.cutoff_hz <= 0:
        raise ValueError("High-pass cutoff must be positive")
    if config.highpass.cutoff_hz >= config.decode.sample_rate / 2:
        raise ValueError("High-pass cutoff must be below the Nyquist frequency")
    if not 0.0 <= config.trim.threshold < 1.0:
        raise ValueError("Silence threshold must be in [0, 1)")
    if config.trim.margin_ms < 0:
        raise ValueError("Silence margin must be non-negative")
    if not 0.0 < config.trim.min_retention <= 1.0:
        raise ValueError("Minimum trim retention must be in (0, 1]")
    if config.loudness.peak_ceiling_db > 0:
        raise ValueError("Peak ceiling cannot exceed 0 dBFS")
    if config.loudness.target_rms_db >= config.loudness.peak_ceiling_db:
        raise ValueError("Target RMS must sit below the peak ceiling")
    if not 0.0 < config.loudness.knee_start_ratio < 1.0:
        raise ValueError("Knee start ratio must be in (0, 1)")
    if config.loudness.compression_ratio <= 0:
        raise ValueError("Compression ratio must be positive")
    if config.loudness.silence_floor < 0:
        raise ValueError("Silence floor must be non-negative")
    policy = config.validation.resolve()
    if policy.min_bytes < 0:
        raise ValueError("Minimum byte size must be non-negative")
    if policy.min_duration > policy.max_duration:
        raise ValueError("Minimum duration cannot exceed maximum duration")

"""Recording-to-sample orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .audio.buffers import MonoSampleBuffer
from .audio.channels import downmix_to_mono
from .audio.decode import AudioDecoder
from .audio.filters import high_pass
from .config import PipelineConfig
from .dynamics.loudness import linear_to_db, normalize_loudness
from .logging import get_logger
from .segment.silence import trim_silence
from .validation import ValidationResult, validate_sample
from .wav.writer import encode_wav


@dataclass(slots=True)
class StageReport:
    """What each stage did to one recording."""

    sample_rate: int
    source_channels: int
    decoded_samples: int
    output_samples: int
    trim_start: int = 0
    trim_end: int = 0
    trim_skipped: bool = True
    gain: float = 1.0
    input_rms: float = 0.0
    input_peak: float = 0.0
    loudness_skipped: bool = True
    peak_limited: bool = False


@dataclass(slots=True)
class PipelineResult:
    wav: bytes
    report: StageReport
    validation: Optional[ValidationResult] = None


class VoicePrepPipeline:
    """Decode, clean and level a recording, then encode it as mono 16-bit WAV.

    Stages run strictly in order; only decoding awaits. Each call owns its
    buffers, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        decoder: Optional[AudioDecoder] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._config = config or PipelineConfig()
        self._decoder = decoder or AudioDecoder(self._config.decode)
        self._logger = logger or get_logger("pipeline")

    @property
    def config(self) -> PipelineConfig:
        return self._config

    async def process(self, blob: bytes, sample_rate: Optional[int] = None) -> PipelineResult:
        rate = sample_rate or self._config.decode.sample_rate
        self._logger.info("Processing recording: %d bytes at %d Hz", len(blob), rate)
        raw = await self._decoder.decode(blob, rate)
        self._logger.debug(
            "Decoded %.2fs, %d channel(s), %d frames",
            raw.duration,
            raw.channel_count,
            raw.frames,
        )
        report = StageReport(
            sample_rate=raw.sample_rate,
            source_channels=raw.channel_count,
            decoded_samples=raw.frames,
            output_samples=raw.frames,
        )
        mono = self.condition(downmix_to_mono(raw), report)
        wav = encode_wav(mono)
        self._logger.info(
            "Encoded %.2fs sample (%d bytes, gain %.2fx)",
            mono.duration,
            len(wav),
            report.gain,
        )
        return PipelineResult(wav=wav, report=report)

    def condition(self, mono: MonoSampleBuffer, report: Optional[StageReport] = None) -> MonoSampleBuffer:
        """Run the synchronous filter, trim and loudness stages."""
        if report is None:
            report = StageReport(
                sample_rate=mono.sample_rate,
                source_channels=1,
                decoded_samples=len(mono),
                output_samples=len(mono),
            )
        cfg = self._config

        if cfg.highpass.enabled:
            mono = high_pass(mono, cfg.highpass.cutoff_hz)

        report.trim_end = len(mono)
        if cfg.trim.enabled:
            trimmed = trim_silence(
                mono,
                threshold=cfg.trim.threshold,
                margin_ms=cfg.trim.margin_ms,
                min_retention=cfg.trim.min_retention,
            )
            report.trim_start, report.trim_end, report.trim_skipped = trimmed.start, trimmed.end, trimmed.skipped
            if trimmed.skipped:
                self._logger.info("Silence trim skipped; keeping all %d samples", len(mono))
            else:
                self._logger.debug(
                    "Trimmed to samples [%d, %d) of %d",
                    trimmed.start,
                    trimmed.end,
                    len(mono),
                )
            mono = trimmed.buffer

        if cfg.loudness.enabled:
            leveled = normalize_loudness(
                mono,
                target_rms_db=cfg.loudness.target_rms_db,
                peak_ceiling_db=cfg.loudness.peak_ceiling_db,
                silence_floor=cfg.loudness.silence_floor,
                knee_start_ratio=cfg.loudness.knee_start_ratio,
                compression_ratio=cfg.loudness.compression_ratio,
            )
            report.gain = leveled.gain
            report.input_rms = leveled.input_rms
            report.input_peak = leveled.input_peak
            report.loudness_skipped = leveled.skipped
            report.peak_limited = leveled.peak_limited
            if leveled.skipped:
                self._logger.info(
                    "Audio too quiet to normalize (RMS %.1f dB); leaving levels unchanged",
                    linear_to_db(leveled.input_rms),
                )
            else:
                self._logger.debug(
                    "Normalized from RMS %.1f dB with gain %.3f%s",
                    linear_to_db(leveled.input_rms),
                    leveled.gain,
                    " (peak limited)" if leveled.peak_limited else "",
                )
            mono = leveled.buffer

        report.output_samples = len(mono)
        return mono

    async def validate(self, blob: bytes) -> ValidationResult:
        result = await validate_sample(blob, self._config.validation.resolve(), self._decoder)
        if not result.valid:
            self._logger.warning("Sample rejected: %s", result.message)
        return result

    async def process_and_validate(self, blob: bytes, sample_rate: Optional[int] = None) -> PipelineResult:
        result = await self.process(blob, sample_rate)
        result.validation = await self.validate(result.wav)
        return result


async def convert_to_wav(
    blob: bytes,
    sample_rate: int = 44100,
    config: Optional[PipelineConfig] = None,
) -> bytes:
    """Convert a recording to a voice-cloning WAV sample."""
    pipeline = VoicePrepPipeline(config)
    result = await pipeline.process(blob, sample_rate)
    return result.wav


__all__ = ["PipelineResult", "StageReport", "VoicePrepPipeline", "convert_to_wav"]

"""Suitability checks for a finished voice sample."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .audio.decode import AudioDecoder
from .config import ValidationPolicy
from .errors import DecodeError
from .logging import get_logger

LOGGER = get_logger("validation")


@dataclass(slots=True)
class ValidationResult:
    valid: bool
    duration: float
    message: Optional[str] = None


async def validate_sample(
    blob: bytes,
    policy: Optional[ValidationPolicy] = None,
    decoder: Optional[AudioDecoder] = None,
) -> ValidationResult:
    """Check ``blob`` against size and duration thresholds.

    Never raises for bad input: every rejection comes back as an invalid
    result whose message can be shown to the person recording.
    """
    policy = policy or ValidationPolicy()
    decoder = decoder or AudioDecoder()

    if len(blob) < policy.min_bytes:
        LOGGER.info("Rejected sample: %d bytes is below %d", len(blob), policy.min_bytes)
        return ValidationResult(
            valid=False,
            duration=0.0,
            message="Audio file too small. Please record a longer sample.",
        )

    try:
        buffer = await decoder.decode(blob)
    except DecodeError as exc:
        LOGGER.info("Rejected sample: %s", exc)
        return ValidationResult(valid=False, duration=0.0, message=f"Audio could not be decoded: {exc}")

    duration = buffer.duration
    if duration < policy.min_duration:
        return ValidationResult(
            valid=False,
            duration=duration,
            message=(
                f"Recording too short ({duration:.1f}s). "
                f"Please record at least {policy.min_duration:g} seconds for best quality."
            ),
        )
    if duration > policy.max_duration:
        return ValidationResult(
            valid=False,
            duration=duration,
            message=(
                f"Recording too long ({duration:.1f}s). "
                f"Please keep it under {policy.max_duration:g} seconds."
            ),
        )
    return ValidationResult(valid=True, duration=duration)


__all__ = ["ValidationResult", "validate_sample"]

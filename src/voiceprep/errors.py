"""Exception hierarchy for the preprocessing pipeline."""

from __future__ import annotations


class VoicePrepError(RuntimeError):
    """Base class for fatal pipeline failures."""


class DecodeError(VoicePrepError):
    """Raised when an input blob cannot be probed or decoded."""


class EmptyAudioError(DecodeError):
    """Raised when decoding succeeds but yields no samples."""


class EncodeIntegrityError(VoicePrepError):
    """Raised when an encoded WAV fails its own header check.

    This signals a bug in the encoder, never a problem with user input.
    """


class WavFormatError(ValueError):
    """Raised when bytes handed to the WAV header parser are not canonical PCM WAV."""


__all__ = [
    "VoicePrepError",
    "DecodeError",
    "EmptyAudioError",
    "EncodeIntegrityError",
    "WavFormatError",
]

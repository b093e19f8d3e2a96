"""Prepare microphone recordings as voice-cloning WAV samples."""

from .config import PipelineConfig, ValidationPolicy, load_config
from .errors import DecodeError, EmptyAudioError, EncodeIntegrityError, VoicePrepError
from .pipeline import PipelineResult, VoicePrepPipeline, convert_to_wav
from .validation import ValidationResult, validate_sample

__all__ = [
    "DecodeError",
    "EmptyAudioError",
    "EncodeIntegrityError",
    "PipelineConfig",
    "PipelineResult",
    "ValidationPolicy",
    "ValidationResult",
    "VoicePrepError",
    "VoicePrepPipeline",
    "convert_to_wav",
    "load_config",
    "validate_sample",
]

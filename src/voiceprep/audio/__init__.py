"""Audio front-end modules."""

from .buffers import MonoSampleBuffer, RawAudioBuffer
from .channels import downmix_to_mono
from .decode import AudioDecoder, DecodingContext
from .filters import high_pass

__all__ = [
    "AudioDecoder",
    "DecodingContext",
    "MonoSampleBuffer",
    "RawAudioBuffer",
    "downmix_to_mono",
    "high_pass",
]

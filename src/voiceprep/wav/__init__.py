"""WAV container helpers."""

from .header import WavHeader, parse_wav_header
from .writer import encode_wav, float_to_pcm16

__all__ = ["WavHeader", "encode_wav", "float_to_pcm16", "parse_wav_header"]

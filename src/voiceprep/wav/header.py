"""Canonical 44-byte PCM WAV header."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from ..errors import WavFormatError

HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")
HEADER_SIZE = HEADER_STRUCT.size  # 44
PCM_FORMAT = 1


@dataclass(slots=True, frozen=True)
class WavHeader:
    chunk_size: int
    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_size: int

    @property
    def frame_count(self) -> int:
        return self.data_size // self.block_align if self.block_align else 0

    @property
    def duration(self) -> float:
        return self.frame_count / self.sample_rate if self.sample_rate else 0.0


def pack_header(sample_rate: int, data_size: int, num_channels: int = 1, bits_per_sample: int = 16) -> bytes:
    block_align = num_channels * bits_per_sample // 8
    return HEADER_STRUCT.pack(
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        16,
        PCM_FORMAT,
        num_channels,
        sample_rate,
        sample_rate * block_align,
        block_align,
        bits_per_sample,
        b"data",
        data_size,
    )


def parse_wav_header(data: bytes) -> WavHeader:
    """Read back a header written by :func:`pack_header`."""
    if len(data) < HEADER_SIZE:
        raise WavFormatError(f"WAV data is {len(data)} bytes; header needs {HEADER_SIZE}")
    (
        riff,
        chunk_size,
        wave_id,
        fmt_id,
        fmt_size,
        audio_format,
        num_channels,
        sample_rate,
        byte_rate,
        block_align,
        bits_per_sample,
        data_id,
        data_size,
    ) = HEADER_STRUCT.unpack_from(data, 0)
    if riff != b"RIFF" or wave_id != b"WAVE":
        raise WavFormatError("Missing RIFF/WAVE signature")
    if fmt_id != b"fmt " or fmt_size != 16 or data_id != b"data":
        raise WavFormatError("Not a canonical PCM WAV layout")
    return WavHeader(
        chunk_size=chunk_size,
        audio_format=audio_format,
        num_channels=num_channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
        data_size=data_size,
    )


__all__ = ["HEADER_SIZE", "WavHeader", "pack_header", "parse_wav_header"]

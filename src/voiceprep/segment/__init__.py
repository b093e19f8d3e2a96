"""Silence handling."""

from .silence import TrimResult, trim_silence

__all__ = ["TrimResult", "trim_silence"]

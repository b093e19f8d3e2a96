"""Level and dynamics processing."""

from .loudness import LoudnessResult, db_to_linear, linear_to_db, normalize_loudness

__all__ = ["LoudnessResult", "db_to_linear", "linear_to_db", "normalize_loudness"]

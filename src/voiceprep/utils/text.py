"""Utility helpers for log and message text."""

from __future__ import annotations

from typing import Iterable, List


def redact_command(command: Iterable[str]) -> str:
    """Return a printable command with obvious secrets redacted."""
    redacted: List[str] = []
    for token in command:
        if any(secret in token.lower() for secret in {"token", "password", "secret"}):
            redacted.append("***")
        else:
            redacted.append(token)
    return " ".join(redacted)


def tail(text: str, limit: int = 500) -> str:
    """Return the last ``limit`` characters of ``text`` with whitespace trimmed."""
    text = text.strip()
    if len(text) <= limit:
        return text
    return "..." + text[-limit:]


__all__ = ["redact_command", "tail"]

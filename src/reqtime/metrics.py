"""Interval derivation from cumulative transfer timestamps."""

from __future__ import annotations

from datetime import timedelta

BODY_SEPARATOR = "\r\n\r\n"

_ONE_MS = timedelta(milliseconds=1)


def derive_interval(start: timedelta, end: timedelta) -> timedelta | None:
    """Return the time spent between two cumulative checkpoints.

    ``None`` means the phase did not happen (``end`` is not past ``start``),
    which is distinct from a phase measured at exactly zero.
    """
    if end > start:
        return end - start
    return None


def extract_body(raw: bytes) -> str | None:
    """Decode a raw body buffer, dropping any leading header block."""
    if not raw:
        return None

    text = raw.decode("utf-8", errors="replace")
    index = text.find(BODY_SEPARATOR)
    if index == -1:
        return text
    return text[index + len(BODY_SEPARATOR) :]


def to_millis(duration: timedelta) -> int:
    """Truncate a duration to whole milliseconds."""
    return duration // _ONE_MS

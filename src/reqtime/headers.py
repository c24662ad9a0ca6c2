"""Response header block parsing."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

STATUS_LINE_PREFIX = "HTTP/"


class DecodeError(ValueError):
    """Raised when a header block is not valid UTF-8."""


class Header(BaseModel):
    """HTTP header name-value pair."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str

    @classmethod
    def parse(cls, raw: str) -> Header:
        """Build a header from ``"Key: value"`` text."""
        key, sep, value = raw.partition(":")
        if not sep:
            raise ValueError("Invalid header format, please use key: value")
        return cls(key=key.strip(), value=value.strip())

    @property
    def display_key(self) -> str:
        """Key in Train-Case, e.g. ``content-type`` -> ``Content-Type``."""
        return "-".join(word[:1].upper() + word[1:].lower() for word in self.key.split("-"))

    def __str__(self) -> str:
        return f"{self.key}: {self.value}"


class ParsedHeaders(BaseModel):
    """Status line fields and headers of one response."""

    model_config = ConfigDict(frozen=True)

    http_version: str | None = None
    status_code: int | None = None
    headers: tuple[Header, ...] = ()


def _parse_status_line(line: str) -> tuple[str | None, int | None]:
    _, _, tail = line.partition("/")
    tokens = tail.split(" ")
    version = tokens[0]
    code = tokens[1] if len(tokens) > 1 else ""
    status_code = int(code) if code.isascii() and code.isdigit() else None
    return version, status_code


def parse_headers(raw: bytes) -> ParsedHeaders:
    """Split a raw header block into status line fields and headers.

    Malformed lines are skipped. If several status lines are present the
    last one wins.
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Response headers are not valid UTF-8: {exc}") from exc

    http_version: str | None = None
    status_code: int | None = None
    headers: list[Header] = []

    for line in text.split("\n"):
        line = line.replace("\r", "")
        if not line:
            continue

        if line.upper().startswith(STATUS_LINE_PREFIX):
            http_version, status_code = _parse_status_line(line)
            continue

        key, sep, value = line.partition(":")
        if not sep:
            logger.debug(f"Skipping malformed header line: {line!r}")
            continue
        headers.append(Header(key=key.strip(), value=value.strip()))

    return ParsedHeaders(
        http_version=http_version,
        status_code=status_code,
        headers=tuple(headers),
    )

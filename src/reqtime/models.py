"""Transfer report models."""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from reqtime.color import Color
from reqtime.headers import Header, parse_headers
from reqtime.metrics import derive_interval, extract_body

# =============================================================================
# Enums
# =============================================================================


class Method(str, Enum):
    """Supported HTTP request methods."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"

    @classmethod
    def parse(cls, value: str) -> Method:
        """Parse a method name case-insensitively."""
        try:
            return cls(value.upper())
        except ValueError:
            names = ", ".join(m.value for m in cls)
            raise ValueError(f"Invalid method, please use {names}") from None


# =============================================================================
# Timing Models
# =============================================================================


class PhaseTimings(BaseModel):
    """Cumulative phase checkpoints, each measured from request start."""

    model_config = ConfigDict(frozen=True)

    name_lookup: timedelta = timedelta(0)
    connect: timedelta = timedelta(0)
    app_connect: timedelta = timedelta(0)
    pre_transfer: timedelta = timedelta(0)
    start_transfer: timedelta = timedelta(0)
    total: timedelta = timedelta(0)

    @field_validator(
        "name_lookup", "connect", "app_connect", "pre_transfer", "start_transfer", "total"
    )
    @classmethod
    def check_not_negative(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("phase timestamps must not be negative")
        return value


class TransferReport(PhaseTimings):
    """Everything observed about one completed transfer."""

    ip_address: str | None = None
    http_version: str | None = None
    status_code: int | None = None
    response_headers: tuple[Header, ...] = ()
    response_body: bytes = b""

    @classmethod
    def from_raw(
        cls,
        raw_headers: bytes,
        raw_body: bytes,
        timings: PhaseTimings,
        ip_address: str | None = None,
    ) -> TransferReport:
        """Build a report from the engine's raw buffers.

        Raises ``DecodeError`` when the header block is not valid UTF-8.
        """
        parsed = parse_headers(raw_headers)
        return cls(
            ip_address=ip_address or None,
            http_version=parsed.http_version,
            status_code=parsed.status_code,
            response_headers=parsed.headers,
            response_body=raw_body,
            **timings.model_dump(),
        )

    def dns_lookup(self) -> timedelta | None:
        return self.name_lookup

    def tcp_handshake(self) -> timedelta | None:
        return derive_interval(self.name_lookup, self.connect)

    def tls_handshake(self) -> timedelta | None:
        """``None`` when no TLS session was negotiated."""
        return derive_interval(self.connect, self.app_connect)

    def waiting(self) -> timedelta | None:
        """Time between sending the request and the first response byte."""
        return derive_interval(self.pre_transfer, self.start_transfer)

    def data_transfer(self) -> timedelta | None:
        return derive_interval(self.start_transfer, self.total)

    def server_processing(self) -> timedelta | None:
        return self.waiting()

    def content_transfer(self) -> timedelta | None:
        return self.data_transfer()

    def utf8_response_body(self) -> str | None:
        return extract_body(self.response_body)


# =============================================================================
# Request Configuration
# =============================================================================


class RequestConfig(BaseModel):
    """Validated settings for one timed request."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: Method = Method.GET
    color: Color = Color.CYAN
    request_headers: tuple[Header, ...] = ()
    request_body: bytes | None = None
    output: Path | None = None
    display_response_body: bool = False
    display_response_headers: bool = False
    follow_redirects: bool = False
    verbose: bool = False

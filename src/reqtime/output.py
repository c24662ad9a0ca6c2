"""Terminal report rendering and body output."""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, ConfigDict
from rich.console import Console
from rich.text import Text

from reqtime.color import Color
from reqtime.metrics import to_millis
from reqtime.models import RequestConfig, TransferReport
from reqtime.scaling import event_bar, scale_factor

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


class NetworkEvent(BaseModel):
    """A labelled duration shown as one row of a timing section."""

    model_config = ConfigDict(frozen=True)

    name: str
    duration: timedelta


def _event(name: str, duration: timedelta | None) -> NetworkEvent | None:
    if duration is None:
        return None
    return NetworkEvent(name=name, duration=duration)


def network_events(report: TransferReport) -> list[NetworkEvent]:
    """Per-phase intervals; phases that did not happen are left out."""
    events = [
        _event("DNS Lookup", report.dns_lookup()),
        _event("TCP Handshake", report.tcp_handshake()),
        _event("TLS Handshake", report.tls_handshake()),
        _event("Server Processing", report.server_processing()),
        _event("Data Transfer", report.data_transfer()),
    ]
    return [e for e in events if e is not None]


def detailed_events(report: TransferReport) -> list[NetworkEvent]:
    """Cumulative checkpoints as reported by the transfer engine."""
    app_connect = report.app_connect if report.tls_handshake() is not None else None
    events = [
        _event("Name Lookup", report.name_lookup),
        _event("Connect", report.connect),
        _event("App Connect", app_connect),
        _event("Pre Transfer", report.pre_transfer),
        _event("Start Transfer", report.start_transfer),
        _event("Total", report.total),
    ]
    return [e for e in events if e is not None]


# =============================================================================
# Screen
# =============================================================================


class Screen:
    """Render a transfer report to the terminal."""

    PADDING = 35
    MAX_PADDING = 50

    def __init__(
        self,
        config: RequestConfig,
        report: TransferReport,
        console: Console | None = None,
    ) -> None:
        self.config = config
        self.report = report
        self.console = console or Console()

    def scale_factor(self) -> float:
        return scale_factor(to_millis(self.report.total))

    def event_bar(self, event: NetworkEvent) -> str:
        return event_bar(to_millis(event.duration), self.scale_factor())

    def display(self) -> None:
        """Print every enabled section in order."""
        self._print()
        self._print("Connect ", self._paint(self.report.ip_address or UNKNOWN))
        self._print()
        self.display_network_timings()
        self._print()
        self.display_detailed_timings()
        if self.config.display_response_headers:
            self._print()
            self.display_response_headers()
        if self.config.display_response_body:
            self._print()
            self.display_response_body()

    def display_network_timings(self) -> None:
        self._print("Network Timings:")
        self.display_events(network_events(self.report))

    def display_detailed_timings(self) -> None:
        self._print("Detailed Timings:")
        self.display_events(detailed_events(self.report))

    def display_events(self, events: list[NetworkEvent]) -> None:
        for event in events:
            self._print(
                self._paint(event.name.ljust(self.PADDING)),
                f" {self.event_bar(event)} {to_millis(event.duration)}ms",
            )

    def header_width(self) -> int:
        """Longest header key, clamped to the padding bounds."""
        longest = max(
            (len(header.key) for header in self.report.response_headers),
            default=self.PADDING,
        )
        return min(max(longest, self.PADDING), self.MAX_PADDING)

    def display_response_headers(self) -> None:
        self._print()
        version = self.report.http_version or UNKNOWN
        status_code = self.report.status_code or 0
        self._print(f"HTTP/{version} {status_code}")

        width = self.header_width()
        for header in self.report.response_headers:
            self._print(self._paint(header.display_key.ljust(width)), f" {header.value}")

    def display_response_body(self) -> None:
        body = self.report.utf8_response_body()
        if body is None:
            return
        self._print("Response Body:")
        self._print()
        self._print(self._paint(body))

    def _paint(self, text: str) -> Text:
        return self.config.color.paint(text)

    def _print(self, *parts: str | Text) -> None:
        self.console.print(Text.assemble(*parts), soft_wrap=True)


# =============================================================================
# Output Helpers
# =============================================================================


def write_body(config: RequestConfig, report: TransferReport) -> Path | None:
    """Write the decoded response body to ``config.output`` if requested."""
    if config.output is None:
        return None

    body = report.utf8_response_body()
    if body is None:
        logger.info(f"Empty response body, nothing written to {config.output}")
        return None

    config.output.write_text(body, encoding="utf-8")
    logger.debug(f"Wrote {len(body)} characters to {config.output}")
    return config.output


def print_error(console: Console, message: str) -> None:
    """Print ``message`` in red."""
    console.print(Color.RED.paint(message), soft_wrap=True)

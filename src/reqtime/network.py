"""libcurl-backed transfer engine.

Timing values come straight from ``curl_easy_getinfo``:
https://curl.se/libcurl/c/curl_easy_getinfo.html
"""

from __future__ import annotations

import io
import logging
from datetime import timedelta

import pycurl

from reqtime.headers import STATUS_LINE_PREFIX
from reqtime.models import Method, PhaseTimings, RequestConfig, TransferReport

logger = logging.getLogger(__name__)

# Cumulative checkpoints, in the order libcurl reaches them
TIMING_INFOS: dict[str, int] = {
    "name_lookup": pycurl.NAMELOOKUP_TIME,
    "connect": pycurl.CONNECT_TIME,
    "app_connect": pycurl.APPCONNECT_TIME,
    "pre_transfer": pycurl.PRETRANSFER_TIME,
    "start_transfer": pycurl.STARTTRANSFER_TIME,
    "total": pycurl.TOTAL_TIME,
}


class TransferError(RuntimeError):
    """Raised when libcurl fails to complete the transfer."""


class TransferSink:
    """Collect raw header and body bytes from libcurl callbacks.

    Only the last response is kept: a status line in the header stream
    starts a new response (redirect hop or interim ``100 Continue``).
    With ``HEADER`` enabled libcurl mirrors each header line into the body
    stream just before the header callback, so the body restarts at the
    mirrored status line and keeps the full header block.
    """

    def __init__(self) -> None:
        self.headers = bytearray()
        self.body = bytearray()

    def write_header(self, data: bytes) -> None:
        if data[: len(STATUS_LINE_PREFIX)].upper() == STATUS_LINE_PREFIX.encode():
            self.headers.clear()
            if self.body.endswith(data):
                self.body[:] = data
            else:
                self.body.clear()
        self.headers.extend(data)

    def write_body(self, data: bytes) -> None:
        self.body.extend(data)


class RequestSource:
    """Serve the request body to libcurl's read callback."""

    def __init__(self, data: bytes | None) -> None:
        self._stream = io.BytesIO(data or b"")
        self.size = len(data or b"")

    def read(self, size: int) -> bytes:
        return self._stream.read(size)


def _configure_method(curl: pycurl.Curl, method: Method, source: RequestSource) -> None:
    if method is Method.GET:
        curl.setopt(pycurl.HTTPGET, 1)
    elif method is Method.HEAD:
        curl.setopt(pycurl.NOBODY, 1)
    elif method in (Method.POST, Method.PATCH):
        curl.setopt(pycurl.POST, 1)
        if method is Method.PATCH:
            curl.setopt(pycurl.CUSTOMREQUEST, method.value)
        curl.setopt(pycurl.READFUNCTION, source.read)
        curl.setopt(pycurl.POSTFIELDSIZE, source.size)
    elif method is Method.PUT:
        curl.setopt(pycurl.UPLOAD, 1)
        curl.setopt(pycurl.READFUNCTION, source.read)
        curl.setopt(pycurl.INFILESIZE, source.size)
    else:
        curl.setopt(pycurl.CUSTOMREQUEST, method.value)


def _read_timings(curl: pycurl.Curl) -> PhaseTimings:
    values = {
        name: timedelta(seconds=curl.getinfo(info)) for name, info in TIMING_INFOS.items()
    }
    return PhaseTimings(**values)


def send_request(config: RequestConfig) -> TransferReport:
    """Perform the request described by ``config`` and report its timings."""
    sink = TransferSink()
    source = RequestSource(config.request_body)
    curl = pycurl.Curl()

    try:
        curl.setopt(pycurl.URL, config.url)
        curl.setopt(pycurl.HEADER, 1)
        curl.setopt(pycurl.HEADERFUNCTION, sink.write_header)
        curl.setopt(pycurl.WRITEFUNCTION, sink.write_body)
        curl.setopt(pycurl.FOLLOWLOCATION, int(config.follow_redirects))
        curl.setopt(pycurl.VERBOSE, int(config.verbose))

        if config.request_headers:
            curl.setopt(pycurl.HTTPHEADER, [str(h) for h in config.request_headers])

        _configure_method(curl, config.method, source)

        logger.debug(f"{config.method.value} {config.url}")
        try:
            curl.perform()
        except pycurl.error as exc:
            code, message = exc.args[0], exc.args[-1]
            raise TransferError(f"{message} (curl error {code})") from exc

        timings = _read_timings(curl)
        ip_address = curl.getinfo(pycurl.PRIMARY_IP)
    finally:
        curl.close()

    logger.debug(
        f"Timings for {config.url}: total={timings.total} "
        f"headers={len(sink.headers)}B body={len(sink.body)}B"
    )
    return TransferReport.from_raw(
        bytes(sink.headers),
        bytes(sink.body),
        timings,
        ip_address=ip_address,
    )

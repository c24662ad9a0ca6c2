from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from io import StringIO
from typing import Any

import pytest
from rich.console import Console

from reqtime.models import PhaseTimings, TransferReport


def ms(value: float) -> timedelta:
    return timedelta(milliseconds=value)


@pytest.fixture
def make_timings() -> Callable[..., PhaseTimings]:
    """Build cumulative timings from millisecond values."""

    def factory(
        name_lookup: float = 0,
        connect: float = 0,
        app_connect: float = 0,
        pre_transfer: float = 0,
        start_transfer: float = 0,
        total: float = 0,
    ) -> PhaseTimings:
        return PhaseTimings(
            name_lookup=ms(name_lookup),
            connect=ms(connect),
            app_connect=ms(app_connect),
            pre_transfer=ms(pre_transfer),
            start_transfer=ms(start_transfer),
            total=ms(total),
        )

    return factory


@pytest.fixture
def make_report(make_timings: Callable[..., PhaseTimings]) -> Callable[..., TransferReport]:
    """Build a report; timing keyword arguments are milliseconds."""
    timing_names = set(PhaseTimings.model_fields)

    def factory(**kwargs: Any) -> TransferReport:
        timing_kwargs = {k: kwargs.pop(k) for k in list(kwargs) if k in timing_names}
        timings = make_timings(**timing_kwargs)
        return TransferReport(**timings.model_dump(), **kwargs)

    return factory


@pytest.fixture
def output() -> StringIO:
    return StringIO()


@pytest.fixture
def plain_console(output: StringIO) -> Console:
    """Console writing uncoloured text into ``output``."""
    return Console(file=output, width=120, color_system=None, legacy_windows=False)

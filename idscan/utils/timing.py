"""
Timing helpers for OCR passes and batch runs.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional


def format_duration(seconds: float) -> str:
    """'850.0ms', '2.40s' or '1m 5.0s'."""
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m {rest:.1f}s"


@dataclass
class TimingResult:
    """How long one labelled step took, and why it failed if it did."""
    label: str
    duration_sec: float = 0.0
    error: Optional[str] = None
    started: float = field(default_factory=time.perf_counter, repr=False)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def describe(self) -> str:
        text = f"{self.label}: {format_duration(self.duration_sec)}"
        return text if self.succeeded else f"{text} (failed: {self.error})"


@contextmanager
def timed_operation(
    label: str,
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
) -> Iterator[TimingResult]:
    """
    Time the body of a `with` block.

        with timed_operation("region pass front.jpg", logger) as timing:
            text = engine.recognize(data)

    The duration is filled in on exit, also when the body raises; the
    exception still propagates.
    """
    timing = TimingResult(label)
    try:
        yield timing
    except Exception as e:
        timing.error = str(e) or type(e).__name__
        raise
    finally:
        timing.duration_sec = time.perf_counter() - timing.started
        if logger is not None:
            logger.log(level, timing.describe())


class Timer:
    """Wall-clock seconds since creation or the last `restart()`."""

    def __init__(self):
        self.restart()

    def restart(self) -> None:
        self._started = time.perf_counter()

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self._started

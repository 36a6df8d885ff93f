"""Pacing between records to stay under the embedding service's rate limit.

The orchestrator calls :meth:`Pacer.observe` with the outcome of every
record that reached the embedding stage, then :meth:`Pacer.wait` before
moving on.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

Sleep = Callable[[float], None]


class Pacer(Protocol):
    def observe(self, error: BaseException | None) -> None: ...

    def wait(self) -> None: ...


def is_rate_limited(error: BaseException) -> bool:
    """``True`` if *error*, or anything in its cause chain, looks like an HTTP 429."""
    seen: set[int] = set()
    exc: BaseException | None = error
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        response = getattr(exc, "response", None)
        status = getattr(response, "status_code", None) or getattr(exc, "status_code", None)
        if status == 429:
            return True
        message = str(exc).lower()
        if "429" in message or "rate limit" in message or "too many requests" in message:
            return True
        exc = exc.__cause__ or exc.__context__
    return False


class FixedDelayPacer:
    """Sleep a constant *delay* after every record."""

    def __init__(self, delay: float = 0.3, *, sleep: Sleep = time.sleep) -> None:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self.delay = delay
        self._sleep = sleep

    def observe(self, error: BaseException | None) -> None:
        pass

    def wait(self) -> None:
        if self.delay:
            self._sleep(self.delay)


class AdaptiveBackoffPacer:
    """Exponential backoff keyed on observed rate-limit errors.

    Parameters
    ----------
    base_delay:
        Delay used while the service is not pushing back.
    max_delay:
        Upper bound for the delay.
    factor:
        Multiplier applied to the current delay on each rate-limit error.
    """

    def __init__(
        self,
        base_delay: float = 0.3,
        *,
        max_delay: float = 30.0,
        factor: float = 2.0,
        sleep: Sleep = time.sleep,
    ) -> None:
        if base_delay < 0 or max_delay < base_delay:
            raise ValueError("require 0 <= base_delay <= max_delay")
        if factor < 1:
            raise ValueError(f"factor must be >= 1, got {factor}")
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.factor = factor
        self.current_delay = base_delay
        self._sleep = sleep

    def observe(self, error: BaseException | None) -> None:
        if error is None:
            self.current_delay = self.base_delay
        elif is_rate_limited(error):
            grown = max(self.current_delay, 0.1) * self.factor
            self.current_delay = min(grown, self.max_delay)
            logger.warning("Rate limited; backing off to %.1fs", self.current_delay)

    def wait(self) -> None:
        if self.current_delay:
            self._sleep(self.current_delay)


def get_pacer(name: str, delay: float, *, sleep: Sleep = time.sleep) -> Pacer:
    """Build the pacer called *name* (``"fixed"`` or ``"adaptive"``)."""
    if name == "fixed":
        return FixedDelayPacer(delay, sleep=sleep)
    if name == "adaptive":
        return AdaptiveBackoffPacer(delay, max_delay=max(30.0, delay), sleep=sleep)
    raise ValueError(f"Unsupported pacing {name!r}; choose 'fixed' or 'adaptive'")

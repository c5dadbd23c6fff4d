"""Session-wide usage accounting."""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from .errors import QuotaExceeded
from .models import QuotaState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Admitted:
    units: int


@dataclass(frozen=True)
class Rejected:
    remaining: int


class Charge:
    """Handle for committing completed work inside a quota transaction."""

    def __init__(self, guard: "QuotaGuard", units: int):
        self._guard = guard
        self.units = units
        self.committed = 0

    def commit(self, units: int) -> None:
        if units < 0 or self.committed + units > self.units:
            raise ValueError(f"cannot commit {units} unit(s); {self.units - self.committed} admitted")
        self._guard._settle(units, charged=True)
        self.committed += units


class QuotaGuard:
    """Counts analyses against a fixed per-session limit.

    ``admit`` never changes the counter; ``commit`` charges completed work.
    ``transaction`` reserves units up front and settles them on exit, so
    concurrent callers cannot jointly pass the limit while their requests
    run in parallel.
    """

    def __init__(self, limit: int, used: int = 0):
        if limit < 0 or used < 0 or used > limit:
            raise ValueError(f"invalid quota state used={used} limit={limit}")
        self.limit = limit
        self._used = used
        self._reserved = 0
        self._lock = threading.Lock()

    @property
    def used(self) -> int:
        return self._used

    @property
    def reserved(self) -> int:
        return self._reserved

    @property
    def state(self) -> QuotaState:
        return QuotaState(used=self._used, limit=self.limit)

    def _check(self, units: int) -> Union[Admitted, Rejected]:
        if units < 0:
            raise ValueError("units must be non-negative")
        available = self.limit - self._used - self._reserved
        if units > available:
            return Rejected(remaining=available)
        return Admitted(units=units)

    def _settle(self, units: int, charged: bool) -> None:
        with self._lock:
            self._reserved -= units
            if charged:
                self._used += units
                logger.debug(f"Quota usage {self._used}/{self.limit}")

    def admit(self, units: int) -> Union[Admitted, Rejected]:
        with self._lock:
            return self._check(units)

    def commit(self, units: int) -> None:
        with self._lock:
            if isinstance(self._check(units), Rejected):
                raise QuotaExceeded(self.limit - self._used - self._reserved)
            self._used += units
            logger.debug(f"Quota usage {self._used}/{self.limit}")

    @contextmanager
    def transaction(self, units: int, message: Optional[str] = None) -> Iterator[Charge]:
        """Reserve ``units``; on exit, release whatever the caller did not commit."""
        with self._lock:
            decision = self._check(units)
            if isinstance(decision, Rejected):
                logger.info(f"Quota rejected {units} unit(s); {decision.remaining} remaining")
                raise QuotaExceeded(decision.remaining, message)
            self._reserved += units
        charge = Charge(self, units)
        try:
            yield charge
        finally:
            self._settle(charge.units - charge.committed, charged=False)

# cartsuite/core/readiness.py
from __future__ import annotations

"""Readiness polling
-------------------
A predicate is polled until it holds or a timeout elapses. The poll itself is
a small state machine (PENDING -> SATISFIED | TIMED_OUT) that only needs a
clock; the sync and async drivers decide how to sleep between steps, so the
same logic runs against a live page or a fake clock in tests.
"""

import asyncio
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

from playwright.sync_api import Error as PlaywrightError, Locator, Page
from playwright.sync_api import TimeoutError as PWTimeoutError

from cartsuite.core.errors import ReadinessTimeout
from cartsuite.locators.candidates import Candidates, Scope, resolve_locator
from cartsuite.utils.logger import get_logger
from cartsuite.utils.timing import async_sleep_ms, now_ms, sleep_ms

log = get_logger(__name__)

DEFAULT_INTERVAL_MS = 500

Predicate = Callable[[], Any]
Clock = Callable[[], int]


class PollState(str, Enum):
    PENDING = "pending"
    SATISFIED = "satisfied"
    TIMED_OUT = "timed_out"


class ReadinessPoll:
    """
    One polling session. Call `step()` to evaluate the predicate once;
    between steps the driver should wait `next_delay_ms()`.
    """

    def __init__(
        self,
        predicate: Predicate,
        timeout_ms: int,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        description: str = "",
        clock: Clock = now_ms,
    ) -> None:
        self.predicate = predicate
        self.timeout_ms = max(0, timeout_ms)
        self.interval_ms = max(1, interval_ms)
        self.description = description
        self.clock = clock
        self.state = PollState.PENDING
        self.started_ms: Optional[int] = None
        self.checks = 0
        self.value: Any = None
        self.last_error: Optional[BaseException] = None

    def start(self) -> "ReadinessPoll":
        if self.started_ms is None:
            self.started_ms = self.clock()
        return self

    @property
    def elapsed_ms(self) -> int:
        if self.started_ms is None:
            return 0
        return max(0, self.clock() - self.started_ms)

    def observe(self, result: Any) -> PollState:
        """Record one predicate outcome and advance the state."""
        if self.state is not PollState.PENDING:
            return self.state
        self.start()
        self.checks += 1
        if result:
            self.value = result
            self.state = PollState.SATISFIED
        elif self.elapsed_ms >= self.timeout_ms:
            self.state = PollState.TIMED_OUT
        return self.state

    def step(self) -> PollState:
        if self.state is not PollState.PENDING:
            return self.state
        self.start()
        try:
            result = self.predicate()
        except PlaywrightError as e:
            # detached/navigating DOM: treat as "not yet"
            self.last_error = e
            result = False
        return self.observe(result)

    def next_delay_ms(self) -> int:
        remaining = self.timeout_ms - self.elapsed_ms
        return max(1, min(self.interval_ms, remaining))

    def timeout_error(self) -> ReadinessTimeout:
        return ReadinessTimeout(self.description, self.elapsed_ms, self.timeout_ms, self.last_error)


def poll_until(
    predicate: Predicate,
    timeout_ms: int,
    interval_ms: int = DEFAULT_INTERVAL_MS,
    description: str = "",
    *,
    clock: Clock = now_ms,
    sleep: Callable[[int], None] = sleep_ms,
) -> Any:
    """
    Check `predicate()` immediately, then every `interval_ms` until it returns
    a truthy value (returned) or `timeout_ms` elapses.

    Raises:
        ReadinessTimeout with elapsed and configured timeout.
    """
    poll = ReadinessPoll(predicate, timeout_ms, interval_ms, description, clock).start()
    while poll.step() is PollState.PENDING:
        sleep(poll.next_delay_ms())
    if poll.state is PollState.TIMED_OUT:
        raise poll.timeout_error()
    log.debug(f"Ready after {poll.elapsed_ms} ms ({poll.checks} checks){' - ' + description if description else ''}")
    return poll.value


async def async_poll_until(
    predicate: Callable[[], Union[Any, Awaitable[Any]]],
    timeout_ms: int,
    interval_ms: int = DEFAULT_INTERVAL_MS,
    description: str = "",
    *,
    clock: Clock = now_ms,
    sleep: Callable[[int], Awaitable[None]] = async_sleep_ms,
) -> Any:
    """Async variant of poll_until(). `predicate` may be sync or async."""
    poll = ReadinessPoll(predicate, timeout_ms, interval_ms, description, clock).start()
    while True:
        try:
            result = predicate()
            if asyncio.iscoroutine(result):
                result = await result
        except PlaywrightError as e:
            poll.last_error = e
            result = False
        if poll.observe(result) is not PollState.PENDING:
            break
        await sleep(poll.next_delay_ms())
    if poll.state is PollState.TIMED_OUT:
        raise poll.timeout_error()
    return poll.value


# ---------------- Composite predicates ----------------

def any_visible(scope: Scope, *candidate_sets: Candidates) -> Callable[[], bool]:
    """True once any selector of any set has a visible first match."""

    def _check() -> bool:
        for cands in candidate_sets:
            for sel in cands.selectors:
                if resolve_locator(scope, sel).first.is_visible():
                    return True
        return False

    return _check


def all_hidden(locator: Locator) -> Callable[[], bool]:
    """True once no element matched by `locator` is visible (or none exist)."""

    def _check() -> bool:
        return not any(locator.nth(i).is_visible() for i in range(locator.count()))

    return _check


def url_contains(page: Page, *fragments: str) -> Callable[[], bool]:
    wanted = [f.lower() for f in fragments]

    def _check() -> bool:
        url = (page.url or "").lower()
        return any(f in url for f in wanted)

    return _check


def settle_network(page: Page, timeout_ms: int) -> bool:
    """
    Best-effort `networkidle`. Storefronts with analytics beacons often never go
    idle, so a timeout is logged and reported as False rather than raised.
    """
    try:
        page.wait_for_load_state("networkidle", timeout=timeout_ms)
        return True
    except PWTimeoutError:
        log.debug(f"networkidle not reached within {timeout_ms} ms; continuing")
        return False


__all__ = [
    "PollState",
    "ReadinessPoll",
    "poll_until",
    "async_poll_until",
    "any_visible",
    "all_hidden",
    "url_contains",
    "settle_network",
]

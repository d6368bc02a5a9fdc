# cartsuite/core/navigation.py
from __future__ import annotations

"""Multi-route navigation
------------------------
Reach a destination by trying alternative routes in order (click the menu
link, then the generic link, then load the URL directly...). Each route is
confirmed with a readiness poll; a route that raises or never becomes ready
hands over to the next one.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from cartsuite.core.errors import AssertionFailed, NavigationExhausted
from cartsuite.core.readiness import DEFAULT_INTERVAL_MS, poll_until
from cartsuite.utils.logger import get_logger
from cartsuite.utils.timing import Stopwatch, now_ms, sleep_ms

log = get_logger(__name__)


@dataclass(frozen=True)
class Route:
    name: str
    go: Callable[[], Any]


@dataclass
class NavigationResult:
    destination: str
    route: str
    elapsed_ms: int
    failures: List[Tuple[str, str]] = field(default_factory=list)


def navigate(
    destination: str,
    routes: Sequence[Route],
    ready: Callable[[], Any],
    *,
    timeout_ms: int,
    interval_ms: int = DEFAULT_INTERVAL_MS,
    clock: Callable[[], int] = now_ms,
    sleep: Callable[[int], None] = sleep_ms,
) -> NavigationResult:
    """
    Try `routes` in order until one is followed by `ready()` within `timeout_ms`.

    Raises:
        NavigationExhausted naming every route and why it failed.
        AssertionFailed is propagated as-is (never treated as a route failure).
    """
    if not routes:
        raise NavigationExhausted(destination, [])

    failures: List[Tuple[str, str]] = []
    for route in routes:
        with Stopwatch(clock=clock) as sw:
            try:
                route.go()
                poll_until(ready, timeout_ms, interval_ms, f"{destination} ready", clock=clock, sleep=sleep)
            except AssertionFailed:
                raise
            except Exception as e:
                reason = f"{e.__class__.__name__}: {e}".splitlines()[0]
                failures.append((route.name, reason))
                log.info(f"Route '{route.name}' to {destination} failed ({reason}); trying next")
                continue
        log.info(f"✓ Reached {destination} via '{route.name}' in {sw.elapsed_ms()} ms")
        return NavigationResult(destination, route.name, sw.elapsed_ms(), failures)

    raise NavigationExhausted(destination, failures)


def goto_route(page, path: str, *, timeout_ms: int, name: Optional[str] = None) -> Route:
    """Route that loads `path` (relative to the context base_url) directly."""
    return Route(
        name or f"goto {path}",
        lambda: page.goto(path, wait_until="domcontentloaded", timeout=timeout_ms),
    )


__all__ = ["Route", "NavigationResult", "navigate", "goto_route"]

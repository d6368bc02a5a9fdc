# cartsuite/core/errors.py
from __future__ import annotations

"""Error taxonomy
----------------
Every failure raised by the resilient action layer carries its diagnostics as
attributes and renders them in ``str()`` so a failing test report shows what
was tried and for how long.
"""

from typing import TYPE_CHECKING, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from cartsuite.locators.strategy import Attempt


class CartSuiteError(RuntimeError):
    pass


class NoCandidateMatched(CartSuiteError):
    """None of the candidate selectors produced a visible element."""

    def __init__(self, label: str, attempts: Sequence["Attempt"]):
        self.label = label
        self.attempts = tuple(attempts)
        lines = [f"[{a.index}] {a.selector.strategy.value}:{a.selector.value} -> {a.reason}" for a in self.attempts]
        super().__init__(
            f"No candidate matched for {label or '<unnamed>'}. Tried:\n  " + "\n  ".join(lines or ["<none>"])
        )

    @property
    def selectors(self) -> Tuple[str, ...]:
        return tuple(a.selector.value for a in self.attempts)


class ElementNotInteractable(CartSuiteError):
    def __init__(self, target: str, timeout_ms: int, detail: str = ""):
        self.target = target
        self.timeout_ms = timeout_ms
        msg = f"{target} not visible+enabled within {timeout_ms} ms"
        super().__init__(f"{msg}: {detail}" if detail else msg)


class ReadinessTimeout(CartSuiteError):
    def __init__(self, description: str, elapsed_ms: int, timeout_ms: int, last_error: Optional[BaseException] = None):
        self.description = description
        self.elapsed_ms = elapsed_ms
        self.timeout_ms = timeout_ms
        self.last_error = last_error
        msg = f"{description or 'condition'} not satisfied after {elapsed_ms} ms (timeout {timeout_ms} ms)"
        if last_error is not None:
            msg += f"; last error: {last_error!r}"
        super().__init__(msg)


class NavigationExhausted(CartSuiteError):
    def __init__(self, destination: str, failures: Sequence[Tuple[str, str]]):
        self.destination = destination
        self.failures = tuple(failures)
        lines = [f"{name}: {reason}" for name, reason in self.failures]
        super().__init__(
            f"Could not reach {destination} by any route. Tried:\n  " + "\n  ".join(lines or ["<none>"])
        )

    @property
    def routes(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.failures)


class AssertionFailed(CartSuiteError, AssertionError):
    """Business-rule mismatch (wrong count, wrong price, cart not empty...)."""


def ensure(condition: bool, message: str) -> None:
    if not condition:
        raise AssertionFailed(message)


__all__ = [
    "CartSuiteError",
    "NoCandidateMatched",
    "ElementNotInteractable",
    "ReadinessTimeout",
    "NavigationExhausted",
    "AssertionFailed",
    "ensure",
]

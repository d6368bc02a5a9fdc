# cartsuite/locators/strategy.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from playwright.sync_api import Error as PlaywrightError, Locator, Page
from playwright.sync_api import TimeoutError as PWTimeoutError

from cartsuite.core.errors import ElementNotInteractable, NoCandidateMatched, ReadinessTimeout
from cartsuite.core.readiness import poll_until
from cartsuite.locators.candidates import Candidates, Scope, Selector, resolve_locator
from cartsuite.utils.config import Settings, get_settings
from cartsuite.utils.logger import get_logger
from cartsuite.utils.timing import now_ms, sleep_ms

log = get_logger(__name__)


@dataclass(frozen=True)
class Attempt:
    index: int
    selector: Selector
    ok: bool
    reason: str = ""


@dataclass
class ActionResult:
    ok: bool
    candidates: Candidates
    attempts: List[Attempt] = field(default_factory=list)
    selector: Optional[Selector] = None
    index: int = -1
    locator: Optional[Locator] = None
    value: Any = None

    def error(self) -> NoCandidateMatched:
        return NoCandidateMatched(self.candidates.describe(), self.attempts)


class LocatorStrategy:
    """
    Multi-selector fallback:
      - Try candidates in order, each with its own short visibility probe
      - The first visible match wins; later candidates are never probed
      - Exhaustion raises NoCandidateMatched with every attempt, unless the
        candidate set is optional (then the caller gets a default)
      - Mutating actions are guarded by a visible+enabled pre-check
    """

    def __init__(
        self,
        page: Page,
        settings: Optional[Settings] = None,
        *,
        clock: Callable[[], int] = now_ms,
        sleep: Callable[[int], None] = sleep_ms,
    ) -> None:
        self.page = page
        self.settings = settings or get_settings()
        self.clock = clock
        self.sleep = sleep

    # ---------- Resolution ----------

    def try_resolve(
        self,
        candidates: Candidates,
        *,
        scope: Optional[Scope] = None,
        probe_timeout_ms: Optional[int] = None,
    ) -> ActionResult:
        root = scope if scope is not None else self.page
        default_probe = self.settings.PROBE_TIMEOUT if probe_timeout_ms is None else probe_timeout_ms
        result = ActionResult(ok=False, candidates=candidates)

        for idx, sel in enumerate(candidates.selectors):
            probe = sel.probe_timeout_ms if sel.probe_timeout_ms is not None else default_probe
            loc = resolve_locator(root, sel).first
            try:
                loc.wait_for(state="visible", timeout=probe)
            except PWTimeoutError:
                result.attempts.append(Attempt(idx, sel, False, f"not visible within {probe} ms"))
                continue
            except PlaywrightError as e:
                result.attempts.append(Attempt(idx, sel, False, f"error: {e.message}"))
                continue

            result.attempts.append(Attempt(idx, sel, True, "visible"))
            result.ok = True
            result.selector = sel
            result.index = idx
            result.locator = loc
            if idx > 0:
                log.debug(f"{candidates.describe()}: matched fallback [{idx}] {sel}")
            return result

        return result

    def resolve(
        self,
        candidates: Candidates,
        *,
        scope: Optional[Scope] = None,
        probe_timeout_ms: Optional[int] = None,
    ) -> ActionResult:
        """First visible candidate, or NoCandidateMatched listing every attempt."""
        result = self.try_resolve(candidates, scope=scope, probe_timeout_ms=probe_timeout_ms)
        if not result.ok:
            raise result.error()
        return result

    def collection(self, candidates: Candidates, *, scope: Optional[Scope] = None) -> Locator:
        """
        All elements of the first candidate that matches anything (no waiting).
        Falls back to the first candidate's (empty) locator.
        """
        root = scope if scope is not None else self.page
        for sel in candidates.selectors:
            loc = resolve_locator(root, sel)
            if loc.count() > 0:
                return loc
        return resolve_locator(root, candidates.selectors[0])

    def is_visible(self, candidates: Candidates, *, scope: Optional[Scope] = None, probe_timeout_ms: Optional[int] = None) -> bool:
        return self.try_resolve(candidates, scope=scope, probe_timeout_ms=probe_timeout_ms).ok

    # ---------- Reads ----------

    def read_text(
        self,
        candidates: Candidates,
        *,
        scope: Optional[Scope] = None,
        default: str = "",
        accept: Optional[Callable[[str], bool]] = None,
        probe_timeout_ms: Optional[int] = None,
    ) -> str:
        """
        Stripped text of the first visible candidate whose text is non-empty
        and passes `accept`. Optional candidate sets return `default` (with a
        warning) when nothing qualifies.
        """
        attempts: List[Attempt] = []
        for idx, sel in enumerate(candidates.selectors):
            single = Candidates(selectors=(sel,), label=candidates.label)
            result = self.try_resolve(single, scope=scope, probe_timeout_ms=probe_timeout_ms)
            if not result.ok:
                attempts.extend(Attempt(idx, a.selector, False, a.reason) for a in result.attempts)
                continue
            text = (result.locator.text_content() or "").strip()
            if text and (accept is None or accept(text)):
                return text
            attempts.append(Attempt(idx, sel, False, f"text rejected: {text!r}"))
        if candidates.required:
            raise NoCandidateMatched(candidates.describe(), attempts)
        log.warning(f"Optional element not found: {candidates.describe()}; using {default!r}")
        return default

    def read_attribute(
        self,
        candidates: Candidates,
        name: str,
        *,
        scope: Optional[Scope] = None,
        default: str = "",
    ) -> str:
        result = self.try_resolve(candidates, scope=scope)
        if result.ok:
            return result.locator.get_attribute(name) or default
        if candidates.required:
            raise result.error()
        log.warning(f"Optional element not found: {candidates.describe()}; using {default!r}")
        return default

    # ---------- Guarded interaction ----------

    def ensure_interactable(self, locator: Locator, *, target: str = "element", timeout_ms: Optional[int] = None) -> Locator:
        timeout = self.settings.GUARD_TIMEOUT if timeout_ms is None else timeout_ms
        try:
            poll_until(
                lambda: locator.is_visible() and locator.is_enabled(),
                timeout,
                self.settings.GUARD_POLL_INTERVAL,
                f"{target} visible+enabled",
                clock=self.clock,
                sleep=self.sleep,
            )
        except ReadinessTimeout as e:
            raise ElementNotInteractable(target, timeout, str(e)) from e
        return locator

    def _guarded(self, candidates: Candidates, scope: Optional[Scope], op: Callable[[Locator], Any]) -> ActionResult:
        result = self.resolve(candidates, scope=scope)
        self.ensure_interactable(result.locator, target=candidates.describe())
        result.value = op(result.locator)
        return result

    def click(self, candidates: Candidates, *, scope: Optional[Scope] = None) -> ActionResult:
        return self._guarded(candidates, scope, lambda loc: loc.click(timeout=self.settings.ACTION_TIMEOUT))

    def fill(self, candidates: Candidates, text: str, *, scope: Optional[Scope] = None) -> ActionResult:
        return self._guarded(candidates, scope, lambda loc: loc.fill(text, timeout=self.settings.ACTION_TIMEOUT))

    def select_option(
        self,
        candidates: Candidates,
        *,
        value: Optional[str] = None,
        label: Optional[str] = None,
        index: Optional[int] = None,
        scope: Optional[Scope] = None,
    ) -> ActionResult:
        opts = {k: v for k, v in {"value": value, "label": label, "index": index}.items() if v is not None}
        return self._guarded(
            candidates, scope, lambda loc: loc.select_option(**opts, timeout=self.settings.ACTION_TIMEOUT)
        )


__all__ = ["Attempt", "ActionResult", "LocatorStrategy"]

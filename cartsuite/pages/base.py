# cartsuite/pages/base.py
from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from playwright.sync_api import Page

from cartsuite.capture.screenshot import ScreenshotManager
from cartsuite.core.navigation import NavigationResult, Route, navigate
from cartsuite.core.readiness import poll_until
from cartsuite.locators.strategy import LocatorStrategy
from cartsuite.utils.config import Settings, get_settings
from cartsuite.utils.logger import page_logger


class BasePage:
    """Shared plumbing: settings, fallback strategy, readiness waits, screenshots."""

    name = "page"

    def __init__(
        self,
        page: Page,
        *,
        settings: Optional[Settings] = None,
        strategy: Optional[LocatorStrategy] = None,
    ) -> None:
        self.page = page
        self.settings = settings or (strategy.settings if strategy else get_settings())
        self.strategy = strategy or LocatorStrategy(page, self.settings)
        self.log = page_logger(self.name)

    # ---------- Waits ----------

    def wait_ready(self, predicate: Callable[[], Any], description: str, timeout_ms: Optional[int] = None) -> Any:
        return poll_until(
            predicate,
            self.settings.READY_TIMEOUT if timeout_ms is None else timeout_ms,
            self.settings.POLL_INTERVAL,
            description,
            clock=self.strategy.clock,
            sleep=self.strategy.sleep,
        )

    def wait_dom_loaded(self) -> None:
        self.page.wait_for_load_state("domcontentloaded", timeout=self.settings.NAVIGATION_TIMEOUT)

    def navigate(self, destination: str, routes: Sequence[Route], ready: Callable[[], Any]) -> NavigationResult:
        return navigate(
            destination,
            routes,
            ready,
            timeout_ms=self.settings.READY_TIMEOUT,
            interval_ms=self.settings.POLL_INTERVAL,
            clock=self.strategy.clock,
            sleep=self.strategy.sleep,
        )

    # ---------- Evidence ----------

    def screenshot(self, name: str, full_page: Optional[bool] = None) -> bytes:
        """PNG bytes of the current page; also kept under ARTIFACTS_DIR/screenshots."""
        shots = ScreenshotManager(self.settings.ARTIFACTS_DIR / "screenshots", settings=self.settings)
        return shots.page(self.page, name=name, full_page=full_page).data

    @property
    def url(self) -> str:
        return self.page.url or ""

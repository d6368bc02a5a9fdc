# cartsuite/core/session.py
from __future__ import annotations

"""Browser session lifecycle
---------------------------
One browser per process (or pytest session) and one fresh context per test,
so concurrent tests never share cookies, cart state or storage.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from playwright.sync_api import Browser, Page, sync_playwright

from cartsuite.utils.config import Settings, get_settings
from cartsuite.utils.logger import get_logger

log = get_logger(__name__)


@contextmanager
def browser_session(settings: Optional[Settings] = None) -> Iterator[Browser]:
    s = settings or get_settings()
    with sync_playwright() as p:
        browser_type = getattr(p, s.BROWSER_TYPE.value)
        browser = browser_type.launch(**s.playwright_launch_kwargs())
        log.debug(f"Launched {s.BROWSER_TYPE.value} (headless={s.HEADLESS})")
        try:
            yield browser
        finally:
            browser.close()


@contextmanager
def page_session(browser: Browser, settings: Optional[Settings] = None, *, base_url: Optional[str] = None) -> Iterator[Page]:
    """Isolated context + page; timeouts come from settings."""
    s = settings or get_settings()
    context = browser.new_context(**s.playwright_context_kwargs(base_url=base_url))
    context.set_default_timeout(s.ACTION_TIMEOUT)
    context.set_default_navigation_timeout(s.NAVIGATION_TIMEOUT)
    try:
        yield context.new_page()
    finally:
        context.close()


__all__ = ["browser_session", "page_session"]

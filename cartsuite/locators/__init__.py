"""
Locators package
----------------
Ordered selector candidates and the fallback strategy that resolves them
against a Playwright page or locator.
Lightweight package init to avoid import cycles with cartsuite.core.readiness.

Consumers should import submodules directly, e.g.:
  from cartsuite.locators.candidates import Candidates
  from cartsuite.locators.strategy import LocatorStrategy
"""

__all__: list[str] = []

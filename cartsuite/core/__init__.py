"""
Core package for the cart suite.
Error taxonomy, readiness polling, price normalization, navigation,
the site catalog loader and the browser session lifecycle.

Consumers should import submodules directly, e.g.:
  from cartsuite.core.readiness import poll_until
  from cartsuite.core.prices import normalize_price
"""

__all__: list[str] = []

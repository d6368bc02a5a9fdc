"""
cartsuite
---------
Page objects and a resilient action layer for end-to-end shopping-cart tests
driven by Playwright.
"""

__version__ = "0.1.0"

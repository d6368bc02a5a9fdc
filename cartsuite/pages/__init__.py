"""
Page objects for the storefront under test.
Each takes a Playwright page plus its selector set; `from_catalog` wires both
from a loaded site catalog.
"""

from .base import BasePage
from .cart import CartPage
from .category import CategoryPage
from .home import HomePage
from .models import AddToCartResponse, CartItem, CartState, Product
from .product import ProductPage

__all__ = [
    "BasePage",
    "HomePage",
    "CategoryPage",
    "ProductPage",
    "CartPage",
    "Product",
    "CartItem",
    "CartState",
    "AddToCartResponse",
]

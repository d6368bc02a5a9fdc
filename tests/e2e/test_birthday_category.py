"""Scenario 2: "Cumpleaños" category, add one product then empty the cart."""

import pytest

from cartsuite.core.prices import normalize_price

pytestmark = pytest.mark.e2e

CATEGORY = "cumpleanos"


def test_navigate_and_validate_listing(home, category, catalog):
    home.go_to_category(CATEGORY)
    category.wait_until_loaded()
    category.validate_title(catalog.categories[CATEGORY].title)
    category.validate_products_available()


def test_add_product_updates_cart_indicator(home, category, product, cart):
    home.go_to_category(CATEGORY)
    category.wait_until_loaded()
    chosen = category.select_product(0)

    category.open_product(0)
    product.wait_until_loaded()
    assert chosen.name.lower() in product.details().name.lower()
    product.add_to_cart()
    product.validate_product_added()

    # themes without a header badge report 0; the notice then has to confirm it
    if cart.counter() == 0:
        cart.validate_success_message(chosen.name)


def test_remove_sole_product_empties_cart(home, category, product, cart):
    home.go_to_category(CATEGORY)
    category.wait_until_loaded()
    chosen = category.select_product(0)
    category.open_product(0)
    product.wait_until_loaded()
    product.add_to_cart()
    product.validate_product_added()

    cart.open()
    cart.validate_not_empty()
    cart.validate_item(chosen.name, chosen.price)
    assert cart.item_count() == 1
    cart.screenshot("birthday-cart-before-remove")

    assert cart.remove_product(chosen.name) == 0
    cart.validate_empty()
    assert cart.is_empty()
    assert normalize_price(cart.strategy.read_text(cart.selectors.total.optional(), default="0")) == 0
    cart.screenshot("birthday-cart-after-remove")


def test_initially_empty_cart(cart):
    cart.open()
    assert cart.item_count() == 0
    cart.validate_empty()
    assert cart.empty_message()

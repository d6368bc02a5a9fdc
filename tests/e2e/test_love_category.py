"""Scenario 1: "Amor" category, two products, cart subtotal."""

import pytest

from cartsuite.core.prices import normalize_price

pytestmark = pytest.mark.e2e

CATEGORY = "amor"


def test_navigate_and_validate_listing(home, category, catalog):
    home.go_to_category(CATEGORY)
    category.wait_until_loaded()
    category.validate_title(catalog.categories[CATEGORY].title)
    assert category.validate_products_available() > 0
    category.screenshot("amor-category-loaded")


def test_add_first_product_with_network_validation(home, category, product):
    home.go_to_category(CATEGORY)
    category.wait_until_loaded()
    first = category.select_product(0)

    category.open_product(0)
    product.wait_until_loaded()
    assert first.name.lower() in product.details().name.lower()

    response = product.add_to_cart_with_network_validation()
    assert 200 <= response.status < 300
    product.validate_product_added()
    product.screenshot("amor-first-product-added")


def test_add_second_product(home, category, product):
    home.go_to_category(CATEGORY)
    category.wait_until_loaded()
    second = category.select_product(1)

    category.open_product(1)
    product.wait_until_loaded()
    assert second.name.lower() in product.details().name.lower()
    product.add_to_cart()
    product.validate_product_added()


def test_cart_holds_two_products_with_matching_subtotal(page, home, category, product, cart):
    home.go_to_category(CATEGORY)
    category.wait_until_loaded()
    first, second = category.select_two_distinct()

    for index in (0, 1):
        if index:
            page.go_back()
            category.wait_until_loaded()
        category.open_product(index)
        product.wait_until_loaded()
        product.add_to_cart()
        product.validate_product_added()

    cart.open()
    assert cart.item_count() == 2
    cart.validate_item(first.name, first.price)
    cart.validate_item(second.name, second.price)
    subtotal = cart.validate_subtotal([first.price, second.price])
    assert subtotal == normalize_price(first.price) + normalize_price(second.price)
    cart.log_state()
    cart.screenshot("amor-cart-two-products")

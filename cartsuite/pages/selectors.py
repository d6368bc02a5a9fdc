# cartsuite/pages/selectors.py
from __future__ import annotations

"""Page selector sets
--------------------
Each page object receives one of these models through its constructor.
Defaults target stock WooCommerce markup; a site catalog can override any
field. Every field is an ordered candidate list, most specific first.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cartsuite.locators.candidates import Candidates


def _c(*values: str, label: str, required: bool = True):
    return Field(default_factory=lambda: Candidates.of(*values, label=label, required=required))


class _Selectors(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _merge_onto_defaults(cls, data: Any) -> Any:
        """
        An override replaces the candidate list only. Its label and
        optional flag come from the field default unless the catalog
        spells them out in the mapping form.
        """
        if not isinstance(data, dict):
            return data
        merged = dict(data)
        for name, value in data.items():
            field = cls.model_fields.get(name)
            if field is None or isinstance(value, Candidates):
                continue
            default: Candidates = field.get_default(call_default_factory=True)
            if isinstance(value, dict) and "selectors" in value:
                entry = dict(value)
            else:
                entry = {"selectors": value}
            entry.setdefault("label", default.label)
            entry.setdefault("required", default.required)
            merged[name] = entry
        return merged


class HomeSelectors(_Selectors):
    menu: Candidates = _c("ul#primary-menu", "#primary-menu", "nav ul", label="main menu")
    menu_links: Candidates = _c("ul#primary-menu a", "nav ul a", label="main menu links")
    logo: Candidates = _c(".logo img", ".site-logo img", ".custom-logo", label="logo", required=False)
    cart_icon: Candidates = _c(".mini-cart", ".cart-icon", ".woocommerce-mini-cart", label="cart icon")
    cart_counter: Candidates = _c(".mini-cart-items", ".cart-contents-count", label="cart counter", required=False)


class CategorySelectors(_Selectors):
    title: Candidates = _c("h1.page-title", "h1.woocommerce-products-header__title", "h1", label="category title")
    grid: Candidates = _c(".products", "ul.products", ".woocommerce-products-wrapper", label="product grid")
    empty_state: Candidates = _c(".woocommerce-info", label="no products notice")
    items: Candidates = _c(".product", "li.product", ".type-product", ".grid.product.type-product", label="product cards")
    item_name: Candidates = _c(
        "h2.woocommerce-loop-product__title",
        "h3.name a",
        ".product-title",
        'a[href*="/product/"]',
        label="product name",
        required=False,
    )
    item_price: Candidates = _c(
        ".price .woocommerce-Price-amount",
        ".woocommerce-Price-amount",
        ".price bdi",
        label="product price",
        required=False,
    )
    item_link: Candidates = _c(
        ".woocommerce-loop-product__link",
        ".product-image a",
        'a[href*="/product/"]',
        "h2.woocommerce-loop-product__title a",
        ".product-image",
        label="product link",
    )
    item_image: Candidates = _c("img", label="product image", required=False)
    pagination: Candidates = _c(".woocommerce-pagination", ".tbay-pagination", label="pagination", required=False)
    current_page: Candidates = _c(".page-numbers.current", label="current page", required=False)
    result_count: Candidates = _c(".woocommerce-result-count", label="result count", required=False)
    ordering: Candidates = _c('.woocommerce-ordering select[name="orderby"]', label="ordering select")


class ProductSelectors(_Selectors):
    title: Candidates = _c("h1.product_title.entry-title", "h1.product_title", ".product-title h1", label="product title")
    price: Candidates = _c(".summary .price .woocommerce-Price-amount", ".summary .price", label="product price")
    add_button: Candidates = _c(
        "button.single_add_to_cart_button", 'button[name="add-to-cart"]', label="add to cart button"
    )
    quantity: Candidates = _c('.quantity input[type="number"]', label="quantity input", required=False)
    description: Candidates = _c(
        ".woocommerce-product-details__short-description", label="short description", required=False
    )
    image: Candidates = _c(".woocommerce-product-gallery img", label="gallery image", required=False)
    success_notice: Candidates = _c(".woocommerce-message", label="added notice", required=False)
    error_notice: Candidates = _c(".woocommerce-error", '[role="alert"]', label="error notice", required=False)


class CartSelectors(_Selectors):
    table: Candidates = _c(
        ".shop_table.cart.woocommerce-cart-form__contents",
        ".shop_table.cart",
        ".woocommerce-cart-form__contents",
        label="cart table",
    )
    rows: Candidates = _c("tr.cart_item", ".woocommerce-cart-form__cart-item", label="cart rows")
    row_name: Candidates = _c(".product-name a", "td.product-name", label="row name")
    row_price: Candidates = _c(".product-price .woocommerce-Price-amount", ".product-price", label="row price")
    row_quantity: Candidates = _c(".product-quantity input.qty", ".product-quantity input", label="row quantity", required=False)
    row_remove: Candidates = _c(".product-remove a.remove", "a.remove", label="remove link")
    subtotal: Candidates = _c(".cart-subtotal .woocommerce-Price-amount", ".cart-subtotal", label="subtotal")
    total: Candidates = _c(".order-total .woocommerce-Price-amount", ".order-total", label="order total")
    empty_message: Candidates = _c(".cart-empty", ".woocommerce-info", ".wc-empty-cart-message", label="empty cart message")
    update_button: Candidates = _c('[name="update_cart"]', label="update cart button")
    checkout_button: Candidates = _c(".checkout-button", label="checkout button")
    success_message: Candidates = _c(".woocommerce-message", label="cart notice")
    cart_icon: Candidates = _c(".mini-cart", ".cart-icon a", label="mini-cart icon")
    counter: Candidates = _c(
        ".mini-cart-items:not(.cart-mobile)", ".mini-cart-items", ".cart-contents-count", label="cart counter", required=False
    )


__all__ = ["HomeSelectors", "CategorySelectors", "ProductSelectors", "CartSelectors"]

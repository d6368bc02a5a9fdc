from pathlib import Path
import textwrap

import pytest

from cartsuite.core.catalog import SiteCatalog, load_catalog
from cartsuite.locators.candidates import SelectorStrategy
from cartsuite.pages.cart import CartPage

from fakes import FakePage

E2E_CATALOG = Path(__file__).resolve().parents[1] / "e2e" / "catalog" / "mundoflor.yaml"


def write(tmp_path: Path, body: str) -> Path:
    p = tmp_path / "site.yaml"
    p.write_text(textwrap.dedent(body), encoding="utf-8")
    return p


def test_shipped_catalog_is_valid():
    cat = load_catalog(E2E_CATALOG)
    assert cat.name == "mundoflor"
    assert set(cat.categories) == {"amor", "cumpleanos"}
    assert cat.cart_routes == ["/cart/", "/carrito/"]
    assert cat.category_for("Cumpleaños").slug == "cumpleanos"


def test_defaults_are_derived_from_slug(tmp_path: Path):
    p = write(
        tmp_path,
        """
        name: demo
        base_url: https://shop.test
        categories:
          amor:
            title: Amor
            slug: /amor/
        """,
    )
    cat = load_catalog(p)
    amor = cat.categories["amor"]
    assert cat.base_url == "https://shop.test/"
    assert amor.slug == "amor"
    assert amor.path == "/product-category/amor/"
    assert amor.menu_link is None
    assert amor.generic_link.selectors[0].value == 'a[href*="/product-category/amor/"]'
    # untouched selector sets keep their WooCommerce defaults
    assert cat.cart.rows.selectors[0].value == "tr.cart_item"


def test_selector_overrides_accept_strings_lists_and_mappings(tmp_path: Path):
    p = write(
        tmp_path,
        """
        name: demo
        base_url: https://shop.test/
        product:
          title: h1.product_title
          add_button:
            - value: "button|Añadir al carrito"
              strategy: role
            - button.single_add_to_cart_button
        """,
    )
    cat = load_catalog(p)
    assert [s.value for s in cat.product.title.selectors] == ["h1.product_title"]
    add = cat.product.add_button.selectors
    assert add[0].strategy is SelectorStrategy.role
    assert add[1].value == "button.single_add_to_cart_button"


def test_env_placeholders_are_substituted(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("SHOP_URL", "https://staging.shop.test")
    p = write(
        tmp_path,
        """
        name: demo
        base_url: ${SHOP_URL}
        """,
    )
    assert load_catalog(p).base_url == "https://staging.shop.test/"


def test_validation_errors_are_listed_per_field(tmp_path: Path):
    p = write(
        tmp_path,
        """
        name: demo
        base_url: shop.test
        cart_routes: []
        categories:
          amor:
            title: Amor
            slug: "  "
        """,
    )
    with pytest.raises(ValueError) as ei:
        load_catalog(p)
    msg = str(ei.value)
    assert msg.startswith("Invalid catalog")
    assert "base_url" in msg
    assert "cart_routes" in msg
    assert "categories.amor.slug" in msg


def test_unknown_selector_field_is_rejected(tmp_path: Path):
    p = write(
        tmp_path,
        """
        name: demo
        base_url: https://shop.test/
        cart:
          basket: .basket
        """,
    )
    with pytest.raises(ValueError, match="cart.basket"):
        load_catalog(p)


def test_non_mapping_and_bad_yaml(tmp_path: Path):
    with pytest.raises(ValueError, match="mapping"):
        load_catalog(write(tmp_path, "- just\n- a list\n"))
    with pytest.raises(ValueError, match="YAML parse error"):
        load_catalog(write(tmp_path, "name: [unclosed\n"))


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_catalog(tmp_path / "nope.yaml")


def test_unknown_category_lookup():
    cat = SiteCatalog(name="demo", base_url="https://shop.test/")
    with pytest.raises(KeyError):
        cat.category_for("Bodas")


def test_override_keeps_default_label_and_optional_flag(tmp_path: Path):
    p = write(
        tmp_path,
        """
        name: demo
        base_url: https://shop.test/
        cart:
          counter: [.badge]
        category:
          item_price: .amount
        home:
          cart_counter:
            selectors: [.badge]
            label: header badge
        """,
    )
    cat = load_catalog(p)
    assert [s.value for s in cat.cart.counter.selectors] == [".badge"]
    assert cat.cart.counter.required is False
    assert cat.cart.counter.label == "cart counter"
    assert cat.category.item_price.required is False
    assert cat.home.cart_counter.label == "header badge"
    assert cat.home.cart_counter.required is False


def test_mapping_override_can_change_required(tmp_path: Path):
    p = write(
        tmp_path,
        """
        name: demo
        base_url: https://shop.test/
        cart:
          counter:
            selectors: [.badge]
            required: true
          subtotal:
            selectors:
              - value: .cart-subtotal bdi
            required: false
        """,
    )
    cat = load_catalog(p)
    assert cat.cart.counter.required is True
    assert cat.cart.subtotal.required is False
    assert cat.cart.subtotal.label == "subtotal"


def test_overridden_counter_still_reads_zero_when_absent(tmp_path: Path, page_kwargs):
    p = write(
        tmp_path,
        """
        name: demo
        base_url: https://shop.test/
        cart:
          counter: [.badge]
        """,
    )
    page = FakePage()
    cart = CartPage.from_catalog(page, load_catalog(p), **page_kwargs(page))
    assert cart.counter() == 0

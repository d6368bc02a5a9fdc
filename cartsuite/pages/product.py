# cartsuite/pages/product.py
from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from playwright.sync_api import Page, Response

from cartsuite.core.errors import AssertionFailed, ensure
from cartsuite.core.readiness import any_visible, settle_network
from cartsuite.locators.strategy import ActionResult
from cartsuite.pages.base import BasePage
from cartsuite.pages.models import AddToCartResponse, Product
from cartsuite.pages.selectors import ProductSelectors
from cartsuite.utils.timing import measure

if TYPE_CHECKING:
    from cartsuite.core.catalog import SiteCatalog

DEFAULT_ADD_TO_CART_PATTERNS = ("add-to-cart", "wc-ajax=add_to_cart", "admin-ajax.php")


class ProductPage(BasePage):
    name = "product"

    def __init__(
        self,
        page: Page,
        selectors: Optional[ProductSelectors] = None,
        *,
        add_to_cart_patterns: Sequence[str] = DEFAULT_ADD_TO_CART_PATTERNS,
        **kwargs,
    ) -> None:
        super().__init__(page, **kwargs)
        self.selectors = selectors or ProductSelectors()
        self.add_to_cart_patterns = tuple(add_to_cart_patterns)

    @classmethod
    def from_catalog(cls, page: Page, catalog: "SiteCatalog", **kwargs) -> "ProductPage":
        return cls(page, catalog.product, add_to_cart_patterns=catalog.add_to_cart_patterns, **kwargs)

    # ---------- Loading ----------

    def _essentials_visible(self) -> bool:
        s = self.selectors
        return all(any_visible(self.page, c)() for c in (s.title, s.price, s.add_button))

    @measure("product.wait_until_loaded")
    def wait_until_loaded(self, timeout_ms: Optional[int] = None) -> None:
        settle_network(self.page, self.settings.NETWORK_IDLE_TIMEOUT)
        self.wait_ready(self._essentials_visible, "product title, price and add button", timeout_ms)
        ensure(self.is_single_product_page(), f"Not a product page: {self.url}")
        self.log.info("Product page loaded")

    def is_single_product_page(self) -> bool:
        return "/product/" in self.url

    # ---------- Reads ----------

    def details(self) -> Product:
        probe = self.settings.ELEMENT_TIMEOUT
        return Product(
            name=self.strategy.read_text(self.selectors.title, probe_timeout_ms=probe),
            price=self.strategy.read_text(self.selectors.price, probe_timeout_ms=probe),
            description=self.description(),
            image=self.image_src(),
        )

    def description(self) -> str:
        return self.strategy.read_text(self.selectors.description)

    def image_src(self) -> str:
        return self.strategy.read_attribute(self.selectors.image, "src")

    def is_available(self) -> bool:
        """In stock means the add button is there and enabled."""
        res = self.strategy.try_resolve(self.selectors.add_button)
        return res.ok and res.locator.is_enabled()

    # ---------- Actions ----------

    @measure("product.add_to_cart")
    def add_to_cart(self) -> ActionResult:
        result = self.strategy.click(self.selectors.add_button)
        self.log.info("✓ Add to cart clicked")
        return result

    def set_quantity(self, quantity: int) -> None:
        ensure(quantity > 0, f"Quantity must be positive, got {quantity}")
        res = self.strategy.try_resolve(self.selectors.quantity)
        if not res.ok:
            ensure(quantity == 1, "Quantity input not available; only a quantity of 1 can be added")
            return
        self.strategy.ensure_interactable(res.locator, target="quantity input")
        res.locator.fill(str(quantity), timeout=self.settings.ACTION_TIMEOUT)

    def add_to_cart_with_quantity(self, quantity: int) -> ActionResult:
        self.set_quantity(quantity)
        return self.add_to_cart()

    @measure("product.add_to_cart_with_network_validation")
    def add_to_cart_with_network_validation(self, patterns: Optional[Sequence[str]] = None) -> AddToCartResponse:
        """
        Click "add to cart" and wait for the request that actually adds the item.
        WooCommerce answers either with an AJAX fragment or a redirect to the
        product page; both must be 2xx with a body.
        """
        wanted = tuple(patterns) if patterns else self.add_to_cart_patterns

        def matches(response: Response) -> bool:
            return any(p in response.url for p in wanted)

        with self.page.expect_response(matches, timeout=self.settings.NETWORK_TIMEOUT) as info:
            self.add_to_cart()
        response = info.value
        body = response.body()
        ensure(200 <= response.status < 300, f"Add to cart answered {response.status} ({response.url})")
        ensure(len(body) > 0, f"Add to cart answered with an empty body ({response.url})")
        self.log.info(f"✓ Add to cart confirmed by network: {response.status} {response.url}")
        return AddToCartResponse(url=response.url, status=response.status, body_length=len(body))

    # ---------- Validations ----------

    def validate_product_added(self) -> None:
        """
        The "added to cart" notice is not rendered by every theme, so its
        absence only logs. A visible error notice fails.
        """
        if self.strategy.is_visible(self.selectors.error_notice):
            error = self.strategy.read_text(self.selectors.error_notice, default="<no text>")
            raise AssertionFailed(f"Add to cart failed: {error}")
        if self.strategy.is_visible(self.selectors.success_notice):
            self.log.info("✓ Added-to-cart notice shown")
        else:
            self.log.info("No added-to-cart notice; relying on the cart contents")

# cartsuite/pages/cart.py
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

from playwright.sync_api import Locator, Page

from cartsuite.core.errors import AssertionFailed, ReadinessTimeout, ensure
from cartsuite.core.navigation import NavigationResult, Route, goto_route
from cartsuite.core.prices import normalize_price, same_price, sum_prices
from cartsuite.core.readiness import all_hidden, any_visible
from cartsuite.locators.strategy import ActionResult
from cartsuite.pages.base import BasePage
from cartsuite.pages.models import CartItem, CartState
from cartsuite.pages.selectors import CartSelectors
from cartsuite.utils.timing import measure

if TYPE_CHECKING:
    from cartsuite.core.catalog import SiteCatalog

EMPTY_PATTERN = re.compile(r"carrito|vac[íi]o|empty", re.IGNORECASE)
ADDED_PATTERN = re.compile(r"añadido|agregado|added", re.IGNORECASE)

DEFAULT_CART_ROUTES = ("/cart/", "/carrito/")


class CartPage(BasePage):
    """
    WooCommerce cart. Reads are row-scoped (name, price, quantity per row);
    the empty state is the absence of rows plus the "cart is empty" notice.
    """

    name = "cart"

    def __init__(
        self,
        page: Page,
        selectors: Optional[CartSelectors] = None,
        *,
        routes: Sequence[str] = DEFAULT_CART_ROUTES,
        **kwargs,
    ) -> None:
        super().__init__(page, **kwargs)
        self.selectors = selectors or CartSelectors()
        self.routes = tuple(routes)

    @classmethod
    def from_catalog(cls, page: Page, catalog: "SiteCatalog", **kwargs) -> "CartPage":
        return cls(page, catalog.cart, routes=catalog.cart_routes, **kwargs)

    # ---------- Navigation & loading ----------

    def _rendered(self) -> bool:
        return any_visible(self.page, self.selectors.table, self.selectors.empty_message)()

    @measure("cart.open")
    def open(self) -> NavigationResult:
        """Mini-cart icon first, then each configured cart URL."""
        self.log.info("Navigating to cart...")
        routes: List[Route] = [Route("mini-cart icon", lambda: self.strategy.click(self.selectors.cart_icon))]
        routes.extend(goto_route(self.page, path, timeout_ms=self.settings.NAVIGATION_TIMEOUT) for path in self.routes)
        result = self.navigate("cart", routes, self._rendered)
        self._wait_document_complete()
        return result

    def _wait_document_complete(self) -> None:
        self.page.wait_for_function("() => document.readyState === 'complete'", timeout=self.settings.READY_TIMEOUT)

    @measure("cart.wait_until_loaded")
    def wait_until_loaded(self, timeout_ms: Optional[int] = None) -> None:
        self.wait_dom_loaded()
        self.wait_ready(self._rendered, "cart table or empty-cart message", timeout_ms)
        self._wait_document_complete()

    # ---------- Reads ----------

    def _rows(self) -> Locator:
        return self.strategy.collection(self.selectors.rows)

    def item_count(self) -> int:
        return self._rows().count()

    def is_empty(self) -> bool:
        """
        Rows win over the notice: some themes keep a stale "empty" notice
        around after an AJAX add, so any row means not empty.
        """
        if self.item_count() > 0:
            return False
        if not self.strategy.is_visible(self.selectors.empty_message):
            self.log.warning("Cart has no rows and no empty-cart message")
        return True

    def _row_item(self, row: Locator) -> CartItem:
        name = self.strategy.read_text(self.selectors.row_name, scope=row)
        price = self.strategy.read_text(self.selectors.row_price, scope=row)
        qty = self.strategy.try_resolve(self.selectors.row_quantity, scope=row)
        quantity = normalize_price(qty.locator.input_value()) if qty.ok else 1
        return CartItem(name=name, price=price, quantity=quantity or 1)

    def items(self) -> List[CartItem]:
        rows = self._rows()
        return [self._row_item(rows.nth(i)) for i in range(rows.count())]

    def find_row(self, name: str, timeout_ms: Optional[int] = None) -> Locator:
        """Row whose text contains `name` (case-insensitive)."""
        row = self._rows().filter(has_text=re.compile(re.escape(name.strip()), re.IGNORECASE))
        try:
            self.wait_ready(
                lambda: row.count() > 0,
                f"cart row for {name!r}",
                self.settings.ELEMENT_TIMEOUT if timeout_ms is None else timeout_ms,
            )
        except ReadinessTimeout as e:
            present = [item.name for item in self.items()]
            raise AssertionFailed(f"Product {name!r} is not in the cart; rows: {present}") from e
        return row.first

    def subtotal(self) -> str:
        return self.strategy.read_text(self.selectors.subtotal, probe_timeout_ms=self.settings.ELEMENT_TIMEOUT)

    def total(self) -> str:
        return self.strategy.read_text(self.selectors.total, probe_timeout_ms=self.settings.ELEMENT_TIMEOUT)

    def empty_message(self) -> str:
        return self.strategy.read_text(self.selectors.empty_message, probe_timeout_ms=self.settings.ELEMENT_TIMEOUT)

    def counter(self) -> int:
        """Header badge count; themes without one read as 0."""
        return normalize_price(self.strategy.read_text(self.selectors.counter, default="0"))

    def state(self) -> CartState:
        items = self.items()
        if not items:
            msg = self.strategy.read_text(self.selectors.empty_message.optional())
            return CartState(empty=True, empty_message=msg)
        return CartState(
            items=items,
            subtotal=self.subtotal(),
            total=self.strategy.read_text(self.selectors.total.optional()),
            empty=False,
        )

    def log_state(self) -> CartState:
        st = self.state()
        self.log.info(f"Cart: {st.count} item(s), subtotal {st.subtotal or '-'}, total {st.total or '-'}")
        for item in st.items:
            self.log.info(f"  - {item.name} x{item.quantity}: {item.price}")
        return st

    @staticmethod
    def expected_subtotal(prices: Iterable[str]) -> int:
        return sum_prices(prices)

    # ---------- Validations ----------

    def validate_item(self, name: str, price: Optional[str] = None) -> CartItem:
        item = self._row_item(self.find_row(name))
        if price is not None:
            ensure(same_price(item.price, price), f"Price of {name!r} in cart is {item.price!r}, expected {price!r}")
        self.log.info(f"✓ In cart: {item.name} - {item.price}")
        return item

    def validate_subtotal(self, prices: Iterable[str]) -> int:
        prices = list(prices)
        expected = self.expected_subtotal(prices)
        actual = normalize_price(self.subtotal())
        ensure(actual == expected, f"Subtotal {actual} != sum of {prices} ({expected})")
        self.log.info(f"✓ Subtotal {actual} matches")
        return actual

    def validate_empty(self) -> None:
        count = self.item_count()
        ensure(count == 0, f"Cart still has {count} item(s)")
        msg = self.empty_message()
        ensure(bool(EMPTY_PATTERN.search(msg)), f"Unexpected empty-cart message: {msg!r}")
        self.log.info(f"✓ Cart is empty: {msg!r}")

    def validate_not_empty(self) -> None:
        count = self.item_count()
        ensure(count > 0, "Cart has no items")
        ensure(
            self.strategy.is_visible(self.selectors.table, probe_timeout_ms=self.settings.ELEMENT_TIMEOUT),
            "Cart table not visible",
        )
        amount = normalize_price(self.subtotal())
        ensure(amount > 0, f"Cart subtotal is {amount}")

    def validate_success_message(self, name: Optional[str] = None) -> str:
        msg = self.strategy.read_text(self.selectors.success_message, probe_timeout_ms=self.settings.ELEMENT_TIMEOUT)
        if name:
            ensure(name.lower() in msg.lower(), f"Notice {msg!r} does not mention {name!r}")
        ensure(bool(ADDED_PATTERN.search(msg)), f"Notice {msg!r} is not an added-to-cart message")
        return msg

    # ---------- Actions ----------

    @measure("cart.remove_product")
    def remove_product(self, name: str) -> int:
        """Remove the row for `name`; returns the remaining item count."""
        row = self.find_row(name)
        self.strategy.click(self.selectors.row_remove, scope=row)
        matching = self._rows().filter(has_text=re.compile(re.escape(name.strip()), re.IGNORECASE))
        self.wait_ready(all_hidden(matching), f"row for {name!r} removed")
        self.wait_until_loaded()
        remaining = self.item_count()
        self.log.info(f"✓ Removed {name!r}; {remaining} item(s) left")
        return remaining

    def update_quantity(self, name: str, quantity: int) -> CartItem:
        ensure(quantity > 0, f"Quantity must be positive, got {quantity}")
        row = self.find_row(name)
        self.strategy.fill(self.selectors.row_quantity.named(f"quantity of {name}"), str(quantity), scope=row)
        update = self.strategy.try_resolve(self.selectors.update_button)
        if update.ok and update.locator.is_enabled():
            update.locator.click(timeout=self.settings.ACTION_TIMEOUT)
            self.wait_until_loaded()
        return self._row_item(self.find_row(name))

    @measure("cart.proceed_to_checkout")
    def proceed_to_checkout(self) -> ActionResult:
        result = self.strategy.click(self.selectors.checkout_button)
        self.wait_dom_loaded()
        return result

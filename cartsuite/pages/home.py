# cartsuite/pages/home.py
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Union

from playwright.sync_api import Page

from cartsuite.core.errors import NoCandidateMatched, ensure
from cartsuite.core.navigation import NavigationResult, Route, goto_route
from cartsuite.core.prices import normalize_price
from cartsuite.core.readiness import any_visible, settle_network, url_contains
from cartsuite.locators.candidates import Candidates, Selector, SelectorStrategy
from cartsuite.pages.base import BasePage
from cartsuite.pages.selectors import HomeSelectors
from cartsuite.utils.timing import measure

if TYPE_CHECKING:
    from cartsuite.core.catalog import Category, SiteCatalog


class HomePage(BasePage):
    name = "home"

    def __init__(
        self,
        page: Page,
        selectors: Optional[HomeSelectors] = None,
        *,
        categories: Optional[Dict[str, "Category"]] = None,
        menu_items: Sequence[str] = (),
        **kwargs,
    ) -> None:
        super().__init__(page, **kwargs)
        self.selectors = selectors or HomeSelectors()
        self.categories = dict(categories or {})
        self.menu_items = list(menu_items)

    @classmethod
    def from_catalog(cls, page: Page, catalog: "SiteCatalog", **kwargs) -> "HomePage":
        return cls(page, catalog.home, categories=catalog.categories, menu_items=catalog.menu_items, **kwargs)

    # ---------- Navigation ----------

    @measure("home.open")
    def open(self) -> None:
        self.page.goto("/", wait_until="domcontentloaded", timeout=self.settings.NAVIGATION_TIMEOUT)
        self.wait_until_loaded()

    def wait_until_loaded(self) -> None:
        settle_network(self.page, self.settings.NETWORK_IDLE_TIMEOUT)
        self.wait_ready(any_visible(self.page, self.selectors.menu), "main menu visible")
        self.log.info("Home page loaded")

    def _category(self, category: Union[str, "Category"]) -> "Category":
        if not isinstance(category, str):
            return category
        if category in self.categories:
            return self.categories[category]
        wanted = category.strip().lower()
        for cat in self.categories.values():
            if cat.title.lower() == wanted or cat.slug == wanted:
                return cat
        raise KeyError(f"Unknown category {category!r}; known: {sorted(self.categories)}")

    @measure("home.go_to_category")
    def go_to_category(self, category: Union[str, "Category"]) -> NavigationResult:
        """
        Menu link (desktop header) → any link to the category → direct URL.
        Arrival means the URL carries the category slug.
        """
        cat = self._category(category)
        self.log.info(f"Navigating to category {cat.title}...")
        routes: List[Route] = []
        if cat.menu_link is not None:
            routes.append(Route("menu link", lambda: self.strategy.click(cat.menu_link)))
        routes.append(Route("generic link", lambda: self.strategy.click(cat.generic_link)))
        routes.append(goto_route(self.page, cat.path, timeout_ms=self.settings.NAVIGATION_TIMEOUT))

        result = self.navigate(cat.title, routes, url_contains(self.page, f"/{cat.slug}"))
        self.wait_dom_loaded()
        return result

    # ---------- Reads & validations ----------

    def validate_category_link(self, category: Union[str, "Category"]) -> None:
        cat = self._category(category)
        res = self.strategy.resolve(cat.generic_link, probe_timeout_ms=self.settings.ELEMENT_TIMEOUT)
        text = (res.locator.text_content() or "").strip()
        ensure(text == cat.title, f"Category link text {text!r} != {cat.title!r}")
        href = res.locator.get_attribute("href") or ""
        ensure(cat.path in href, f"Category link href {href!r} does not point at {cat.path!r}")

    def validate_menu(self, items: Optional[Sequence[str]] = None) -> None:
        wanted = list(items) if items is not None else self.menu_items
        menu = self.strategy.resolve(self.selectors.menu, probe_timeout_ms=self.settings.ELEMENT_TIMEOUT).locator
        missing = []
        for item in wanted:
            link = Candidates.of(Selector(value=item, strategy=SelectorStrategy.text), label=f"menu item {item}")
            try:
                self.strategy.resolve(link, scope=menu)
            except NoCandidateMatched:
                missing.append(item)
        ensure(not missing, f"Menu items not visible: {missing}")

    def menu_entries(self) -> List[str]:
        links = self.strategy.collection(self.selectors.menu_links)
        return [t.strip() for t in links.all_text_contents() if t.strip()]

    def is_menu_visible(self) -> bool:
        return self.strategy.is_visible(self.selectors.menu)

    def cart_counter(self) -> int:
        """Mini-cart badge; an absent badge reads as 0."""
        return normalize_price(self.strategy.read_text(self.selectors.cart_counter, default="0"))

    def validate_cart_empty(self) -> None:
        count = self.cart_counter()
        ensure(count == 0, f"Mini-cart shows {count} item(s), expected 0")

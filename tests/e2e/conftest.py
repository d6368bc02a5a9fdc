"""Live storefront fixtures: one browser per session, one context per test."""

from pathlib import Path

import pytest

from cartsuite.core.catalog import load_catalog
from cartsuite.core.session import browser_session, page_session
from cartsuite.pages import CartPage, CategoryPage, HomePage, ProductPage
from cartsuite.utils.config import get_settings
from cartsuite.utils.logger import get_logger, scenario_log

DEFAULT_CATALOG = Path(__file__).parent / "catalog" / "mundoflor.yaml"

log = get_logger(__name__)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when != "call" or not report.failed:
        return
    page = item.funcargs.get("page")
    settings = get_settings()
    if page is None or not settings.SCREENSHOT_ON_FAILURE:
        return
    shots = settings.ARTIFACTS_DIR / "failures"
    shots.mkdir(parents=True, exist_ok=True)
    target = shots / f"{item.name}.png"
    page.screenshot(path=str(target), full_page=settings.FULL_PAGE_SCREENSHOT)
    log.error(f"Failure screenshot: {target}")


@pytest.fixture(scope="session")
def settings():
    return get_settings()


@pytest.fixture(scope="session")
def catalog(settings):
    return load_catalog(settings.CATALOG_FILE or DEFAULT_CATALOG)


@pytest.fixture(scope="session")
def browser(settings):
    with browser_session(settings) as b:
        yield b


@pytest.fixture
def page(browser, settings, catalog, request):
    with scenario_log(request.node.name, settings.ARTIFACTS_DIR / "logs"):
        with page_session(browser, settings, base_url=catalog.base_url) as p:
            yield p


@pytest.fixture
def home(page, catalog):
    h = HomePage.from_catalog(page, catalog)
    h.open()
    return h


@pytest.fixture
def category(page, catalog):
    return CategoryPage.from_catalog(page, catalog)


@pytest.fixture
def product(page, catalog):
    return ProductPage.from_catalog(page, catalog)


@pytest.fixture
def cart(page, catalog):
    return CartPage.from_catalog(page, catalog)

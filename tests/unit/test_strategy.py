import pytest

from cartsuite.core.errors import ElementNotInteractable, NoCandidateMatched
from cartsuite.locators.candidates import Candidates, Selector, SelectorStrategy
from cartsuite.locators.strategy import LocatorStrategy
from cartsuite.utils.config import Settings

from fakes import FakeClock, FakeElement, FakePage


@pytest.fixture
def settings():
    return Settings(PROBE_TIMEOUT=50, GUARD_TIMEOUT=300, GUARD_POLL_INTERVAL=100)


@pytest.fixture
def clock():
    return FakeClock()


def make_strategy(page, settings, clock):
    return LocatorStrategy(page, settings, clock=clock, sleep=clock.sleep)


ABC = Candidates.of("#a", "#b", "#c", label="add button")


def test_first_visible_candidate_wins_and_later_ones_are_not_probed(settings, clock):
    page = FakePage({"#b": [FakeElement("B")], "#c": [FakeElement("C")]})
    result = make_strategy(page, settings, clock).resolve(ABC)

    assert result.ok
    assert result.index == 1
    assert result.selector.value == "#b"
    assert page.probes == ["#a", "#b"]
    assert [a.ok for a in result.attempts] == [False, True]


def test_hidden_candidate_is_skipped(settings, clock):
    page = FakePage({"#a": [FakeElement("A", visible=False)], "#c": [FakeElement("C")]})
    result = make_strategy(page, settings, clock).resolve(ABC)
    assert result.selector.value == "#c"


def test_exhaustion_lists_every_candidate(settings, clock):
    page = FakePage()
    with pytest.raises(NoCandidateMatched) as ei:
        make_strategy(page, settings, clock).resolve(ABC)

    err = ei.value
    assert err.selectors == ("#a", "#b", "#c")
    assert err.label == "add button"
    text = str(err)
    for sel in ("#a", "#b", "#c"):
        assert sel in text
    assert "not visible within 50 ms" in text


def test_try_resolve_reports_instead_of_raising(settings, clock):
    result = make_strategy(FakePage(), settings, clock).try_resolve(ABC)
    assert not result.ok
    assert len(result.attempts) == 3
    assert isinstance(result.error(), NoCandidateMatched)


def test_per_selector_probe_timeout_override(settings, clock):
    cands = Candidates.of(Selector(value="#slow", probe_timeout_ms=900), "#fast")
    with pytest.raises(NoCandidateMatched) as ei:
        make_strategy(FakePage(), settings, clock).resolve(cands)
    reasons = [a.reason for a in ei.value.attempts]
    assert reasons == ["not visible within 900 ms", "not visible within 50 ms"]


def test_scoped_resolution_inside_a_row(settings, clock):
    row = FakeElement(children={".product-name a": [FakeElement("Ramo de rosas")]})
    page = FakePage({"tr.cart_item": [row]})
    strategy = make_strategy(page, settings, clock)
    scope = page.locator("tr.cart_item").first
    text = strategy.read_text(Candidates.of(".product-name a", "td.product-name"), scope=scope)
    assert text == "Ramo de rosas"


def test_text_and_role_strategies(settings, clock):
    page = FakePage(
        {
            "text=Amor": [FakeElement("Amor")],
            "role=button[name=Añadir al carrito]": [FakeElement("Añadir al carrito")],
        }
    )
    strategy = make_strategy(page, settings, clock)
    by_text = Candidates.of(Selector(value="Amor", strategy=SelectorStrategy.text))
    by_role = Candidates.of(Selector(value="button|Añadir al carrito", strategy=SelectorStrategy.role))
    assert strategy.resolve(by_text).ok
    assert strategy.resolve(by_role).ok


def test_read_text_skips_empty_and_rejected_text(settings, clock):
    page = FakePage(
        {
            ".name": [FakeElement("   ")],
            ".price": [FakeElement("Consultar")],
            ".price bdi": [FakeElement("$ 45.500")],
        }
    )
    strategy = make_strategy(page, settings, clock)
    name = strategy.read_text(Candidates.of(".name", ".title", required=False), default="Producto 1")
    assert name == "Producto 1"
    price = strategy.read_text(Candidates.of(".price", ".price bdi"), accept=lambda t: "$" in t)
    assert price == "$ 45.500"


def test_optional_lookup_returns_default(settings, clock):
    strategy = make_strategy(FakePage(), settings, clock)
    counter = Candidates.of(".mini-cart-items", ".cart-contents-count", label="cart counter", required=False)
    assert strategy.read_text(counter, default="0") == "0"
    assert strategy.read_attribute(counter, "data-count", default="none") == "none"


def test_required_read_raises(settings, clock):
    strategy = make_strategy(FakePage(), settings, clock)
    with pytest.raises(NoCandidateMatched):
        strategy.read_text(Candidates.of(".cart-subtotal", label="subtotal"))


def test_collection_uses_first_candidate_with_matches(settings, clock):
    page = FakePage({"li.product": [FakeElement("1"), FakeElement("2")]})
    strategy = make_strategy(page, settings, clock)
    assert strategy.collection(Candidates.of(".product", "li.product")).count() == 2
    assert strategy.collection(Candidates.of(".none", ".other")).count() == 0


def test_guarded_click(settings, clock):
    button = FakeElement("Añadir al carrito")
    page = FakePage({"button.single_add_to_cart_button": [button]})
    result = make_strategy(page, settings, clock).click(Candidates.of("button.single_add_to_cart_button"))
    assert result.ok
    assert button.clicks == 1


def test_disabled_element_is_not_interactable(settings, clock):
    button = FakeElement("Añadir al carrito", enabled=False)
    page = FakePage({"button.single_add_to_cart_button": [button]})
    strategy = make_strategy(page, settings, clock)

    with pytest.raises(ElementNotInteractable) as ei:
        strategy.click(Candidates.of("button.single_add_to_cart_button", label="add to cart button"))

    assert button.clicks == 0
    assert ei.value.timeout_ms == 300
    assert "add to cart button" in str(ei.value)
    assert clock.now == 300


def test_element_enabled_during_guard_is_clicked(settings, clock):
    button = FakeElement("Actualizar carrito", enabled=False)
    page = FakePage({"[name=update_cart]": [button]})
    strategy = make_strategy(page, settings, clock)

    original_sleep = clock.sleep

    def enabling_sleep(ms):
        original_sleep(ms)
        button.enabled = True

    strategy.sleep = enabling_sleep
    strategy.click(Candidates.of("[name=update_cart]"))
    assert button.clicks == 1
    assert clock.sleeps == [100]


def test_fill_and_select(settings, clock):
    qty = FakeElement(value="1")
    ordering = FakeElement()
    page = FakePage({"input.qty": [qty], "select.orderby": [ordering]})
    strategy = make_strategy(page, settings, clock)
    strategy.fill(Candidates.of("input.qty"), "3")
    strategy.select_option(Candidates.of("select.orderby"), value="price")
    assert qty.value == "3"
    assert ordering.value == "price"

import pytest

from cartsuite.locators.strategy import LocatorStrategy
from cartsuite.utils.config import Settings

from fakes import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fast_settings(tmp_path):
    return Settings(
        ARTIFACTS_DIR=tmp_path / "artifacts",
        PROBE_TIMEOUT=10,
        ELEMENT_TIMEOUT=1000,
        READY_TIMEOUT=1000,
        POLL_INTERVAL=100,
        GUARD_TIMEOUT=300,
        GUARD_POLL_INTERVAL=100,
        NETWORK_IDLE_TIMEOUT=10,
    )


@pytest.fixture
def page_kwargs(fast_settings, clock):
    """Keyword arguments for building a page object over a fake page."""

    def build(page):
        strategy = LocatorStrategy(page, fast_settings, clock=clock, sleep=clock.sleep)
        return {"settings": fast_settings, "strategy": strategy}

    return build

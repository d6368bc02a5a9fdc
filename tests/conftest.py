import pytest


def pytest_addoption(parser):
    parser.addoption("--e2e", action="store_true", default=False, help="Run live storefront scenarios")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--e2e"):
        return
    skip = pytest.mark.skip(reason="live storefront scenario; pass --e2e to run")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip)

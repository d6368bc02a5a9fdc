import json

from cartsuite.utils.logger import bound, get_logger, page_logger, scenario_log


def read_records(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_scenario_log_captures_only_its_own_test(tmp_path):
    cart_log = page_logger("cart")
    with scenario_log("test_initially_empty_cart", tmp_path) as path:
        cart_log.info("Navigating to cart...")
    cart_log.info("after the test")

    records = read_records(path)
    assert len(records) == 1
    rec = records[0]
    assert rec["msg"] == "Navigating to cart..."
    assert rec["test"] == "test_initially_empty_cart"
    assert rec["page"] == "cart"
    assert rec["logger"] == "cartsuite.pages.cart"
    assert rec["ts"].endswith("Z")


def test_bound_context_nests_and_restores(tmp_path):
    log = get_logger("cartsuite.cli")
    with scenario_log("test_smoke", tmp_path) as path:
        with bound(site="mundoflor"):
            with bound(site="staging"):
                log.warning("inner")
            log.warning("outer")
        log.warning("unbound")

    inner, outer, unbound = read_records(path)
    assert inner["site"] == "staging"
    assert outer["site"] == "mundoflor"
    assert "site" not in unbound
    assert unbound["test"] == "test_smoke"

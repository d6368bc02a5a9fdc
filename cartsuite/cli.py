# cartsuite/cli.py
from __future__ import annotations

"""Command-line interface
------------------------
Convenience commands to inspect settings, normalize prices, validate site
catalogs and smoke-check a storefront. Thin wrapper around the library; the
scenarios themselves run under pytest.
"""

import json
import sys
from pathlib import Path
from typing import List, Optional

import click
from playwright.sync_api import Error as PlaywrightError

from cartsuite.core.catalog import load_catalog
from cartsuite.core.errors import CartSuiteError
from cartsuite.core.prices import normalize_price, sum_prices
from cartsuite.core.session import browser_session, page_session
from cartsuite.pages.cart import CartPage
from cartsuite.pages.home import HomePage
from cartsuite.utils.config import get_settings
from cartsuite.utils.logger import bound, get_logger, set_log_level


# -------- helpers --------


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, indent=2, ensure_ascii=False))


def _find_yaml_files(root: Path) -> list[Path]:
    return sorted(list(root.rglob("*.yaml")) + list(root.rglob("*.yml")))


# -------- CLI root --------


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL from settings",
)
@click.version_option(package_name="cartsuite")
def cli(log_level: Optional[str]):
    _ = get_settings()
    if log_level:
        set_log_level(log_level.upper())


# -------- commands --------


@cli.command("config")
def cmd_config():
    """Print effective configuration (after .env & env vars)."""
    _echo_json(get_settings().model_dump(mode="json"))


@cli.command("prices")
@click.argument("raw", nargs=-1, required=True)
@click.option("--sum", "show_sum", is_flag=True, help="Also print the sum of the normalized values")
def cmd_prices(raw: List[str], show_sum: bool):
    """Normalize display prices ("$ 129.000" -> 129000)."""
    for r in raw:
        click.echo(f"{r!r} -> {normalize_price(r)}")
    if show_sum:
        click.echo(f"sum -> {sum_prices(raw)}")


@cli.command("catalog")
@click.argument("targets", nargs=-1, required=True)
def cmd_catalog(targets: List[str]):
    """Validate site catalog files (or every YAML under a directory)."""
    paths: list[Path] = []
    for t in targets:
        p = Path(t).resolve()
        paths.extend(_find_yaml_files(p) if p.is_dir() else [p])

    ok = True
    for fp in paths:
        try:
            cat = load_catalog(fp)
            click.echo(f"OK  {fp}  ->  [{cat.name}] {len(cat.categories)} categories, cart routes {cat.cart_routes}")
        except (FileNotFoundError, ValueError) as e:
            ok = False
            click.echo(f"ERR {fp}  ->  {e}")

    sys.exit(0 if ok else 1)


@cli.command("smoke")
@click.argument("catalog_file", type=click.Path(dir_okay=False, exists=True))
def cmd_smoke(catalog_file: str):
    """
    Open the storefront home and the cart and print a JSON readiness summary.

    Example:
      cartsuite smoke tests/e2e/catalog/mundoflor.yaml
    """
    settings = get_settings()
    log = get_logger(__name__)
    catalog = load_catalog(catalog_file)
    summary = {"site": catalog.name, "base_url": catalog.base_url, "ok": False}
    with bound(site=catalog.name):
        try:
            with browser_session(settings) as browser, page_session(browser, settings, base_url=catalog.base_url) as page:
                home = HomePage.from_catalog(page, catalog, settings=settings)
                home.open()
                summary["menu"] = home.menu_entries()
                cart = CartPage.from_catalog(page, catalog, settings=settings)
                nav = cart.open()
                summary.update(cart_route=nav.route, cart_items=cart.item_count(), ok=True)
        except (CartSuiteError, PlaywrightError) as e:
            log.error(f"Smoke check failed: {e}")
            summary["error"] = str(e)

    _echo_json(summary)
    sys.exit(0 if summary["ok"] else 1)


def main() -> None:
    cli(prog_name="cartsuite")


if __name__ == "__main__":
    main()

# cartsuite/utils/logger.py
from __future__ import annotations

"""Logging setup
---------------
Console output goes through Rich; scenario logs are JSON lines, one file per
test. Every record carries the bound scenario context (test, site) plus the
page object that emitted it, so a failing run can be filtered per page.
"""

import json
import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler

from cartsuite.utils.config import LogLevel, get_settings


__all__ = [
    "get_logger",
    "page_logger",
    "set_log_level",
    "bound",
    "scenario_log",
]


_config_lock = threading.Lock()
_configured = False
_scenario: Dict[str, Any] = {}

_CONSOLE_KEYS = ("test", "page")


class _ScenarioFilter(logging.Filter):
    """Stamps the bound scenario context onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = dict(_scenario)
        ctx.update(getattr(record, "ctx", None) or {})
        record.ctx = ctx
        tags = [str(ctx[k]) for k in _CONSOLE_KEYS if ctx.get(k)]
        record.ctx_prefix = f"{' · '.join(tags)}: " if tags else ""
        return True


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "ts": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(getattr(record, "ctx", None) or {})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


_LEVEL_MAP = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
}


def _json_file_handler(path: Path, level: int, backups: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    fh = RotatingFileHandler(
        filename=str(path), maxBytes=5 * 1024 * 1024, backupCount=backups, encoding="utf-8", delay=True
    )
    fh.setLevel(level)
    fh.setFormatter(JsonLineFormatter())
    fh.addFilter(_ScenarioFilter())
    return fh


def _ensure_configured() -> None:
    """Configure root logging once from settings."""
    global _configured
    if _configured:
        return

    with _config_lock:
        if _configured:
            return

        settings = get_settings()
        level = _LEVEL_MAP.get(settings.LOG_LEVEL, logging.INFO)

        root = logging.getLogger()
        root.setLevel(level)
        for h in list(root.handlers):
            root.removeHandler(h)

        console = Console(stderr=True, color_system="auto" if settings.COLORIZED_OUTPUT else None)
        rich_handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False,  # selectors contain [attr] brackets
            omit_repeated_times=False,
        )
        rich_handler.setFormatter(logging.Formatter("%(ctx_prefix)s%(message)s"))
        rich_handler.setLevel(level)
        rich_handler.addFilter(_ScenarioFilter())
        root.addHandler(rich_handler)

        if settings.LOG_TO_FILE:
            root.addHandler(_json_file_handler(settings.LOG_FILE, level, backups=5))

        # browser driver chatter only when debugging
        for n in ("asyncio", "urllib3", "playwright"):
            logging.getLogger(n).setLevel(max(level, logging.WARNING))

        _configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    _ensure_configured()
    return logging.getLogger(name or "cartsuite")


def page_logger(page_name: str) -> logging.LoggerAdapter:
    """Logger for a page object; its records carry ``page=<page_name>``."""
    return logging.LoggerAdapter(get_logger(f"cartsuite.pages.{page_name}"), {"ctx": {"page": page_name}})


def set_log_level(level: LogLevel | str) -> None:
    _ensure_configured()
    lvl = level if isinstance(level, str) else level.value
    py_level = getattr(logging, lvl.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(py_level)
    for h in root.handlers:
        h.setLevel(py_level)


@contextmanager
def bound(**ctx: Any) -> Iterator[None]:
    """
    Attach scenario context (``site=...``, ``test=...``) to every record
    logged inside the block. Nested blocks restore the outer values.
    """
    previous = {k: _scenario[k] for k in ctx if k in _scenario}
    _scenario.update(ctx)
    try:
        yield
    finally:
        for k in ctx:
            _scenario.pop(k, None)
        _scenario.update(previous)


@contextmanager
def scenario_log(test_name: str, directory: Path | str) -> Iterator[Path]:
    """
    Write everything logged during one test to ``<directory>/<test_name>.jsonl``
    with ``test=<test_name>`` bound. Yields the file path.
    """
    _ensure_configured()
    root = logging.getLogger()
    path = Path(directory) / f"{test_name}.jsonl"
    handler = _json_file_handler(path, root.level, backups=1)
    root.addHandler(handler)
    try:
        with bound(test=test_name):
            yield path
    finally:
        root.removeHandler(handler)
        handler.close()

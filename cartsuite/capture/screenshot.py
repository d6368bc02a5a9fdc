# cartsuite/capture/screenshot.py
from __future__ import annotations

"""Screenshot utilities
----------------------
Captures page screenshots as PNG bytes (for attaching to reports) and,
when an output directory is set, also writes them with consistent filenames.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from playwright.sync_api import Page

from cartsuite.utils.config import Settings, get_settings
from cartsuite.utils.logger import get_logger
from cartsuite.utils.timing import measure


@dataclass
class CaptureResult:
    data: bytes
    path: Optional[Path]
    name: str
    url: str
    ts: str


class ScreenshotManager:
    """
    Centralized screenshot helper.
    - Respects FULL_PAGE_SCREENSHOT.
    - Produces deterministic, filesystem-safe file names.
    """

    def __init__(self, out_dir: Optional[Path] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.out_dir = out_dir
        self.log = get_logger(__name__)

    @measure("page_screenshot")
    def page(self, page: Page, name: str, full_page: Optional[bool] = None) -> CaptureResult:
        is_full = full_page if full_page is not None else self.settings.FULL_PAGE_SCREENSHOT
        out_path = self._build_path(name) if self.out_dir is not None else None
        data = page.screenshot(
            path=str(out_path) if out_path else None,
            type="png",
            full_page=is_full,
            animations="disabled",
        )
        if out_path:
            self.log.debug(f"Saved screenshot: {out_path}")
        return CaptureResult(data=data, path=out_path, name=name, url=page.url, ts=self._ts())

    def _build_path(self, base: str) -> Path:
        safe = "".join(ch if ch.isalnum() or ch in ("-", "_") else "_" for ch in base)
        out_path = self.out_dir / f"{safe}.png"
        out_path.parent.mkdir(parents=True, exist_ok=True)
        return out_path

    @staticmethod
    def _ts() -> str:
        return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")

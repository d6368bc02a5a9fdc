# cartsuite/utils/config.py
from __future__ import annotations

import functools
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ---------- Enums ----------

class BrowserType(str, Enum):
    chromium = "chromium"
    firefox = "firefox"
    webkit = "webkit"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# ---------- Settings ----------

class Settings(BaseSettings):
    """
    Central configuration for the cart suite.

    Values load in this order of precedence:
      1) Environment variables
      2) .env file in project root
      3) Defaults below
    """

    # ---- Browser configuration ----
    HEADLESS: bool = Field(default=True, description="Run the browser headless")
    BROWSER_TYPE: BrowserType = Field(default=BrowserType.chromium, description="Playwright browser")
    VIEWPORT_WIDTH: int = Field(default=1280, ge=320, le=7680)
    VIEWPORT_HEIGHT: int = Field(default=720, ge=320, le=4320)
    SLOW_MO: int = Field(default=0, ge=0, description="Slow down actions (ms) for debugging")
    USER_AGENT: Optional[str] = Field(default=None)
    IGNORE_HTTPS_ERRORS: bool = Field(default=True)
    CHROMIUM_ARGS: List[str] = Field(default_factory=lambda: ["--no-sandbox", "--disable-dev-shm-usage"])

    # ---- Site ----
    BASE_URL: str = Field(default="https://www.floristeriamundoflor.com/")
    CATALOG_FILE: Optional[Path] = Field(default=None, description="Site catalog YAML used by the e2e suite")

    # ---- Timeouts (ms) ----
    NAVIGATION_TIMEOUT: int = Field(default=30000, ge=1000)
    ACTION_TIMEOUT: int = Field(default=30000, ge=1000)
    ELEMENT_TIMEOUT: int = Field(default=15000, ge=0)
    NETWORK_TIMEOUT: int = Field(default=20000, ge=0)
    READY_TIMEOUT: int = Field(default=15000, ge=0)
    PROBE_TIMEOUT: int = Field(default=3000, ge=0, description="Per-candidate visibility probe")
    GUARD_TIMEOUT: int = Field(default=5000, ge=0, description="Visible+enabled pre-check before mutating actions")
    POLL_INTERVAL: int = Field(default=500, ge=1)
    GUARD_POLL_INTERVAL: int = Field(default=100, ge=1)
    NETWORK_IDLE_TIMEOUT: int = Field(default=8000, ge=0)

    # ---- Artifacts ----
    ARTIFACTS_DIR: Path = Field(default=Path("./artifacts"))
    SCREENSHOT_ON_FAILURE: bool = Field(default=True)
    FULL_PAGE_SCREENSHOT: bool = Field(default=True)

    # ---- Proxies ----
    PROXY_SERVER: Optional[str] = None
    PROXY_USERNAME: Optional[str] = None
    PROXY_PASSWORD: Optional[str] = None

    # ---- Logging ----
    LOG_LEVEL: LogLevel = Field(default=LogLevel.INFO)
    LOG_TO_FILE: bool = Field(default=False)
    LOG_FILE: Path = Field(default=Path("./cartsuite.log"))
    COLORIZED_OUTPUT: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("ARTIFACTS_DIR", "LOG_FILE", "CATALOG_FILE", mode="before")
    @classmethod
    def _coerce_to_path(cls, v):
        if v is None or v == "":
            return None
        if isinstance(v, Path):
            return v
        return Path(str(v))

    @field_validator("ARTIFACTS_DIR", "LOG_FILE", "CATALOG_FILE", mode="after")
    @classmethod
    def _absolutize(cls, v: Optional[Path]):
        if v is None:
            return v
        return v if v.is_absolute() else Path.cwd() / v

    @field_validator("BASE_URL")
    @classmethod
    def _base_url_trailing_slash(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith("http"):
            raise ValueError("BASE_URL must be an absolute http(s) URL")
        return v if v.endswith("/") else v + "/"

    def ensure_dirs(self) -> None:
        """Create required directories (idempotent)."""
        for p in {self.ARTIFACTS_DIR, self.LOG_FILE.parent}:
            p.mkdir(parents=True, exist_ok=True)

    # Convenience: Playwright launch options dict
    def playwright_launch_kwargs(self) -> dict:
        kwargs = {
            "headless": self.HEADLESS,
            "slow_mo": self.SLOW_MO,
        }
        if self.BROWSER_TYPE == BrowserType.chromium and self.CHROMIUM_ARGS:
            kwargs["args"] = list(self.CHROMIUM_ARGS)
        if self.PROXY_SERVER:
            proxy = {"server": self.PROXY_SERVER}
            if self.PROXY_USERNAME and self.PROXY_PASSWORD:
                proxy["username"] = self.PROXY_USERNAME
                proxy["password"] = self.PROXY_PASSWORD
            kwargs["proxy"] = proxy
        return kwargs

    # Convenience: Playwright new_context kwargs
    def playwright_context_kwargs(self, base_url: Optional[str] = None) -> dict:
        ctx = {
            "viewport": {"width": self.VIEWPORT_WIDTH, "height": self.VIEWPORT_HEIGHT},
            "base_url": base_url or self.BASE_URL,
            "ignore_https_errors": self.IGNORE_HTTPS_ERRORS,
        }
        if self.USER_AGENT:
            ctx["user_agent"] = self.USER_AGENT
        return ctx


# --------- Public accessor (memoized) ---------

@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache settings once per process.
    Call `get_settings.cache_clear()` if you need to reload after changing env.
    """
    s = Settings()
    s.ensure_dirs()
    return s

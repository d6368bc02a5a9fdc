# cartsuite/locators/candidates.py
from __future__ import annotations

"""Selector candidates
---------------------
An ordered list of alternative ways to find the same logical element.
Each entry is tried on its own; nothing is comma-joined into one CSS string.
"""

from enum import Enum
from typing import Any, Optional, Tuple, Union

from playwright.sync_api import Locator, Page
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cartsuite.utils.logger import get_logger

log = get_logger(__name__)

Scope = Union[Page, Locator]


class SelectorStrategy(str, Enum):
    css = "css"
    text = "text"
    role = "role"
    xpath = "xpath"


class Selector(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="Selector string (css/text/role/xpath)")
    strategy: SelectorStrategy = Field(default=SelectorStrategy.css)
    probe_timeout_ms: Optional[int] = Field(default=None, ge=0, description="Override the probe timeout for this entry")

    @field_validator("value")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("selector.value cannot be empty")
        return v

    def __str__(self) -> str:
        if self.strategy == SelectorStrategy.css:
            return self.value
        return f"{self.strategy.value}={self.value}"


class Candidates(BaseModel):
    """
    Ordered, non-empty selector list; most specific first.

    Accepts a bare string, a list of strings, or a list of mappings
    (``{"value": ..., "strategy": ...}``) wherever a model field is typed
    as ``Candidates``.
    """

    model_config = ConfigDict(frozen=True)

    selectors: Tuple[Selector, ...] = Field(..., min_length=1)
    label: str = ""
    required: bool = True

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        if isinstance(data, (str, Selector)):
            return {"selectors": [data]}
        if isinstance(data, (list, tuple)):
            return {"selectors": list(data)}
        return data

    @field_validator("selectors", mode="before")
    @classmethod
    def _coerce_entries(cls, v: Any) -> Any:
        if isinstance(v, (str, Selector, dict)):
            v = [v]
        return [{"value": s} if isinstance(s, str) else s for s in v]

    @classmethod
    def of(cls, *values: Union[str, Selector], label: str = "", required: bool = True) -> "Candidates":
        return cls(selectors=list(values), label=label, required=required)

    def named(self, label: str) -> "Candidates":
        return self.model_copy(update={"label": label})

    def optional(self) -> "Candidates":
        return self.model_copy(update={"required": False})

    def describe(self) -> str:
        return self.label or " | ".join(str(s) for s in self.selectors)


def _parse_role_value(value: str) -> Tuple[str, Optional[str]]:
    """
    Accept a few simple role notations:

    - "button"                      → role="button"
    - "button|Añadir al carrito"    → role="button", name="Añadir al carrito"
    - "link name=Amor"              → role="link", name="Amor"
    """
    v = value.strip()
    if "|" in v:
        role, name = v.split("|", 1)
        return role.strip(), name.strip() or None
    if " name=" in v:
        role, name = v.split(" name=", 1)
        return role.strip(), name.strip() or None
    return v, None


def resolve_locator(scope: Scope, sel: Selector) -> Locator:
    """
    Convert a Selector into a Playwright Locator rooted at `scope`
    (a Page, or a Locator for lookups inside a row/card).
    """
    strategy = sel.strategy
    value = sel.value

    if strategy == SelectorStrategy.css:
        return scope.locator(value)

    if strategy == SelectorStrategy.text:
        return scope.get_by_text(value, exact=False)

    if strategy == SelectorStrategy.role:
        role, name = _parse_role_value(value)
        kwargs = {}
        if name:
            kwargs["name"] = name
        return scope.get_by_role(role, **kwargs)  # type: ignore[arg-type]

    if strategy == SelectorStrategy.xpath:
        return scope.locator(f"xpath={value}")

    log.debug(f"Unknown selector strategy '{strategy}', falling back to css for value={value!r}")
    return scope.locator(value)


__all__ = ["Scope", "SelectorStrategy", "Selector", "Candidates", "resolve_locator"]

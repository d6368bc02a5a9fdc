# cartsuite/core/catalog.py
from __future__ import annotations

"""Site catalog schema and loader
--------------------------------
The storefront-specific data (base URL, categories, menu, cart routes,
selector overrides) lives in a YAML file owned by the test harness. This
module validates it into pydantic models and hands the selector sets to the
page objects.
"""

import os
import re
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from cartsuite.locators.candidates import Candidates
from cartsuite.pages.selectors import CartSelectors, CategorySelectors, HomeSelectors, ProductSelectors

_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


class Category(BaseModel):
    title: str = Field(..., description="Heading shown on the category page, e.g. 'Cumpleaños'")
    slug: str = Field(..., description="URL slug, e.g. 'cumpleanos'")
    path: Optional[str] = Field(default=None, description="Direct path; defaults to /product-category/<slug>/")
    menu_link: Optional[Candidates] = None
    generic_link: Optional[Candidates] = None

    @field_validator("slug")
    @classmethod
    def _slug_clean(cls, v: str) -> str:
        v = v.strip().strip("/")
        if not v:
            raise ValueError("category.slug cannot be empty")
        return v

    @model_validator(mode="after")
    def _defaults(self) -> "Category":
        if self.path is None:
            self.path = f"/product-category/{self.slug}/"
        if self.generic_link is None:
            self.generic_link = Candidates.of(f'a[href*="/product-category/{self.slug}/"]', label=f"{self.title} link")
        return self


class SiteCatalog(BaseModel):
    name: str
    base_url: str
    categories: Dict[str, Category] = Field(default_factory=dict)
    menu_items: List[str] = Field(default_factory=list)
    cart_routes: List[str] = Field(default_factory=lambda: ["/cart/"])
    add_to_cart_patterns: List[str] = Field(
        default_factory=lambda: ["add-to-cart", "wc-ajax=add_to_cart", "admin-ajax.php"]
    )
    home: HomeSelectors = Field(default_factory=HomeSelectors)
    category: CategorySelectors = Field(default_factory=CategorySelectors)
    product: ProductSelectors = Field(default_factory=ProductSelectors)
    cart: CartSelectors = Field(default_factory=CartSelectors)

    @field_validator("base_url")
    @classmethod
    def _url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith("http"):
            raise ValueError("base_url must be an absolute http(s) URL")
        return v if v.endswith("/") else v + "/"

    @field_validator("cart_routes")
    @classmethod
    def _routes_non_empty(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("cart_routes needs at least one path")
        return v

    def category_for(self, key_or_title: str) -> Category:
        """Look up a category by key or (case-insensitive) title."""
        if key_or_title in self.categories:
            return self.categories[key_or_title]
        wanted = key_or_title.strip().lower()
        for cat in self.categories.values():
            if cat.title.lower() == wanted or cat.slug == wanted:
                return cat
        raise KeyError(f"Unknown category {key_or_title!r}; known: {sorted(self.categories)}")


def _subst_env(obj):
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(0)), obj)
    if isinstance(obj, list):
        return [_subst_env(x) for x in obj]
    if isinstance(obj, dict):
        return {k: _subst_env(v) for k, v in obj.items()}
    return obj


def load_catalog(path: Path | str) -> SiteCatalog:
    """Load and validate a site catalog YAML file."""
    cat_path = Path(path)
    if not cat_path.exists():
        raise FileNotFoundError(f"Catalog file not found: {cat_path}")
    try:
        data = yaml.safe_load(cat_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as ye:
        raise ValueError(f"YAML parse error in {cat_path}: {ye}") from ye
    if not isinstance(data, dict):
        raise ValueError(f"Catalog {cat_path} must be a mapping/object.")
    try:
        return SiteCatalog.model_validate(_subst_env(data))
    except ValidationError as ve:
        lines = [f"Invalid catalog '{cat_path}':"]
        for e in ve.errors():
            loc = ".".join(str(p) for p in e.get("loc", []))
            lines.append(f"  - {loc}: {e.get('msg', 'invalid value')}")
        raise ValueError("\n".join(lines)) from ve


__all__ = ["Category", "SiteCatalog", "load_catalog"]

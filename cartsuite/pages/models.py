# cartsuite/pages/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from cartsuite.core.prices import normalize_price


@dataclass(frozen=True)
class Product:
    name: str
    price: str
    description: str = ""
    image: str = ""

    @property
    def amount(self) -> int:
        return normalize_price(self.price)


@dataclass(frozen=True)
class CartItem:
    name: str
    price: str
    quantity: int = 1

    @property
    def amount(self) -> int:
        return normalize_price(self.price)


@dataclass
class CartState:
    items: List[CartItem] = field(default_factory=list)
    subtotal: str = ""
    total: str = ""
    empty: bool = True
    empty_message: str = ""

    @property
    def count(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class AddToCartResponse:
    url: str
    status: int
    body_length: int

"""Validators shared by several resource schemas."""

from typing import Optional


def check_discount(price: Optional[float], discount_price: Optional[float]) -> None:
    """A discount price, when present, must be strictly below the base price."""
    if discount_price is not None and price is not None and discount_price >= price:
        raise ValueError("Discount price must be less than the original price")

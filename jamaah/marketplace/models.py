"""Data models for the marketplace."""

from __future__ import annotations

from typing import TypedDict

PRODUCT_TYPE_C2C = "c2c"
PRODUCT_TYPE_B2C = "b2c"
PRODUCT_TYPES = (PRODUCT_TYPE_C2C, PRODUCT_TYPE_B2C)
PRODUCT_STATUS_ACTIVE = "active"


class Product(TypedDict):
    """A listing stored at ``product:<type>:<id>``."""

    id: str
    type: str
    name: str
    description: str
    price: int
    images: list[str]
    is_barter_allowed: bool
    seller_id: str
    seller_name: str
    created_at: int
    status: str


class Review(TypedDict):
    """A review stored at ``review:product:<productId>:<id>``."""

    id: str
    product_id: str
    user_id: str
    user_name: str
    rating: int
    comment: str
    created_at: int

# storefront/cart/models.py

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class CartLine(BaseModel):
    """Snapshot of a product taken when it was added, plus the chosen quantity"""
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    image_url: Optional[str] = None
    quantity: int


class Cart(BaseModel):
    """Ordered cart lines; at most one line per product id"""
    lines: List[CartLine] = Field(default_factory=list)


class CartView(BaseModel):
    cart: List[CartLine]
    total: Decimal

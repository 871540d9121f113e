# storefront/pages/models.py
# View models returned by the handlers: the page to render plus its context.

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel

from ..cart.models import CartLine
from ..checkout.models import CheckoutMessage
from ..products.models import ProductResponse


class PageResponse(BaseModel):
    page: str
    user: Optional[str] = None


class HomePageResponse(PageResponse):
    title: str
    description: str
    brand: str
    header_title: str
    main_title: str
    main_content: str
    year: int


class FormPageResponse(PageResponse):
    """Login and register forms, optionally carrying the error of the last attempt"""
    error: Optional[str] = None


class ProductListResponse(PageResponse):
    products: List[ProductResponse]


class CartPageResponse(PageResponse):
    cart: List[CartLine]
    total: Decimal
    checkout_message: Optional[CheckoutMessage] = None

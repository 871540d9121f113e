# storefront/cart/controller.py
from typing import Annotated, Optional
from fastapi import APIRouter, Form, Response
from fastapi.responses import RedirectResponse
from starlette import status

from .models import Cart
from .service import CartService
from ..database.core import DbSession
from ..pages.models import CartPageResponse
from ..sessions.dependencies import CurrentSessionDep, SessionStoreDep, persist_session
from ..sessions.models import CurrentSession
from ..sessions.store import SessionStore

router = APIRouter(tags=["cart"])

QuantityField = Annotated[Optional[str], Form()]


def redirect_to(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def save_cart(store: SessionStore, current: CurrentSession, cart: Cart, response: Response) -> None:
    """Persist the new cart; a fresh session whose cart did not change is not written"""
    if current.is_new and cart == current.state.cart:
        return
    persist_session(store, current.id, current.state.model_copy(update={"cart": cart}), response)


@router.get("/cart", response_model=CartPageResponse)
async def view_cart(current: CurrentSessionDep):
    """Current cart and total."""
    view = CartService.get_cart(current.state.cart)
    return CartPageResponse(
        page="cart",
        user=current.state.username,
        cart=view.cart,
        total=view.total,
        checkout_message=None,
    )


@router.post("/add-to-cart/{product_id}")
async def add_to_cart(
    product_id: str,
    db: DbSession,
    store: SessionStoreDep,
    current: CurrentSessionDep,
    quantity: QuantityField = None,
):
    """Add a product (default quantity 1) and go back to the product list."""
    cart = CartService.add_item(
        db,
        current.state.cart,
        CartService.parse_product_id(product_id),
        CartService.parse_quantity(quantity, default=1),
    )
    response = redirect_to("/products")
    save_cart(store, current, cart, response)
    return response


@router.post("/remove-from-cart/{product_id}")
async def remove_from_cart(product_id: str, store: SessionStoreDep, current: CurrentSessionDep):
    cart = CartService.remove_item(current.state.cart, CartService.parse_product_id(product_id))
    response = redirect_to("/cart")
    save_cart(store, current, cart, response)
    return response


@router.post("/update-cart/{product_id}")
async def update_cart(
    product_id: str,
    store: SessionStoreDep,
    current: CurrentSessionDep,
    quantity: QuantityField = None,
):
    """Set a line's quantity; 0 removes the line."""
    cart = CartService.update_quantity(
        current.state.cart,
        CartService.parse_product_id(product_id),
        CartService.parse_quantity(quantity),
    )
    response = redirect_to("/cart")
    save_cart(store, current, cart, response)
    return response

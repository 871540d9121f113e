# storefront/checkout/controller.py
from fastapi import APIRouter, Response

from .service import CheckoutService
from ..cart.models import Cart
from ..core.config import settings
from ..pages.models import CartPageResponse
from ..sessions.dependencies import CurrentSessionDep, SessionStoreDep, persist_session

router = APIRouter(tags=["checkout"])


@router.post("/checkout", response_model=CartPageResponse)
async def checkout(response: Response, store: SessionStoreDep, current: CurrentSessionDep):
    """Simulated payment; renders the cart page with the outcome message."""
    result = CheckoutService.attempt(current.state)

    if result.approved and settings.CLEAR_CART_ON_CHECKOUT:
        persist_session(store, current.id, current.state.model_copy(update={"cart": Cart()}), response)

    return CartPageResponse(
        page="cart",
        user=current.state.username,
        cart=result.cart,
        total=result.total,
        checkout_message=result.message,
    )

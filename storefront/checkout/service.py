import logging

from .models import CheckoutMessage, CheckoutOutcome, CheckoutResult
from ..cart.service import CartService
from ..sessions.models import SessionState

logger = logging.getLogger(__name__)

LOGIN_REQUIRED_MESSAGE = "You must log in to proceed to payment."
PAYMENT_APPROVED_MESSAGE = "Payment completed successfully."


class CheckoutService:

    @staticmethod
    def attempt(state: SessionState) -> CheckoutResult:
        """Gate the simulated payment on the session being logged in.

        No payment provider is involved: an authenticated session is always
        approved. The cart is reported as-is and never modified here.
        """
        view = CartService.get_cart(state.cart)

        if not state.is_authenticated:
            logger.info("Checkout refused for anonymous session")
            return CheckoutResult(
                outcome=CheckoutOutcome.UNAUTHENTICATED,
                cart=view.cart,
                total=view.total,
                message=CheckoutMessage(type="error", text=LOGIN_REQUIRED_MESSAGE),
            )

        logger.info(f"Checkout approved for user {state.user.id}, total {view.total}")
        return CheckoutResult(
            outcome=CheckoutOutcome.APPROVED,
            cart=view.cart,
            total=view.total,
            message=CheckoutMessage(type="success", text=PAYMENT_APPROVED_MESSAGE),
        )

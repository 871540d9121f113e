from .models import CheckoutMessage, CheckoutOutcome, CheckoutResult
from .service import CheckoutService

__all__ = ["CheckoutMessage", "CheckoutOutcome", "CheckoutResult", "CheckoutService"]

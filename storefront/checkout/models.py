from enum import Enum
from decimal import Decimal
from typing import List, Literal
from pydantic import BaseModel, Field

from ..cart.models import CartLine


class CheckoutOutcome(str, Enum):
    APPROVED = "approved"
    UNAUTHENTICATED = "unauthenticated"


class CheckoutMessage(BaseModel):
    """User-facing checkout message"""
    type: Literal["error", "success"] = Field(..., description="How the page should style the message")
    text: str


class CheckoutResult(BaseModel):
    outcome: CheckoutOutcome
    cart: List[CartLine]
    total: Decimal
    message: CheckoutMessage

    @property
    def approved(self) -> bool:
        return self.outcome == CheckoutOutcome.APPROVED

from .models import Cart, CartLine, CartView
from .service import CartService

__all__ = ["Cart", "CartLine", "CartView", "CartService"]

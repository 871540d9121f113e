from sqlalchemy.orm import Session
from typing import Any, Optional
from decimal import Decimal
import logging

from .models import Cart, CartLine, CartView
from ..products.models import Product
from ..products.service import ProductService
from ..core.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


def _parse_int(name: str, raw: Any, default: Optional[int] = None) -> int:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        if default is None:
            raise InvalidInputError(name, raw, "an integer")
        return default
    if isinstance(raw, bool):
        raise InvalidInputError(name, raw, "an integer")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise InvalidInputError(name, raw, "an integer")


class CartService:
    """Cart operations. Every operation returns a new Cart and leaves its input untouched."""

    @staticmethod
    def parse_quantity(raw: Any, default: Optional[int] = None) -> int:
        """Coerce a form field into an int; blank falls back to `default`"""
        return _parse_int("quantity", raw, default)

    @staticmethod
    def parse_product_id(raw: Any) -> int:
        return _parse_int("id", raw)

    @staticmethod
    def snapshot(product: Product, quantity: int) -> CartLine:
        """Copy the product fields so later catalogue changes don't leak into the cart"""
        return CartLine(
            id=product.id,
            name=product.name,
            description=product.description,
            price=Decimal(product.price),
            image_url=product.image_url,
            quantity=quantity,
        )

    @staticmethod
    def add_product(cart: Cart, product: Product, quantity: int) -> Cart:
        """Merge `quantity` of an already resolved product into the cart"""
        if quantity < 1:
            raise InvalidInputError("quantity", quantity, "a positive integer")

        lines = []
        merged = False
        for line in cart.lines:
            if line.id == product.id:
                line = line.model_copy(update={"quantity": line.quantity + quantity})
                merged = True
            lines.append(line)
        if not merged:
            lines.append(CartService.snapshot(product, quantity))
        return Cart(lines=lines)

    @staticmethod
    def add_item(db: Session, cart: Cart, product_id: int, quantity: int) -> Cart:
        """Add a product by id; raises ProductNotFoundError for unknown ids"""
        if quantity < 1:
            raise InvalidInputError("quantity", quantity, "a positive integer")
        product = ProductService.get_product_by_id(db, product_id)
        updated = CartService.add_product(cart, product, quantity)
        logger.info(f"Added {quantity} x product {product_id} to cart")
        return updated

    @staticmethod
    def remove_item(cart: Cart, product_id: int) -> Cart:
        """Drop the line for `product_id`; unknown ids are a no-op"""
        return Cart(lines=[line for line in cart.lines if line.id != product_id])

    @staticmethod
    def update_quantity(cart: Cart, product_id: int, new_quantity: int) -> Cart:
        """Set the quantity of an existing line.

        Zero removes the line, negative quantities are rejected and unknown
        ids leave the cart as it was.
        """
        if new_quantity < 0:
            raise InvalidInputError("quantity", new_quantity, "zero or a positive integer")
        if new_quantity == 0:
            return CartService.remove_item(cart, product_id)
        return Cart(lines=[
            line.model_copy(update={"quantity": new_quantity}) if line.id == product_id else line
            for line in cart.lines
        ])

    @staticmethod
    def compute_total(cart: Cart) -> Decimal:
        return sum((line.price * line.quantity for line in cart.lines), Decimal("0"))

    @staticmethod
    def get_cart(cart: Cart) -> CartView:
        return CartView(
            cart=[line.model_copy() for line in cart.lines],
            total=CartService.compute_total(cart),
        )

# Central models file so every table is registered on Base before create_all

from .core import Base

from ..products.models import Product
from ..users.models import User
from ..sessions.models import SessionRecord

# Export all models
__all__ = [
    "Base",
    "Product",
    "User",
    "SessionRecord",
]

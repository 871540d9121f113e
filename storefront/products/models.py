# storefront/products/models.py

from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime
from datetime import datetime, timezone
from decimal import Decimal
from pydantic import BaseModel, ConfigDict
from typing import Optional

from ..database.core import Base


class Product(Base):
    """
    SQLAlchemy model representing a catalogue product.
    """
    __tablename__ = 'products'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    image_url = Column(String(512), nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"


class ProductResponse(BaseModel):
    """Schema for returning a product to the storefront"""
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    image_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

# storefront/sessions/models.py

from sqlalchemy import Column, String, JSON, DateTime
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field

from ..database.core import Base
from ..cart.models import Cart
from ..auth.models import AuthenticatedUser


class SessionRecord(Base):
    """Server-side session row; the cookie only carries the signed id"""
    __tablename__ = 'sessions'

    id = Column(String(128), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))


class SessionState(BaseModel):
    """Everything a session owns: its cart and, after login, the user"""
    cart: Cart = Field(default_factory=Cart)
    user: Optional[AuthenticatedUser] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def username(self) -> Optional[str]:
        return self.user.username if self.user else None


class CurrentSession(BaseModel):
    """A loaded session: the id it lives under and its state"""
    id: str
    state: SessionState
    is_new: bool = False

# storefront/users/models.py

from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime, timezone

from ..database.core import Base


class User(Base):
    """
    SQLAlchemy model representing a registered shopper.
    """
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    last_login = Column(DateTime, nullable=True)

    def __repr__(self):
        """String representation of the User object."""
        return f"<User(username='{self.username}', email='{self.email}')>"

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
import logging

from .models import User
from ..core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        try:
            return db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching user {user_id}: {e}")
            raise StoreUnavailableError("get_user", str(e)) from e

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        try:
            return db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching user by email: {e}")
            raise StoreUnavailableError("get_user_by_email", str(e)) from e

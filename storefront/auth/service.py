# storefront/auth/service.py

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from email_validator import validate_email, EmailNotValidError

from . import models
from ..core.config import settings, LOGOUT_MODES
from ..core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidInputError,
    StoreUnavailableError,
    UserNotFoundError,
)
from ..logging import logger
from ..sessions.models import SessionState
from ..users.models import User
from ..users.service import UserService
from ..utils.password_utils import verify_password, get_password_hash


def register_user(db: Session, register_user_request: models.RegisterUserRequest) -> User:
    """Create an account; the email must not be registered yet."""
    if UserService.get_user_by_email(db, register_user_request.email):
        logger.info(f"Registration rejected, email already registered: {register_user_request.email}")
        raise DuplicateEmailError(register_user_request.email)

    new_user = User(
        username=register_user_request.username,
        email=register_user_request.email,
        password_hash=get_password_hash(register_user_request.password),
    )
    try:
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise DuplicateEmailError(register_user_request.email)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Registration failed for {register_user_request.email}: {e}")
        raise StoreUnavailableError("register_user", str(e)) from e

    logger.info(f"Successfully registered user: {new_user.email}")
    return new_user


def normalize_email(email: str) -> str:
    """Canonical form of an address, the same one EmailStr stores at registration"""
    return validate_email(email.strip(), check_deliverability=False).normalized


def authenticate_user(db: Session, email: str, password: str) -> User:
    """Authenticates a user with email and password."""
    try:
        email = normalize_email(email)
    except EmailNotValidError:
        logger.info(f"Login attempt with malformed email: {email}")
        raise UserNotFoundError()

    user = UserService.get_user_by_email(db, email)
    if not user:
        logger.info(f"Login attempt for unknown email: {email}")
        raise UserNotFoundError()
    if not verify_password(password, user.password_hash):
        logger.warning(f"Failed login attempt for: {email}")
        raise InvalidCredentialsError()

    try:
        user.last_login = datetime.now(timezone.utc)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Could not record last login for {email}: {e}")
        raise StoreUnavailableError("authenticate_user", str(e)) from e
    return user


def login(db: Session, state: SessionState, email: str, password: str) -> SessionState:
    """Return a copy of `state` linked to the authenticated user"""
    user = authenticate_user(db, email, password)
    logger.info(f"User {user.id} logged in")
    return state.model_copy(update={
        "user": models.AuthenticatedUser(id=user.id, username=user.username, email=user.email)
    })


def logout(state: SessionState, mode: Optional[str] = None) -> Optional[SessionState]:
    """Apply the logout policy.

    Returns None when the whole session has to be destroyed ("session" mode),
    otherwise the state with only the user reference removed ("auth" mode).
    """
    mode = mode or settings.LOGOUT_MODE
    if mode not in LOGOUT_MODES:
        raise InvalidInputError("LOGOUT_MODE", mode, " or ".join(LOGOUT_MODES))
    if mode == "session":
        return None
    return state.model_copy(update={"user": None})

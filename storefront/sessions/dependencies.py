# storefront/sessions/dependencies.py

from typing import Annotated, Optional
from fastapi import Depends, Request, Response
from itsdangerous import TimestampSigner, BadSignature
import logging

from .models import CurrentSession, SessionState
from .store import SessionStore
from ..core.config import settings
from ..database.core import DbSession

logger = logging.getLogger(__name__)

signer = TimestampSigner(settings.SESSION_SECRET_KEY)


def sign_session_id(session_id: str) -> str:
    return signer.sign(session_id.encode("utf-8")).decode("utf-8")


def unsign_session_id(cookie_value: str) -> Optional[str]:
    """Return the session id inside a cookie, or None if it was tampered with or is too old"""
    try:
        return signer.unsign(cookie_value, max_age=settings.SESSION_TTL_SECONDS).decode("utf-8")
    except BadSignature:
        logger.info("Ignoring session cookie with a bad or expired signature")
        return None


def set_session_cookie(response: Response, session_id: str):
    """Utility to set the signed session id in an httpOnly cookie."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=sign_session_id(session_id),
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_HTTPS_ONLY,
        max_age=settings.SESSION_TTL_SECONDS
    )


def clear_session_cookie(response: Response):
    """Utility to clear the session cookie."""
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_HTTPS_ONLY
    )


def get_session_store(db: DbSession) -> SessionStore:
    return SessionStore(db)


SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]


def get_current_session(request: Request, store: SessionStoreDep) -> CurrentSession:
    """Resolve the session cookie to stored state; unknown sessions start empty and unsaved"""
    cookie_value = request.cookies.get(settings.SESSION_COOKIE_NAME)
    session_id = unsign_session_id(cookie_value) if cookie_value else None
    state = store.load(session_id) if session_id else None
    if state is None:
        return CurrentSession(id=SessionStore.new_session_id(), state=SessionState(), is_new=True)
    return CurrentSession(id=session_id, state=state)


CurrentSessionDep = Annotated[CurrentSession, Depends(get_current_session)]


def persist_session(store: SessionStore, session_id: str, state: SessionState, response: Response) -> None:
    """Write the state back and (re)issue the cookie so the TTL rolls with it"""
    store.save(session_id, state)
    set_session_cookie(response, session_id)

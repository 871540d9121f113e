# storefront/sessions/store.py

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime, timedelta, timezone
from typing import Optional
from pydantic import ValidationError
import logging
import secrets

from .models import SessionRecord, SessionState
from ..core.config import settings
from ..core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    # Stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SessionStore:
    """Key/value store of session state, backed by the `sessions` table.

    Expiry is a rolling TTL: every save pushes `expires_at` forward. Reads of
    an expired row delete it and behave as if it never existed.
    """

    def __init__(self, db: Session, ttl_seconds: Optional[int] = None):
        self.db = db
        self.ttl = timedelta(seconds=ttl_seconds if ttl_seconds is not None else settings.SESSION_TTL_SECONDS)

    @staticmethod
    def new_session_id() -> str:
        return secrets.token_urlsafe(32)

    def load(self, session_id: str) -> Optional[SessionState]:
        """Return the stored state, or None for unknown or expired ids"""
        try:
            record = self.db.get(SessionRecord, session_id)
            if record is None:
                return None
            if record.expires_at <= utcnow():
                logger.info(f"Session {session_id[:8]}... expired, discarding")
                self.db.delete(record)
                self.db.commit()
                return None
            data = record.data
        except SQLAlchemyError as e:
            logger.error(f"Error loading session: {e}")
            self.db.rollback()
            raise StoreUnavailableError("load_session", str(e)) from e

        try:
            return SessionState.model_validate(data or {})
        except ValidationError as e:
            logger.warning(f"Discarding unreadable session {session_id[:8]}...: {e}")
            return None

    def save(self, session_id: str, state: SessionState) -> None:
        """Insert or overwrite the state stored under `session_id`"""
        now = utcnow()
        payload = state.model_dump(mode="json")
        try:
            record = self.db.get(SessionRecord, session_id)
            if record:
                record.data = payload
                record.expires_at = now + self.ttl
                record.updated_at = now
            else:
                record = SessionRecord(
                    id=session_id,
                    data=payload,
                    expires_at=now + self.ttl,
                    created_at=now,
                    updated_at=now,
                )
                self.db.add(record)
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error saving session: {e}")
            self.db.rollback()
            raise StoreUnavailableError("save_session", str(e)) from e

    def destroy(self, session_id: str) -> bool:
        """Delete a session; returns False when there was nothing to delete"""
        try:
            deleted = self.db.query(SessionRecord).filter(SessionRecord.id == session_id).delete()
            self.db.commit()
            return deleted > 0
        except SQLAlchemyError as e:
            logger.error(f"Error destroying session: {e}")
            self.db.rollback()
            raise StoreUnavailableError("destroy_session", str(e)) from e

    def rotate(self, session_id: str, state: SessionState) -> str:
        """Move `state` under a freshly generated id and drop the old one"""
        new_id = self.new_session_id()
        self.destroy(session_id)
        self.save(new_id, state)
        return new_id

    def purge_expired(self) -> int:
        """Remove every expired session row"""
        try:
            removed = self.db.query(SessionRecord).filter(SessionRecord.expires_at <= utcnow()).delete()
            self.db.commit()
            if removed:
                logger.info(f"Purged {removed} expired sessions")
            return removed
        except SQLAlchemyError as e:
            logger.error(f"Error purging expired sessions: {e}")
            self.db.rollback()
            raise StoreUnavailableError("purge_sessions", str(e)) from e

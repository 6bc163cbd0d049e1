# interfaces/session_store.py
"""
Session State Management
Keeps journey sessions and their coordinators in memory.
Nothing here is persisted: generated content is scoped to one run.
Sessions idle for longer than the TTL are dropped with their coordinators.
"""

import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from loguru import logger

from ..config import settings
from ..schemas.ai_schemas import UserSession


class SessionStore:
    """In-memory map of session id -> session plus its per-session coordinators"""

    def __init__(self, ttl_hours: Optional[float] = None):
        ttl_hours = settings.SESSION_TTL_HOURS if ttl_hours is None else ttl_hours
        self.ttl = timedelta(hours=ttl_hours)
        self._sessions: Dict[str, UserSession] = {}
        self._coordinators: Dict[str, Dict[str, Any]] = {}
        self._last_seen: Dict[str, datetime] = {}

    @staticmethod
    def new_session_id(order_id: str) -> str:
        return f"sess_{order_id}_{uuid.uuid4().hex[:8]}"

    def _touch(self, session_id: str):
        self._last_seen[session_id] = datetime.utcnow()

    def expire_idle(self) -> int:
        """Drop sessions idle for longer than the TTL. Returns how many were removed."""
        cutoff = datetime.utcnow() - self.ttl
        expired = [sid for sid, seen in self._last_seen.items() if seen < cutoff]
        for session_id in expired:
            self._remove(session_id)
        if expired:
            logger.info(f"Expired {len(expired)} idle sessions, {len(self._sessions)} active")
        return len(expired)

    def save_session(self, session: UserSession) -> UserSession:
        self.expire_idle()
        self._sessions[session.session_id] = session
        self._coordinators.setdefault(session.session_id, {})
        self._touch(session.session_id)
        logger.info(f"Created new session: {session.session_id} ({len(self._sessions)} active)")
        return session

    def get_session(self, session_id: str) -> Optional[UserSession]:
        self.expire_idle()
        session = self._sessions.get(session_id)
        if session is not None:
            self._touch(session_id)
        return session

    def _remove(self, session_id: str) -> bool:
        self._coordinators.pop(session_id, None)
        self._last_seen.pop(session_id, None)
        return self._sessions.pop(session_id, None) is not None

    def delete_session(self, session_id: str) -> bool:
        if not self._remove(session_id):
            return False
        logger.info(f"Deleted session: {session_id}")
        return True

    def get_coordinator(self, session_id: str, kind: str) -> Optional[Any]:
        return self._coordinators.get(session_id, {}).get(kind)

    def set_coordinator(self, session_id: str, kind: str, coordinator: Any):
        self._coordinators.setdefault(session_id, {})[kind] = coordinator

    def count(self) -> int:
        self.expire_idle()
        return len(self._sessions)

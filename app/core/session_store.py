from __future__ import annotations

import secrets
import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone

from app.core.config import settings
from app.parsing.models import ParsedDocument
from app.schemas.ats import ATSAnalysisResult


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_session_id() -> str:
    return secrets.token_urlsafe(12)


@dataclass(frozen=True)
class AnalysisSession:
    session_id: str
    document: ParsedDocument
    analysis: ATSAnalysisResult
    created_at: datetime


class AnalysisSessionStore:
    """Latest upload per session, bounded LRU, process memory only."""

    def __init__(self, max_entries: int | None = None) -> None:
        self._max_entries = max(1, int(max_entries if max_entries is not None else settings.session_max_entries))
        self._entries: OrderedDict[str, AnalysisSession] = OrderedDict()
        self._lock = threading.Lock()

    def save(self, session_id: str, document: ParsedDocument, analysis: ATSAnalysisResult) -> AnalysisSession:
        session = AnalysisSession(
            session_id=session_id,
            document=document,
            analysis=analysis,
            created_at=_utc_now(),
        )
        with self._lock:
            self._entries.pop(session_id, None)
            self._entries[session_id] = session
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
        return session

    def get(self, session_id: str) -> AnalysisSession:
        with self._lock:
            session = self._entries.get(session_id)
            if session is None:
                raise KeyError(session_id)
            self._entries.move_to_end(session_id)
            return session

    def clear(self, session_id: str) -> bool:
        with self._lock:
            return self._entries.pop(session_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()


session_store = AnalysisSessionStore()

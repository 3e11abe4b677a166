# services/sessions.py
import os
import stat
import time
import logging
from pathlib import Path
from typing import Optional
from config import Settings
from models.lookup import Found, Absent, Lookup
from models.results import SessionStatus
from services.paths import is_single_segment

logger = logging.getLogger(__name__)


def now_ms() -> float:
    return time.time() * 1000


class SessionDirectory:
    """
    Reads the session marker directories under `<claude_dir>/session-env`.

    A marker's only state is its mtime: the newest one is the current session,
    and a session counts as active while its marker was touched within the
    configured window (five minutes by default).
    """

    def __init__(self, settings: Settings):
        self.root = Path(settings.session_env_dir)
        self.active_window_ms = settings.session_active_window_ms

    def current_session_id(self) -> Lookup[str]:
        newest_name = None
        newest_mtime = None

        try:
            with os.scandir(self.root) as entries:
                for entry in entries:
                    try:
                        if not entry.is_dir():
                            continue
                        mtime = entry.stat().st_mtime_ns
                    except OSError:
                        # removed between listing and stat
                        continue
                    # strict comparison: ties keep the first marker seen
                    if newest_mtime is None or mtime > newest_mtime:
                        newest_name, newest_mtime = entry.name, mtime
        except OSError as e:
            logger.debug(f"Cannot list sessions in {self.root}: {str(e)}")
            return Absent("unreadable")

        if newest_name is None:
            return Absent("no-sessions")
        return Found(newest_name)

    def is_session_active(self, session_id: Optional[str], now: Optional[float] = None) -> bool:
        """True if the session's marker was modified less than the window ago. `now` is ms since epoch."""
        if not is_single_segment(session_id):
            return False

        try:
            st = (self.root / session_id).stat()
        except OSError:
            return False
        if not stat.S_ISDIR(st.st_mode):
            return False

        mtime_ms = st.st_mtime_ns / 1_000_000
        if now is None:
            now = now_ms()
        return now - mtime_ms < self.active_window_ms

    def session_status(self, lead_session_id: Optional[str], current: Lookup[str],
                       now: Optional[float] = None) -> SessionStatus:
        if isinstance(current, Found) and lead_session_id == current.value:
            return SessionStatus.CURRENT
        if self.is_session_active(lead_session_id, now):
            return SessionStatus.ACTIVE_OTHER
        return SessionStatus.STALE

"""
Session Management Service: one WorkflowController per user session
"""
import time
import uuid
from typing import Callable, Dict, List

from screener.services.workflow import WorkflowController
from screener.utils.exceptions import SessionNotFoundError
from screener.utils.logging_config import get_logger

logger = get_logger(__name__)


class SessionManager:
    """Keeps workflow sessions in memory, keyed by session id.

    Sessions untouched for ``idle_timeout`` seconds are dropped, and at most
    ``max_sessions`` are kept (least recently used go first). Dropping a
    session releases its resume bytes; an in-flight request still finishes
    but its result has nowhere to go.
    """

    def __init__(
        self,
        controller_factory: Callable[[str], WorkflowController],
        idle_timeout: float = 3600,
        max_sessions: int = 1000,
        clock: Callable[[], float] = time.monotonic
    ):
        self.controller_factory = controller_factory
        self.idle_timeout = idle_timeout
        self.max_sessions = max_sessions
        self.clock = clock
        self._sessions: Dict[str, WorkflowController] = {}
        self._last_seen: Dict[str, float] = {}

    async def create_session(self) -> WorkflowController:
        """Create a workflow and load its role catalog before handing it out"""
        self.evict_idle()
        while len(self._sessions) >= self.max_sessions:
            oldest = min(self._last_seen, key=self._last_seen.get)
            self._drop(oldest, "session limit reached")

        session_id = str(uuid.uuid4())
        controller = self.controller_factory(session_id)
        self._sessions[session_id] = controller
        self._last_seen[session_id] = self.clock()

        loaded = await controller.load_catalog()
        logger.info(f"Created session {session_id} (catalog loaded: {loaded})")
        return controller

    def get(self, session_id: str) -> WorkflowController:
        self.evict_idle()
        controller = self._sessions.get(session_id)
        if controller is None:
            raise SessionNotFoundError(session_id)
        self._last_seen[session_id] = self.clock()
        return controller

    def close(self, session_id: str) -> None:
        if session_id not in self._sessions:
            raise SessionNotFoundError(session_id)
        self._drop(session_id, "closed")

    def evict_idle(self) -> int:
        cutoff = self.clock() - self.idle_timeout
        expired = [sid for sid, seen in self._last_seen.items() if seen < cutoff]
        for session_id in expired:
            self._drop(session_id, "idle")
        return len(expired)

    def session_ids(self) -> List[str]:
        self.evict_idle()
        return list(self._sessions)

    def _drop(self, session_id: str, reason: str) -> None:
        del self._sessions[session_id]
        del self._last_seen[session_id]
        logger.info(f"Removed session {session_id} ({reason})")

    def __len__(self) -> int:
        return len(self._sessions)

from typing import Callable, Dict, List, Optional

from blockfly.models import Session
from .clock import now_ms
from .errors import InvalidIdentity


class SessionRegistry:
    """Connected identities keyed by connection id, in join order."""

    def __init__(self, max_name_length: int = 20, clock: Callable[[], int] = now_ms):
        self.max_name_length = max_name_length
        self._clock = clock
        self._sessions: Dict[str, Session] = {}

    def join(self, connection_id: str, display_name) -> Session:
        if not isinstance(display_name, str) or not display_name or len(display_name) > self.max_name_length:
            raise InvalidIdentity()
        session = Session(id=connection_id, username=display_name, join_time=self._clock())
        # Re-joining keeps the roster position
        self._sessions[connection_id] = session
        return session

    def leave(self, connection_id: str) -> Optional[Session]:
        return self._sessions.pop(connection_id, None)

    def get(self, connection_id: str) -> Optional[Session]:
        return self._sessions.get(connection_id)

    def list_all(self) -> List[Session]:
        return list(self._sessions.values())

    def __len__(self):
        return len(self._sessions)

    def __contains__(self, connection_id):
        return connection_id in self._sessions

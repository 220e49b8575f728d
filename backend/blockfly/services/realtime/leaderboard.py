import math
from numbers import Real
from typing import Dict, List, Optional

from blockfly.models import LeaderboardEntry
from .errors import InvalidScore, NotJoined
from .registry import SessionRegistry


class Leaderboard:
    """Best score per display name for the lifetime of the process.

    Entries are keyed by name, not connection, so a player keeps their best
    across reconnects. Entries are never removed.
    """

    def __init__(self, registry: SessionRegistry):
        self.registry = registry
        # Insertion order doubles as the tie-break for equal scores
        self._entries: Dict[str, LeaderboardEntry] = {}

    def submit(self, connection_id: str, score) -> None:
        session = self.registry.get(connection_id)
        if session is None:
            raise NotJoined()
        value = _coerce_score(score)

        entry = self._entries.get(session.username)
        if entry is None:
            self._entries[session.username] = LeaderboardEntry(username=session.username, score=value)
        elif value > entry.score:
            entry.score = value

    def top_n(self, n: int) -> List[LeaderboardEntry]:
        if n <= 0:
            return []
        # sorted() is stable, so equal scores keep creation order
        ranked = sorted(self._entries.values(), key=lambda e: e.score, reverse=True)
        return [LeaderboardEntry(username=e.username, score=e.score) for e in ranked[:n]]

    def best_score(self, username: str) -> Optional[int]:
        entry = self._entries.get(username)
        return entry.score if entry else None

    def __len__(self):
        return len(self._entries)


def _coerce_score(score) -> int:
    # bool is a Real subclass; a client sending true is not a score
    if isinstance(score, bool) or not isinstance(score, Real):
        raise InvalidScore()
    if not math.isfinite(score) or score < 0:
        raise InvalidScore()
    return int(score)

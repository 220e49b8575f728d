"""Per-connection lifecycle for the chat and leaderboard server.

Every handler takes a connection id and the inbound payload, mutates the
owned roster/history/leaderboard, and returns the list of events to send.
Sending is left to the socket layer so a failed delivery to one client can
never interrupt the handler or reach other clients.
"""

import enum
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from .errors import RealtimeError, NotJoined
from .leaderboard import Leaderboard
from .registry import SessionRegistry
from .relay import MessageRelay


class ConnectionState(enum.Enum):
    CONNECTED = 'connected'
    IDENTIFIED = 'identified'
    CLOSED = 'closed'


class Effect(NamedTuple):
    event: str
    payload: Any
    to: Optional[str] = None  # None means every open connection

    @property
    def is_broadcast(self) -> bool:
        return self.to is None


EVENT_JOIN = 'user_join'
EVENT_CHAT = 'chat message'
EVENT_SCORE = 'submit_score'


class Coordinator:

    def __init__(self, registry: SessionRegistry, relay: MessageRelay, leaderboard: Leaderboard,
                 leaderboard_size: int = 10, initial_history_size: int = 50):
        self.registry = registry
        self.relay = relay
        self.leaderboard = leaderboard
        self.leaderboard_size = leaderboard_size
        self.initial_history_size = initial_history_size
        self._connections: Dict[str, ConnectionState] = {}
        self._handlers: Dict[str, Callable[[str, Any], List[Effect]]] = {
            EVENT_JOIN: self.on_join,
            EVENT_CHAT: self.on_chat,
            EVENT_SCORE: self.on_score,
        }

    @classmethod
    def from_config(cls, config) -> 'Coordinator':
        registry = SessionRegistry(max_name_length=int(config.get('MAX_USERNAME_LENGTH', 20)))
        relay = MessageRelay(
            registry,
            capacity=int(config.get('CHAT_HISTORY_SIZE', 100)),
            max_length=int(config.get('MAX_MESSAGE_LENGTH', 500)),
        )
        return cls(
            registry,
            relay,
            Leaderboard(registry),
            leaderboard_size=int(config.get('LEADERBOARD_SIZE', 10)),
            initial_history_size=int(config.get('INITIAL_HISTORY_SIZE', 50)),
        )

    # ---- views ----

    def state_of(self, connection_id: str) -> ConnectionState:
        return self._connections.get(connection_id, ConnectionState.CLOSED)

    def open_connections(self) -> List[str]:
        return list(self._connections)

    def roster(self) -> List[dict]:
        return [s.to_dict() for s in self.registry.list_all()]

    def top_scores(self, n: Optional[int] = None) -> List[dict]:
        return [e.to_dict() for e in self.leaderboard.top_n(self.leaderboard_size if n is None else n)]

    def history(self, limit: Optional[int] = None) -> List[dict]:
        limit = self.initial_history_size if limit is None else limit
        return [m.to_dict() for m in self.relay.recent_history(limit)]

    # ---- inbound events ----

    def dispatch(self, event: str, connection_id: str, payload: Any = None) -> List[Effect]:
        handler = self._handlers.get(event)
        if handler is None:
            return []
        return handler(connection_id, payload)

    def on_connect(self, connection_id: str) -> List[Effect]:
        self._connections[connection_id] = ConnectionState.CONNECTED
        return [
            Effect('leaderboard', self.top_scores(), connection_id),
            Effect('initial_data', {'users': self.roster(), 'messages': self.history()}, connection_id),
        ]

    def on_join(self, connection_id: str, display_name: Any) -> List[Effect]:
        if self.state_of(connection_id) is ConnectionState.CLOSED:
            return []
        try:
            session = self.registry.join(connection_id, display_name)
        except RealtimeError as exc:
            return [_error(connection_id, exc)]
        self._connections[connection_id] = ConnectionState.IDENTIFIED
        return [
            Effect('user_list', self.roster()),
            Effect('system_message', f'{session.username} has joined the chat'),
        ]

    def on_chat(self, connection_id: str, text: Any) -> List[Effect]:
        state = self.state_of(connection_id)
        if state is ConnectionState.CLOSED:
            return []
        if state is not ConnectionState.IDENTIFIED:
            return [_error(connection_id, NotJoined())]
        try:
            message = self.relay.accept(connection_id, text)
        except RealtimeError as exc:
            return [_error(connection_id, exc)]
        return [Effect('chat message', message.to_dict())]

    def on_score(self, connection_id: str, score: Any) -> List[Effect]:
        state = self.state_of(connection_id)
        if state is ConnectionState.CLOSED:
            return []
        if state is not ConnectionState.IDENTIFIED:
            return [_error(connection_id, NotJoined())]
        try:
            self.leaderboard.submit(connection_id, score)
        except RealtimeError as exc:
            return [_error(connection_id, exc)]
        return [Effect('leaderboard', self.top_scores())]

    def on_disconnect(self, connection_id: str) -> List[Effect]:
        self._connections.pop(connection_id, None)
        session = self.registry.leave(connection_id)
        if session is None:
            return []
        return [
            Effect('user_list', self.roster()),
            Effect('system_message', f'{session.username} has left the chat'),
        ]


def _error(connection_id: str, exc: RealtimeError) -> Effect:
    return Effect('error', exc.message, connection_id)

from collections import deque
from typing import Callable, Deque, List

from blockfly.models import ChatMessage
from .clock import now_ms
from .errors import InvalidMessage, NotJoined
from .registry import SessionRegistry


class MessageRelay:
    """Validates chat lines and keeps a bounded FIFO of recent messages.

    Delivery is left to the caller; accept() only records and returns.
    """

    def __init__(self, registry: SessionRegistry, capacity: int = 100,
                 max_length: int = 500, clock: Callable[[], int] = now_ms):
        self.registry = registry
        self.capacity = capacity
        self.max_length = max_length
        self._clock = clock
        self._history: Deque[ChatMessage] = deque(maxlen=capacity)
        self._last_id = 0

    def accept(self, connection_id: str, raw_text) -> ChatMessage:
        sender = self.registry.get(connection_id)
        if sender is None:
            raise NotJoined()
        if not isinstance(raw_text, str) or not raw_text or len(raw_text) > self.max_length:
            raise InvalidMessage()

        timestamp = self._clock()
        # Ids follow the clock but never repeat within a millisecond
        message_id = max(timestamp, self._last_id + 1)
        self._last_id = message_id
        message = ChatMessage(
            id=message_id,
            user_id=sender.id,
            username=sender.username,
            content=raw_text,
            timestamp=timestamp,
        )
        self._history.append(message)
        return message

    def recent_history(self, limit: int) -> List[ChatMessage]:
        if limit <= 0:
            return []
        return list(self._history)[-limit:]

    def __len__(self):
        return len(self._history)

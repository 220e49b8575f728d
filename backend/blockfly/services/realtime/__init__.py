"""Realtime domain services: roster, chat relay and leaderboard.

This package holds the in-memory state behind the Socket.IO handlers.
Nothing in here touches the transport: handlers in the coordinator return
the events to send and the socket layer delivers them.
"""

from .errors import RealtimeError, InvalidIdentity, NotJoined, InvalidMessage, InvalidScore
from .registry import SessionRegistry
from .relay import MessageRelay
from .leaderboard import Leaderboard
from .coordinator import Coordinator, Effect, ConnectionState

__all__ = [
    'RealtimeError', 'InvalidIdentity', 'NotJoined', 'InvalidMessage', 'InvalidScore',
    'SessionRegistry', 'MessageRelay', 'Leaderboard',
    'Coordinator', 'Effect', 'ConnectionState',
]

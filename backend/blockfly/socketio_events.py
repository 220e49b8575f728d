import threading
from typing import Iterable

from flask import current_app, request

from blockfly import socketio
from blockfly.services.realtime import Coordinator, Effect
from blockfly.services.realtime.coordinator import EVENT_CHAT, EVENT_JOIN, EVENT_SCORE

NAMESPACE = '/'

# Handlers may run on worker threads; each inbound event runs to completion
# under this lock, including delivery, so every client sees the same order.
coordinator_lock = threading.RLock()


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _coordinator() -> Coordinator:
    return current_app.extensions['realtime']


def deliver(coordinator: Coordinator, effects: Iterable[Effect]) -> None:
    """Send each effect to its recipients one at a time.

    A failed send is logged and skipped; the rest still go out.
    """
    for effect in effects:
        recipients = coordinator.open_connections() if effect.is_broadcast else [effect.to]
        if effect.event == 'error':
            current_app.logger.info(f"[rejected] sid={effect.to} reason={effect.payload!r}")
        for sid in recipients:
            try:
                socketio.emit(effect.event, effect.payload, to=sid, namespace=NAMESPACE)
            except Exception as exc:
                current_app.logger.warning(f"[send-failed] sid={sid} event={effect.event} error={exc}")


def handle_connect(auth=None):
    sid = _get_sid()
    current_app.logger.info(f"[connect] sid={sid}")
    with coordinator_lock:
        coordinator = _coordinator()
        deliver(coordinator, coordinator.on_connect(sid))


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")
    with coordinator_lock:
        coordinator = _coordinator()
        deliver(coordinator, coordinator.on_disconnect(sid))


def _dispatch(event: str, payload) -> None:
    sid = _get_sid()
    with coordinator_lock:
        coordinator = _coordinator()
        effects = coordinator.dispatch(event, sid, payload)
        deliver(coordinator, effects)


def handle_user_join(display_name=None):
    current_app.logger.info(f"[join] sid={_get_sid()} length={len(display_name) if isinstance(display_name, str) else None}")
    _dispatch(EVENT_JOIN, display_name)


def handle_chat_message(text=None):
    current_app.logger.info(f"[chat] sid={_get_sid()} length={len(text) if isinstance(text, str) else None}")
    _dispatch(EVENT_CHAT, text)


def handle_submit_score(score=None):
    current_app.logger.info(f"[score] sid={_get_sid()} score={score!r:.40}")
    _dispatch(EVENT_SCORE, score)


def register_socketio_handlers(namespace: str = NAMESPACE) -> None:
    """Register Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event(EVENT_JOIN, handle_user_join, namespace=namespace)
    socketio.on_event(EVENT_CHAT, handle_chat_message, namespace=namespace)
    socketio.on_event(EVENT_SCORE, handle_submit_score, namespace=namespace)

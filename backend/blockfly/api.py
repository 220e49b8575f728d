from flask import Blueprint, current_app, jsonify, request

from blockfly.socketio_events import coordinator_lock

api = Blueprint('api', __name__)

MAX_LEADERBOARD_LIMIT = 100


def _coordinator():
    return current_app.extensions['realtime']


def _limit_arg(default: int, cap: int) -> int:
    limit = request.args.get('limit', default=default, type=int)
    return max(0, min(limit, cap))


@api.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    """Top scores, best first."""
    limit = _limit_arg(current_app.config.get('LEADERBOARD_SIZE', 10), MAX_LEADERBOARD_LIMIT)
    with coordinator_lock:
        entries = _coordinator().top_scores(limit)
    return jsonify(entries), 200


@api.route('/users', methods=['GET'])
def get_users():
    with coordinator_lock:
        users = _coordinator().roster()
    return jsonify(users), 200


@api.route('/messages', methods=['GET'])
def get_messages():
    """Most recent chat messages, oldest first."""
    coordinator = _coordinator()
    limit = _limit_arg(current_app.config.get('INITIAL_HISTORY_SIZE', 50), coordinator.relay.capacity)
    with coordinator_lock:
        messages = coordinator.history(limit)
    return jsonify(messages), 200

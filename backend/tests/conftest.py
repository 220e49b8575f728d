import os
import sys
import pytest

# Ensure the backend root (containing the `blockfly` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from blockfly import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:5173']
    STATIC_FOLDER = os.path.join(CURRENT_DIR, 'no-such-public-dir')
    PORT = 3000
    MAX_USERNAME_LENGTH = 20
    MAX_MESSAGE_LENGTH = 500
    CHAT_HISTORY_SIZE = 100
    INITIAL_HISTORY_SIZE = 50
    LEADERBOARD_SIZE = 10
    RATE_LIMIT_ENABLED = False
    RATE_LIMIT_MAX_REQUESTS = 100
    RATE_LIMIT_WINDOW_SEC = 900


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    """Factory for Socket.IO test clients; all are disconnected at teardown."""
    created = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def sio_client(make_sio_client):
    return make_sio_client()

from blockfly import create_app
from blockfly.rate_limit import SlidingWindowLimiter

from conftest import TestConfig


def test_index_without_bundle_returns_welcome(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_index_serves_game_bundle(tmp_path):
    (tmp_path / 'index.html').write_text('<html>blockfly</html>')

    class BundleConfig(TestConfig):
        STATIC_FOLDER = str(tmp_path)

    res = create_app(BundleConfig).test_client().get('/')
    assert res.status_code == 200
    assert b'blockfly' in res.data


def test_health_reports_roster_size(client, sio_client):
    sio_client.emit('user_join', 'Ace')
    res = client.get('/health')
    assert res.status_code == 200
    assert res.get_json() == {'status': 'ok', 'users': 1}


def test_rest_views_follow_socket_state(client, make_sio_client):
    ace = make_sio_client()
    rex = make_sio_client()
    ace.emit('user_join', 'Ace')
    rex.emit('user_join', 'Rex')
    ace.emit('submit_score', 20)
    rex.emit('submit_score', 35)
    ace.emit('chat message', 'gg')

    users = client.get('/api/users').get_json()
    assert [u['username'] for u in users] == ['Ace', 'Rex']

    board = client.get('/api/leaderboard').get_json()
    assert board == [{'username': 'Rex', 'score': 35}, {'username': 'Ace', 'score': 20}]
    assert client.get('/api/leaderboard?limit=1').get_json() == [{'username': 'Rex', 'score': 35}]

    messages = client.get('/api/messages').get_json()
    assert [(m['username'], m['content']) for m in messages] == [('Ace', 'gg')]
    assert set(messages[0]) == {'id', 'userId', 'username', 'content', 'timestamp'}


def test_rate_limit_rejects_excess_requests():
    class LimitedConfig(TestConfig):
        RATE_LIMIT_ENABLED = True
        RATE_LIMIT_MAX_REQUESTS = 2

    test_client = create_app(LimitedConfig).test_client()
    assert test_client.get('/health').status_code == 200
    assert test_client.get('/health').status_code == 200
    res = test_client.get('/health')
    assert res.status_code == 429
    assert res.get_json() == {'error': 'Too many requests'}


def test_sliding_window_expires_old_hits():
    now = [0.0]
    limiter = SlidingWindowLimiter(max_requests=2, window_sec=10, clock=lambda: now[0])
    assert limiter.hit('1.2.3.4')
    assert limiter.hit('1.2.3.4')
    assert not limiter.hit('1.2.3.4')
    assert limiter.hit('5.6.7.8')
    now[0] = 10.0
    assert limiter.hit('1.2.3.4')


def test_sliding_window_forgets_idle_addresses():
    now = [0.0]
    limiter = SlidingWindowLimiter(max_requests=5, window_sec=10, clock=lambda: now[0])
    for i in range(10_000):
        assert limiter.hit(f'10.0.{i // 256}.{i % 256}')
    assert len(limiter) == 10_000

    now[0] = 1000.0
    assert limiter.hit('192.168.0.1')
    assert len(limiter) == 1


def test_sliding_window_keeps_active_addresses_on_sweep():
    now = [0.0]
    limiter = SlidingWindowLimiter(max_requests=1, window_sec=10, clock=lambda: now[0])
    limiter.hit('idle')
    now[0] = 5.0
    limiter.hit('busy')
    now[0] = 12.0
    limiter.hit('other')
    assert len(limiter) == 2
    assert not limiter.hit('busy')

import os


def _env_list(name, default):
    raw = os.environ.get(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(',') if item.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    CORS_ORIGINS = _env_list('CORS_ORIGINS', [
        'https://blockfly.netlify.app',
        'http://localhost:5173',
        'http://127.0.0.1:5173',
    ])
    # Game bundle served at /
    STATIC_FOLDER = os.environ.get('STATIC_FOLDER', 'public')
    PORT = int(os.environ.get('PORT', '3000'))
    # Realtime limits
    MAX_USERNAME_LENGTH = int(os.environ.get('MAX_USERNAME_LENGTH', '20'))
    MAX_MESSAGE_LENGTH = int(os.environ.get('MAX_MESSAGE_LENGTH', '500'))
    CHAT_HISTORY_SIZE = int(os.environ.get('CHAT_HISTORY_SIZE', '100'))
    INITIAL_HISTORY_SIZE = int(os.environ.get('INITIAL_HISTORY_SIZE', '50'))
    LEADERBOARD_SIZE = int(os.environ.get('LEADERBOARD_SIZE', '10'))
    # HTTP rate limiting: requests per window per client address
    RATE_LIMIT_ENABLED = os.environ.get('RATE_LIMIT_ENABLED', '1') not in ('0', 'false', 'False')
    RATE_LIMIT_MAX_REQUESTS = int(os.environ.get('RATE_LIMIT_MAX_REQUESTS', '100'))
    RATE_LIMIT_WINDOW_SEC = int(os.environ.get('RATE_LIMIT_WINDOW_SEC', str(15 * 60)))

import os

import click
from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from blockfly.config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    static_folder = os.path.abspath(getattr(config_class, 'STATIC_FOLDER', 'public'))
    flask_app = Flask(__name__, static_folder=static_folder, static_url_path='')
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from blockfly.rate_limit import init_rate_limiting
    init_rate_limiting(flask_app)

    # In-memory roster, chat history and leaderboard for this process
    from blockfly.services.realtime import Coordinator
    flask_app.extensions['realtime'] = Coordinator.from_config(flask_app.config)

    from blockfly.main import main
    flask_app.register_blueprint(main)

    from blockfly.api import api
    flask_app.register_blueprint(api, url_prefix='/api')

    from blockfly.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('serve')
    @click.option('--host', default='0.0.0.0', show_default=True)
    @click.option('--port', type=int, default=None, help='Defaults to the PORT setting.')
    def serve_command(host, port):
        """Runs the chat and leaderboard server."""
        port = port or flask_app.config.get('PORT', 3000)
        flask_app.logger.info(f"[serve] host={host} port={port}")
        socketio.run(flask_app, host=host, port=port, allow_unsafe_werkzeug=True)

    flask_app.cli.add_command(serve_command)

    return flask_app

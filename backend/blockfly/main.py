import os

from flask import Blueprint, current_app, jsonify, send_from_directory

main = Blueprint('main', __name__)


@main.route('/')
def index():
    static_folder = current_app.static_folder
    if static_folder and os.path.isfile(os.path.join(static_folder, 'index.html')):
        return send_from_directory(static_folder, 'index.html')
    return jsonify({'message': 'Welcome to the BlockFly server!'})


@main.route('/health')
def health():
    coordinator = current_app.extensions['realtime']
    return jsonify({'status': 'ok', 'users': len(coordinator.registry)})

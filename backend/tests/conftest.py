import os
import sys
from types import SimpleNamespace

import pytest

# Ensure the backend root (containing the `arcade` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from arcade import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    BCRYPT_HANDLE_LONG_PASSWORDS = True
    JWT_ALGORITHM = 'HS256'
    ACCESS_TOKEN_EXPIRE_MINUTES = 5


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import arcade.models  # noqa: F401
        db.create_all()
    # Requests push their own app context so per-request state (current_user) does not leak
    yield application
    application.extensions['score_broadcaster'].stop()
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(flask_app, namespace='/ws')
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')


@pytest.fixture()
def register_user(client):
    def _register(username, password='password1'):
        res = client.post('/api/users', json={
            'username': username,
            'email': f'{username}@example.com',
            'password': password,
        })
        assert res.status_code == 201, res.get_json()
        body = res.get_json()
        return body['user'], {'Authorization': f"Bearer {body['token']}"}
    return _register


@pytest.fixture()
def game_with_players(client, register_user):
    """Game 'Maze' whose roster is [alice, bob]; carol exists but is not on it."""
    alice, alice_h = register_user('alice')
    bob, bob_h = register_user('bob')
    carol, carol_h = register_user('carol')
    game = client.post('/api/games', json={'name': 'Maze'}, headers=alice_h).get_json()
    assert client.post(f"/api/games/{game['id']}", headers=bob_h).status_code == 200
    return SimpleNamespace(
        game=game,
        alice=alice, alice_h=alice_h,
        bob=bob, bob_h=bob_h,
        carol=carol, carol_h=carol_h,
    )


@pytest.fixture()
def match_setup(client, game_with_players):
    """Match hosted by alice on the game with secret 's1'."""
    g = game_with_players
    res = client.post('/api/matches', json={
        'name': 'Round 1', 'secret': 's1', 'game_id': g.game['id'],
    }, headers=g.alice_h)
    assert res.status_code == 200, res.get_json()
    g.match = res.get_json()
    return g

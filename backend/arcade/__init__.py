from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
from werkzeug.exceptions import HTTPException
import click
from arcade.config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or '*'

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Import and register blueprints here
    from arcade.main import main
    flask_app.register_blueprint(main, url_prefix='/api')

    from arcade.api.games import games
    from arcade.api.matches import matches
    from arcade.api.teams import teams
    from arcade.api.results import results
    flask_app.register_blueprint(games, url_prefix='/api/games')
    flask_app.register_blueprint(matches, url_prefix='/api/matches')
    flask_app.register_blueprint(teams, url_prefix='/api/teams')
    flask_app.register_blueprint(results, url_prefix='/api/results')

    _register_error_handlers(flask_app)

    # Live score feed: one broadcaster per app, owning its DB subscription
    from arcade.services.live import ScoreBroadcaster
    from arcade.socketio_events import register_socketio_handlers
    broadcaster = ScoreBroadcaster(socketio, flask_app.logger)
    flask_app.extensions['score_broadcaster'] = broadcaster
    register_socketio_handlers(broadcaster)
    broadcaster.start()

    # Bearer token authentication
    from arcade.models import User
    from arcade.security import user_id_from_token

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.request_loader
    def load_user_from_request(req):
        header = req.headers.get('Authorization', '')
        scheme, _, token = header.partition(' ')
        if scheme.lower() != 'bearer' or not token:
            return None
        user_id = user_id_from_token(token.strip())
        if user_id is None:
            return None
        return db.session.get(User, user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'No valid token, authorization denied'}), 401

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from arcade.services import games as game_service
        from arcade.services import users as user_service
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed users and a demo game they all play
            users = [
                user_service.register_user(name, f'{name}@example.com', 'password')
                for name in ('testuser1', 'testuser2', 'testuser3')
            ]
            game = game_service.create_game(users[0].id, 'Demo Maze')
            for user in users[1:]:
                game_service.join_game(game.id, user.id)
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app


def _register_error_handlers(flask_app):
    from arcade.services.errors import ServiceError

    @flask_app.errorhandler(ServiceError)
    def handle_service_error(err):
        return jsonify(err.to_dict()), err.status_code

    @flask_app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({'error': err.description}), err.code

    @flask_app.errorhandler(Exception)
    def handle_unexpected_error(err):
        flask_app.logger.exception(f"[server-error] {err}")
        db.session.rollback()
        return jsonify({'error': 'Server error'}), 500

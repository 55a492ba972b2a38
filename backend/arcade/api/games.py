from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user
from arcade.api.validation import require
from arcade.services import games as game_service


games = Blueprint('games', __name__)


@games.route('', methods=['GET'])
@login_required
def list_games():
    return jsonify([g.to_dict() for g in game_service.list_games()])


@games.route('', methods=['POST'])
@login_required
def create_game():
    data = require(request.get_json(silent=True), name='Name is required')
    game = game_service.create_game(current_user.id, str(data['name']).strip())
    return jsonify(game.to_dict()), 201


@games.route('/user', methods=['GET'])
@login_required
def list_my_games():
    return jsonify([g.to_dict() for g in game_service.list_for_user(current_user.id)])


@games.route('/<int:game_id>', methods=['GET'])
@login_required
def get_game(game_id):
    return jsonify(game_service.get_game(game_id).to_dict())


@games.route('/<int:game_id>', methods=['POST'])
@login_required
def join_game(game_id):
    game = game_service.join_game(game_id, current_user.id)
    return jsonify(game.to_dict())

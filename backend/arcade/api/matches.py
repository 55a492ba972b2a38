from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user
from arcade.api.validation import as_int, require
from arcade.services import matches as match_service


matches = Blueprint('matches', __name__)


@matches.route('', methods=['GET'])
@login_required
def list_hosted_matches():
    """Matches created by the caller, newest first, host and teams expanded."""
    hosted = match_service.list_hosted_by(current_user.id)
    return jsonify([m.to_dict(expand=True) for m in hosted])


@matches.route('', methods=['POST'])
@login_required
def create_match():
    data = require(
        request.get_json(silent=True),
        ids=('game_id',),
        name='Name is required',
        secret='Secret is required',
        game_id='Game ID is required',
    )
    match = match_service.create_match(
        current_user.id,
        str(data['name']).strip(),
        str(data['secret']),
        as_int(data, 'game_id'),
    )
    return jsonify(match.to_dict())


@matches.route('/user', methods=['GET'])
@login_required
def list_my_matches():
    return jsonify([m.to_dict() for m in match_service.list_for_user(current_user.id)])


@matches.route('/<int:match_id>', methods=['POST'])
@login_required
def join_match(match_id):
    data = require(request.get_json(silent=True), secret='Secret is required')
    players = match_service.join_match(match_id, current_user.id, str(data['secret']))
    return jsonify([p.to_dict() for p in players])


@matches.route('/<int:match_id>', methods=['DELETE'])
@login_required
def delete_match(match_id):
    match_service.delete_match(match_id, current_user.id)
    return jsonify({'msg': 'Match removed'})


@matches.route('/<int:match_id>/play', methods=['POST'])
@login_required
def record_play(match_id):
    data = require(
        request.get_json(silent=True),
        ids=('player_id',),
        item='Item is required',
        player_id='Player ID is required',
    )
    result = match_service.record_play(match_id, as_int(data, 'player_id'), data['item'])
    return jsonify(result.to_dict())


# Unauthenticated: any caller may finalize a match
@matches.route('/<int:match_id>/stop', methods=['GET'])
def stop_match(match_id):
    match_service.stop_match(match_id)
    return jsonify({'msg': 'Match stopped'})

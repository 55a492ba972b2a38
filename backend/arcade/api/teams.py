from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user
from arcade.api.validation import as_int, require
from arcade.services import teams as team_service


teams = Blueprint('teams', __name__)


@teams.route('', methods=['GET'])
@login_required
def list_owned_teams():
    owned = team_service.list_owned_by(current_user.id)
    return jsonify([t.to_dict(expand=True) for t in owned])


@teams.route('', methods=['POST'])
@login_required
def create_team():
    data = require(
        request.get_json(silent=True),
        ids=('match_id', 'game_id'),
        name='Name is required',
        match_id='Match ID is required',
        game_id='Game ID is required',
        secret='Secret is required',
    )
    team = team_service.create_team(
        current_user.id,
        str(data['name']).strip(),
        as_int(data, 'match_id'),
        as_int(data, 'game_id'),
        str(data['secret']),
    )
    return jsonify(team.to_dict())


@teams.route('/<int:team_id>', methods=['POST'])
@login_required
def join_team(team_id):
    """Join a team. Only players of the team's match may join."""
    data = require(request.get_json(silent=True), secret='Secret is required')
    team = team_service.join_team(team_id, current_user.id, str(data['secret']))
    return jsonify(team.to_dict())


@teams.route('/user', methods=['GET'])
@login_required
def list_my_teams():
    return jsonify([t.to_dict() for t in team_service.list_for_user(current_user.id)])


@teams.route('/<int:team_id>', methods=['DELETE'])
@login_required
def delete_team(team_id):
    team_service.delete_team(team_id, current_user.id)
    return jsonify({'msg': 'Team removed'})

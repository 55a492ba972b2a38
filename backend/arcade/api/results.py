from flask import Blueprint, jsonify
from flask_login import login_required
from arcade.services import results as result_service


results = Blueprint('results', __name__)


@results.route('/<int:result_id>', methods=['GET'])
@login_required
def get_result(result_id):
    return jsonify(result_service.get_result(result_id).to_dict())


@results.route('/match/<int:match_id>', methods=['GET'])
@login_required
def list_match_results(match_id):
    return jsonify([r.to_dict() for r in result_service.list_for_match(match_id)])

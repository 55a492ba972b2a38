from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from arcade.api.validation import require
from arcade.security import create_access_token
from arcade.services import users as user_service
from arcade.services.errors import ValidationFailed

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'API Running'})

@main.route('/users', methods=['POST'])
def register():
    data = require(
        request.get_json(silent=True),
        username='Username is required',
        email='Please include a valid email',
        password='Password is required',
    )
    if '@' not in data['email']:
        raise ValidationFailed([{'param': 'email', 'msg': 'Please include a valid email'}])
    if len(data['password']) < 6:
        raise ValidationFailed([{'param': 'password', 'msg': 'Please enter a password with 6 or more characters'}])

    user = user_service.register_user(data['username'].strip(), data['email'], data['password'])
    return jsonify({'token': create_access_token(user.id), 'user': user.to_dict()}), 201

@main.route('/auth', methods=['POST'])
def login():
    data = require(
        request.get_json(silent=True),
        email='Please include a valid email',
        password='Password is required',
    )
    user = user_service.authenticate(data['email'], data['password'])
    return jsonify({'token': create_access_token(user.id), 'user': user.to_dict()})

@main.route('/auth', methods=['GET'])
@login_required
def current():
    return jsonify(current_user.to_dict())

from flask import current_app
from sqlalchemy import or_

from arcade import db
from arcade.models import User
from arcade.services.errors import Conflict, NotFound, Unauthorized


def register_user(username: str, email: str, password: str) -> User:
    email = email.strip().lower()
    existing = User.query.filter(or_(User.username == username, User.email == email)).first()
    if existing:
        raise Conflict('User already exists')

    user = User(username=username, email=email)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"[user-register] user={user.id} username={username}")
    return user


def authenticate(email: str, password: str) -> User:
    user = User.query.filter_by(email=email.strip().lower()).first()
    if not user or not user.check_password(password):
        raise Unauthorized('Invalid credentials', status_code=400)
    return user


def get_user(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if not user:
        raise NotFound('User not found')
    return user

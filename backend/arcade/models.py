from arcade import db
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from datetime import datetime


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
        }

    def to_summary(self):
        return {'id': self.id, 'username': self.username}


class Player(db.Model):
    """A user's entry on a game roster, carrying accumulated xp."""
    __tablename__ = 'player'
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    xp = db.Column(db.Integer, default=0, nullable=False)
    game = db.relationship('Game', back_populates='players')
    user = db.relationship('User')

    def to_dict(self):
        return {
            'user': self.user.to_summary() if self.user else self.user_id,
            'xp': self.xp,
        }


class Game(db.Model):
    __tablename__ = 'game'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    # Roster keeps join order
    players = db.relationship('Player', back_populates='game', order_by='Player.id',
                              cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'players': [p.to_dict() for p in self.players],
            'date': self.date.isoformat() if self.date else None,
        }


class MatchPlayer(db.Model):
    __tablename__ = 'match_player'
    id = db.Column(db.Integer, primary_key=True)
    match_id = db.Column(db.Integer, db.ForeignKey('match.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    xp = db.Column(db.Integer, default=0, nullable=False)
    match = db.relationship('Match', back_populates='players')

    def to_dict(self):
        return {'user': self.user_id, 'xp': self.xp}


class Match(db.Model):
    __tablename__ = 'match'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    host_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False)
    secret_hash = db.Column(db.String(128), nullable=False)
    is_completed = db.Column(db.Boolean, default=False, nullable=False)
    result_id = db.Column(db.Integer, db.ForeignKey('result.id', name='fk_match_result_id', use_alter=True), nullable=True)
    date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    host = db.relationship('User', foreign_keys=[host_id])
    game = db.relationship('Game')
    # Newest joiner first
    players = db.relationship('MatchPlayer', back_populates='match', order_by='MatchPlayer.id.desc()',
                              cascade='all, delete-orphan')
    teams = db.relationship('Team', back_populates='match', order_by='Team.id',
                            cascade='all, delete-orphan')
    result = db.relationship('Result', foreign_keys=[result_id], post_update=True)

    def to_dict(self, expand=False):
        return {
            'id': self.id,
            'name': self.name,
            'host': self.host.to_summary() if expand else self.host_id,
            'game': self.game_id,
            'teams': [t.to_dict() for t in self.teams] if expand else [t.id for t in self.teams],
            'players': [p.to_dict() for p in self.players],
            'is_completed': self.is_completed,
            'result': self.result_id,
            'date': self.date.isoformat() if self.date else None,
        }


class TeamMember(db.Model):
    __tablename__ = 'team_member'
    id = db.Column(db.Integer, primary_key=True)
    team_id = db.Column(db.Integer, db.ForeignKey('team.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    team = db.relationship('Team', back_populates='members')

    def to_dict(self):
        return {'user': self.user_id}


class Team(db.Model):
    __tablename__ = 'team'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    match_id = db.Column(db.Integer, db.ForeignKey('match.id'), nullable=False, index=True)
    owner_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False)
    secret_hash = db.Column(db.String(128), nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    match = db.relationship('Match', back_populates='teams')
    owner = db.relationship('User', foreign_keys=[owner_id])
    members = db.relationship('TeamMember', back_populates='team', order_by='TeamMember.id.desc()',
                              cascade='all, delete-orphan')

    def to_dict(self, expand=False):
        return {
            'id': self.id,
            'name': self.name,
            'match': self.match_id,
            'owner': self.owner.to_dict() if expand else self.owner_id,
            'game': self.game_id,
            'members': [m.to_dict() for m in self.members],
            'date': self.date.isoformat() if self.date else None,
        }


class ResultEntry(db.Model):
    __tablename__ = 'result_entry'
    id = db.Column(db.Integer, primary_key=True)
    result_id = db.Column(db.Integer, db.ForeignKey('result.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    xp = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self):
        return {'user': self.user_id, 'xp': self.xp}


class Result(db.Model):
    """Snapshot of per-player match xp taken at one scoring event."""
    __tablename__ = 'result'
    id = db.Column(db.Integer, primary_key=True)
    match_id = db.Column(db.Integer, db.ForeignKey('match.id'), nullable=False, index=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    players = db.relationship('ResultEntry', order_by='ResultEntry.id', cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'match': self.match_id,
            'game': self.game_id,
            'players': [e.to_dict() for e in self.players],
            'date': self.date.isoformat() if self.date else None,
        }

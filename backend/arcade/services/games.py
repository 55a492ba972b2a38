from typing import List

from flask import current_app

from arcade import db
from arcade.models import Game, Player
from arcade.services.errors import Conflict, NotFound
from arcade.services.membership import is_member


def list_games() -> List[Game]:
    return Game.query.order_by(Game.date.desc(), Game.id.desc()).all()


def list_for_user(user_id: int) -> List[Game]:
    return (Game.query
            .filter(Game.players.any(Player.user_id == user_id))
            .order_by(Game.date.desc(), Game.id.desc())
            .all())


def get_game(game_id: int) -> Game:
    game = db.session.get(Game, game_id)
    if not game:
        raise NotFound('Game not found')
    return game


def create_game(owner_id: int, name: str) -> Game:
    """Create a game with its creator as the first roster entry."""
    game = Game(name=name)
    game.players.append(Player(user_id=owner_id, xp=0))
    db.session.add(game)
    db.session.commit()
    current_app.logger.info(f"[game-create] game={game.id} owner={owner_id}")
    return game


def join_game(game_id: int, user_id: int) -> Game:
    game = get_game(game_id)
    if is_member(game.players, user_id):
        raise Conflict('User is already a player of this game')

    game.players.append(Player(user_id=user_id, xp=0))
    db.session.commit()
    current_app.logger.info(f"[game-join] game={game.id} user={user_id}")
    return game

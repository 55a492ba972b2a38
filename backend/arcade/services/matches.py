"""Match lifecycle: create, join, score, stop and delete.

Joining is gated by game membership and the match secret. Every recorded
play appends a new Result snapshot; stopping a match folds the last snapshot
into the game roster.
"""
from typing import List

from flask import current_app
from sqlalchemy import or_

from arcade import db
from arcade.models import Game, Match, MatchPlayer, Result
from arcade.security import check_secret, hash_secret
from arcade.services import results as result_service
from arcade.services.errors import Conflict, Forbidden, NotFound, Unauthorized
from arcade.services.membership import find_entry, is_member
from arcade.services.scoring import points_for


def get_match(match_id: int) -> Match:
    match = db.session.get(Match, match_id)
    if not match:
        raise NotFound('Match not found')
    return match


def list_hosted_by(user_id: int) -> List[Match]:
    return (Match.query
            .filter_by(host_id=user_id)
            .order_by(Match.date.desc(), Match.id.desc())
            .all())


def list_for_user(user_id: int) -> List[Match]:
    return (Match.query
            .filter(or_(Match.host_id == user_id,
                        Match.players.any(MatchPlayer.user_id == user_id)))
            .order_by(Match.date.desc(), Match.id.desc())
            .all())


def create_match(host_id: int, name: str, secret: str, game_id: int) -> Match:
    game = db.session.get(Game, game_id)
    if not game:
        raise NotFound('Game not found')
    if not is_member(game.players, host_id):
        raise Forbidden('User is not yet a player of this game')

    match = Match(
        name=name,
        host_id=host_id,
        game_id=game.id,
        secret_hash=hash_secret(secret),
        is_completed=False,
    )
    db.session.add(match)
    db.session.commit()
    current_app.logger.info(f"[match-create] match={match.id} host={host_id} game={game.id}")
    return match


def join_match(match_id: int, user_id: int, secret: str) -> List[MatchPlayer]:
    match = get_match(match_id)
    game = db.session.get(Game, match.game_id)
    if not game or not is_member(game.players, user_id):
        raise Forbidden('User is not yet a player of this game')
    if is_member(match.players, user_id):
        raise Conflict('User is already a player of this match')
    if not check_secret(match.secret_hash, secret):
        raise Unauthorized('Invalid secret', status_code=400)

    match.players.insert(0, MatchPlayer(user_id=user_id, xp=0))
    db.session.commit()
    current_app.logger.info(f"[match-join] match={match.id} user={user_id}")
    return match.players


def delete_match(match_id: int, requester_id: int) -> None:
    match = get_match(match_id)
    if match.host_id != requester_id:
        raise Unauthorized('User not authorized')

    # Break the match -> result reference before removing results
    if match.result_id is not None:
        match.result = None
        db.session.flush()
    for result in Result.query.filter_by(match_id=match.id).all():
        db.session.delete(result)
    db.session.flush()

    team_count = len(match.teams)
    # Teams, their members and the match players go with the match
    db.session.delete(match)
    db.session.commit()
    current_app.logger.info(f"[match-delete] match={match_id} teams_removed={team_count}")


def record_play(match_id: int, player_id: int, item) -> Result:
    match = get_match(match_id)
    if match.is_completed:
        raise Conflict('Match is already completed')
    points = points_for(item)
    player = find_entry(match.players, player_id)
    if player is None:
        raise NotFound('Player is not part of this match')

    player.xp += points
    result = result_service.create_result(match.players, match.id, match.game_id)
    match.result = result
    db.session.commit()
    current_app.logger.info(
        f"[play] match={match.id} player={player_id} item={item} points={points} result={result.id}"
    )
    return result


def stop_match(match_id: int) -> Match:
    match = get_match(match_id)
    result = db.session.get(Result, match.result_id) if match.result_id else None
    if result is None:
        raise NotFound('Result not found')
    if match.is_completed:
        raise Conflict('Match is already completed')

    match.is_completed = True
    db.session.commit()

    game = db.session.get(Game, match.game_id)
    roster = game.players if game else []
    for entry in result.players:
        roster_entry = find_entry(roster, entry.user_id)
        if roster_entry is None:
            current_app.logger.warning(
                f"[stop] match={match.id} user={entry.user_id} missing from game roster, skipped"
            )
            continue
        roster_entry.xp += entry.xp
        db.session.commit()
    current_app.logger.info(f"[stop] match={match.id} result={result.id} credited game={match.game_id}")
    return match

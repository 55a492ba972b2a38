from typing import List

from flask import current_app

from arcade import db
from arcade.models import Game, Match, MatchPlayer, Team, TeamMember
from arcade.security import check_secret, hash_secret
from arcade.services.errors import Conflict, Forbidden, InvalidArgument, NotFound, Unauthorized
from arcade.services.membership import is_member


def get_team(team_id: int) -> Team:
    team = db.session.get(Team, team_id)
    if not team:
        raise NotFound('Team not found')
    return team


def list_owned_by(user_id: int) -> List[Team]:
    return (Team.query
            .filter_by(owner_id=user_id)
            .order_by(Team.date.desc(), Team.id.desc())
            .all())


def list_for_user(user_id: int) -> List[Team]:
    # Match on the member entry's user field, not on the whole entry
    return (Team.query
            .filter(Team.members.any(TeamMember.user_id == user_id))
            .order_by(Team.date.desc(), Team.id.desc())
            .all())


def create_team(owner_id: int, name: str, match_id: int, game_id: int, secret: str) -> Team:
    game = db.session.get(Game, game_id)
    if not game:
        raise NotFound('Game not found')
    match = db.session.get(Match, match_id)
    if not match:
        raise NotFound('Match not found')
    if match.game_id != game.id:
        raise InvalidArgument('Match does not belong to this game')
    if not is_member(game.players, owner_id):
        raise Forbidden('User is not a player of the game')

    team = Team(
        name=name,
        match_id=match.id,
        owner_id=owner_id,
        game_id=game.id,
        secret_hash=hash_secret(secret),
    )
    team.members.insert(0, TeamMember(user_id=owner_id))
    db.session.add(team)
    db.session.commit()

    # The owner becomes a match player if not one already
    if not is_member(match.players, owner_id):
        match.players.insert(0, MatchPlayer(user_id=owner_id, xp=0))
    if team not in match.teams:
        match.teams.append(team)
    db.session.commit()
    current_app.logger.info(f"[team-create] team={team.id} match={match.id} owner={owner_id}")
    return team


def join_team(team_id: int, user_id: int, secret: str) -> Team:
    team = get_team(team_id)
    match = db.session.get(Match, team.match_id)
    if not match or not is_member(match.players, user_id):
        raise Forbidden('User is unable to join, since they are not yet a player of this match')
    if is_member(team.members, user_id):
        raise Conflict('User is already a member of this team')
    if not check_secret(team.secret_hash, secret):
        raise Unauthorized('Invalid secret', status_code=400)

    team.members.insert(0, TeamMember(user_id=user_id))
    db.session.commit()
    current_app.logger.info(f"[team-join] team={team.id} user={user_id}")
    return team


def delete_team(team_id: int, requester_id: int) -> None:
    team = get_team(team_id)
    if team.owner_id != requester_id:
        raise Unauthorized('User not authorized')

    match_id = team.match_id
    match = db.session.get(Match, match_id)
    if match is not None and team in match.teams:
        # delete-orphan cascade removes the row
        match.teams.remove(team)
    else:
        db.session.delete(team)
    db.session.commit()
    current_app.logger.info(f"[team-delete] team={team_id} match={match_id}")

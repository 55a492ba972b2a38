from typing import Iterable, List

from arcade import db
from arcade.models import Result, ResultEntry
from arcade.services.errors import NotFound


def create_result(players: Iterable, match_id: int, game_id: int) -> Result:
    """Persist a snapshot of ``(user_id, xp)`` for every given match player.

    ``players`` are read only; the snapshot copies their current values.
    """
    result = Result(match_id=match_id, game_id=game_id)
    for p in players:
        result.players.append(ResultEntry(user_id=p.user_id, xp=p.xp))
    db.session.add(result)
    db.session.commit()
    return result


def get_result(result_id: int) -> Result:
    result = db.session.get(Result, result_id)
    if not result:
        raise NotFound('Result not found')
    return result


def list_for_match(match_id: int) -> List[Result]:
    return (Result.query
            .filter_by(match_id=match_id)
            .order_by(Result.date.desc(), Result.id.desc())
            .all())

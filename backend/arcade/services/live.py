"""Live score feed.

``ScoreBroadcaster`` subscribes to session events on the application's
SQLAlchemy session. Games whose row or roster entries change during a flush
are remembered on the session; once the transaction commits, each game's
roster is re-read and pushed as ``updateScore`` to every connected viewer.
A rollback drops whatever was pending.
"""
from typing import Any, Dict, Set

from sqlalchemy import event
from sqlalchemy.orm import Session

from arcade import db
from arcade.models import Game, Player

PENDING_KEY = 'arcade_changed_games'


class ScoreBroadcaster:

    def __init__(self, socketio, logger, namespace: str = '/ws', event_name: str = 'updateScore'):
        self.socketio = socketio
        self.logger = logger
        self.namespace = namespace
        self.event_name = event_name
        self.viewers: Set[str] = set()
        self._started = False

    # ---- lifecycle ----

    def start(self) -> None:
        if self._started:
            return
        event.listen(db.session, 'after_flush', self._collect)
        event.listen(db.session, 'after_commit', self._publish)
        event.listen(db.session, 'after_rollback', self._discard)
        self._started = True
        self.logger.info(f"[live-start] namespace={self.namespace}")

    def stop(self) -> None:
        if not self._started:
            return
        event.remove(db.session, 'after_flush', self._collect)
        event.remove(db.session, 'after_commit', self._publish)
        event.remove(db.session, 'after_rollback', self._discard)
        self._started = False
        self.viewers.clear()
        self.logger.info(f"[live-stop] namespace={self.namespace}")

    @property
    def running(self) -> bool:
        return self._started

    # ---- viewer registry ----

    def add_viewer(self, sid: str) -> None:
        self.viewers.add(sid)
        self.logger.info(f"[viewer-connect] sid={sid} viewers={len(self.viewers)}")

    def remove_viewer(self, sid: str) -> None:
        self.viewers.discard(sid)
        self.logger.info(f"[viewer-disconnect] sid={sid} viewers={len(self.viewers)}")

    # ---- change feed ----

    def _collect(self, session, flush_context) -> None:
        changed = session.info.setdefault(PENDING_KEY, set())
        for obj in list(session.new) + list(session.dirty) + list(session.deleted):
            if isinstance(obj, Game) and obj.id is not None:
                changed.add(obj.id)
            elif isinstance(obj, Player) and obj.game_id is not None:
                changed.add(obj.game_id)

    def _discard(self, session) -> None:
        session.info.pop(PENDING_KEY, None)

    def _publish(self, session) -> None:
        changed = session.info.pop(PENDING_KEY, None)
        if not changed:
            return
        # The committing session can no longer emit SQL; read on a fresh one.
        # The write is already committed, so a failed push is logged, not raised.
        try:
            with Session(db.engine) as reader:
                for game_id in sorted(changed):
                    self.broadcast(self.snapshot(reader, game_id))
        except Exception:
            self.logger.exception(f"[live-publish-error] games={sorted(changed)}")

    def snapshot(self, reader, game_id: int) -> Dict[str, Any]:
        game = reader.get(Game, game_id)
        if game is None:
            return {'id': game_id, 'players': []}
        return {
            'id': game.id,
            'players': [
                {'user': p.user.to_summary() if p.user else {'id': p.user_id, 'username': None}, 'xp': p.xp}
                for p in game.players
            ],
        }

    def broadcast(self, payload: Dict[str, Any]) -> None:
        self.logger.info(f"[live-emit] game={payload['id']} viewers={len(self.viewers)}")
        for sid in list(self.viewers):
            self.socketio.emit(self.event_name, payload, to=sid, namespace=self.namespace)

import threading
from contextlib import contextmanager

from scoreboard import db
from scoreboard.exceptions import NotFoundError
from scoreboard.models import Match

# Per-match locks for this process; the row lock covers other workers
_registry_lock = threading.Lock()
_match_locks: dict[int, threading.Lock] = {}


def _lock_for(match_id: int) -> threading.Lock:
    with _registry_lock:
        lock = _match_locks.get(match_id)
        if lock is None:
            lock = _match_locks[match_id] = threading.Lock()
        return lock


def forget_match_lock(match_id: int) -> None:
    with _registry_lock:
        _match_locks.pop(match_id, None)


@contextmanager
def match_lock(match_id: int):
    """Serialize load -> mutate -> commit for one match.

    Holds the process-local lock for ``match_id`` and yields the match row
    loaded with ``SELECT ... FOR UPDATE``. The caller commits before the
    block exits; an exception rolls the session back.
    """
    lock = _lock_for(match_id)
    with lock:
        match = Match.query.filter_by(id=match_id).with_for_update().populate_existing().first()
        if match is None:
            db.session.rollback()
            raise NotFoundError(f'Match {match_id} not found')
        try:
            yield match
        except Exception:
            db.session.rollback()
            raise

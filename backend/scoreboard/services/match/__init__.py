"""Match domain services: volleyball scoring rules and state transitions.

These functions mutate a ``Match`` in memory and never commit; HTTP routes
load the match under ``match_lock``, call exactly one operation and commit.
"""

from .editing import edit_completed_set, edit_current_set_score
from .lifecycle import create_match, pause, reset_current_set, resume, toggle_pause
from .locking import match_lock
from .scoring import apply_point
from .undo import pending_undo, undo_last_point

__all__ = [
    'apply_point',
    'create_match',
    'edit_completed_set',
    'edit_current_set_score',
    'match_lock',
    'pause',
    'pending_undo',
    'reset_current_set',
    'resume',
    'toggle_pause',
    'undo_last_point',
]

"""Thread-safe FSM variant.

``FSM`` assumes exclusive, sequential access. ``SynchronizedFSM`` guards
every public operation with a single re-entrant lock per instance so one
machine can be shared between threads.
"""

import threading
from typing import Any, Dict, List

from undo_fsm.core.fsm import FSM


class SynchronizedFSM(FSM):
    """FSM whose operations are serialized by a per-instance lock."""

    def __init__(self, *args: Any, **kwargs: Any):
        # The lock must exist before any operation can run
        self._lock = threading.RLock()
        super().__init__(*args, **kwargs)

    @property
    def state(self) -> str:
        with self._lock:
            return self._state

    @property
    def undo_history(self) -> List[str]:
        with self._lock:
            return super().undo_history

    @property
    def redo_history(self) -> List[str]:
        with self._lock:
            return super().redo_history

    def get_state(self) -> str:
        with self._lock:
            return super().get_state()

    def change_state(self, state: str) -> None:
        with self._lock:
            super().change_state(state)

    def trigger(self, event: str) -> None:
        with self._lock:
            super().trigger(event)

    def reset(self) -> None:
        with self._lock:
            super().reset()

    def undo(self) -> bool:
        with self._lock:
            return super().undo()

    def redo(self) -> bool:
        with self._lock:
            return super().redo()

    def can_undo(self) -> bool:
        with self._lock:
            return super().can_undo()

    def can_redo(self) -> bool:
        with self._lock:
            return super().can_redo()

    def clear_history(self) -> None:
        with self._lock:
            super().clear_history()

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return super().to_dict()

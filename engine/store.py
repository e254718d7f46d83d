"""
store.py — Snapshot Store
=========================
Holds the current mutable model (an ArrayModel or a Graph) and
publishes immutable snapshots of it to subscribers (renderers, the
recorder, the HTTP layer).

Publishing rules:
  - Only the token the store currently authorises may publish.  After
    `revoke()` a straggling step from a stopped run is dropped, and a
    token from an earlier run can never publish into a new one.
  - Snapshots are numbered 0, 1, 2 … per run and delivered to
    subscribers in that order, under the store lock.
  - `publish_idle()` is the controller's own channel, used between runs
    (model loaded, run stopped).
"""

import logging
import threading
from typing import Callable, List, Optional, Union

from model import ArrayModel, ArraySnapshot, Graph, GraphSnapshot
from engine.token import CancellationToken

logger = logging.getLogger(__name__)

Model = Union[ArrayModel, Graph]
Snapshot = Union[ArraySnapshot, GraphSnapshot]
Subscriber = Callable[[Snapshot], None]


class SnapshotStore:
    """
    Attributes:
        model  : The current model, or None before anything was loaded.
        latest : The most recently published snapshot.
    """

    def __init__(self):
        self.model:        Optional[Model]    = None
        self.latest:       Optional[Snapshot] = None
        self._authorised:  Optional[int]      = None
        self._next_step:   int                = 0
        self._subscribers: List[Subscriber]   = []
        # re-entrant: a subscriber may call back into the controller
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Model
    # ------------------------------------------------------------------
    @property
    def kind(self) -> Optional[str]:
        if isinstance(self.model, ArrayModel):
            return "array"
        if isinstance(self.model, Graph):
            return "graph"
        return None

    def load(self, model: Model) -> Snapshot:
        """Replace the model wholesale.  Callers guarantee no run is active."""
        with self._lock:
            self.model      = model
            self._next_step = 0
        return self.publish_idle("Model loaded.")

    # ------------------------------------------------------------------
    # Authorisation
    # ------------------------------------------------------------------
    def authorise(self, token: CancellationToken) -> None:
        with self._lock:
            self._authorised = token.run_id
            self._next_step  = 0

    def revoke(self, token: CancellationToken) -> None:
        with self._lock:
            if self._authorised == token.run_id:
                self._authorised = None

    def is_authorised(self, token: CancellationToken) -> bool:
        with self._lock:
            return token.is_active and self._authorised == token.run_id

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(self, token: CancellationToken, explanation: str = "") -> Optional[Snapshot]:
        """Snapshot the model for `token`'s run.  Returns None if the token may not publish."""
        with self._lock:
            if not self.is_authorised(token):
                logger.debug("dropped publish from stale run %d", token.run_id)
                return None
            return self._emit(explanation, token.run_id)

    def publish_idle(self, explanation: str = "") -> Optional[Snapshot]:
        with self._lock:
            if self.model is None:
                return None
            return self._emit(explanation, 0)

    def _emit(self, explanation: str, run_id: int) -> Snapshot:
        snap = self.model.snapshot(self._next_step, explanation, run_id)
        self._next_step += 1
        self.latest = snap
        for callback in list(self._subscribers):
            callback(snap)
        return snap

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------
    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback(snapshot)`.  Returns an unsubscribe function."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

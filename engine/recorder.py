"""
recorder.py — Run Recorder & Metrics
====================================
Subscribes to the Snapshot Store for the duration of one run, counts
(and optionally keeps) every snapshot that run publishes, then computes
the metrics card shown after the run.

Usage:
    rec = Recorder(store, keep_snapshots=True)
    rec.start(info, token)
    …                                # run publishes snapshots
    metrics = rec.finish(outcome)
    rec.export()                     # JSON-safe summary
"""

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

from algorithms import AlgoInfo
from algorithms.step import Outcome
from engine.store import Snapshot, SnapshotStore
from engine.token import CancellationToken
from model import ArraySnapshot, GraphSnapshot


# ---------------------------------------------------------------------------
# Metrics dataclass — what the result card renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str            = ""
    algo_label:      str            = ""
    kind:            str            = ""
    run_id:          int            = 0
    outcome:         str            = ""
    total_steps:     int            = 0          # snapshots published by the run
    wall_time_ms:    float          = 0.0
    final_values:    List[float]    = field(default_factory=list)     # sorting
    traversal_order: List[str]      = field(default_factory=list)     # graphs
    distances:       Dict[str, Any] = field(default_factory=dict)     # weighted graphs
    negative_cycle:  bool           = False


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        snapshots : Every snapshot of the run (only if keep_snapshots).
        count     : Number of snapshots the run published.
        last      : The run's last published snapshot.
        metrics   : Computed RunMetrics (available after finish()).
    """

    def __init__(self, store: SnapshotStore, keep_snapshots: bool = False):
        self.store          = store
        self.keep_snapshots = keep_snapshots
        self.snapshots:   List[Snapshot]       = []
        self.count:       int                  = 0
        self.last:        Optional[Snapshot]   = None
        self.metrics:     Optional[RunMetrics] = None

        self._info:        Optional[AlgoInfo]          = None
        self._run_id:      int                         = 0
        self._start_time:  float                       = 0.0
        self._unsubscribe: Optional[Callable[[], None]] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, info: AlgoInfo, token: CancellationToken) -> None:
        self._info       = info
        self._run_id     = token.run_id
        self._start_time = time.monotonic()
        self.snapshots   = []
        self.count       = 0
        self.last        = None
        self.metrics     = None
        self._unsubscribe = self.store.subscribe(self._on_snapshot)

    def finish(self, outcome: Outcome) -> RunMetrics:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        wall_ms = (time.monotonic() - self._start_time) * 1000
        self.metrics = self._compute_metrics(outcome, wall_ms)
        return self.metrics

    def _on_snapshot(self, snap: Snapshot) -> None:
        if snap.run_id != self._run_id:
            return
        self.count += 1
        self.last = snap
        if self.keep_snapshots:
            self.snapshots.append(snap)

    # ------------------------------------------------------------------
    # Export (serialisable summary)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "metrics":   asdict(self.metrics) if self.metrics else {},
            "snapshots": [s.to_dict() for s in self.snapshots],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, outcome: Outcome, wall_ms: float) -> RunMetrics:
        info = self._info
        last = self.last
        metrics = RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            kind=info.kind if info else "",
            run_id=self._run_id,
            outcome=outcome.value,
            total_steps=self.count,
            wall_time_ms=round(wall_ms, 2),
        )
        if isinstance(last, ArraySnapshot):
            metrics.final_values = list(last.values)
        elif isinstance(last, GraphSnapshot):
            metrics.traversal_order = list(last.traversal_order)
            metrics.distances       = last.to_dict()["distances"]
            metrics.negative_cycle  = last.negative_cycle
        return metrics

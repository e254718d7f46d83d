"""
controller.py — Run Controller
==============================
Start/stop orchestration around the Stepper.  The controller owns the
model between runs; during a run the algorithm generator is the only
writer and everyone else reads published snapshots.

    ctl = RunController(Config(delay_scale=0))
    ctl.load_graph(Graph.from_adjacency_list("A: B, C\\nB: D"))
    ctl.start("bfs", start_node="A", block=True)
    ctl.traversal_order                 # ['A', 'B', 'C', 'D']

Run lifecycle:
    start()  → validate → reset model → fresh token → authorise in store
             → Stepper.run on a worker thread (or inline when block=True)
    finish   → token cancelled & revoked → metrics recorded
    stop()   → cancel token (wakes every pending delay) → revoke
             → join worker → clear transient flags → publish idle snapshot

Every precondition is checked before anything is mutated, so a
rejected start leaves the model exactly as it was.
"""

import logging
import random
import threading
from typing import List, Optional, Union

from algorithms import ARRAY, GRAPH, AlgoInfo, Outcome, get_algorithm
from config import Config
from engine.recorder import Recorder, RunMetrics
from engine.scheduler import DelayScheduler, validate_speed
from engine.stepper import Stepper
from engine.store import Snapshot, SnapshotStore
from engine.token import CancellationToken
from errors import PreconditionError, RunActiveError
from model import ArrayModel, Graph, GraphSnapshot

logger = logging.getLogger(__name__)


class RunController:
    """
    Attributes:
        config       : Runtime Config.
        store        : The SnapshotStore renderers subscribe to.
        last_outcome : Outcome of the most recent finished run.
        last_metrics : RunMetrics of the most recent finished run.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        store: Optional[SnapshotStore] = None,
        scheduler: Optional[DelayScheduler] = None,
    ):
        self.config    = config or Config()
        self.store     = store or SnapshotStore()
        self.scheduler = scheduler or DelayScheduler(self.config.delay_scale)
        self.recorder  = Recorder(self.store, keep_snapshots=self.config.keep_snapshots)

        self.last_outcome: Optional[Outcome]    = None
        self.last_metrics: Optional[RunMetrics] = None

        self._lock   = threading.RLock()
        self._token:  Optional[CancellationToken] = None
        self._runner: Optional[threading.Thread]  = None
        self._done   = threading.Event()
        self._done.set()

    # ==================================================================
    # MODEL LOADING (between runs only)
    # ==================================================================
    def load_array(self, values: Union[ArrayModel, List[float]]) -> Snapshot:
        model = values if isinstance(values, ArrayModel) else ArrayModel(values)
        with self._lock:
            self._ensure_idle()
            return self.store.load(model)

    def generate_array(self, size: int, seed: Optional[int] = None) -> Snapshot:
        lo, hi = self.config.min_array_size, self.config.max_array_size
        if not lo <= size <= hi:
            raise PreconditionError(f"array size must be between {lo} and {hi}, got {size}")
        return self.load_array(ArrayModel.random(size, random.Random(seed)))

    def load_graph(self, graph: Graph) -> Snapshot:
        with self._lock:
            self._ensure_idle()
            return self.store.load(graph)

    def generate_graph(
        self,
        num_nodes: int,
        directed: bool = False,
        weighted: bool = False,
        seed: Optional[int] = None,
    ) -> Snapshot:
        lo, hi = self.config.min_nodes, self.config.max_nodes
        if not lo <= num_nodes <= hi:
            raise PreconditionError(f"node count must be between {lo} and {hi}, got {num_nodes}")
        return self.load_graph(Graph.generate_random(num_nodes, directed, weighted, seed))

    # ==================================================================
    # RUN
    # ==================================================================
    @property
    def is_running(self) -> bool:
        return not self._done.is_set()

    @property
    def traversal_order(self) -> List[str]:
        latest = self.store.latest
        if isinstance(latest, GraphSnapshot):
            return list(latest.traversal_order)
        if isinstance(self.store.model, Graph):
            return list(self.store.model.traversal_order)
        return []

    def start(
        self,
        algo_key: str,
        speed: Optional[int] = None,
        start_node: Optional[str] = None,
        directed: Optional[bool] = None,
        block: bool = False,
    ) -> Optional[Outcome]:
        """
        Begin a run of `algo_key` on the loaded model.

        Returns the Outcome when `block` is True, otherwise None right
        after the worker thread has been started.
        """
        speed = self.config.default_speed if speed is None else speed
        with self._lock:
            self._ensure_idle()
            info = self._validate(algo_key, speed, start_node, directed)

            model = self.store.model
            model.reset_algo_state()
            token = CancellationToken()
            self._token = token
            self._done.clear()
            self.store.authorise(token)
            self.recorder.start(info, token)

            if info.kind == ARRAY:
                generator = info.fn(model, token)
            else:
                generator = info.fn(model, start_node, token)

            logger.info("run %d: %s started (speed=%d)", token.run_id, info.key, speed)
            if block:
                self._runner = threading.current_thread()
            else:
                self._runner = threading.Thread(
                    target=self._execute,
                    args=(info, generator, token, speed),
                    name=f"run-{token.run_id}",
                    daemon=True,
                )
                self._runner.start()
                return None

        return self._execute(info, generator, token, speed)

    def stop(self) -> None:
        """
        Cancel the current run and return to a clean idle view.

        With no run in progress this is a no-op: a finished run's
        result stays on screen.
        """
        with self._lock:
            token, runner = self._token, self._runner
            if not self.is_running:
                return
            token.cancel()
            self.store.revoke(token)

        if runner is not threading.current_thread():
            timeout = self.config.stop_join_timeout
            if not self._done.wait(timeout):
                # the worker may still be writing to the model
                logger.warning(
                    "run %d: worker did not finish within %.1fs; model left as is",
                    token.run_id, timeout,
                )
                return

        with self._lock:
            model = self.store.model
            if isinstance(model, ArrayModel):
                model.clear_transient()
            elif isinstance(model, Graph):
                model.reset_algo_state()
            self.store.publish_idle("Stopped.")
        logger.info("run %d: stop requested", token.run_id)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the current run has finished.  Returns False on timeout."""
        return self._done.wait(timeout)

    # ==================================================================
    # INTERNAL
    # ==================================================================
    def _ensure_idle(self) -> None:
        if self.is_running:
            raise RunActiveError("a run is already in progress; stop it first")

    def _validate(
        self,
        algo_key: str,
        speed: int,
        start_node: Optional[str],
        directed: Optional[bool],
    ) -> AlgoInfo:
        info = get_algorithm(algo_key)
        if info is None:
            raise PreconditionError(f"unknown algorithm {algo_key!r}")
        validate_speed(speed)

        model = self.store.model
        if model is None or len(model.nodes if isinstance(model, Graph) else model) == 0:
            raise PreconditionError("nothing to run on; load an array or a graph first")
        if self.store.kind != info.kind:
            raise PreconditionError(f"{info.label} needs a {info.kind}, but a {self.store.kind} is loaded")

        if info.kind == GRAPH:
            if start_node is None or start_node == "":
                raise PreconditionError("select a start node")
            if start_node not in model:
                raise PreconditionError(f"start node {start_node!r} is not in the graph")
            if directed is not None and directed != model.directed:
                kind = "directed" if model.directed else "undirected"
                raise PreconditionError(f"the loaded graph is {kind}; re-import it to change directedness")
            if "weighted" in info.tags and not info.supports_negative and model.has_negative_edges():
                raise PreconditionError(f"{info.label} cannot handle negative edge weights; use Bellman–Ford")
        return info

    def _execute(
        self,
        info: AlgoInfo,
        generator,
        token: CancellationToken,
        speed: int,
    ) -> Outcome:
        outcome = Outcome.FAILED
        try:
            outcome = Stepper(self.store, self.scheduler).run(generator, token, speed)
        except Exception:
            logger.exception("run %d: %s failed", token.run_id, info.key)
        finally:
            with self._lock:
                token.cancel()
                self.store.revoke(token)
                self.last_outcome = outcome
                self.last_metrics = self.recorder.finish(outcome)
                self._done.set()
            logger.info(
                "run %d: %s %s after %d steps",
                token.run_id, info.key, outcome.value, self.last_metrics.total_steps,
            )
        return outcome

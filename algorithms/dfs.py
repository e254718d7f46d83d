"""
dfs.py — Depth-First Search
===========================
Recursive DFS semantics, run on an explicit stack of frames so a
cancellation unwinds the whole "call stack" at once instead of one
frame at a time.

Each frame is `(node_id, neighbour iterator)` — the state a recursive
call keeps between descents.  The iterator is lazy, so the visited
check for a neighbour happens at the moment the frame reaches it, as
it would in the recursive version.

Yields a Step at:
  1. Entering a node  →  CURRENT + VISITED, recorded in the order
  2. Descending an edge to an unvisited neighbour  →  edge highlighted
  3. Returning from a node  →  highlight cleared, parent CURRENT again
"""

from typing import TYPE_CHECKING, Generator, Iterator, List, Set, Tuple

from model import Graph
from algorithms.step import Step

if TYPE_CHECKING:
    from engine.token import CancellationToken


def dfs(graph: Graph, start: str, token: "CancellationToken") -> Generator[Step, None, None]:
    visited: Set[str] = set()
    stack:   List[Tuple[str, Iterator[str]]] = []

    def enter(node_id: str) -> Step:
        visited.add(node_id)
        graph.record_visit(node_id)
        graph.set_current(node_id)
        graph.mark_visited(visited)
        stack.append((node_id, iter([nbr for nbr, _ in graph.neighbours(node_id)])))
        return Step(explanation=f"Visit '{node_id}' and dive into its neighbours.")

    if not token.is_active:
        return
    yield enter(start)

    while stack:
        if not token.is_active:
            return

        node_id, pending = stack[-1]
        nbr = next((n for n in pending if n not in visited), None)

        if nbr is None:
            # -- return from node --
            stack.pop()
            graph.clear_highlights()
            graph.set_current(stack[-1][0] if stack else None)
            yield Step(pause=False, explanation=f"Backtrack from '{node_id}'.")
            continue

        # -- descend --
        graph.highlight(node_id, nbr)
        yield Step(explanation=f"Follow edge {node_id}→{nbr}.")

        if not token.is_active:
            return
        if nbr in visited:
            continue
        yield enter(nbr)

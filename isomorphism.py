# isomorphism.py
"""
Brute-force graph isomorphism over adjacency matrices.

Exhaustive: tries up to n! vertex relabelings with Heap's algorithm, so it is
only practical for small graphs. It runs in a worker process and callers get
the answer back through a Future.
"""

from concurrent.futures import Future, ProcessPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)

Matrix = List[List[int]]
GraphMessage = Tuple[int, Tuple[Tuple[int, int], ...]]


def graphMessage(graph) -> GraphMessage:
    """Plain, picklable adjacency data for a Graph: (vertex count, edges)."""
    return (graph.vertexCount(), tuple((int(a), int(b)) for a, b in graph.getEdges()))


def getAdjacency(vertexCount: int, edges: Sequence[Tuple[int, int]]) -> Matrix:
    a = [[0] * vertexCount for _ in range(vertexCount)]
    for u, v in edges:
        a[u][v] = 1
        a[v][u] = 1
    return a


def isEqual(a: Matrix, a2: Matrix) -> bool:
    if len(a) != len(a2):
        return False
    for i in range(len(a)):
        for j in range(len(a)):
            if a[i][j] != a2[i][j]:
                return False
    return True


def swap(a: Matrix, i: int, j: int) -> None:
    # Relabel vertices i and j: swap both columns and rows
    for row in a:
        row[i], row[j] = row[j], row[i]
    a[i], a[j] = a[j], a[i]


def permute(n: int, a: Matrix, callback: Callable[[Matrix], bool]) -> bool:
    """Heap's algorithm over the first n labels; stops at the first truthy callback."""
    if n <= 1:
        return callback(a)
    for i in range(n - 1):
        if permute(n - 1, a, callback):
            return True
        if n % 2 == 0:
            swap(a, i, n - 1)
        else:
            swap(a, 0, n - 1)
    return permute(n - 1, a, callback)


def isIsomorphic(g: GraphMessage, g2: GraphMessage) -> bool:
    a = getAdjacency(*g)
    a2 = getAdjacency(*g2)
    if len(a) != len(a2):
        return False
    if isEqual(a, a2):
        return True
    return bool(permute(len(a), a, lambda m: isEqual(m, a2)))


def _handleMessage(message: Tuple[GraphMessage, GraphMessage]) -> bool:
    return isIsomorphic(message[0], message[1])


class IsomorphismChecker:
    """Answers isomorphism queries in a separate process, one at a time."""

    def __init__(self, executor: Optional[ProcessPoolExecutor] = None):
        self._executor = executor
        self._owns_executor = executor is None

    def _pool(self) -> ProcessPoolExecutor:
        if self._executor is None:
            self._executor = ProcessPoolExecutor(max_workers=1)
        return self._executor

    def submit(self, graph, graph2) -> Future:
        message = (graphMessage(graph), graphMessage(graph2))
        logger.info("isomorphism check submitted: %d vs %d vertices", message[0][0], message[1][0])
        future = self._pool().submit(_handleMessage, message)
        future.add_done_callback(_logResult)
        return future

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None and self._owns_executor:
            self._executor.shutdown(wait=wait)
            self._executor = None


def _logResult(future: Future) -> None:
    if future.cancelled():
        logger.info("isomorphism check cancelled")
    elif future.exception() is not None:
        logger.error("isomorphism check failed: %s", future.exception())
    else:
        logger.info("isomorphism check finished: %s", future.result())

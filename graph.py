# graph.py

from utils_events import Notifier
from typing import Iterable, List, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)

EdgeKey = Tuple[int, int]


class Graph:
    """
    Undirected multigraph over index-addressed vertex labels.

    Vertices are plain labels; edges are unordered pairs of vertex indices.
    Indices are positional: removing a vertex shifts every higher index down
    by one, so observers must treat held indices as stale after a removal.

    Every mutation is fully applied before its notifier fires.
    """

    def __init__(self, v: Sequence = None, e: Sequence = None):
        if v is None:
            v = []
        if e is None:
            e = []
        if not isinstance(v, (list, tuple)):
            raise TypeError(f"Graph(v, e): Graph vertices must be in a list.  v: {v!r}")
        if not isinstance(e, (list, tuple)):
            raise TypeError(f"Graph(v, e): Graph edges must be in a list.  e: {e!r}")
        self.vertices: List[str] = list(v)
        self.edges: List[EdgeKey] = [(int(a), int(b)) for a, b in e]

        self.vertexAdded = Notifier("vertexAdded")
        self.edgeAdded = Notifier("edgeAdded")
        self.vertexRemoved = Notifier("vertexRemoved")
        self.edgeRemoved = Notifier("edgeRemoved")
        self.vertexEdited = Notifier("vertexEdited")

    # --------------------------
    # Queries
    # --------------------------
    def getVertices(self) -> Tuple[str, ...]:
        return tuple(self.vertices)

    def getEdges(self) -> Tuple[EdgeKey, ...]:
        return tuple(self.edges)

    def vertexCount(self) -> int:
        return len(self.vertices)

    def edgeCount(self) -> int:
        return len(self.edges)

    def isAdjacent(self, a: int, b: int) -> bool:
        for e in self.edges:
            if (e[0] == a and e[1] == b) or (e[0] == b and e[1] == a):
                return True
        return False

    def isConnected(self) -> bool:
        if len(self.vertices) <= 1:
            return True
        return len(self.getConnected([0])) == len(self.vertices)

    def getAdjacent(self, a: Iterable[int]) -> List[int]:
        """One-hop neighbours of every vertex in a, de-duplicated, in discovery order."""
        b: List[int] = []
        for v in a:
            for e in self.edges:
                if e[0] == v and e[1] not in b:
                    b.append(e[1])
                if e[1] == v and e[0] not in b:
                    b.append(e[0])
        return b

    def getConnected(self, a: Iterable[int]) -> List[int]:
        """Closure of getAdjacent from the seed set: every vertex reachable from a."""
        a = list(a)
        while True:
            b = self.getAdjacent(a)
            for v in a:
                if v not in b:
                    b.append(v)
            if len(b) == len(a):
                return a
            a = b

    # --------------------------
    # Mutations
    # --------------------------
    def addVertex(self, v: str) -> int:
        self.vertices.append(v)
        i = len(self.vertices) - 1
        logger.debug("vertex %d added: %r", i, v)
        self.vertexAdded.emit(i)
        return i

    def addEdge(self, e: Sequence[int]) -> bool:
        a, b = int(e[0]), int(e[1])
        if self.isAdjacent(a, b):
            return False
        self.edges.append((a, b))
        logger.debug("edge %d added: (%d, %d)", len(self.edges) - 1, a, b)
        self.edgeAdded.emit(len(self.edges) - 1)
        return True

    def removeVertex(self, i: int) -> None:
        j = 0
        while j < len(self.edges):
            # Re-scan the same slot: removal shifts the next edge into it
            while j < len(self.edges) and i in self.edges[j]:
                self.removeEdge(j)
            if j < len(self.edges):
                a, b = self.edges[j]
                self.edges[j] = (a - 1 if a > i else a, b - 1 if b > i else b)
            j += 1
        label = self.vertices.pop(i)
        logger.debug("vertex %d removed: %r", i, label)
        self.vertexRemoved.emit(i)

    def removeEdge(self, i: int) -> None:
        e = self.edges.pop(i)
        logger.debug("edge %d removed: %r", i, e)
        self.edgeRemoved.emit(i)

    def editVertex(self, i: int, v: str) -> None:
        self.vertices[i] = v
        self.vertexEdited.emit(i)

    def clone(self) -> "Graph":
        return Graph(list(self.vertices), list(self.edges))

    def __repr__(self):
        return f"Graph(v={len(self.vertices)}, e={len(self.edges)})"

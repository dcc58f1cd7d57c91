# viewmodel.py

from PyQt5.QtCore import QPointF, QRectF
from typing import List, Tuple, Union
import logging

from graph import Graph
from vertex import Vertex
from edge import Edge
from utils_events import Notifier

logger = logging.getLogger(__name__)


def stepSpiral(n: int) -> List[Tuple[int, int]]:
    """
    First n points of a square spiral over the integer lattice, starting at
    the origin: +x k steps, +y k steps, k += 1, -x k steps, -y k steps,
    k += 1, repeat. Any prefix of a longer spiral equals the shorter spiral.
    """
    x, y = 0, 0
    r = [(0, 0)]
    k = 1
    while len(r) < n:
        for _ in range(k):
            x += 1
            r.append((x, y))
        for _ in range(k):
            y += 1
            r.append((x, y))
        k += 1
        for _ in range(k):
            x -= 1
            r.append((x, y))
        for _ in range(k):
            y -= 1
            r.append((x, y))
        k += 1
    return r[:max(0, n)]


class GraphViewModel:
    """
    Spatial projection of a Graph.

    vertices/edges stay index-aligned with graph.vertices/graph.edges: every
    graph mutation is mirrored here first, then graphChanged fires once.
    """

    def __init__(self, graph: Graph):
        self.graph = graph
        spiral = stepSpiral(graph.vertexCount())
        self.vertices: List[Vertex] = [Vertex(text, spiral[i]) for i, text in enumerate(graph.vertices)]
        self.edges: List[Edge] = [Edge(e) for e in graph.edges]
        self.graphChanged = Notifier("graphChanged")
        # Caller-chosen spot for the vertex addVertex is about to create
        self._pendingPosition = None

        graph.vertexAdded.connect(self._onVertexAdded)
        graph.edgeAdded.connect(self._onEdgeAdded)
        graph.edgeRemoved.connect(self._onEdgeRemoved)
        graph.vertexRemoved.connect(self._onVertexRemoved)
        graph.vertexEdited.connect(self._onVertexEdited)

    # --------------------------
    # Graph observers
    # --------------------------
    def _onVertexAdded(self, i: int):
        position = self._pendingPosition
        self._pendingPosition = None
        if position is None:
            # Next free spiral slot; (0, 0) for the first vertex
            position = stepSpiral(i + 1)[i]
        self.vertices.append(Vertex(self.graph.vertices[i], position))
        self.graphChanged.emit()

    def _onEdgeAdded(self, i: int):
        self.edges.append(Edge(self.graph.edges[i]))
        self.graphChanged.emit()

    def _onEdgeRemoved(self, i: int):
        del self.edges[i]
        self.graphChanged.emit()

    def _onVertexRemoved(self, i: int):
        del self.vertices[i]
        # Surviving endpoints were re-indexed by the graph
        self.edges = [Edge(e) for e in self.graph.edges]
        self.position()
        self.graphChanged.emit()

    def _onVertexEdited(self, i: int):
        self.vertices[i].setText(self.graph.vertices[i])
        self.graphChanged.emit()

    # --------------------------
    # Queries
    # --------------------------
    def getVertices(self) -> Tuple[Vertex, ...]:
        return tuple(self.vertices)

    def getEdges(self) -> Tuple[Edge, ...]:
        return tuple(self.edges)

    def vertexAt(self, i: int) -> Vertex:
        return self.vertices[i]

    def boundingRect(self) -> QRectF:
        if not self.vertices:
            return QRectF()
        left = min(v.getPosition().x() - v.getWidth() / 2 for v in self.vertices)
        right = max(v.getPosition().x() + v.getWidth() / 2 for v in self.vertices)
        top = min(v.getPosition().y() - v.getHeight() / 2 for v in self.vertices)
        bottom = max(v.getPosition().y() + v.getHeight() / 2 for v in self.vertices)
        return QRectF(left, top, right - left, bottom - top)

    # --------------------------
    # Mutations
    # --------------------------
    def addVertex(self, text: str, position: Union[QPointF, Tuple[float, float]]) -> int:
        self._pendingPosition = position
        try:
            return self.graph.addVertex(text)
        finally:
            self._pendingPosition = None

    def addEdge(self, a: int, b: int) -> bool:
        return self.graph.addEdge((a, b))

    def removeVertex(self, i: int) -> None:
        self.graph.removeVertex(i)

    def removeEdge(self, i: int) -> None:
        self.graph.removeEdge(i)

    def editVertex(self, i: int, text: str) -> None:
        self.graph.editVertex(i, text)

    def moveVertex(self, i: int, delta: QPointF) -> None:
        self.vertices[i].moveBy(delta.x(), delta.y())
        self.graphChanged.emit()

    def position(self) -> None:
        """Lay every vertex out on the spiral again, discarding user placement."""
        spiral = stepSpiral(len(self.vertices))
        for v, p in zip(self.vertices, spiral):
            v.setPosition(p)
        logger.debug("re-laid out %d vertices", len(self.vertices))

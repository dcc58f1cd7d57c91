# vertex.py

from PyQt5.QtCore import QPointF
from typing import Tuple, Union

# Graph-space geometry of a vertex ellipse
VERTEX_HEIGHT = 0.5
VERTEX_MIN_WIDTH = 0.5
VERTEX_BASE_WIDTH = 0.375
VERTEX_CHAR_WIDTH = 0.125


class Vertex:
    """View entry of one graph vertex: cached label, graph-space position, ellipse size."""
    __slots__ = ("_text", "_position", "_width", "_height")

    def __init__(self, text: str, position: Union[QPointF, Tuple[float, float]] = (0.0, 0.0)):
        self._position = QPointF()
        self.setPosition(position)
        self._text = ""
        self._width = VERTEX_MIN_WIDTH
        self._height = VERTEX_HEIGHT
        self.setText(text)

    @staticmethod
    def calculateWidth(text: str) -> float:
        # Grows with the label, never narrower than it is tall
        return max(VERTEX_BASE_WIDTH + len(text) * VERTEX_CHAR_WIDTH, VERTEX_MIN_WIDTH)

    # --- Getters and Setters ---
    def getText(self) -> str:
        return self._text

    def setText(self, text: str) -> None:
        self._text = text
        self._width = self.calculateWidth(text)
        self._height = VERTEX_HEIGHT

    def getPosition(self) -> QPointF:
        return self._position

    def setPosition(self, pos: Union[QPointF, Tuple[float, float]]) -> None:
        if isinstance(pos, QPointF):
            self._position = QPointF(pos.x(), pos.y())
        else:
            x, y = pos  # type: ignore[misc]
            self._position = QPointF(float(x), float(y))

    def moveBy(self, dx: float, dy: float) -> None:
        self._position = QPointF(self._position.x() + dx, self._position.y() + dy)

    def pos_tuple(self) -> Tuple[float, float]:
        return (self._position.x(), self._position.y())

    def getWidth(self) -> float:
        return self._width

    def getHeight(self) -> float:
        return self._height

    def isCircle(self) -> bool:
        return self._width == self._height

    def __repr__(self) -> str:
        return f"V({self._text!r} @ {self._position.x():g},{self._position.y():g})"

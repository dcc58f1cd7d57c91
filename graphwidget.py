# graphwidget.py

from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QEvent, QPointF, pyqtSignal
from PyQt5.QtGui import QPen, QColor, QPainter, QPicture, QFont, QFontMetricsF, QPainterPath
from typing import Optional
import logging

from graph import Graph
from viewmodel import GraphViewModel
from canvasview import (
    CanvasGraphView, DrawingSurface, PointerEvent, ViewConfig,
    PRESS, MOVE, RELEASE, LEAVE, CLICK, WHEEL,
    TOUCH_START, TOUCH_MOVE, TOUCH_END, TOUCH_CANCEL
)
from behaviors import defaultBehaviors

logger = logging.getLogger(__name__)

# Zoom step for the toolbar/keyboard zoom actions (fraction of current scale)
ZOOM_STEP = 0.15

FONT_FAMILY = "Helvetica"

CURSORS = {
    "default": Qt.ArrowCursor,
    "grab": Qt.OpenHandCursor,
    "grabbing": Qt.ClosedHandCursor,
    "move": Qt.SizeAllCursor,
    "alias": Qt.DragLinkCursor,
    "copy": Qt.DragCopyCursor,
}

TOUCH_KINDS = {
    QEvent.TouchBegin: TOUCH_START,
    QEvent.TouchUpdate: TOUCH_MOVE,
    QEvent.TouchEnd: TOUCH_END,
    QEvent.TouchCancel: TOUCH_CANCEL,
}


class QPainterSurface(DrawingSurface):
    """
    Records each frame into a QPicture; the widget replays the latest one
    in paintEvent.
    """

    def __init__(self, widget: QWidget):
        self.widget = widget
        self.background = QColor(255, 255, 255)
        self.frame: Optional[QPicture] = None
        self._picture: Optional[QPicture] = None
        self._painter: Optional[QPainter] = None

    def width(self) -> float:
        return float(self.widget.width())

    def height(self) -> float:
        return float(self.widget.height())

    def beginFrame(self) -> None:
        self._picture = QPicture()
        self._painter = QPainter(self._picture)
        self._painter.setRenderHint(QPainter.Antialiasing)

    def endFrame(self) -> None:
        self._painter.end()
        self.frame = self._picture
        self._painter = None
        self._picture = None
        self.widget.update()

    def clear(self) -> None:
        self._painter.fillRect(0, 0, self.widget.width(), self.widget.height(), self.background)

    def strokePath(self, path: QPainterPath, color: str, lineWidth: float) -> None:
        pen = QPen(QColor(color))
        pen.setWidthF(lineWidth)
        pen.setCapStyle(Qt.RoundCap)
        pen.setJoinStyle(Qt.RoundJoin)
        self._painter.strokePath(path, pen)

    def fillPath(self, path: QPainterPath, color: str) -> None:
        self._painter.fillPath(path, QColor(color))

    def drawText(self, baseline: QPointF, text: str, fontSize: int, color: str) -> None:
        if not text:
            return
        font = QFont(FONT_FAMILY)
        font.setPixelSize(max(1, fontSize))
        advance = QFontMetricsF(font).horizontalAdvance(text)
        self._painter.setFont(font)
        self._painter.setPen(QColor(color))
        self._painter.drawText(QPointF(baseline.x() - advance / 2.0, baseline.y()), text)


class GraphWidget(QWidget):
    statusMessage = pyqtSignal(str, int)
    selectionTextChanged = pyqtSignal(object)

    def __init__(self, parent=None, graph: Optional[Graph] = None, config: Optional[ViewConfig] = None):
        super().__init__(parent)
        self.setMouseTracking(True)
        self.setAttribute(Qt.WA_AcceptTouchEvents)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setMinimumSize(200, 150)

        self.config = config if config is not None else ViewConfig()
        self.surface = QPainterSurface(self)
        self._lastPos = QPointF(0.0, 0.0)
        self.graph: Graph = None
        self.viewModel: GraphViewModel = None
        self.view: CanvasGraphView = None
        self.setGraph(graph if graph is not None else Graph())

    # --------------------------
    # Graph lifecycle
    # --------------------------
    def setGraph(self, graph: Graph):
        behaviors = self.view.behaviors if self.view is not None else defaultBehaviors()
        if self.view is not None:
            self.view.detach()
        self.graph = graph
        self.viewModel = GraphViewModel(graph)
        self.view = CanvasGraphView(self.viewModel, self.surface, behaviors, self.config)
        self.view.cursorChanged.connect(self._applyCursor)
        self.view.textChanged.connect(self.selectionTextChanged.emit)
        self._applyCursor(self.view.cursor)
        self.selectionTextChanged.emit(None)

    def newGraph(self):
        self.setGraph(Graph())
        self.statusMessage.emit("New empty graph.", 2000)

    def addVertex(self, label: str):
        # Drop new vertices at the middle of the visible canvas
        at = self.view.untransform(self.view.center())
        i = self.viewModel.addVertex(label, at)
        self.view.select(i)
        self.statusMessage.emit(f"Vertex {i} added.", 2000)
        return i

    def removeSelectedVertex(self):
        i = self.view.selection
        if i is None:
            self.statusMessage.emit("Select a vertex first (click it).", 3000)
            return
        self.viewModel.removeVertex(i)
        self.statusMessage.emit(f"Vertex {i} removed; layout recomputed.", 3000)

    def setSelectedText(self, text: str):
        self.view.setText(text)

    def relayout(self):
        self.viewModel.position()
        self.view.render()

    def fitGraph(self):
        self.view.fitGraph()

    def centerSelection(self):
        if self.view.selection is None:
            return
        self.view.centerOn(self.viewModel.vertexAt(self.view.selection).getPosition())

    def zoomIn(self):
        self.view.zoom(ZOOM_STEP, self.view.center())
        self.view.render()

    def zoomOut(self):
        self.view.zoom(-ZOOM_STEP, self.view.center())
        self.view.render()

    def setCurvedEdges(self, flag: bool):
        self.config.edgeStyle = "curvy" if flag else "straight"
        self.view.render()

    # --------------------------
    # Painting
    # --------------------------
    def paintEvent(self, event):
        painter = QPainter(self)
        if self.surface.frame is not None:
            painter.drawPicture(0, 0, self.surface.frame)
        else:
            painter.fillRect(self.rect(), self.surface.background)
        painter.end()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.view.render()

    def _applyCursor(self, name: str):
        self.setCursor(CURSORS.get(name, Qt.ArrowCursor))

    # --------------------------
    # Input
    # --------------------------
    def _pointerEvent(self, kind: str, event, pos: QPointF, wheelDelta: float = 0.0) -> PointerEvent:
        mods = event.modifiers()
        self._lastPos = QPointF(pos)
        return PointerEvent(
            kind, QPointF(pos),
            ctrl=bool(mods & Qt.ControlModifier),
            shift=bool(mods & Qt.ShiftModifier),
            alt=bool(mods & Qt.AltModifier),
            meta=bool(mods & Qt.MetaModifier),
            wheelDelta=wheelDelta,
        )

    def _dispatch(self, pe: PointerEvent) -> bool:
        return self.view.dispatch(pe)

    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        if self._dispatch(self._pointerEvent(PRESS, event, QPointF(event.pos()))):
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._dispatch(self._pointerEvent(MOVE, event, QPointF(event.pos()))):
            event.accept()
        else:
            super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mouseReleaseEvent(event)
            return
        pos = QPointF(event.pos())
        consumed = self._dispatch(self._pointerEvent(RELEASE, event, pos))
        # A click always follows the release of the button that was pressed
        consumed = self._dispatch(self._pointerEvent(CLICK, event, pos)) or consumed
        if consumed:
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        pe = PointerEvent(LEAVE, QPointF(self._lastPos))
        self._dispatch(pe)
        super().leaveEvent(event)

    def wheelEvent(self, event):
        pe = self._pointerEvent(WHEEL, event, QPointF(event.pos()), float(event.angleDelta().y()))
        if self._dispatch(pe):
            event.accept()
        else:
            event.ignore()

    def event(self, e):
        kind = TOUCH_KINDS.get(e.type())
        if kind is None:
            return super().event(e)
        points = e.touchPoints()
        pos = QPointF(points[0].pos()) if points else QPointF(self._lastPos)
        self._dispatch(self._pointerEvent(kind, e, pos))
        e.accept()
        return True

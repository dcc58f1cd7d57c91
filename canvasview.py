# canvasview.py

from PyQt5.QtCore import QPointF, QTimer
from PyQt5.QtGui import QPainterPath
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple
import logging
import time

from viewmodel import GraphViewModel
from vertex import Vertex
from edge import Edge
from motion import Ease, Decelerate
from utils_events import Notifier
from utils_geom import (
    BEZIER_KAPPA, v_add, v_sub, v_scale, v_mid, v_rot90_ccw,
    ellipse_boundary_point, point_in_ellipse
)

logger = logging.getLogger(__name__)

# Input event kinds, pointer then touch
CLICK = "click"
PRESS = "press"
MOVE = "move"
RELEASE = "release"
LEAVE = "leave"
WHEEL = "wheel"
TOUCH_START = "touchstart"
TOUCH_MOVE = "touchmove"
TOUCH_END = "touchend"
TOUCH_CANCEL = "touchcancel"

EVENTS = (CLICK, PRESS, MOVE, RELEASE, LEAVE, WHEEL,
          TOUCH_START, TOUCH_MOVE, TOUCH_END, TOUCH_CANCEL)

MODIFIERS = ("ctrl", "shift", "alt", "meta")

# Events after which no pointer button is held
GESTURE_ENDS = (RELEASE, LEAVE, TOUCH_END, TOUCH_CANCEL)

# Rendering proportions, relative to the current scale
FONT_SCALE = 0.2
LINE_WIDTH_SCALE = 0.02
TEXT_BASELINE = 7.0 / 20.0
CURVE_BEND = 1.0 / 8.0
FIT_PADDING = 0.5


@dataclass
class ViewConfig:
    scale: float = 100.0          # pixels per graph-space unit
    minScale: float = 45.0
    maxScale: float = 1450.0
    maxFPS: float = 60.0
    easeTime: float = 50.0        # ms for a pan to catch up with the pointer
    coastTime: float = 100.0      # ms of momentum after a pan is released
    centerTime: float = 600.0     # ms for centerOn()
    wheelDivisor: float = 1000.0  # wheel delta units per unit of zoom
    edgeStyle: str = "straight"   # "straight" | "curvy"

    def __post_init__(self):
        if self.minScale <= 0:
            raise ValueError(f"ViewConfig: minScale must be positive, got {self.minScale}")
        if self.minScale > self.maxScale:
            raise ValueError(f"ViewConfig: minScale {self.minScale} exceeds maxScale {self.maxScale}")
        if self.maxFPS <= 0:
            raise ValueError(f"ViewConfig: maxFPS must be positive, got {self.maxFPS}")
        for name in ("easeTime", "coastTime", "centerTime"):
            if getattr(self, name) <= 0:
                raise ValueError(f"ViewConfig: {name} must be positive, got {getattr(self, name)}")
        if self.edgeStyle not in ("straight", "curvy"):
            raise ValueError(f"ViewConfig: unknown edgeStyle {self.edgeStyle!r}")
        self.scale = min(max(self.scale, self.minScale), self.maxScale)


@dataclass
class PointerEvent:
    """A pointer or touch event in canvas pixel coordinates."""
    kind: str
    pos: QPointF
    ctrl: bool = False
    shift: bool = False
    alt: bool = False
    meta: bool = False
    wheelDelta: float = 0.0
    defaultPrevented: bool = False

    def preventDefault(self) -> None:
        self.defaultPrevented = True

    def hasModifier(self, name: str) -> bool:
        return bool(getattr(self, name, False))


@dataclass
class DragState:
    """A vertex drag in progress, shared by the drag-based behaviors."""
    vertex: int
    origin: QPointF
    current: QPointF

    def delta(self) -> QPointF:
        return v_sub(self.current, self.origin)


class DrawingSurface(ABC):
    """
    What the view draws on. One frame is bracketed by beginFrame/endFrame;
    coordinates are canvas pixels.
    """

    @abstractmethod
    def width(self) -> float: ...

    @abstractmethod
    def height(self) -> float: ...

    def beginFrame(self) -> None:
        pass

    def endFrame(self) -> None:
        pass

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def strokePath(self, path: QPainterPath, color: str, lineWidth: float) -> None: ...

    @abstractmethod
    def fillPath(self, path: QPainterPath, color: str) -> None: ...

    @abstractmethod
    def drawText(self, baseline: QPointF, text: str, fontSize: int, color: str) -> None:
        """Draw text horizontally centred on baseline.x(), sitting on baseline.y()."""


def _monotonicMs() -> float:
    return time.monotonic() * 1000.0


def _qtScheduler(delay_ms: float, callback: Callable[[], None]) -> None:
    QTimer.singleShot(int(round(delay_ms)), callback)


class CanvasGraphView:
    """
    Renders a GraphViewModel on a DrawingSurface and routes input events to
    an ordered list of behaviors. Owns the pixel transform:

        pixel = graphPoint * scale - pan + canvasCenter
    """

    def __init__(self, graphViewModel: GraphViewModel, surface: DrawingSurface,
                 behaviors: Optional[list] = None, config: Optional[ViewConfig] = None,
                 clock: Optional[Callable[[], float]] = None,
                 scheduler: Optional[Callable[[float, Callable[[], None]], None]] = None):
        self.gvm = graphViewModel
        self.surface = surface
        self.config = config if config is not None else ViewConfig()
        self.clock = clock if clock is not None else _monotonicMs
        self.scheduler = scheduler if scheduler is not None else _qtScheduler

        self.scale = self.config.scale
        self.pan = QPointF(0.0, 0.0)
        self.motion: Optional[Tuple] = None
        self.selection: Optional[int] = None
        self.drag: Optional[DragState] = None
        self.cursor = "default"
        self._animating = False

        self.textChanged = Notifier("textChanged")
        self.cursorChanged = Notifier("cursorChanged")

        self.behaviors: list = list(behaviors) if behaviors else []

        self.gvm.graphChanged.connect(self.render)
        self.gvm.graph.vertexRemoved.connect(self._onVertexRemoved)
        self.render()

    # --------------------------
    # Canvas geometry
    # --------------------------
    def width(self) -> float:
        return self.surface.width()

    def height(self) -> float:
        return self.surface.height()

    def center(self) -> QPointF:
        return QPointF(self.surface.width() / 2.0, self.surface.height() / 2.0)

    def transform(self, p: QPointF) -> QPointF:
        c = self.center()
        return QPointF(p.x() * self.scale - self.pan.x() + c.x(),
                       p.y() * self.scale - self.pan.y() + c.y())

    def untransform(self, p: QPointF) -> QPointF:
        c = self.center()
        return QPointF((p.x() + self.pan.x() - c.x()) / self.scale,
                       (p.y() + self.pan.y() - c.y()) / self.scale)

    def zoom(self, delta: float, pivot: QPointF) -> None:
        """Scale by (1 + delta), keeping the graph point under pivot fixed on screen."""
        oldScale = self.scale
        newScale = oldScale + delta * oldScale
        clamped = min(max(newScale, self.config.minScale), self.config.maxScale)
        if clamped != newScale:
            logger.debug("zoom clamped to %g", clamped)
        self.scale = clamped
        k = (self.scale - oldScale) / oldScale
        c = self.center()
        self.pan = QPointF(self.pan.x() + k * (self.pan.x() + pivot.x() - c.x()),
                           self.pan.y() + k * (self.pan.y() + pivot.y() - c.y()))

    def pickVertex(self, p: QPointF) -> Optional[int]:
        """Index of the first vertex whose ellipse contains pixel p, else None."""
        g = self.untransform(p)
        for i, v in enumerate(self.gvm.vertices):
            if point_in_ellipse(g, v.getPosition(), v.getWidth(), v.getHeight()):
                return i
        return None

    # --------------------------
    # Pan motion
    # --------------------------
    def sampleMotion(self, t: float) -> Tuple[QPointF, QPointF]:
        """Pan position and velocity at time t; at rest when no motion runs."""
        if self.motion is None:
            return QPointF(self.pan), QPointF(0.0, 0.0)
        mx, my = self.motion
        return QPointF(mx.x(t), my.x(t)), QPointF(mx.v(t), my.v(t))

    def easePanTo(self, target: QPointF, duration: float) -> None:
        # Start from the current velocity so replacing a motion never jolts
        now = self.clock()
        x, v = self.sampleMotion(now)
        self.motion = (Ease(x.x(), target.x(), v.x(), now, now + duration),
                       Ease(x.y(), target.y(), v.y(), now, now + duration))
        self._startAnimation()

    def arrestMotion(self, duration: float) -> None:
        if self.motion is None:
            return
        now = self.clock()
        x, v = self.sampleMotion(now)
        self.motion = (Ease(x.x(), x.x(), v.x(), now, now + duration),
                       Ease(x.y(), x.y(), v.y(), now, now + duration))
        self._startAnimation()

    def coast(self, duration: float) -> None:
        if self.motion is None:
            return
        now = self.clock()
        x, v = self.sampleMotion(now)
        self.motion = (Decelerate(x.x(), v.x(), now, now + duration),
                       Decelerate(x.y(), v.y(), now, now + duration))
        self._startAnimation()

    def _startAnimation(self) -> None:
        if not self._animating:
            logger.debug("pan animation started")
            self.animate()

    def animate(self) -> None:
        """One animation frame; reschedules itself until both axes come to rest."""
        t = self.clock()
        if self.motion is None:
            self._animating = False
            return
        mx, my = self.motion
        self.pan = QPointF(mx.x(t), my.x(t))
        if t > mx.end and t > my.end:
            self.motion = None
            self._animating = False
            logger.debug("pan animation finished at (%g, %g)", self.pan.x(), self.pan.y())
            self.render()
            return
        self.render()
        frameDuration = self.clock() - t
        self._animating = True
        self.scheduler(max(1.0, 1000.0 / self.config.maxFPS - frameDuration), self.animate)

    def centerOn(self, p: QPointF) -> None:
        """Ease the pan until graph point p sits at the canvas centre."""
        self.easePanTo(v_scale(p, self.scale), self.config.centerTime)

    def fitGraph(self) -> None:
        rect = self.gvm.boundingRect()
        if rect.isNull():
            return
        rect = rect.adjusted(-FIT_PADDING, -FIT_PADDING, FIT_PADDING, FIT_PADDING)
        fit = min(self.width() / rect.width(), self.height() / rect.height())
        self.scale = min(max(fit, self.config.minScale), self.config.maxScale)
        self.motion = None
        self.pan = v_scale(rect.center(), self.scale)
        self.render()

    # --------------------------
    # Rendering
    # --------------------------
    def fontSize(self) -> int:
        return int(self.scale * FONT_SCALE)

    def lineWidth(self) -> float:
        return self.scale * LINE_WIDTH_SCALE

    def render(self) -> None:
        s = self.surface
        s.beginFrame()
        try:
            s.clear()
            for edge in self.gvm.edges:
                self.renderEdge(edge)
            for i, v in enumerate(self.gvm.vertices):
                if self.drag is not None and i == self.drag.vertex:
                    self.renderVertex(v, True, v_add(self.transform(v.getPosition()), self.drag.delta()))
                self.renderVertex(v, i == self.selection)
        finally:
            s.endFrame()

    def renderEdge(self, edge: Edge) -> None:
        if edge.isLoop():
            v = self.gvm.vertices[edge.getStartIndex()]
            c = v_add(v.getPosition(), QPointF(v.getWidth() / 2.0, v.getHeight() / 2.0))
            path = self.circlePath(self.transform(c), self.scale * v.getHeight() / 2.0)
        else:
            a = self.gvm.vertices[edge.getStartIndex()]
            b = self.gvm.vertices[edge.getEndIndex()]
            pa, pb = a.getPosition(), b.getPosition()
            c = v_mid(pa, pb)
            if self.config.edgeStyle == "curvy":
                c = v_add(c, v_scale(v_rot90_ccw(v_sub(pb, pa)), CURVE_BEND))
            ea = self.transform(ellipse_boundary_point(pa, a.getWidth(), a.getHeight(), c))
            eb = self.transform(ellipse_boundary_point(pb, b.getWidth(), b.getHeight(), c))
            path = QPainterPath(ea)
            if self.config.edgeStyle == "curvy":
                path.quadTo(self.transform(c), eb)
            else:
                path.lineTo(eb)
        self.surface.strokePath(path, "black", self.lineWidth())

    def renderVertex(self, v: Vertex, selected: bool, position: Optional[QPointF] = None) -> None:
        p = position if position is not None else self.transform(v.getPosition())
        if v.isCircle():
            path = self.circlePath(p, self.scale * v.getHeight() / 2.0)
        else:
            path = self.ellipsePath(p, self.scale * v.getWidth(), self.scale * v.getHeight())
        baseline = QPointF(p.x(), p.y() + self.fontSize() * TEXT_BASELINE)
        if selected:
            self.surface.fillPath(path, "black")
            self.surface.strokePath(path, "white", self.lineWidth())
            self.surface.drawText(baseline, v.getText(), self.fontSize(), "white")
        else:
            self.surface.strokePath(path, "black", self.lineWidth())
            self.surface.drawText(baseline, v.getText(), self.fontSize(), "black")

    @staticmethod
    def circlePath(c: QPointF, r: float) -> QPainterPath:
        path = QPainterPath()
        path.addEllipse(c, r, r)
        return path

    @staticmethod
    def ellipsePath(c: QPointF, w: float, h: float) -> QPainterPath:
        """Four cubic Bezier quarters approximating a w x h ellipse around c."""
        x, y = c.x(), c.y()
        kw, kh = w * BEZIER_KAPPA, h * BEZIER_KAPPA
        path = QPainterPath(QPointF(x + w / 2, y))
        path.cubicTo(QPointF(x + w / 2, y - kh), QPointF(x + kw, y - h / 2), QPointF(x, y - h / 2))
        path.cubicTo(QPointF(x - kw, y - h / 2), QPointF(x - w / 2, y - kh), QPointF(x - w / 2, y))
        path.cubicTo(QPointF(x - w / 2, y + kh), QPointF(x - kw, y + h / 2), QPointF(x, y + h / 2))
        path.cubicTo(QPointF(x + kw, y + h / 2), QPointF(x + w / 2, y + kh), QPointF(x + w / 2, y))
        path.closeSubpath()
        return path

    # --------------------------
    # Selection and labels
    # --------------------------
    def select(self, index: Optional[int]) -> None:
        self.selection = index
        self.textChanged.emit(self.getText())
        self.render()

    def setText(self, text: str) -> None:
        if self.selection is not None:
            self.gvm.editVertex(self.selection, text)
            self.textChanged.emit(text)

    def getText(self) -> Optional[str]:
        if self.selection is not None:
            return self.gvm.vertices[self.selection].getText()
        return None

    def _onVertexRemoved(self, i: int) -> None:
        # The view-model has already redrawn with the old indices
        stale = self.selection is not None or self.drag is not None
        changed = False
        if self.selection is not None:
            if self.selection == i:
                self.selection = None
                changed = True
            elif self.selection > i:
                self.selection -= 1
        if self.drag is not None:
            if self.drag.vertex == i:
                self.drag = None
            elif self.drag.vertex > i:
                self.drag.vertex -= 1
        if changed:
            self.textChanged.emit(None)
        if stale:
            self.render()

    # --------------------------
    # Behaviors and dispatch
    # --------------------------
    def addBehavior(self, behavior) -> None:
        self.behaviors.append(behavior)

    def removeBehavior(self, behavior) -> bool:
        for i, b in enumerate(self.behaviors):
            if b is behavior:
                del self.behaviors[i]
                return True
        return False

    def setBehaviors(self, behaviors: List) -> None:
        self.behaviors = list(behaviors)

    def detach(self) -> None:
        self.behaviors = []

    def dispatch(self, event: PointerEvent) -> bool:
        """
        Offer the event to each behavior in registration order. The first
        handler returning a truthy value consumes it.
        """
        for behavior in self.behaviors:
            handler = behavior.handler(event.kind)
            if handler is not None and handler(event, self):
                event.preventDefault()
                return True
        if event.kind == MOVE:
            self.setCursor("default")
        elif event.kind in GESTURE_ENDS and self.drag is not None:
            # Nobody finished the drag; the button is up, so drop it
            logger.debug("unclaimed drag of vertex %d dropped", self.drag.vertex)
            self.endDrag()
        return False

    def setCursor(self, cursor: str) -> None:
        if cursor != self.cursor:
            self.cursor = cursor
            self.cursorChanged.emit(cursor)

    def getMousePosition(self, event: PointerEvent) -> QPointF:
        return QPointF(event.pos)

    # --------------------------
    # Vertex dragging
    # --------------------------
    def startDrag(self, event: PointerEvent) -> bool:
        m0 = self.getMousePosition(event)
        v0 = self.pickVertex(m0)
        if v0 is None:
            return False
        self.drag = DragState(v0, m0, QPointF(m0))
        logger.debug("drag started on vertex %d", v0)
        return True

    def isDraggingVertex(self) -> bool:
        return self.drag is not None

    def moveDrag(self, event: PointerEvent) -> bool:
        if self.drag is None:
            return False
        self.drag.current = self.getMousePosition(event)
        self.render()
        return True

    def endDrag(self) -> bool:
        if self.drag is None:
            return False
        self.drag = None
        self.render()
        return True

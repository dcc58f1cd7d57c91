# behaviors.py
"""
Gesture recognizers for CanvasGraphView.

A behavior exposes one handler method per input event kind it understands
(click, press, move, release, leave, wheel, touch*). The view offers each
event to its behaviors in order; a handler returns True to consume the event
and anything falsy to let the next behavior see it. Behaviors compose by
declining whatever falls outside their concern, so their order matters.
"""

from PyQt5.QtCore import QPointF
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence
import logging

from canvasview import EVENTS, CanvasGraphView, PointerEvent
from utils_geom import v_sub

logger = logging.getLogger(__name__)


class Behavior:
    def __init__(self, modifiers: Optional[Sequence[str]] = None, disabled: bool = False):
        self.modifiers: List[str] = list(modifiers) if modifiers else []
        self.disabled = disabled

    def handler(self, kind: str) -> Optional[Callable[[PointerEvent, CanvasGraphView], bool]]:
        if kind not in EVENTS:
            return None
        h = getattr(self, kind, None)
        return h if callable(h) else None

    def applies(self, event: PointerEvent) -> bool:
        if self.disabled:
            return False
        for m in self.modifiers:
            if not event.hasModifier(m):
                return False
        return True

    # --- Modifier builders (chainable) ---
    def modify(self, prop: str, enable: bool = True) -> "Behavior":
        if enable is False:
            if prop in self.modifiers:
                self.modifiers.remove(prop)
        elif prop not in self.modifiers:
            self.modifiers.append(prop)
        return self

    def ctrl(self, enable: bool = True) -> "Behavior":
        return self.modify("ctrl", enable)

    def shift(self, enable: bool = True) -> "Behavior":
        return self.modify("shift", enable)

    def alt(self, enable: bool = True) -> "Behavior":
        return self.modify("alt", enable)

    def meta(self, enable: bool = True) -> "Behavior":
        return self.modify("meta", enable)

    def __repr__(self):
        return f"{type(self).__name__}(modifiers={self.modifiers}, disabled={self.disabled})"


@dataclass
class PanGesture:
    """Pointer and pan offset captured when a pan starts."""
    origin: QPointF
    panOrigin: QPointF


class Panning(Behavior):
    """
    Drag on empty canvas to pan. The pan eases toward the pointer and coasts
    to a stop after release. Durations left as None come from the view's
    ViewConfig.
    """

    def __init__(self, modifiers=None, easeTime: Optional[float] = None, coastTime: Optional[float] = None):
        super().__init__(modifiers)
        for name, value in (("easeTime", easeTime), ("coastTime", coastTime)):
            if value is not None and value <= 0:
                raise ValueError(f"Panning: {name} must be positive, got {value}")
        self.easeTime = easeTime
        self.coastTime = coastTime
        self.gesture: Optional[PanGesture] = None

    def _easeTime(self, view) -> float:
        return self.easeTime if self.easeTime is not None else view.config.easeTime

    def _coastTime(self, view) -> float:
        return self.coastTime if self.coastTime is not None else view.config.coastTime

    def press(self, event, view):
        if not self.applies(event):
            return False
        # Bring any running motion to a smooth stop under the pointer
        view.arrestMotion(self._easeTime(view))
        self.gesture = PanGesture(view.getMousePosition(event), QPointF(view.pan))
        view.setCursor("grabbing")
        logger.debug("pan started at (%g, %g)", self.gesture.origin.x(), self.gesture.origin.y())
        return True

    def move(self, event, view):
        if self.gesture is not None:
            d = v_sub(view.getMousePosition(event), self.gesture.origin)
            view.easePanTo(v_sub(self.gesture.panOrigin, d), self._easeTime(view))
            view.setCursor("grabbing")
            return True
        if self.applies(event):
            if view.pickVertex(view.getMousePosition(event)) is None and view.drag is None:
                view.setCursor("grab")
                return True
        return False

    def release(self, event, view):
        if self.gesture is None:
            return False
        self.gesture = None
        view.coast(self._coastTime(view))
        view.setCursor("grab")
        logger.debug("pan released")
        return True

    leave = release
    touchstart = press
    touchmove = move
    touchend = release
    touchcancel = release


class Selecting(Behavior):
    """Click a vertex to select it for label editing; click empty canvas to clear."""

    def click(self, event, view):
        if not self.applies(event):
            return False
        view.select(view.pickVertex(view.getMousePosition(event)))
        return True


class Zooming(Behavior):
    """Wheel zoom anchored at the pointer."""

    def wheel(self, event, view):
        if not self.applies(event):
            return False
        view.zoom(event.wheelDelta / view.config.wheelDivisor, view.getMousePosition(event))
        if view.motion is None:
            view.render()
        event.preventDefault()
        return True


class Moving(Behavior):
    """
    Drag a vertex to move it. Releasing over another vertex is left to the
    behaviors after this one.
    """

    def press(self, event, view):
        if self.applies(event):
            return view.startDrag(event)
        return False

    def move(self, event, view):
        if not self.applies(event):
            return False
        v = view.pickVertex(view.getMousePosition(event))
        if view.drag is not None:
            view.moveDrag(event)
            if v is None or v == view.drag.vertex:
                view.setCursor("move")
                return True
        elif v is not None:
            view.setCursor("move")
            return True
        return False

    def release(self, event, view):
        if not (self.applies(event) and view.isDraggingVertex()):
            return False
        v0 = view.drag.vertex
        m1 = view.getMousePosition(event)
        v1 = view.pickVertex(m1)
        if v1 is not None and v1 != v0:
            return False
        p0 = view.untransform(view.drag.origin)
        p1 = view.untransform(m1)
        view.endDrag()
        view.gvm.moveVertex(v0, v_sub(p1, p0))
        logger.debug("vertex %d moved", v0)
        return True

    leave = release


class CreatingEdges(Behavior):
    """Drag from one vertex and release on another to join them."""

    def press(self, event, view):
        if self.applies(event):
            return view.startDrag(event)
        return False

    def move(self, event, view):
        if not (self.applies(event) and view.isDraggingVertex()):
            return False
        v1 = view.pickVertex(view.getMousePosition(event))
        view.moveDrag(event)
        if v1 is not None:
            view.setCursor("alias")
            return True
        return False

    def release(self, event, view):
        if not (self.applies(event) and view.isDraggingVertex()):
            return False
        v1 = view.pickVertex(view.getMousePosition(event))
        if v1 is None:
            return False
        v0 = view.drag.vertex
        view.endDrag()
        added = view.gvm.addEdge(v0, v1)
        logger.debug("edge %d - %d %s", v0, v1, "added" if added else "already present")
        return True

    leave = release


class CreatingVertices(Behavior):
    """Drag from a vertex and release on empty canvas to grow a new joined vertex there."""

    def press(self, event, view):
        if self.applies(event):
            return view.startDrag(event)
        return False

    def move(self, event, view):
        if not (self.applies(event) and view.isDraggingVertex()):
            return False
        v1 = view.pickVertex(view.getMousePosition(event))
        view.moveDrag(event)
        if v1 is None:
            view.setCursor("copy")
            return True
        return False

    def release(self, event, view):
        if not (self.applies(event) and view.isDraggingVertex()):
            return False
        m1 = view.getMousePosition(event)
        if view.pickVertex(m1) is not None:
            return False
        v0 = view.drag.vertex
        view.endDrag()
        v = view.gvm.addVertex("", view.untransform(m1))
        view.gvm.addEdge(v0, v)
        logger.debug("vertex %d grown from %d", v, v0)
        return True

    leave = release


def defaultBehaviors() -> List[Behavior]:
    """Stock gesture set: shift-drag grows vertices, plain drag moves or joins them."""
    return [
        Selecting(),
        Zooming(),
        CreatingVertices().shift(),
        Moving(),
        CreatingEdges(),
        Panning(),
    ]

import pytest
from PyQt5.QtCore import QPointF

from graph import Graph
from viewmodel import GraphViewModel
from canvasview import CanvasGraphView, DrawingSurface, PointerEvent, ViewConfig


class RecordingSurface(DrawingSurface):
    """Canvas stand-in: remembers every draw call of the last frame."""

    def __init__(self, width=800, height=600):
        self._width = width
        self._height = height
        self.frames = 0
        self.calls = []

    def width(self):
        return self._width

    def height(self):
        return self._height

    def beginFrame(self):
        self.calls = []

    def endFrame(self):
        self.frames += 1

    def clear(self):
        self.calls.append(("clear",))

    def strokePath(self, path, color, lineWidth):
        self.calls.append(("stroke", path, color, lineWidth))

    def fillPath(self, path, color):
        self.calls.append(("fill", path, color))

    def drawText(self, baseline, text, fontSize, color):
        self.calls.append(("text", baseline, text, fontSize, color))

    def texts(self):
        return [c for c in self.calls if c[0] == "text"]


class ManualClock:
    def __init__(self, t=1000.0):
        self.t = t

    def __call__(self):
        return self.t

    def advance(self, dt):
        self.t += dt


class QueueScheduler:
    """Collects animation callbacks instead of running a timer."""

    def __init__(self):
        self.pending = []

    def __call__(self, delay_ms, callback):
        self.pending.append((delay_ms, callback))

    def runNext(self):
        delay, callback = self.pending.pop(0)
        callback()
        return delay


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler():
    return QueueScheduler()


@pytest.fixture
def make_view(surface, clock, scheduler):
    def _make(graph=None, behaviors=None, **config):
        g = graph if graph is not None else Graph()
        gvm = GraphViewModel(g)
        return CanvasGraphView(gvm, surface, behaviors, ViewConfig(**config),
                               clock=clock, scheduler=scheduler)
    return _make


def pointer(kind, x, y, **mods):
    return PointerEvent(kind, QPointF(x, y), **mods)

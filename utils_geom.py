# utils_geom.py

from PyQt5.QtCore import QPointF
import math

EPS = 1e-9

# Cubic Bezier control offset approximating a quarter ellipse
BEZIER_KAPPA = 2.0 * (math.sqrt(2.0) - 1.0) / 3.0

def v_add(a: QPointF, b: QPointF) -> QPointF:
    return QPointF(a.x() + b.x(), a.y() + b.y())

def v_sub(a: QPointF, b: QPointF) -> QPointF:
    return QPointF(a.x() - b.x(), a.y() - b.y())

def v_scale(a: QPointF, s: float) -> QPointF:
    return QPointF(a.x() * s, a.y() * s)

def v_mid(a: QPointF, b: QPointF) -> QPointF:
    return QPointF((a.x() + b.x()) * 0.5, (a.y() + b.y()) * 0.5)

def v_len(a: QPointF) -> float:
    return math.hypot(a.x(), a.y())

def v_norm(a: QPointF) -> QPointF:
    L = v_len(a)
    return QPointF(0.0, 0.0) if L == 0.0 else v_scale(a, 1.0 / L)

def v_rot90_ccw(a: QPointF) -> QPointF:
    return QPointF(-a.y(), a.x())

def v_copy(a: QPointF) -> QPointF:
    return QPointF(a.x(), a.y())

# --------------------------
# Ellipse helpers (axis-aligned, given by full width/height)
# --------------------------

def ellipse_radius(width: float, height: float, d: QPointF) -> float:
    """
    Distance from the centre of a width x height ellipse to its boundary
    along direction d. The angle is measured on the offset scaled into
    the unit circle, so the result lies on the ellipse for any d.
    """
    angle = math.atan2(d.x() / width, d.y() / height)
    return math.sqrt((math.sin(angle) * width / 2.0) ** 2 + (math.cos(angle) * height / 2.0) ** 2)

def point_in_ellipse(p: QPointF, center: QPointF, width: float, height: float) -> bool:
    dx = abs(p.x() - center.x())
    dy = abs(p.y() - center.y())
    # Bounding box is only a fast reject
    if dx >= width / 2.0 or dy > height / 2.0:
        return False
    r = ellipse_radius(width, height, QPointF(dx, dy))
    return dx * dx + dy * dy < r * r

def ellipse_boundary_point(center: QPointF, width: float, height: float, toward: QPointF) -> QPointF:
    # Point where the ray centre -> toward leaves the ellipse
    d = v_sub(toward, center)
    if v_len(d) < EPS:
        return v_copy(center)
    return v_add(center, v_scale(v_norm(d), ellipse_radius(width, height, d)))

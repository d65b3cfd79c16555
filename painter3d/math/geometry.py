# painter3d/math/geometry.py
"""
Плоскостные утилиты: нормаль по Ньюэллу, линейная интерполяция,
тест «плоскость отвёрнута от камеры», порядок обхода в 2D.
"""

from typing import Optional, Sequence

import numpy as np

from painter3d.math.vec4 import Vec4, W_DIRECTION
from painter3d.utils.logger import logger


def newell_normal(points: Sequence[Vec4]) -> Optional[Vec4]:
    """
    Единичная нормаль многоугольника по методу Ньюэлла.

    Использует все точки, поэтому годится для не‑треугольных и
    невыпуклых (но плоских) многоугольников.  Для вырожденных
    (нулевая площадь) возвращает None.
    """
    if len(points) < 3:
        return None
    p = np.array([v.as_np()[:3] for v in points], dtype=np.float64)
    q = np.roll(p, -1, axis=0)
    normal = np.array([
        np.sum((p[:, 1] - q[:, 1]) * (p[:, 2] + q[:, 2])),
        np.sum((p[:, 2] - q[:, 2]) * (p[:, 0] + q[:, 0])),
        np.sum((p[:, 0] - q[:, 0]) * (p[:, 1] + q[:, 1])),
    ])
    length = np.linalg.norm(normal)
    if length == 0.0 or not np.isfinite(length):
        return None
    normal = normal / length
    return Vec4(normal[0], normal[1], normal[2], W_DIRECTION)


def lerp(a: Vec4, b: Vec4, alpha: float) -> Vec4:
    """
    Линейная интерполяция по всем четырём компонентам
    (alpha = 0 → a, alpha = 1 → b).
    """
    if alpha < 0.0 or alpha > 1.0:
        logger.error(f"[Geometry] Invalid lerp alpha {alpha}")
    if alpha == 0.0:
        return a
    if alpha == 1.0:
        return b
    return Vec4(*((1.0 - alpha) * a.as_np() + alpha * b.as_np()))


def is_plane_back_facing(plane_normal: Vec4, direction_to_camera: Vec4) -> bool:
    """Угол между нормалью и направлением на камеру ≥ 90°."""
    return plane_normal.dot(direction_to_camera) <= 0.0


def winding_order_2d(points: Sequence[Vec4]) -> str:
    """Порядок обхода по формуле шнурования (ось y направлена вверх)."""
    total = 0.0
    n = len(points)
    for i in range(n):
        a, b = points[i], points[(i + 1) % n]
        total += (b.x - a.x) * (b.y + a.y)
    if total < 0:
        return "CCW"
    if total > 0:
        return "CW"
    return "unknown"

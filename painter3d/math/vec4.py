# painter3d/math/vec4.py
"""
4‑мерный однородный вектор (float64).

w = 1 – позиция (точка), w = 0 – направление.  Сложение/вычитание
работают по всем четырём компонентам, поэтому «точка − точка» даёт
направление, а «точка + направление» – снова точку.
"""

import numpy as np
from typing import Iterable, Tuple

from painter3d.utils.logger import logger

# Общий допуск для всех сравнений «почти равно / по одну сторону плоскости»
EPSILON = 1e-6

W_POSITION = 1.0
W_DIRECTION = 0.0


class Vec4:
    """Короткий неизменяемый вектор‑4 (float64)."""

    __slots__ = ("_v",)

    def __init__(self, x: float = 0.0, y: float = 0.0,
                 z: float = 0.0, w: float = W_POSITION):
        self._v = np.array([x, y, z, w], dtype=np.float64)
        if np.isnan(self._v).any():
            logger.warning(f"[Vec4] NaN component in {self!r}")

    @staticmethod
    def point(x: float, y: float, z: float = 0.0) -> "Vec4":
        return Vec4(x, y, z, W_POSITION)

    @staticmethod
    def direction(x: float, y: float, z: float) -> "Vec4":
        return Vec4(x, y, z, W_DIRECTION)

    @staticmethod
    def from_np(array: Iterable[float]) -> "Vec4":
        a = np.asarray(array, dtype=np.float64)
        if a.shape == (3,):
            return Vec4(a[0], a[1], a[2], W_POSITION)
        return Vec4(a[0], a[1], a[2], a[3])

    # -----------------------------------------------------------------
    # свойства (только чтение)
    # -----------------------------------------------------------------
    @property
    def x(self) -> float:
        return float(self._v[0])

    @property
    def y(self) -> float:
        return float(self._v[1])

    @property
    def z(self) -> float:
        return float(self._v[2])

    @property
    def w(self) -> float:
        return float(self._v[3])

    # -----------------------------------------------------------------
    # арифметика (операторы возвращают новый объект)
    # -----------------------------------------------------------------
    def __add__(self, other: "Vec4") -> "Vec4":
        return Vec4(*(self._v + other._v))

    def __sub__(self, other: "Vec4") -> "Vec4":
        return Vec4(*(self._v - other._v))

    def __mul__(self, scalar: float) -> "Vec4":
        v = self._v.copy()
        v[:3] *= scalar
        return Vec4(*v)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec4":
        return self * -1.0

    def __truediv__(self, scalar: float) -> "Vec4":
        if scalar == 0:
            logger.warning("[Vec4] division by zero")
        v = self._v.copy()
        with np.errstate(divide="ignore", invalid="ignore"):
            v[:3] /= scalar
        return Vec4(*v)

    # -----------------------------------------------------------------
    # вспомогательные методы
    # -----------------------------------------------------------------
    def dot(self, other: "Vec4") -> float:
        """Скалярное произведение по x, y, z (w не участвует)."""
        return float(np.dot(self._v[:3], other._v[:3]))

    def dot4(self, other: "Vec4") -> float:
        """Полное однородное скалярное произведение."""
        return float(np.dot(self._v, other._v))

    def cross(self, other: "Vec4") -> "Vec4":
        """Векторное произведение – всегда направление (w = 0)."""
        c = np.cross(self._v[:3], other._v[:3])
        return Vec4(c[0], c[1], c[2], W_DIRECTION)

    def length_sq(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        """Евклидова длина (x, y, z)."""
        return float(np.linalg.norm(self._v[:3]))

    def unit(self) -> "Vec4":
        """Нормализованный вектор (w сохраняется)."""
        return self / self.length()

    def normalize_w(self) -> "Vec4":
        """Перспективное деление на w."""
        if self.w == 0:
            logger.error(f"[Vec4] w component is zero: {self!r}")
        with np.errstate(divide="ignore", invalid="ignore"):
            x, y, z = self._v[:3] / self._v[3]
        return Vec4(x, y, z, W_POSITION)

    def transform(self, matrix) -> "Vec4":
        """M · v."""
        return Vec4(*(matrix.m @ self._v))

    def equals(self, other: "Vec4", eps: float = EPSILON) -> bool:
        return bool(np.all(np.abs(self._v - other._v) < eps))

    def as_np(self) -> np.ndarray:
        """Копия 4‑компонентного ndarray (float64)."""
        return self._v.copy()

    # -----------------------------------------------------------------
    # представление
    # -----------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Vec4({self.x:.3f}, {self.y:.3f}, {self.z:.3f}, {self.w:.3f})"

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return tuple(self._v.tolist())

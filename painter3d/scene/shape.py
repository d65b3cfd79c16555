# -*- coding: utf-8 -*-
"""
Плоские многоугольники (Shape) – источник геометрии для моделей.

Полигон – упорядоченный список вершин (порядок обхода задаёт
ориентацию), необязательные контуры отверстий в той же плоскости,
единичная нормаль по Ньюэллу и материал.  Нормаль пересчитывается при
каждом присвоении `points`; у вырожденного полигона она None.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from painter3d.math.geometry import newell_normal, winding_order_2d
from painter3d.math.vec4 import Vec4

_shape_counter = itertools.count()


@dataclass
class Material:
    color: Optional[str] = None
    opacity: Optional[float] = None


def _to_vertex(p) -> Vec4:
    if isinstance(p, Vec4):
        return Vec4.point(p.x, p.y, p.z)
    if len(p) == 2:
        return Vec4.point(p[0], p[1], 0.0)
    return Vec4.point(p[0], p[1], p[2])


class Shape:
    """Базовый плоский многоугольник."""

    def __init__(self, type_name: str, points: Iterable = (),
                 holes: Iterable[Iterable] = (), id: str = None,
                 material: Material = None):
        self.type = type_name
        self.id = id if id is not None else f"{type_name}-{next(_shape_counter)}"
        self.material = material
        self.normal: Optional[Vec4] = None
        self._points: List[Vec4] = []
        self.points = [_to_vertex(p) for p in points]
        self.holes: List[List[Vec4]] = [[_to_vertex(p) for p in hole] for hole in holes]

    @property
    def points(self) -> List[Vec4]:
        return self._points

    @points.setter
    def points(self, points: Sequence[Vec4]):
        self._points = list(points)
        self.normal = newell_normal(self._points)

    @property
    def is_degenerate(self) -> bool:
        return self.normal is None

    def clone(self, id: str = None, points: Sequence[Vec4] = None,
              holes: Sequence[Sequence[Vec4]] = None) -> "Shape":
        shape = Shape.__new__(type(self))
        shape.type = self.type
        shape.id = id if id is not None else self.id
        shape.material = self.material
        shape.normal = None
        shape._points = []
        shape.points = list(self.points if points is None else points)
        shape.holes = [list(h) for h in (self.holes if holes is None else holes)]
        return shape

    def transform(self, matrix) -> "Shape":
        self.points = [p.transform(matrix) for p in self.points]
        self.holes = [[p.transform(matrix) for p in hole] for hole in self.holes]
        return self

    def invert(self) -> "Shape":
        """Развернуть порядок обхода (и нормаль)."""
        self.points = list(reversed(self.points))
        self.holes = [list(reversed(hole)) for hole in self.holes]
        return self

    # -----------------------------------------------------------------
    # выдавливание
    # -----------------------------------------------------------------
    def extrude_to_shapes(self, depth: float, id: str = None,
                          start_cap=True, end_cap=True,
                          side_faces=True, hole_side_faces=True) -> List["Shape"]:
        """Выдавить против нормали на depth; стенки смотрят наружу."""
        if depth <= 0:
            raise ValueError("Extrusion depth should be a positive number")
        if self.normal is None:
            raise ValueError(f"Shape {self.id} is degenerate and can't be extruded")

        base_id = id or self.id
        depth_vector = self.normal * -depth

        back_face = Polygon3(
            [p + depth_vector for p in reversed(self.points)],
            holes=[[p + depth_vector for p in reversed(hole)] for hole in self.holes],
            id=f"{base_id}-back",
            material=self.material,
        )
        walls = _extruded_walls(self.points, depth_vector, base_id, self.material)
        hole_walls = []
        for n, hole in enumerate(self.holes):
            for wall in _extruded_walls(hole, depth_vector, f"{base_id}-hole{n}",
                                        self.material):
                hole_walls.append(wall.invert())

        result = []
        if start_cap:
            result.append(self)
        if end_cap:
            result.append(back_face)
        if side_faces:
            result.extend(walls)
        if hole_side_faces:
            result.extend(hole_walls)
        return result

    def extrude_to_model(self, depth: float, id: str = None, **options):
        from painter3d.scene.model import Model
        return Model(self.extrude_to_shapes(depth, id, **options),
                     name=id or self.id, material=self.material)

    def to_model(self, id: str = None):
        from painter3d.scene.model import Model
        return Model([self], name=id or self.id, material=self.material)

    def __repr__(self):
        return f"{type(self).__name__}({self.id!r}, {len(self.points)} points)"


def _extruded_walls(points: Sequence[Vec4], depth_vector: Vec4, base_id: str,
                    material: Optional[Material]) -> List[Shape]:
    if len(points) < 2:
        return []
    walls = []
    for i, p in enumerate(points):
        p_next = points[(i + 1) % len(points)]
        walls.append(Polygon3(
            [p, p + depth_vector, p_next + depth_vector, p_next],
            id=f"{base_id}-wall-{i}",
            material=material,
        ))
    return walls


class Polygon3(Shape):
    """Произвольный плоский многоугольник, заданный точками в 3D."""
    def __init__(self, points: Iterable, holes: Iterable[Iterable] = (),
                 id: str = None, material: Material = None):
        super().__init__("Polygon3", points, holes, id, material)


class Rect2(Shape):
    """
    Прямоугольник в плоскости z = const.

    face="FRONT" – нормаль +z (обход против часовой стрелки),
    face="BACK" – нормаль −z.  Отверстия задаются в координатах
    прямоугольника и сдвигаются вместе с ним.
    """
    def __init__(self, width: float, height: float, x: float = 0.0,
                 y: float = 0.0, z: float = 0.0, holes: Iterable[Iterable] = (),
                 face: str = "FRONT", id: str = None, material: Material = None):
        corners = [Vec4.point(x, y, z), Vec4.point(x + width, y, z),
                   Vec4.point(x + width, y + height, z), Vec4.point(x, y + height, z)]
        contours = [[_to_vertex(p) + Vec4.direction(x, y, z) for p in hole]
                    for hole in holes]
        if (winding_order_2d(corners) == "CCW") == (face == "BACK"):
            corners.reverse()
        for contour in contours:
            if (winding_order_2d(contour) == "CCW") == (face == "BACK"):
                contour.reverse()
        super().__init__("Rect2", corners, contours, id, material)

# -*- coding: utf-8 -*-
"""
Ограничивающий кубоид (8 углов + 6 помеченных граней).

Все 8 углов хранятся явно, чтобы после поворота/масштаба грани и углы
оставались во взаимно‑однозначном соответствии (OBB в мировом и
видовом пространстве).

Нумерация углов: index = xi*4 + yi*2 + zi (0 – min, 1 – max)::

      2--------6
     /|       /|
    3--------7 |
    | |      | |
    | 0------|-4
    |/       |/
    1--------5
"""

from __future__ import annotations

from typing import List, NamedTuple, Sequence

import numpy as np

from painter3d.math.vec4 import Vec4


class BoundingPlane(NamedTuple):
    normal: Vec4
    point_index: int


_LOCAL_PLANES = (
    BoundingPlane(Vec4.direction(0, 0, -1), 0),
    BoundingPlane(Vec4.direction(0, 0, 1), 7),
    BoundingPlane(Vec4.direction(0, -1, 0), 0),
    BoundingPlane(Vec4.direction(0, 1, 0), 7),
    BoundingPlane(Vec4.direction(-1, 0, 0), 0),
    BoundingPlane(Vec4.direction(1, 0, 0), 7),
)


class Bounding:
    def __init__(self, vertices: Sequence[Vec4] = ()):
        if len(vertices) == 0:
            vertices = [Vec4.point(0, 0, 0)]

        pts = np.array([v.as_np()[:3] for v in vertices], dtype=np.float64)
        lo, hi = pts.min(axis=0), pts.max(axis=0)

        self.cuboid: List[Vec4] = [
            Vec4.point(x, y, z)
            for x in (lo[0], hi[0])
            for y in (lo[1], hi[1])
            for z in (lo[2], hi[2])
        ]
        self.planes: List[BoundingPlane] = list(_LOCAL_PLANES)
        self._update_extents()

    def _update_extents(self):
        pts = np.array([v.as_np()[:3] for v in self.cuboid], dtype=np.float64)
        self.min_x, self.min_y, self.min_z = (float(c) for c in pts.min(axis=0))
        self.max_x, self.max_y, self.max_z = (float(c) for c in pts.max(axis=0))

    def transform(self, point_matrix, normal_matrix) -> "Bounding":
        """Углы – точечной матрицей, нормали граней – матрицей поворота."""
        bounding = Bounding.__new__(Bounding)
        bounding.cuboid = [p.transform(point_matrix) for p in self.cuboid]
        bounding.planes = [
            BoundingPlane(p.normal.transform(normal_matrix), p.point_index)
            for p in self.planes
        ]
        bounding._update_extents()
        return bounding

    def plane_point(self, plane: BoundingPlane) -> Vec4:
        return self.cuboid[plane.point_index]

    def centroid(self) -> Vec4:
        c = np.mean([v.as_np()[:3] for v in self.cuboid], axis=0)
        return Vec4.point(c[0], c[1], c[2])

    def __repr__(self):
        return (f"Bounding(x=[{self.min_x:.3f}, {self.max_x:.3f}], "
                f"y=[{self.min_y:.3f}, {self.max_y:.3f}], "
                f"z=[{self.min_z:.3f}, {self.max_z:.3f}])")

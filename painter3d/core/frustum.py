# painter3d/core/frustum.py
"""
Тест вершины относительно плоскостей frustum‑а в однородных координатах
и отсечение контура по ближней плоскости (обход рёбер в духе
Сазерленда–Ходжмана).

Стадия CLIP использует только NEAR; остальные пять плоскостей описаны
для полноты.
"""

from enum import Enum, IntEnum
from typing import List, NamedTuple, Sequence

from painter3d.math.geometry import lerp
from painter3d.math.vec4 import Vec4


class FrustumPlane(IntEnum):
    NEAR = 0
    FAR = 1
    LEFT = 2
    RIGHT = 3
    TOP = 4
    BOTTOM = 5


class Position(Enum):
    INSIDE = "INSIDE"
    PLANE = "PLANE"
    OUTSIDE = "OUTSIDE"


class PlanePosition(NamedTuple):
    dot_product: float
    position: Position


def plane_dot(v: Vec4, plane: FrustumPlane) -> float:
    """Знаковое «расстояние» вершины в clip‑пространстве до плоскости."""
    if plane is FrustumPlane.LEFT:
        return v.x + v.w
    if plane is FrustumPlane.RIGHT:
        return -v.x + v.w
    if plane is FrustumPlane.TOP:
        return v.y + v.w
    if plane is FrustumPlane.BOTTOM:
        return -v.y + v.w
    if plane is FrustumPlane.NEAR:
        return v.z + v.w
    if plane is FrustumPlane.FAR:
        return -v.z + v.w
    raise ValueError(f"Unknown frustum plane: {plane}")


def vector_plane_position(v: Vec4, plane: FrustumPlane) -> PlanePosition:
    d = plane_dot(v, plane)
    if d > 0:
        return PlanePosition(d, Position.INSIDE)
    if d < 0:
        return PlanePosition(d, Position.OUTSIDE)
    return PlanePosition(d, Position.PLANE)


# ---------------------------------------------------------------------
# Общий массив вершин с дедупликацией
# ---------------------------------------------------------------------
def fill_vertex_array(target: List[Vec4], source: Sequence[Vec4]) -> List[int]:
    """
    Добавить вершины в target, повторно используя уже имеющиеся
    (равенство с допуском EPSILON).  Возвращает индексы.
    """
    indices = []
    for vertex in source:
        for i, existing in enumerate(target):
            if existing.equals(vertex):
                indices.append(i)
                break
        else:
            target.append(vertex)
            indices.append(len(target) - 1)
    return indices


def fill_vertex_array_nested(target: List[Vec4],
                             sources: Sequence[Sequence[Vec4]]) -> List[List[int]]:
    return [fill_vertex_array(target, source) for source in sources]


# ---------------------------------------------------------------------
# Отсечение
# ---------------------------------------------------------------------
def clip_and_fill_vertex_array(target: List[Vec4], vertices: Sequence[Vec4],
                               plane: FrustumPlane = FrustumPlane.NEAR) -> List[int]:
    """
    Отсечь замкнутый контур по плоскости и сложить результат в target.

    Пустой список означает, что контур целиком снаружи.
    """
    clipped: List[int] = []
    if not vertices:
        return clipped

    vector_from = vertices[-1]
    from_pos = vector_plane_position(vector_from, plane)
    for vector_to in vertices:
        to_pos = vector_plane_position(vector_to, plane)

        straddles = {from_pos.position, to_pos.position} == {
            Position.INSIDE, Position.OUTSIDE}
        if straddles:
            alpha = from_pos.dot_product / (from_pos.dot_product - to_pos.dot_product)
            intersection = lerp(vector_from, vector_to, alpha)
            clipped.extend(fill_vertex_array(target, [intersection]))

        if to_pos.position in (Position.INSIDE, Position.PLANE):
            clipped.extend(fill_vertex_array(target, [vector_to]))

        vector_from, from_pos = vector_to, to_pos

    return clipped


def clip_and_fill_vertex_array_nested(target: List[Vec4],
                                      contours: Sequence[Sequence[Vec4]],
                                      plane: FrustumPlane = FrustumPlane.NEAR
                                      ) -> List[List[int]]:
    return [clip_and_fill_vertex_array(target, contour, plane)
            for contour in contours]

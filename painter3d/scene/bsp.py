# -*- coding: utf-8 -*-
"""
BSP‑дерево одной модели.

Строится один раз из локальных полигонов модели: первый полигон –
корень, остальные вставляются по одному.  Кандидат классифицируется
относительно плоскости узла (точка – первая вершина узла, нормаль –
нормаль узла) как front / back / intersecting; пересекающие полигоны
режутся на две части, каждая вставляется отдельно.

Каждый кадр `sort()` обходит дерево, начиная с поддерева, дальнего от
камеры, – получается порядок художника для невыпуклых и
самозаслоняющихся моделей.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from painter3d.core.errors import ConsistencyError
from painter3d.math.geometry import lerp
from painter3d.math.vec4 import EPSILON, Vec4
from painter3d.utils.logger import logger


class Side(Enum):
    FRONT = "front"
    BACK = "back"
    INTERSECTING = "intersecting"


class BSPNode:
    __slots__ = ("original_shape", "shape", "front", "back")

    def __init__(self, shape, original_shape=None):
        self.shape = shape
        self.original_shape = original_shape if original_shape is not None else shape
        self.front: Optional[BSPNode] = None
        self.back: Optional[BSPNode] = None

    def child(self, side: Side) -> Optional["BSPNode"]:
        return self.front if side is Side.FRONT else self.back

    def set_child(self, side: Side, node: "BSPNode") -> None:
        if side is Side.FRONT:
            self.front = node
        else:
            self.back = node


class BSP:
    """BSP‑дерево; `shapes` – все полигоны дерева, включая осколки."""

    def __init__(self, shapes: Sequence = ()):
        self.shapes: List = []
        self.root: Optional[BSPNode] = None

        for shape in shapes:
            self.insert(shape)

    def insert(self, shape) -> None:
        if self.root is None:
            self.root = BSPNode(shape)
            self.shapes.append(shape)
            return

        pending: List[Tuple[BSPNode, BSPNode]] = [(self.root, BSPNode(shape))]
        while pending:
            node, candidate = pending.pop()
            side = classify(node.shape, candidate.shape)

            if side is Side.INTERSECTING:
                front, back = split(node.shape, candidate)
                parts = []
                for part_side, part in ((Side.FRONT, front), (Side.BACK, back)):
                    if part.shape.normal is None:
                        logger.debug(f"[BSP] Dropped degenerate fragment {part.shape.id}")
                        continue
                    parts.append((part_side, part))
            else:
                parts = [(side, candidate)]

            for part_side, part in parts:
                child = node.child(part_side)
                if child is None:
                    node.set_child(part_side, part)
                    self.shapes.append(part.shape)
                else:
                    pending.append((child, part))

    def sort(self, shape_map: Dict) -> List:
        """
        Порядок отрисовки: дальнее поддерево, узел, ближнее поддерево.

        shape_map: полигон → буфер полигона с заполненным `eye`
        (флаг is_back_facing).  Отсутствие полигона – ошибка
        согласованности.
        """
        result = []
        # стек: (узел, признак «узел уже раскрыт»)
        stack: List[Tuple[BSPNode, bool]] = []
        if self.root is not None:
            stack.append((self.root, False))

        while stack:
            node, expanded = stack.pop()
            shape_frame = shape_map.get(node.shape)
            if shape_frame is None:
                raise ConsistencyError(
                    f"All shapes are needed to traverse tree, missing {node.shape.id}")

            if expanded:
                result.append(shape_frame)
                continue

            back_facing = shape_frame.require_eye().is_back_facing
            far = node.front if back_facing else node.back
            near = node.back if back_facing else node.front

            # LIFO: кладём в обратном порядке обхода
            if near is not None:
                stack.append((near, False))
            stack.append((node, True))
            if far is not None:
                stack.append((far, False))

        return result

    def __len__(self):
        return len(self.shapes)


def classify(plane_shape, shape) -> Side:
    """Сторона `shape` относительно плоскости `plane_shape`."""
    plane_point = plane_shape.points[0]
    normal = plane_shape.normal
    dots = [(p - plane_point).dot(normal) for p in shape.points]

    if all(d >= -EPSILON for d in dots):
        return Side.FRONT
    if all(d <= EPSILON for d in dots):
        return Side.BACK
    return Side.INTERSECTING


def split(plane_shape, node: BSPNode) -> Tuple[BSPNode, BSPNode]:
    """Разрезать полигон узла `node` (и его отверстия) плоскостью `plane_shape`."""
    plane_point = plane_shape.points[0]
    normal = plane_shape.normal
    shape = node.shape

    plus, minus = split_points(shape.points, plane_point, normal)
    hole_pairs = [split_points(hole, plane_point, normal) for hole in shape.holes]

    front = shape.clone(
        id=f"{shape.id}-splitby[{plane_shape.id}]-front",
        points=plus,
        holes=[pair[0] for pair in hole_pairs if len(pair[0]) > 2],
    )
    back = shape.clone(
        id=f"{shape.id}-splitby[{plane_shape.id}]-back",
        points=minus,
        holes=[pair[1] for pair in hole_pairs if len(pair[1]) > 2],
    )
    return (BSPNode(front, node.original_shape),
            BSPNode(back, node.original_shape))


def split_points(points: Sequence[Vec4], plane_point: Vec4,
                 plane_normal: Vec4) -> Tuple[List[Vec4], List[Vec4]]:
    """Обход рёбер: вершины с dot ≥ 0 → plus, dot ≤ 0 → minus, пересечения – в обе."""
    plus: List[Vec4] = []
    minus: List[Vec4] = []
    if not points:
        return plus, minus

    previous = points[-1]
    previous_dot = (previous - plane_point).dot(plane_normal)

    for point in points:
        dot = (point - plane_point).dot(plane_normal)

        if previous_dot * dot < 0:
            alpha = abs(previous_dot) / (abs(previous_dot) + abs(dot))
            intersection = lerp(previous, point, alpha)
            plus.append(intersection)
            minus.append(intersection)

        if dot >= 0:
            plus.append(point)
        if dot <= 0:
            minus.append(point)

        previous, previous_dot = point, dot

    return plus, minus

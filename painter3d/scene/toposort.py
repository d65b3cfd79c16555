# painter3d/scene/toposort.py
"""
Порядок отрисовки между моделями.

Для каждой пары моделей (по их ограничивающим кубоидам в пространстве
EYE) ищется разделяющая плоскость – SAT‑тест по 12 граням и 36
векторным произведениям граней.  Результат сравнения задаёт ребро
графа «A за B»; граф сортируется топологически.  Если разделяющей
плоскости нет, моделям рассылается событие "collision".

Знак сравнения: < 0 – A позади B (рисуется раньше), > 0 – A впереди,
0 – порядок не определён.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from painter3d.core.collision import CollisionEvent, new_collision_id
from painter3d.core.spaces import Space
from painter3d.math.geometry import is_plane_back_facing
from painter3d.math.vec4 import EPSILON, Vec4
from painter3d.scene.camera import DIRECTION_TO_CAMERA
from painter3d.utils.logger import logger

COLLISION_EVENT = "collision"


class _TopoNode:
    __slots__ = ("buffer", "fronts", "backs")

    def __init__(self, buffer):
        self.buffer = buffer
        # dict вместо set – порядок вставки детерминирован
        self.fronts: Dict[_TopoNode, None] = {}
        self.backs: Dict[_TopoNode, None] = {}


def topo_sort(models: Sequence, camera, pool=None) -> Dict[object, int]:
    """
    Буфер модели → позиция в порядке отрисовки (0 – рисуется первым).

    pool – необязательный TaskPool: попарные сравнения считаются в нём,
    события столкновений рассылаются уже после барьера, в вызывающем
    потоке.
    """
    graph = build_graph(models, camera, pool)
    ordered = sort_graph(graph)

    if len(ordered) < len(graph):
        logger.warning(f"[TopoSort] Cycle detected among {len(graph)} models, "
                       f"falling back to distance order")
        fallback = sorted(models, key=_camera_distance, reverse=True)
        return {buffer: i for i, buffer in enumerate(fallback)}

    return {node.buffer: i for i, node in enumerate(ordered)}


def build_graph(models: Sequence, camera, pool=None) -> List[_TopoNode]:
    nodes = [_TopoNode(buffer) for buffer in models]
    pairs = [(i, j) for i in range(len(nodes)) for j in range(i + 1, len(nodes))]

    if pool is None:
        sides = [compare(nodes[i].buffer, nodes[j].buffer, camera) for i, j in pairs]
    else:
        results = pool.map(
            lambda pair: _compare_detached(nodes[pair[0]].buffer, nodes[pair[1]].buffer, camera),
            pairs,
        )
        sides = []
        for (i, j), (side, colliding) in zip(pairs, results):
            if colliding:
                emit_collision(nodes[i].buffer.obj, nodes[j].buffer.obj)
            sides.append(side)

    for (i, j), side in zip(pairs, sides):
        node_a, node_b = nodes[i], nodes[j]
        if side < 0:
            # A позади B
            node_a.fronts[node_b] = None
            node_b.backs[node_a] = None
        elif side > 0:
            node_b.fronts[node_a] = None
            node_a.backs[node_b] = None

    return nodes


def sort_graph(graph: List[_TopoNode]) -> List[_TopoNode]:
    """Алгоритм Кана; готовые узлы берутся со стека (LIFO)."""
    ordered = []
    remaining = {node: len(node.backs) for node in graph}
    ready = [node for node in graph if remaining[node] == 0]

    while ready:
        node = ready.pop()
        ordered.append(node)
        for front in node.fronts:
            remaining[front] -= 1
            if remaining[front] == 0:
                ready.append(front)

    return ordered


# ---------------------------------------------------------------------
# SAT‑сравнение двух моделей
# ---------------------------------------------------------------------
def compare(a, b, camera) -> int:
    """Сравнить два буфера моделей; при пересечении рассылает collision."""
    side, colliding = _compare_detached(a, b, camera)
    if colliding:
        emit_collision(a.obj, b.obj)
    return side


def _compare_detached(a, b, camera) -> Tuple[int, bool]:
    """(сторона, признак столкновения) без побочных эффектов."""
    bounding_a = a.require(Space.EYE).require_bounding()
    bounding_b = b.require(Space.EYE).require_bounding()

    # модели по разные стороны плоскостей x = 0 / y = 0 пространства EYE
    # не перекрываются на экране
    if bounding_a.max_x <= 0 <= bounding_b.min_x or bounding_b.max_x <= 0 <= bounding_a.min_x:
        return 0, False
    if bounding_a.max_y <= 0 <= bounding_b.min_y or bounding_b.max_y <= 0 <= bounding_a.min_y:
        return 0, False

    perspective = camera.is_perspective

    # 12 граней: грани A против углов B, грани B против углов A
    face_result: Optional[int] = None
    for own, other, invert_front in ((bounding_a, bounding_b, False),
                                     (bounding_b, bounding_a, True)):
        for plane in own.planes:
            point = own.plane_point(plane)
            back_facing = is_plane_back_facing(
                plane.normal, _direction_to_camera(point, perspective))
            result = points_and_bounding_plane_compare(
                plane.normal, point, other.cuboid,
                invert=(not back_facing) if invert_front else back_facing,
                skip_back_test=True,
            )
            if face_result is None:
                face_result = result
            if result is not None and face_result is not None and result * face_result < 0:
                return 0, False

    if face_result is not None:
        return face_result, False

    # одинаково ориентированные и не разделённые гранями – пересекаются
    if bounding_a.planes[0].normal.equals(bounding_b.planes[0].normal):
        return 0, True

    # 36 плоскостей через векторные произведения нормалей граней
    for plane_a in bounding_a.planes:
        for plane_b in bounding_b.planes:
            cross = plane_a.normal.cross(plane_b.normal)
            cross_length_sq = cross.length_sq()
            if cross_length_sq == 0:
                return 0, True

            d_a = -plane_a.normal.dot(bounding_a.plane_point(plane_a))
            d_b = -plane_b.normal.dot(bounding_b.plane_point(plane_b))
            line_point = (plane_a.normal * d_b - plane_b.normal * d_a).cross(cross) / cross_length_sq

            back_facing = is_plane_back_facing(
                cross, _direction_to_camera(line_point, perspective))

            side1 = points_and_bounding_plane_compare(
                cross, line_point, bounding_b.cuboid, invert=back_facing)
            if side1 is None:
                continue
            side2 = points_and_bounding_plane_compare(
                cross, line_point, bounding_a.cuboid, invert=not back_facing)
            if side2 is None or side1 != side2:
                continue
            return side1, False

    return 0, True


def points_and_bounding_plane_compare(normal: Vec4, plane_point: Vec4,
                                      points: Sequence[Vec4], invert=False,
                                      skip_back_test=False) -> Optional[int]:
    """−1 – все точки перед плоскостью (без инверсии), 1 – все позади."""
    dots = [(p - plane_point).dot(normal) for p in points]

    if all(d >= -EPSILON for d in dots):
        return 1 if invert else -1
    if skip_back_test:
        return None
    if all(d <= EPSILON for d in dots):
        return -1 if invert else 1
    return None


def _direction_to_camera(point: Vec4, perspective: bool) -> Vec4:
    return -point if perspective else DIRECTION_TO_CAMERA


def _camera_distance(buffer) -> float:
    return buffer.require(Space.EYE).require_bounding().centroid().length()


# ---------------------------------------------------------------------
# События
# ---------------------------------------------------------------------
def emit_collision(model_a, model_b) -> int:
    collision_id = new_collision_id()
    logger.debug(f"[TopoSort] Collision {collision_id}: {model_a.name} / {model_b.name}")
    model_a.emit(COLLISION_EVENT, CollisionEvent(collision_id, (model_a, model_b)))
    model_b.emit(COLLISION_EVENT, CollisionEvent(collision_id, (model_b, model_a)))
    return collision_id

# painter3d/core/framebuffer.py
"""
Кэш преобразований по пространствам (FrameBuffer).

Буфер принадлежит вызывающему коду (обычно рендереру) и хранит для
каждого объекта сцены геометрию в каждом рассчитанном пространстве.
Три назначения:

1. кэш – неизменившиеся данные не пересчитываются между кадрами;
2. пост‑обработка – данные переиспользуются для доп. артефактов;
3. «безголовый» режим – результат можно забрать, ничего не рисуя.

Запись пространства N требует записи N‑1 и стирает все записи после N
(перезапись, а не слияние).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from math import acos, degrees
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional

from painter3d.core.errors import ConsistencyError, SpaceNotCalculatedError
from painter3d.core.spaces import Space
from painter3d.math.mat4 import Mat4
from painter3d.math.vec4 import EPSILON, Vec4


# ---------------------------------------------------------------------
# Массивы вершин
# ---------------------------------------------------------------------
class VertexArray:
    """Готовый (материализованный) массив вершин."""

    def __init__(self, array: Iterable[Vec4] = ()):
        self.array: List[Vec4] = list(array)

    def __len__(self):
        return len(self.array)


class LazyVertexArray:
    """Отложенное отображение исходного массива; считается при первом чтении."""

    def __init__(self, source, mapper: Callable[[Vec4], Vec4]):
        self._source = source
        self._mapper = mapper

    @cached_property
    def array(self) -> List[Vec4]:
        return [self._mapper(v) for v in self._source.array]

    @property
    def is_materialized(self) -> bool:
        return "array" in self.__dict__

    def __len__(self):
        return len(self._source.array)


# ---------------------------------------------------------------------
# 2D‑описание полигона
# ---------------------------------------------------------------------
class FlatShape:
    """
    Полигон в собственной плоскости: плоскость поворачивается нормалью
    на ось взгляда, первая вершина уходит в начало координат, затем
    всё сдвигается в неотрицательный квадрант.

    vertices / holes – 2D‑вершины (z ≈ 0); matrix3d возвращает их обратно
    в локальное 3D‑пространство модели.  Всё считается лениво.
    """

    def __init__(self, vertices3d: List[Vec4], holes3d: List[List[Vec4]],
                 normal: Vec4):
        self._vertices3d = vertices3d
        self._holes3d = holes3d
        self._normal = normal

    @cached_property
    def _xy_rotation(self) -> Mat4:
        view_axis = Vec4.direction(0, 0, -1)
        dot = max(-1.0, min(1.0, view_axis.dot(self._normal)))
        axis = view_axis.cross(self._normal)
        if abs(axis.x) < EPSILON and abs(axis.y) < EPSILON:
            return Mat4.identity()
        return Mat4.rotate(degrees(acos(dot)), (axis.x, axis.y, axis.z))

    @cached_property
    def _to_xy(self) -> Mat4:
        origin = self._vertices3d[0]
        return self._xy_rotation.transpose() @ Mat4.translate(-origin.x, -origin.y, -origin.z)

    @cached_property
    def _vertices2d(self) -> List[Vec4]:
        return [v.transform(self._to_xy) for v in self._vertices3d]

    @cached_property
    def _offset(self) -> Vec4:
        pts = self._vertices2d
        return Vec4.direction(min(v.x for v in pts), min(v.y for v in pts),
                              min(v.z for v in pts))

    @cached_property
    def vertices(self) -> List[Vec4]:
        if not self._vertices3d:
            return []
        shift = -self._offset
        return [v + shift for v in self._vertices2d]

    @cached_property
    def holes(self) -> List[List[Vec4]]:
        if not self._holes3d or not self._vertices3d:
            return []
        shift = -self._offset
        return [[v.transform(self._to_xy) + shift for v in hole]
                for hole in self._holes3d]

    @cached_property
    def matrix3d(self) -> Mat4:
        if not self._vertices3d:
            return Mat4.identity()
        origin = self._vertices3d[0]
        to_xyz = Mat4.translate(origin.x, origin.y, origin.z) @ self._xy_rotation
        offset = self._offset
        return to_xyz @ Mat4.translate(offset.x, offset.y, offset.z)

    @cached_property
    def width(self) -> float:
        if not self.vertices:
            return 0.0
        xs = [v.x for v in self.vertices]
        return max(xs) - min(xs)

    @cached_property
    def height(self) -> float:
        if not self.vertices:
            return 0.0
        ys = [v.y for v in self.vertices]
        return max(ys) - min(ys)


# ---------------------------------------------------------------------
# Данные полигона
# ---------------------------------------------------------------------
class WorldShapeData(NamedTuple):
    normal: Vec4


class EyeShapeData(NamedTuple):
    normal: Vec4
    is_back_facing: bool


@dataclass
class ShapeFrameBuffer:
    shape: object
    vertex_indices: List[int]
    hole_vertex_indices: List[List[int]]
    local: FlatShape
    world: Optional[WorldShapeData] = None
    eye: Optional[EyeShapeData] = None

    def require_world(self) -> WorldShapeData:
        if self.world is None:
            raise SpaceNotCalculatedError(Space.WORLD, self.shape.id)
        return self.world

    def require_eye(self) -> EyeShapeData:
        if self.eye is None:
            raise SpaceNotCalculatedError(Space.EYE, self.shape.id)
        return self.eye


class ResolvedPolygon(NamedTuple):
    """Полигон, готовый к отрисовке: вершины уже выбраны по индексам."""
    id: str
    points: List[Vec4]
    holes: List[List[Vec4]]
    normal: Optional[Vec4]
    is_back_facing: Optional[bool]
    material: object


@dataclass
class SpaceGeometry:
    """
    Геометрия объекта в одном пространстве.

    matrix / normal_matrix: WORLD – model и её поворот, EYE – model‑view
    и её поворот, PROJECTION – mvp.  bounding есть только в LOCAL, WORLD
    и EYE.  stamp – входные данные, из которых запись получена.
    """
    vertices: object
    shapes: List[ShapeFrameBuffer] = field(default_factory=list)
    bounding: object = None
    matrix: Optional[Mat4] = None
    normal_matrix: Optional[Mat4] = None
    stamp: tuple = ()

    def require_bounding(self):
        if self.bounding is None:
            raise ConsistencyError("Bounding is not provided in this space")
        return self.bounding

    def polygons(self, material=None) -> List[ResolvedPolygon]:
        """Непустые полигоны (отсечение может удалить все вершины)."""
        from painter3d.scene.shape import Material

        vertices = self.vertices.array
        result = []
        for shape_frame in self.shapes:
            if not shape_frame.vertex_indices:
                continue
            shape = shape_frame.shape
            result.append(ResolvedPolygon(
                id=shape.id,
                points=[vertices[i] for i in shape_frame.vertex_indices],
                holes=[[vertices[i] for i in hole]
                       for hole in shape_frame.hole_vertex_indices if hole],
                normal=shape_frame.world.normal if shape_frame.world else None,
                is_back_facing=(shape_frame.eye.is_back_facing
                                if shape_frame.eye else None),
                material=shape.material or material or Material(),
            ))
        return result


# ---------------------------------------------------------------------
# Буферы объекта и кадра
# ---------------------------------------------------------------------
class ObjectFrameBuffer:
    """Записи по пространствам для одного объекта сцены."""

    def __init__(self, kind: str, obj, local: SpaceGeometry):
        if kind not in ("model", "group"):
            raise ValueError(f"Unknown buffer kind: {kind}")
        self.kind = kind
        self.obj = obj
        self.spaces: Dict[Space, SpaceGeometry] = {Space.LOCAL: local}

    def get(self, space: Space) -> Optional[SpaceGeometry]:
        return self.spaces.get(space)

    def require(self, space: Space) -> SpaceGeometry:
        geo = self.spaces.get(space)
        if geo is None:
            raise SpaceNotCalculatedError(space, getattr(self.obj, "name", None))
        return geo

    def put(self, space: Space, geo: SpaceGeometry) -> None:
        previous = space.previous
        if previous is not None and previous not in self.spaces:
            raise SpaceNotCalculatedError(previous, getattr(self.obj, "name", None))
        for later in [s for s in self.spaces if s > space]:
            del self.spaces[later]
        self.spaces[space] = geo

    def polygons(self, space: Space = Space.SCREEN) -> List[ResolvedPolygon]:
        return self.require(space).polygons(getattr(self.obj, "material", None))

    def __repr__(self):
        spaces = ",".join(s.name for s in sorted(self.spaces))
        return f"ObjectFrameBuffer({self.kind}, {self.obj!r}, [{spaces}])"


class FrameBuffer:
    """Явный кэш кадра: объект → ObjectFrameBuffer."""

    def __init__(self):
        self._lookup: Dict[object, ObjectFrameBuffer] = {}
        self._models: List[ObjectFrameBuffer] = []

    def has(self, obj) -> bool:
        return obj in self._lookup

    def get(self, obj) -> Optional[ObjectFrameBuffer]:
        return self._lookup.get(obj)

    def add(self, obj, object_buffer: ObjectFrameBuffer) -> None:
        if obj in self._lookup:
            raise ConsistencyError(f"Object {obj!r} is already in buffer")
        self._lookup[obj] = object_buffer
        if object_buffer.kind == "model":
            self._models.append(object_buffer)

    def models(self, objects: Iterable = None) -> List[ObjectFrameBuffer]:
        """Буферы моделей; с `objects` – только принадлежащие им."""
        if objects is None:
            return list(self._models)
        wanted = {id(o) for o in objects}
        return [b for b in self._models if id(b.obj) in wanted]

    def sort(self, key) -> None:
        self._models.sort(key=key)

    def prune(self, objects: Iterable) -> int:
        """Удалить записи объектов, которых больше нет в сцене."""
        alive = {id(o) for o in objects}
        stale = [o for o in self._lookup if id(o) not in alive]
        for obj in stale:
            del self._lookup[obj]
        self._models = [b for b in self._models if id(b.obj) in alive]
        return len(stale)

    def for_objects(self, objects: Iterable, callback):
        """
        callback(obj, object_buffer, parent_buffer) для каждого объекта.
        Объект без записи – ошибка согласованности.
        """
        results = []
        for obj in objects:
            object_buffer = self._lookup.get(obj)
            if object_buffer is None:
                raise ConsistencyError(f"Object {obj!r} not found in FrameBuffer")
            parent = obj.parent
            parent_buffer = self._lookup.get(parent) if parent is not None else None
            results.append(callback(obj, object_buffer, parent_buffer))
        return results

    def __len__(self):
        return len(self._lookup)

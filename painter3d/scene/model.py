# painter3d/scene/model.py
"""
Object3D – узел с преобразованием (позиция, поворот, масштаб), Model –
объект с полигонами и BSP‑деревом, Group – контейнер без геометрии.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from painter3d.math.mat4 import Mat4
from painter3d.math.vec4 import Vec4
from painter3d.scene.bsp import BSP
from painter3d.scene.node import SceneNode
from painter3d.utils.logger import logger


def _vec3(value) -> Vec4:
    if isinstance(value, Vec4):
        return Vec4.point(value.x, value.y, value.z)
    x, y, z = value
    return Vec4.point(x, y, z)


class Object3D(SceneNode):
    """
    Узел сцены с локальным преобразованием.

    model_matrix = T · R · S (сначала масштаб, затем поворот, затем
    перенос – всё в локальном пространстве объекта).  Любое изменение
    увеличивает transform_revision – по нему конвейер понимает, что
    записи WORLD и дальше устарели.
    """

    def __init__(self, name="Object3D"):
        super().__init__(name)
        self._position = Vec4.point(0, 0, 0)
        self._rotation = (0.0, 0.0, 0.0)
        self._scale = (1.0, 1.0, 1.0)
        self._rotation_matrix = Mat4.identity()
        self._model_matrix: Optional[Mat4] = None
        self.transform_revision = 0

    # ----------------- преобразования -----------------
    @property
    def position(self) -> Vec4:
        return self._position

    @position.setter
    def position(self, value):
        self._position = _vec3(value)
        self._transform_changed()

    @property
    def rotation(self):
        """Углы Эйлера в градусах (x, y, z)."""
        return self._rotation

    @rotation.setter
    def rotation(self, value):
        x, y, z = (float(c) for c in value)
        self._rotation = (x, y, z)
        self._rotation_matrix = Mat4.from_euler(x, y, z)
        self._transform_changed()

    @property
    def scale(self):
        return self._scale

    @scale.setter
    def scale(self, value):
        if isinstance(value, (int, float)):
            value = (value, value, value)
        self._scale = tuple(float(c) for c in value)
        self._transform_changed()

    @property
    def rotation_matrix(self) -> Mat4:
        return self._rotation_matrix

    @property
    def model_matrix(self) -> Mat4:
        if self._model_matrix is None:
            p = self._position
            self._model_matrix = (Mat4.translate(p.x, p.y, p.z)
                                  @ self._rotation_matrix
                                  @ Mat4.scale(*self._scale))
        return self._model_matrix

    def look_at(self, target, y: float = None, z: float = None):
        """Повернуть объект на точку; принимает Vec4, тройку или x, y, z."""
        if y is not None or z is not None:
            target = (target, y or 0.0, z or 0.0)
        target = _vec3(target)
        p = self._position
        self._rotation_matrix = Mat4.look_at_in_world(
            (p.x, p.y, p.z), (target.x, target.y, target.z))
        self._transform_changed()
        return self

    def _transform_changed(self):
        self._model_matrix = None
        self.transform_revision += 1

    # ----------------- геометрия -----------------
    @property
    def bsp(self) -> Optional[BSP]:
        return None

    @property
    def polygon_revision(self) -> int:
        return 0


class PolygonSet:
    """
    Наблюдаемая коллекция полигонов модели.

    Любая мутация увеличивает revision и сбрасывает BSP; дерево
    перестраивается лениво при следующем обращении.  Вырожденные
    полигоны (без нормали) в дерево не попадают.
    """

    def __init__(self, polygons: Iterable = ()):
        self._polygons: List = list(polygons)
        self.revision = 0
        self._bsp: Optional[BSP] = None

    def replace_all(self, polygons: Iterable) -> None:
        self._polygons = list(polygons)
        self._changed()

    def add(self, *polygons) -> None:
        self._polygons.extend(polygons)
        self._changed()

    def remove(self, *polygons) -> None:
        for polygon in polygons:
            if polygon in self._polygons:
                self._polygons.remove(polygon)
        self._changed()

    def _changed(self):
        self.revision += 1
        self._bsp = None

    @property
    def bsp(self) -> BSP:
        if self._bsp is None:
            valid = []
            for polygon in self._polygons:
                if polygon.is_degenerate:
                    logger.warning(f"[Model] Shape {polygon.id} is invalid (degenerate)")
                    continue
                valid.append(polygon)
            self._bsp = BSP(valid)
        return self._bsp

    def __iter__(self):
        return iter(self._polygons)

    def __len__(self):
        return len(self._polygons)

    def __contains__(self, polygon):
        return polygon in self._polygons

    def __getitem__(self, index):
        return self._polygons[index]


class Model(Object3D):
    """Объект с полигонами; material – запасной материал для полигонов без своего."""

    def __init__(self, polygons: Iterable = (), name: str = "Model", material=None):
        super().__init__(name)
        self.polygons = PolygonSet(polygons)
        self.material = material

    @property
    def bsp(self) -> BSP:
        return self.polygons.bsp

    @property
    def polygon_revision(self) -> int:
        return self.polygons.revision

    def clone(self, name: str = None, material=None) -> "Model":
        """Новый узел с теми же полигонами (без детей и без преобразования)."""
        return Model(list(self.polygons), name=name or self.name,
                     material=material if material is not None else self.material)


class Group(Object3D):
    """Контейнер: своё преобразование применяется ко всем детям."""

    def __init__(self, *children, name: str = "Group"):
        super().__init__(name)
        self.add(*children)

# painter3d/scene/camera.py
# ---------------------------------------------------------------
# Камеры: перспективная и ортографическая.
# Камера – обычный узел сцены (без полигонов); её WORLD‑матрица
# обращается в view‑матрицу.  Система координат правая (как в OpenGL):
# +x вправо, +y вверх, камера смотрит вдоль −z.
# ---------------------------------------------------------------

from dataclasses import dataclass

from painter3d.math.mat4 import Mat4
from painter3d.math.vec4 import Vec4
from painter3d.scene.model import Object3D

# Для ортографической камеры «смотреть на камеру» – это направление,
# а не точка (нет перспективного деления).
DIRECTION_TO_CAMERA = Vec4.direction(0, 0, 1)


@dataclass(frozen=True)
class Viewport:
    width: int = 800
    height: int = 600

    @property
    def matrix(self) -> Mat4:
        return Mat4.viewport(self.width, self.height)

    @property
    def aspect(self) -> float:
        return self.width / self.height


class Camera(Object3D):
    """Базовая камера; проекция задаётся подклассом."""

    is_perspective = True

    def __init__(self, name="Camera", width: int = 800, height: int = 600):
        super().__init__(name)
        self.viewport = Viewport(width, height)
        self.projection_revision = 0
        self._world_matrix = None
        self._view_matrix = None
        self.projection_matrix = self._build_projection()

    def _build_projection(self) -> Mat4:
        raise NotImplementedError

    @property
    def aspect_ratio(self) -> float:
        return self.viewport.aspect

    def set_viewport(self, width: int, height: int):
        """Сменить размер viewport (пересчитывает проекцию)."""
        if (width, height) == (self.viewport.width, self.viewport.height):
            return
        self.viewport = Viewport(width, height)
        self._update_projection()

    def _update_projection(self):
        self.projection_matrix = self._build_projection()
        self.projection_revision += 1

    @property
    def near(self) -> float:
        return self._near

    @near.setter
    def near(self, value: float):
        self._near = value
        self._update_projection()

    @property
    def far(self) -> float:
        return self._far

    @far.setter
    def far(self, value: float):
        self._far = value
        self._update_projection()

    def view_matrix(self, world_matrix: Mat4) -> Mat4:
        """Обратная к мировой матрице камеры; запоминается до её смены."""
        if self._world_matrix is None or not self._world_matrix.equals(world_matrix):
            # при вырожденной матрице кэш не трогаем
            self._view_matrix = world_matrix.inverse()
            self._world_matrix = world_matrix
        return self._view_matrix


class PerspectiveCamera(Camera):
    def __init__(self, fov_y: float = 50.0, near: float = 0.1, far: float = 1000.0,
                 width: int = 800, height: int = 600, name="PerspectiveCamera"):
        self._fov_y = fov_y
        self._near = near
        self._far = far
        super().__init__(name, width, height)

    @property
    def fov_y(self) -> float:
        return self._fov_y

    @fov_y.setter
    def fov_y(self, value: float):
        self._fov_y = value
        self._update_projection()

    def _build_projection(self) -> Mat4:
        return Mat4.perspective(self.fov_y, self.aspect_ratio, self.near, self.far)


class OrthographicCamera(Camera):
    is_perspective = False

    def __init__(self, view_height: float = 10.0, near: float = 1.0, far: float = 100.0,
                 width: int = 800, height: int = 600, name="OrthographicCamera"):
        self._view_height = view_height
        self._near = near
        self._far = far
        super().__init__(name, width, height)

    @property
    def view_height(self) -> float:
        return self._view_height

    @view_height.setter
    def view_height(self, value: float):
        self._view_height = value
        self._update_projection()

    def _build_projection(self) -> Mat4:
        return Mat4.ortho(self.view_height, self.aspect_ratio, self.near, self.far)

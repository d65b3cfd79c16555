# painter3d/math/mat4.py
"""
Неизменяемая 4×4 матрица (row‑major, применяется как M · v).
multiply / transpose / inverse возвращают новые экземпляры.
"""

import numpy as np
from math import radians, tan, sin, cos

from painter3d.core.errors import SingularMatrixError
from painter3d.math.quat import Quat
from painter3d.math.vec4 import EPSILON

_SINGULAR_DET = 1e-12


class Mat4:
    __slots__ = ("m",)

    def __init__(self, array: np.ndarray = None):
        if array is None:
            m = np.identity(4, dtype=np.float64)
        else:
            m = np.array(array, dtype=np.float64).reshape((4, 4))
        m.flags.writeable = False
        self.m = m

    @staticmethod
    def identity():
        return Mat4(np.identity(4, dtype=np.float64))

    @staticmethod
    def from_values(*values: float) -> "Mat4":
        """16 чисел построчно."""
        if len(values) != 16:
            raise ValueError(f"Mat4 needs 16 values, got {len(values)}")
        return Mat4(values)

    # -----------------------------------------------------------------
    # аффинные преобразования
    # -----------------------------------------------------------------
    @staticmethod
    def translate(x: float, y: float, z: float):
        m = np.identity(4, dtype=np.float64)
        m[0, 3] = x
        m[1, 3] = y
        m[2, 3] = z
        return Mat4(m)

    @staticmethod
    def scale(sx: float, sy: float, sz: float):
        m = np.identity(4, dtype=np.float64)
        m[0, 0] = sx
        m[1, 1] = sy
        m[2, 2] = sz
        return Mat4(m)

    @staticmethod
    def rotate_x(angle_deg: float):
        a = radians(angle_deg)
        c, s = cos(a), sin(a)
        m = np.identity(4, dtype=np.float64)
        m[1, 1] = c
        m[1, 2] = -s
        m[2, 1] = s
        m[2, 2] = c
        return Mat4(m)

    @staticmethod
    def rotate_y(angle_deg: float):
        a = radians(angle_deg)
        c, s = cos(a), sin(a)
        m = np.identity(4, dtype=np.float64)
        m[0, 0] = c
        m[0, 2] = s
        m[2, 0] = -s
        m[2, 2] = c
        return Mat4(m)

    @staticmethod
    def rotate_z(angle_deg: float):
        a = radians(angle_deg)
        c, s = cos(a), sin(a)
        m = np.identity(4, dtype=np.float64)
        m[0, 0] = c
        m[0, 1] = -s
        m[1, 0] = s
        m[1, 1] = c
        return Mat4(m)

    @staticmethod
    def rotate(angle_deg: float, axis):
        """Поворот вокруг произвольной оси (через кватернион)."""
        return Mat4(Quat.from_axis_angle(axis, angle_deg).to_mat4())

    @staticmethod
    def from_euler(pitch: float, yaw: float, roll: float):
        Rx = Mat4.rotate_x(pitch)
        Ry = Mat4.rotate_y(yaw)
        Rz = Mat4.rotate_z(roll)
        return Ry @ Rx @ Rz

    # -----------------------------------------------------------------
    # проекции
    # -----------------------------------------------------------------
    @staticmethod
    def frustum(left: float, right: float, bottom: float, top: float,
                near: float, far: float):
        m = np.zeros((4, 4), dtype=np.float64)
        m[0, 0] = (2.0 * near) / (right - left)
        m[0, 2] = (right + left) / (right - left)
        m[1, 1] = (2.0 * near) / (top - bottom)
        m[1, 2] = (top + bottom) / (top - bottom)
        m[2, 2] = -(far + near) / (far - near)
        m[2, 3] = -(2.0 * far * near) / (far - near)
        m[3, 2] = -1.0
        return Mat4(m)

    @staticmethod
    def perspective(fov_deg: float, aspect: float,
                    z_near: float, z_far: float):
        """fov_deg – вертикальный угол обзора."""
        y = tan(radians(fov_deg) / 2.0) * z_near
        x = y * aspect
        return Mat4.frustum(-x, x, -y, y, z_near, z_far)

    @staticmethod
    def ortho(view_height: float, aspect: float,
              z_near: float, z_far: float):
        top = view_height / 2.0
        right = view_height * aspect / 2.0
        m = np.identity(4, dtype=np.float64)
        m[0, 0] = 1.0 / right
        m[1, 1] = 1.0 / top
        m[2, 2] = -2.0 / (z_far - z_near)
        m[2, 3] = -(z_far + z_near) / (z_far - z_near)
        return Mat4(m)

    @staticmethod
    def viewport(width: float, height: float,
                 depth_min: float = 0.0, depth_max: float = 1.0):
        """NDC → экран: масштаб на половину viewport, глубина в [min, max]."""
        depth_range = depth_max - depth_min
        m = np.identity(4, dtype=np.float64)
        m[0, 0] = width / 2.0
        m[1, 1] = height / 2.0
        m[2, 2] = depth_range / 2.0
        m[2, 3] = depth_min + depth_range / 2.0
        return Mat4(m)

    @staticmethod
    def look_at(eye, target, up=(0.0, 1.0, 0.0)) -> "Mat4":
        """View‑матрица (мир → камера)."""
        side, up_v, forward = Mat4._look_basis(eye, target, up)
        eye = np.asarray(eye, dtype=np.float64)[:3]

        m = np.identity(4, dtype=np.float64)
        m[0, :3] = side
        m[1, :3] = up_v
        m[2, :3] = forward

        m[0, 3] = -np.dot(side, eye)
        m[1, 3] = -np.dot(up_v, eye)
        m[2, 3] = -np.dot(forward, eye)

        return Mat4(m)

    @staticmethod
    def look_at_in_world(eye, target, up=(0.0, 1.0, 0.0)) -> "Mat4":
        """Чистый поворот, ориентирующий объект (или камеру) на target."""
        side, up_v, forward = Mat4._look_basis(eye, target, up)

        m = np.identity(4, dtype=np.float64)
        m[:3, 0] = side
        m[:3, 1] = up_v
        m[:3, 2] = forward
        return Mat4(m)

    @staticmethod
    def _look_basis(eye, target, up):
        eye = np.asarray(eye, dtype=np.float64)[:3]
        target = np.asarray(target, dtype=np.float64)[:3]
        up = np.asarray(up, dtype=np.float64)[:3]

        forward = eye - target
        forward = forward / np.linalg.norm(forward)

        side = np.cross(up, forward)
        side = side / np.linalg.norm(side)

        up_v = np.cross(forward, side)
        up_v = up_v / np.linalg.norm(up_v)
        return side, up_v, forward

    # -----------------------------------------------------------------
    # алгебра
    # -----------------------------------------------------------------
    def multiply(self, other: "Mat4") -> "Mat4":
        return Mat4(self.m @ other.m)

    def __matmul__(self, other: "Mat4") -> "Mat4":
        return self.multiply(other)

    def transpose(self) -> "Mat4":
        return Mat4(self.m.T)

    def determinant(self) -> float:
        return float(np.linalg.det(self.m))

    def inverse(self) -> "Mat4":
        det = self.determinant()
        if abs(det) < _SINGULAR_DET:
            raise SingularMatrixError(
                f"Matrix is singular and does not have an inverse: {self!r}")
        return Mat4(np.linalg.inv(self.m))

    def equals(self, other: "Mat4", eps: float = EPSILON) -> bool:
        return bool(np.all(np.abs(self.m - other.m) < eps))

    def is_identity(self) -> bool:
        return bool(np.array_equal(self.m, np.identity(4)))

    def transform(self, vec):
        """M · v для Vec4."""
        return vec.transform(self)

    def __repr__(self):
        return f"Mat4({self.m.tolist()})"

    def to_np(self) -> np.ndarray:
        return self.m.copy()

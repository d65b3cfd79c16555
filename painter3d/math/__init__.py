"""
Математический суб‑пакет: Vec4, Mat4, Quat и плоскостные утилиты.
"""

from painter3d.math.vec4 import Vec4, EPSILON
from painter3d.math.mat4 import Mat4
from painter3d.math.quat import Quat
from painter3d.math.geometry import (
    newell_normal, lerp, is_plane_back_facing, winding_order_2d,
)

__all__ = ["Vec4", "Mat4", "Quat", "EPSILON", "newell_normal",
           "lerp", "is_plane_back_facing", "winding_order_2d"]

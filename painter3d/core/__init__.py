"""
Ядро конвейера видимости.

Здесь только исключения и перечисление пространств: модули framebuffer,
frustum, pipeline и collision импортируются напрямую, чтобы
математический пакет мог зависеть от core.errors без циклов.
"""

from painter3d.core.errors import (
    Painter3DError, ConsistencyError, SpaceNotCalculatedError, SingularMatrixError,
)
from painter3d.core.spaces import Space

__all__ = ["Painter3DError", "ConsistencyError", "SpaceNotCalculatedError",
           "SingularMatrixError", "Space"]

"""
Painter3D – CPU‑конвейер видимости по алгоритму художника.

Вершины проходят LOCAL → WORLD → EYE → PROJECTION → CLIP → NDC → SCREEN,
полигоны внутри модели упорядочиваются BSP‑деревом, модели между собой –
топологической сортировкой по SAT‑тесту ограничивающих кубоидов.
"""

from painter3d.utils import logger, Config, RendererConfig
from painter3d.math import Vec4, Mat4, Quat
from painter3d.core import Space, Painter3DError, ConsistencyError
from painter3d.core.framebuffer import FrameBuffer
from painter3d.core.pipeline import calculate_space_in_buffer, run_pipeline
from painter3d.scene import (
    Scene, Model, Group, Material, Polygon3, Rect2,
    PerspectiveCamera, OrthographicCamera, AmbientLight, DirectionalLight,
)
from painter3d.renderer import ImageRenderer, SVGRenderer
from painter3d.multithread import TaskPool

__version__ = "0.1.0"

__all__ = [
    "Config",
    "RendererConfig",
    "Vec4",
    "Mat4",
    "Quat",
    "Space",
    "Painter3DError",
    "ConsistencyError",
    "FrameBuffer",
    "calculate_space_in_buffer",
    "run_pipeline",
    "Scene",
    "Model",
    "Group",
    "Material",
    "Polygon3",
    "Rect2",
    "PerspectiveCamera",
    "OrthographicCamera",
    "AmbientLight",
    "DirectionalLight",
    "ImageRenderer",
    "SVGRenderer",
    "TaskPool",
]

"""
Граф сцены: узлы, полигоны, модели, камеры, свет, BSP и порядок
отрисовки между моделями.
"""

from painter3d.scene.node import SceneNode
from painter3d.scene.shape import Material, Shape, Polygon3, Rect2
from painter3d.scene.bsp import BSP
from painter3d.scene.bounding import Bounding
from painter3d.scene.model import Object3D, PolygonSet, Model, Group
from painter3d.scene.camera import (
    Camera, PerspectiveCamera, OrthographicCamera, Viewport, DIRECTION_TO_CAMERA,
)
from painter3d.scene.light import AmbientLight, DirectionalLight
from painter3d.scene.scene import Scene
from painter3d.scene.toposort import topo_sort

__all__ = [
    "SceneNode", "Material", "Shape", "Polygon3", "Rect2", "BSP", "Bounding",
    "Object3D", "PolygonSet", "Model", "Group", "Camera", "PerspectiveCamera",
    "OrthographicCamera", "Viewport", "DIRECTION_TO_CAMERA", "AmbientLight",
    "DirectionalLight", "Scene", "topo_sort",
]

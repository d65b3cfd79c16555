# -*- coding: utf-8 -*-
"""
conftest.py – общие фикстуры: кубы, камеры, сцены, буфер кадра.
"""

import pytest

from painter3d.core.framebuffer import FrameBuffer
from painter3d.scene import PerspectiveCamera, Rect2, Scene, Material
from painter3d.utils.config import RendererConfig


def make_box(x, y, z, size=1.0, id="box", color=None):
    """Куб: передняя грань z, задняя z - size, углы x..x+size, y..y+size."""
    material = Material(color=color) if color else None
    return Rect2(size, size, x=x, y=y, z=z, id=id, material=material).extrude_to_model(size)


@pytest.fixture
def box_factory():
    return make_box


@pytest.fixture
def unit_cube():
    """Единичный куб с центром в начале координат, повернутый x=30°, y=45°."""
    cube = make_box(-0.5, -0.5, 0.5, id="cube", color="red")
    cube.rotation = (30, 45, 0)
    return cube


@pytest.fixture
def camera():
    """Перспективная камера в (0, 0, 5), смотрит на начало координат."""
    cam = PerspectiveCamera()
    cam.position = (0, 0, 5)
    cam.look_at(0, 0, 0)
    return cam


@pytest.fixture
def cube_scene(unit_cube, camera):
    scene = Scene(unit_cube)
    scene.add(camera)
    return scene


@pytest.fixture
def buffer():
    return FrameBuffer()


@pytest.fixture
def config():
    return RendererConfig()

# -*- coding: utf-8 -*-
import pytest

from painter3d.core.errors import ConsistencyError
from painter3d.core.framebuffer import FrameBuffer
from painter3d.core.pipeline import run_pipeline
from painter3d.core.spaces import Space
from painter3d.scene import Model, PerspectiveCamera, Polygon3, Rect2, Scene
from painter3d.scene.bsp import BSP, Side, classify


def _square(z, id):
    return Rect2(2, 2, x=-1, y=-1, z=z, id=id)


def test_classify_sides():
    plane = _square(0, "plane")
    assert classify(plane, _square(1, "front")) is Side.FRONT
    assert classify(plane, _square(-1, "back")) is Side.BACK
    # копланарный полигон считается лежащим спереди
    assert classify(plane, _square(0, "same")) is Side.FRONT


def test_split_intersecting_polygon():
    plane = _square(0, "root")
    crossing = Polygon3([(-1, 0, -1), (1, 0, -1), (1, 0, 1), (-1, 0, 1)], id="cross")
    bsp = BSP([plane, crossing])

    assert len(bsp.shapes) == 3
    ids = {s.id for s in bsp.shapes}
    assert "cross-splitby[root]-front" in ids
    assert "cross-splitby[root]-back" in ids

    front = next(s for s in bsp.shapes if s.id.endswith("-front"))
    back = next(s for s in bsp.shapes if s.id.endswith("-back"))
    assert all(p.z >= -1e-9 for p in front.points)
    assert all(p.z <= 1e-9 for p in back.points)
    assert bsp.root.front.original_shape is crossing


@pytest.mark.parametrize("order", [("near", "far"), ("far", "near")])
def test_sort_draws_far_square_first(order):
    squares = {"near": _square(0, "near"), "far": _square(-1, "far")}
    model = Model([squares[name] for name in order])
    camera = PerspectiveCamera()
    camera.position = (0, 0, 5)
    scene = Scene(model, camera)

    buffer = FrameBuffer()
    run_pipeline(Space.EYE, scene, camera, buffer)

    eye = buffer.get(model).require(Space.EYE)
    assert [s.shape.id for s in eye.shapes] == ["far", "near"]


def test_sort_requires_every_shape():
    bsp = BSP([_square(0, "a"), _square(-1, "b")])
    with pytest.raises(ConsistencyError):
        bsp.sort({})

# -*- coding: utf-8 -*-
import logging

import pytest

from painter3d.core.errors import SpaceNotCalculatedError
from painter3d.core.framebuffer import SpaceGeometry, VertexArray
from painter3d.core.pipeline import calculate_space_in_buffer, run_pipeline
from painter3d.core.spaces import Space
from painter3d.math import Vec4
from painter3d.scene import Group, Polygon3, Scene
from painter3d.utils.config import RendererConfig

BACK_FACING = {"cube-back", "cube-wall-0", "cube-wall-1"}
VISIBLE = {"cube", "cube-wall-2", "cube-wall-3"}


def test_cube_back_faces(cube_scene, unit_cube, camera, buffer):
    run_pipeline(Space.SCREEN, cube_scene, camera, buffer)

    model_buffer = buffer.get(unit_cube)
    assert set(model_buffer.spaces) == set(Space)

    eye = model_buffer.require(Space.EYE)
    assert len(eye.shapes) == 6
    back = {s.shape.id for s in eye.shapes if s.require_eye().is_back_facing}
    assert back == BACK_FACING

    # для выпуклого тела все отвёрнутые грани рисуются раньше видимых
    flags = [s.eye.is_back_facing for s in eye.shapes]
    assert flags == sorted(flags, reverse=True)


def test_cube_backface_culling(cube_scene, unit_cube, camera, buffer):
    run_pipeline(Space.SCREEN, cube_scene, camera, buffer,
                 RendererConfig(backface_culling=True))

    polygons = buffer.get(unit_cube).polygons(Space.SCREEN)
    assert {p.id for p in polygons} == VISIBLE
    for polygon in polygons:
        assert len(polygon.points) == 4
        assert all(abs(p.x) < 400 and abs(p.y) < 300 for p in polygon.points)


def test_missing_predecessor_raises(cube_scene, camera, buffer):
    calculate_space_in_buffer(Space.LOCAL, cube_scene, camera, buffer)
    with pytest.raises(SpaceNotCalculatedError):
        calculate_space_in_buffer(Space.EYE, cube_scene, camera, buffer)


def test_put_requires_previous_space(cube_scene, unit_cube, camera, buffer):
    calculate_space_in_buffer(Space.LOCAL, cube_scene, camera, buffer)
    with pytest.raises(SpaceNotCalculatedError):
        buffer.get(unit_cube).put(Space.EYE, SpaceGeometry(VertexArray()))


def test_singular_camera_skips_frame(cube_scene, unit_cube, camera, buffer, caplog):
    camera.scale = (0, 1, 1)
    with caplog.at_level(logging.ERROR, logger="Painter3D"):
        assert run_pipeline(Space.SCREEN, cube_scene, camera, buffer) is False

    assert "cannot be inverted" in caplog.text
    # вырожденная камера не даёт видовых пространств, но не роняет кадр
    assert set(buffer.get(unit_cube).spaces) == {Space.LOCAL, Space.WORLD}

    camera.scale = 1
    assert run_pipeline(Space.SCREEN, cube_scene, camera, buffer) is True
    assert set(buffer.get(unit_cube).spaces) == set(Space)


def test_rerun_is_a_cache_hit(cube_scene, unit_cube, camera, buffer):
    run_pipeline(Space.SCREEN, cube_scene, camera, buffer)
    model_buffer = buffer.get(unit_cube)
    before = dict(model_buffer.spaces)

    run_pipeline(Space.SCREEN, cube_scene, camera, buffer)
    assert all(model_buffer.spaces[s] is before[s] for s in Space)


def test_transform_change_recomputes_from_world(cube_scene, unit_cube, camera, buffer):
    run_pipeline(Space.SCREEN, cube_scene, camera, buffer)
    model_buffer = buffer.get(unit_cube)
    local, world = model_buffer.spaces[Space.LOCAL], model_buffer.spaces[Space.WORLD]

    unit_cube.position = (0, 1, 0)
    run_pipeline(Space.SCREEN, cube_scene, camera, buffer)

    assert model_buffer.spaces[Space.LOCAL] is local
    assert model_buffer.spaces[Space.WORLD] is not world
    assert model_buffer.require(Space.WORLD).matrix.equals(unit_cube.model_matrix)


def test_polygon_change_recomputes_local(cube_scene, unit_cube, camera, buffer):
    run_pipeline(Space.SCREEN, cube_scene, camera, buffer)
    local = buffer.get(unit_cube).spaces[Space.LOCAL]

    unit_cube.polygons.remove(unit_cube.polygons[0])
    run_pipeline(Space.SCREEN, cube_scene, camera, buffer)

    assert buffer.get(unit_cube).spaces[Space.LOCAL] is not local
    assert len(buffer.get(unit_cube).require(Space.EYE).shapes) == 5


def test_group_transform_is_inherited(box_factory, camera, buffer):
    box = box_factory(-0.5, -0.5, 0.5, id="box")
    group = Group(box)
    group.position = (2, 0, 0)
    scene = Scene(group, camera)

    run_pipeline(Space.WORLD, scene, camera, buffer)
    world = buffer.get(box).require(Space.WORLD)
    assert world.bounding.min_x == pytest.approx(1.5)
    assert world.bounding.max_x == pytest.approx(2.5)
    assert buffer.get(group).kind == "group"


def test_local_vertices_are_shared(buffer, camera):
    square = Polygon3([(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)], id="sq")
    model = square.to_model()
    scene = Scene(model, camera)
    calculate_space_in_buffer(Space.LOCAL, scene, camera, buffer)

    local = buffer.get(model).require(Space.LOCAL)
    assert len(local.vertices.array) == 4
    assert local.shapes[0].vertex_indices == [0, 1, 2, 3]
    assert local.bounding.cuboid[7].equals(Vec4.point(1, 1, 0))


def test_polygon_behind_camera_is_clipped_away(camera, buffer):
    behind = Polygon3([(0, 0, 10), (1, 0, 10), (1, 1, 10)], id="behind")
    model = behind.to_model()
    scene = Scene(model, camera)
    run_pipeline(Space.SCREEN, scene, camera, buffer)

    assert buffer.get(model).require(Space.CLIP).shapes[0].vertex_indices == []
    assert buffer.get(model).polygons(Space.SCREEN) == []

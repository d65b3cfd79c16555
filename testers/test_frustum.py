# -*- coding: utf-8 -*-
from painter3d.core.frustum import (
    FrustumPlane, Position, clip_and_fill_vertex_array, fill_vertex_array,
    plane_dot, vector_plane_position,
)
from painter3d.math import Vec4


def test_vector_plane_position():
    assert vector_plane_position(Vec4(0, 0, 0, 1), FrustumPlane.NEAR).position is Position.INSIDE
    assert vector_plane_position(Vec4(0, 0, -2, 1), FrustumPlane.NEAR).position is Position.OUTSIDE
    assert vector_plane_position(Vec4(0, 0, -1, 1), FrustumPlane.NEAR).position is Position.PLANE
    assert plane_dot(Vec4(0.5, 0, 0, 1), FrustumPlane.RIGHT) == 0.5


def test_fill_vertex_array_deduplicates():
    target = []
    a = Vec4.point(1, 2, 3)
    b = Vec4.point(4, 5, 6)
    almost_a = Vec4.point(1 + 1e-8, 2, 3)
    assert fill_vertex_array(target, [a, b, almost_a]) == [0, 1, 0]
    assert len(target) == 2


def test_clip_straddling_polygon():
    target = []
    vertices = [Vec4(0, 0, -2, 1), Vec4(1, 0, 0, 1), Vec4(0, 1, 0, 1)]
    indices = clip_and_fill_vertex_array(target, vertices)

    assert len(indices) == 4
    clipped = [target[i] for i in indices]
    assert clipped[0].equals(Vec4(0, 0.5, -1, 1))
    assert clipped[1].equals(Vec4(0.5, 0, -1, 1))
    assert all(plane_dot(v, FrustumPlane.NEAR) >= -1e-9 for v in clipped)


def test_clip_fully_outside_is_empty():
    target = []
    vertices = [Vec4(0, 0, -3, 1), Vec4(1, 0, -3, 1), Vec4(0, 1, -3, 1)]
    assert clip_and_fill_vertex_array(target, vertices) == []
    assert target == []


def test_clip_keeps_vertex_on_plane():
    target = []
    vertices = [Vec4(0, 0, -1, 1), Vec4(1, 0, 0, 1), Vec4(0, 1, 0, 1)]
    indices = clip_and_fill_vertex_array(target, vertices)
    assert len(indices) == 3
    # вершина на плоскости не дублируется и не сдвигается
    assert [target[i].to_tuple() for i in indices] == [v.to_tuple() for v in vertices]


def test_clip_fully_inside_is_unchanged():
    target = []
    vertices = [Vec4(0, 0, 0.5, 1), Vec4(2, 0, 0, 2), Vec4(0, 1, -0.5, 1)]
    indices = clip_and_fill_vertex_array(target, vertices)

    assert indices == [0, 1, 2]
    assert [target[i].to_tuple() for i in indices] == [v.to_tuple() for v in vertices]

    # повторное отсечение уже отсечённого контура ничего не меняет
    again = []
    clipped = [target[i] for i in indices]
    assert clip_and_fill_vertex_array(again, clipped) == indices
    assert [v.to_tuple() for v in again] == [v.to_tuple() for v in clipped]

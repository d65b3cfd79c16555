# -*- coding: utf-8 -*-
import numpy as np
import pytest

from painter3d.core.errors import SingularMatrixError
from painter3d.math import Vec4, Mat4, Quat, newell_normal, lerp, winding_order_2d
from painter3d.math.geometry import is_plane_back_facing


def test_vec4_point_direction_arithmetic():
    a = Vec4.point(1, 2, 3)
    b = Vec4.point(4, -1, 0)
    d = b - a
    assert d.to_tuple() == (3.0, -3.0, -3.0, 0.0)
    assert (a + d).to_tuple() == (4.0, -1.0, 0.0, 1.0)
    assert (a * 2).to_tuple() == (2.0, 4.0, 6.0, 1.0)
    assert (-a).w == 1.0


def test_vec4_dot_cross_length():
    x = Vec4.direction(1, 0, 0)
    y = Vec4.direction(0, 1, 0)
    assert x.dot(y) == 0.0
    assert x.cross(y).equals(Vec4.direction(0, 0, 1))
    assert Vec4.direction(3, 4, 0).length() == pytest.approx(5.0)
    assert Vec4.direction(3, 4, 0).unit().length() == pytest.approx(1.0)


def test_vec4_normalize_w():
    v = Vec4(2, 4, 6, 2).normalize_w()
    assert v.to_tuple() == (1.0, 2.0, 3.0, 1.0)


def test_mat4_identity():
    I = Mat4.identity()
    assert np.allclose(I.to_np(), np.eye(4))
    assert I.is_identity()


def test_mat4_translation():
    M = Mat4.translate(1, 2, 3)
    res = Vec4.point(0, 0, 0).transform(M)
    assert np.allclose(res.as_np(), [1, 2, 3, 1])
    # направления переносом не сдвигаются
    assert Vec4.direction(1, 0, 0).transform(M).equals(Vec4.direction(1, 0, 0))


def test_mat4_algebra_properties():
    M = Mat4.translate(1, -2, 3) @ Mat4.from_euler(30, 45, 10) @ Mat4.scale(2, 1, 0.5)
    assert (M @ Mat4.identity()).equals(M)
    assert (M @ M.inverse()).equals(Mat4.identity())
    assert M.transpose().transpose().equals(M)


def test_mat4_is_immutable():
    M = Mat4.identity()
    with pytest.raises(ValueError):
        M.m[0, 0] = 5.0


def test_singular_inverse_raises():
    with pytest.raises(SingularMatrixError):
        Mat4.scale(0, 1, 1).inverse()


def test_rotate_axis_angle_matches_rotate_z():
    assert Mat4.rotate(90, (0, 0, 1)).equals(Mat4.rotate_z(90))
    v = Vec4.point(1, 0, 0).transform(Mat4.rotate_z(90))
    assert v.equals(Vec4.point(0, 1, 0))


def test_quat_zero_axis_raises():
    with pytest.raises(ValueError):
        Quat.from_axis_angle((0, 0, 0), 45)


def test_perspective_near_plane_maps_to_minus_one():
    P = Mat4.perspective(50, 4 / 3, 0.1, 1000)
    ndc = Vec4.point(0, 0, -0.1).transform(P).normalize_w()
    assert ndc.z == pytest.approx(-1.0)
    far = Vec4.point(0, 0, -1000).transform(P).normalize_w()
    assert far.z == pytest.approx(1.0)


def test_viewport_scales_by_half():
    V = Mat4.viewport(800, 600)
    corner = Vec4.point(1, 1, 0).transform(V)
    assert np.allclose(corner.as_np(), [400, 300, 0.5, 1])


def test_newell_normal_and_degenerate():
    square = [Vec4.point(0, 0), Vec4.point(1, 0), Vec4.point(1, 1), Vec4.point(0, 1)]
    assert newell_normal(square).equals(Vec4.direction(0, 0, 1))
    line = [Vec4.point(0, 0), Vec4.point(1, 0), Vec4.point(2, 0)]
    assert newell_normal(line) is None
    assert winding_order_2d(square) == "CCW"


def test_lerp_endpoints_exact():
    a, b = Vec4.point(0, 0, 0), Vec4.point(2, 2, 2)
    assert lerp(a, b, 0.0) is a
    assert lerp(a, b, 1.0) is b
    assert lerp(a, b, 0.5).equals(Vec4.point(1, 1, 1))


def test_back_facing_boundary():
    n = Vec4.direction(0, 0, 1)
    assert not is_plane_back_facing(n, Vec4.direction(0, 0, 1))
    assert is_plane_back_facing(n, Vec4.direction(1, 0, 0))

# -*- coding: utf-8 -*-
import logging

from painter3d.core.framebuffer import FrameBuffer
from painter3d.core.pipeline import run_pipeline
from painter3d.core.spaces import Space
from painter3d.multithread import TaskPool
from painter3d.scene import PerspectiveCamera, Scene
from painter3d.scene import toposort


def _eye_buffers(models):
    camera = PerspectiveCamera()
    scene = Scene(*models)
    scene.add(camera)
    buffer = FrameBuffer()
    run_pipeline(Space.EYE, scene, camera, buffer)
    return scene, camera, buffer


def test_separated_boxes_are_ordered(box_factory):
    a = box_factory(0.5, -0.5, -5, id="a")
    b = box_factory(2.0, -0.5, -5, id="b")
    scene, camera, buffer = _eye_buffers([a, b])
    collisions = []
    scene.on("collision", collisions.append)

    buf_a, buf_b = buffer.get(a), buffer.get(b)
    # грань +x у A отвёрнута от камеры, B за ней – A ближе
    assert toposort.compare(buf_a, buf_b, camera) == 1
    assert toposort.topo_sort(buffer.models(), camera) == {buf_b: 0, buf_a: 1}
    assert collisions == []


def test_opposite_quadrants_are_not_compared(box_factory):
    a = box_factory(-3, -0.5, -5, id="a")
    b = box_factory(2, -0.5, -5, id="b")
    scene, camera, buffer = _eye_buffers([a, b])
    assert toposort.compare(buffer.get(a), buffer.get(b), camera) == 0


def test_overlapping_boxes_emit_one_collision(box_factory):
    a = box_factory(-0.5, -0.5, -5, id="a")
    b = box_factory(-0.5, -0.5, -5, id="b")
    scene, camera, buffer = _eye_buffers([a, b])
    on_a, on_b, on_scene = [], [], []
    a.on("collision", on_a.append)
    b.on("collision", on_b.append)
    scene.on("collision", on_scene.append)

    assert toposort.compare(buffer.get(a), buffer.get(b), camera) == 0

    assert on_a[0].models == (a, b)
    assert on_b[0].models == (b, a)
    assert on_a[0].collision_id == on_b[0].collision_id
    # общий предок получает событие один раз
    assert len(on_scene) == 1


def test_cycle_falls_back_to_distance(box_factory, monkeypatch, caplog):
    near = box_factory(-0.5, -0.5, -5, id="near")
    middle = box_factory(-0.5, -0.5, -10, id="middle")
    far = box_factory(-0.5, -0.5, -15, id="far")
    scene, camera, buffer = _eye_buffers([near, middle, far])
    ranks = {buffer.get(near): 0, buffer.get(middle): 1, buffer.get(far): 2}

    def cyclic(a, b, cam):
        # near < middle, middle < far, far < near
        pair = (ranks[a], ranks[b])
        return {(0, 1): -1, (1, 2): -1, (0, 2): 1}[pair]

    monkeypatch.setattr(toposort, "compare", cyclic)
    with caplog.at_level(logging.WARNING, logger="Painter3D"):
        order = toposort.topo_sort(buffer.models(), camera)

    assert "Cycle detected" in caplog.text
    assert order == {buffer.get(far): 0, buffer.get(middle): 1, buffer.get(near): 2}


def test_pool_gives_same_order(box_factory):
    models = [box_factory(0.5 + 1.5 * i, -0.5, -5, id=f"m{i}") for i in range(4)]
    scene, camera, buffer = _eye_buffers(models)

    expected = toposort.topo_sort(buffer.models(), camera)
    with TaskPool(max_workers=2) as pool:
        assert toposort.topo_sort(buffer.models(), camera, pool) == expected


def test_pool_emits_collisions_after_barrier(box_factory):
    a = box_factory(-0.5, -0.5, -5, id="a")
    b = box_factory(-0.5, -0.5, -5, id="b")
    scene, camera, buffer = _eye_buffers([a, b])
    seen = []
    scene.on("collision", seen.append)

    with TaskPool(max_workers=2) as pool:
        toposort.topo_sort(buffer.models(), camera, pool)
    assert len(seen) == 1

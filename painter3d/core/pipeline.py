# painter3d/core/pipeline.py
"""
Конвейер пространств: LOCAL → WORLD → EYE → PROJECTION → CLIP → NDC → SCREEN.

Каждая стадия проходит по всем объектам сцены (pre‑order DFS, родитель
раньше детей, камеры – объекты без полигонов) и пишет в FrameBuffer
одну запись на объект.  Запись помечается «штампом» – кортежем входов,
из которых она получена (ревизии полигонов и преобразования, штамп
родителя и камеры, флаг отсечения).  Совпавший штамп – попадание в
кэш, иначе запись перезаписывается вместе со всеми последующими.
"""

from __future__ import annotations

import dataclasses
from typing import Callable, Dict, Optional

from painter3d.core.errors import SingularMatrixError, SpaceNotCalculatedError
from painter3d.core.framebuffer import (
    EyeShapeData, FlatShape, FrameBuffer, LazyVertexArray, ObjectFrameBuffer,
    ShapeFrameBuffer, SpaceGeometry, VertexArray, WorldShapeData,
)
from painter3d.core.frustum import (
    clip_and_fill_vertex_array, clip_and_fill_vertex_array_nested,
    fill_vertex_array, fill_vertex_array_nested,
)
from painter3d.core.spaces import Space
from painter3d.math.geometry import is_plane_back_facing
from painter3d.scene.bounding import Bounding
from painter3d.scene.camera import DIRECTION_TO_CAMERA
from painter3d.scene.model import Model
from painter3d.utils.config import RendererConfig
from painter3d.utils.logger import logger
from painter3d.utils.profiler import Profiler


def calculate_space_in_buffer(space: Space, scene, camera, buffer: FrameBuffer,
                              config: RendererConfig = None) -> bool:
    """
    Рассчитать одно пространство для всех объектов сцены.

    False – стадия пропущена (вырожденная камера), последующие стадии
    в этом кадре считать нельзя.
    """
    config = config or RendererConfig()
    objects = scene.objects()
    with Profiler(f"Pipeline {space.name}"):
        computed = _STAGES[space](objects, camera, buffer, config)
    if computed is None:
        return False
    logger.debug(f"[Pipeline] {space.name}: {computed} of {len(objects)} objects recomputed")
    return True


def run_pipeline(target: Space, scene, camera, buffer: FrameBuffer,
                 config: RendererConfig = None) -> bool:
    """Все стадии от LOCAL до target включительно; False – кадр пропущен."""
    for space in Space.up_to(target):
        if not calculate_space_in_buffer(space, scene, camera, buffer, config):
            return False
    return True


# ---------------------------------------------------------------------
# LOCAL
# ---------------------------------------------------------------------
def _local_stage(objects, camera, buffer: FrameBuffer, config) -> int:
    computed = 0
    for obj in objects:
        stamp = (obj.uid, obj.polygon_revision)
        object_buffer = buffer.get(obj)
        if object_buffer is not None and object_buffer.require(Space.LOCAL).stamp == stamp:
            continue

        vertices = []
        shapes = []
        bsp = obj.bsp
        for shape in (bsp.shapes if bsp is not None else ()):
            shapes.append(ShapeFrameBuffer(
                shape=shape,
                vertex_indices=fill_vertex_array(vertices, shape.points),
                hole_vertex_indices=fill_vertex_array_nested(vertices, shape.holes),
                local=FlatShape(shape.points, shape.holes, shape.normal),
            ))

        geo = SpaceGeometry(VertexArray(vertices), shapes, Bounding(vertices),
                            stamp=stamp)
        if object_buffer is None:
            kind = "model" if isinstance(obj, Model) else "group"
            buffer.add(obj, ObjectFrameBuffer(kind, obj, geo))
        else:
            object_buffer.put(Space.LOCAL, geo)
        computed += 1
    return computed


# ---------------------------------------------------------------------
# WORLD
# ---------------------------------------------------------------------
def _world_stage(objects, camera, buffer: FrameBuffer, config) -> int:
    computed = 0

    def compute(obj, object_buffer: ObjectFrameBuffer, parent_buffer):
        nonlocal computed
        local = object_buffer.require(Space.LOCAL)
        parent_world = parent_buffer.get(Space.WORLD) if parent_buffer else None
        stamp = (local.stamp, obj.transform_revision,
                 parent_world.stamp if parent_world is not None else None)

        current = object_buffer.get(Space.WORLD)
        if current is not None and current.stamp == stamp:
            return

        if parent_world is not None:
            # сначала преобразование в своём пространстве, затем в родительском
            matrix = parent_world.matrix @ obj.model_matrix
            normal_matrix = parent_world.normal_matrix @ obj.rotation_matrix
        else:
            matrix = obj.model_matrix
            normal_matrix = obj.rotation_matrix

        for shape_frame in local.shapes:
            shape_frame.world = WorldShapeData(shape_frame.shape.normal.transform(normal_matrix))

        object_buffer.put(Space.WORLD, SpaceGeometry(
            vertices=LazyVertexArray(local.vertices, matrix.transform),
            shapes=local.shapes,
            bounding=local.bounding.transform(matrix, normal_matrix),
            matrix=matrix,
            normal_matrix=normal_matrix,
            stamp=stamp,
        ))
        computed += 1

    buffer.for_objects(objects, compute)
    return computed


# ---------------------------------------------------------------------
# EYE
# ---------------------------------------------------------------------
def _eye_stage(objects, camera, buffer: FrameBuffer, config) -> Optional[int]:
    camera_buffer = buffer.get(camera)
    if camera_buffer is None or camera_buffer.get(Space.WORLD) is None:
        raise SpaceNotCalculatedError(Space.WORLD, camera.name)
    camera_world = camera_buffer.get(Space.WORLD)

    try:
        view_matrix = camera.view_matrix(camera_world.matrix)
    except SingularMatrixError as exc:
        logger.error(f"[Pipeline] Camera {camera.name} cannot be inverted, frame skipped: {exc}")
        return None
    # матрица поворота ортогональна: обратная совпадает с транспонированной
    camera_normal_matrix = camera_world.normal_matrix.transpose()
    computed = 0

    def compute(obj, object_buffer: ObjectFrameBuffer, parent_buffer):
        nonlocal computed
        local = object_buffer.require(Space.LOCAL)
        world = object_buffer.require(Space.WORLD)
        stamp = (world.stamp, camera_world.stamp, camera.is_perspective,
                 config.backface_culling)

        current = object_buffer.get(Space.EYE)
        if current is not None and current.stamp == stamp:
            return

        model_view = view_matrix @ world.matrix
        model_view_normal = camera_normal_matrix @ world.normal_matrix
        local_vertices = local.vertices.array

        shape_map: Dict[object, ShapeFrameBuffer] = {}
        for shape_frame in local.shapes:
            normal = shape_frame.shape.normal.transform(model_view_normal)
            if camera.is_perspective:
                # камера в начале координат: (0,0,0) − точка плоскости
                first = local_vertices[shape_frame.vertex_indices[0]]
                to_camera = -first.transform(model_view)
            else:
                to_camera = DIRECTION_TO_CAMERA
            shape_frame.eye = EyeShapeData(normal, is_plane_back_facing(normal, to_camera))
            shape_map[shape_frame.shape] = shape_frame

        bsp = obj.bsp
        ordered = bsp.sort(shape_map) if bsp is not None else []
        if config.backface_culling:
            ordered = [s for s in ordered if not s.eye.is_back_facing]

        object_buffer.put(Space.EYE, SpaceGeometry(
            vertices=LazyVertexArray(local.vertices, model_view.transform),
            shapes=ordered,
            bounding=local.bounding.transform(model_view, model_view_normal),
            matrix=model_view,
            normal_matrix=model_view_normal,
            stamp=stamp,
        ))
        computed += 1

    buffer.for_objects(objects, compute)
    return computed


# ---------------------------------------------------------------------
# PROJECTION / CLIP / NDC / SCREEN
# ---------------------------------------------------------------------
def _projection_stage(objects, camera, buffer: FrameBuffer, config) -> int:
    computed = 0

    def compute(obj, object_buffer: ObjectFrameBuffer, parent_buffer):
        nonlocal computed
        eye = object_buffer.require(Space.EYE)
        stamp = (eye.stamp, camera.projection_revision)
        current = object_buffer.get(Space.PROJECTION)
        if current is not None and current.stamp == stamp:
            return

        mvp = camera.projection_matrix @ eye.matrix
        local = object_buffer.require(Space.LOCAL)
        object_buffer.put(Space.PROJECTION, SpaceGeometry(
            vertices=LazyVertexArray(local.vertices, mvp.transform),
            shapes=eye.shapes,
            matrix=mvp,
            stamp=stamp,
        ))
        computed += 1

    buffer.for_objects(objects, compute)
    return computed


def _clip_stage(objects, camera, buffer: FrameBuffer, config) -> int:
    computed = 0

    def compute(obj, object_buffer: ObjectFrameBuffer, parent_buffer):
        nonlocal computed
        projection = object_buffer.require(Space.PROJECTION)
        stamp = (projection.stamp,)
        current = object_buffer.get(Space.CLIP)
        if current is not None and current.stamp == stamp:
            return

        source = projection.vertices.array
        vertices = []
        shapes = []
        for shape_frame in projection.shapes:
            outline = [source[i] for i in shape_frame.vertex_indices]
            holes = [[source[i] for i in hole] for hole in shape_frame.hole_vertex_indices]
            shapes.append(dataclasses.replace(
                shape_frame,
                vertex_indices=clip_and_fill_vertex_array(vertices, outline),
                hole_vertex_indices=clip_and_fill_vertex_array_nested(vertices, holes),
            ))

        object_buffer.put(Space.CLIP, SpaceGeometry(VertexArray(vertices), shapes,
                                                    stamp=stamp))
        computed += 1

    buffer.for_objects(objects, compute)
    return computed


def _ndc_stage(objects, camera, buffer: FrameBuffer, config) -> int:
    computed = 0

    def compute(obj, object_buffer: ObjectFrameBuffer, parent_buffer):
        nonlocal computed
        clip = object_buffer.require(Space.CLIP)
        stamp = (clip.stamp,)
        current = object_buffer.get(Space.NDC)
        if current is not None and current.stamp == stamp:
            return

        object_buffer.put(Space.NDC, SpaceGeometry(
            vertices=VertexArray(v.normalize_w() for v in clip.vertices.array),
            shapes=clip.shapes,
            stamp=stamp,
        ))
        computed += 1

    buffer.for_objects(objects, compute)
    return computed


def _screen_stage(objects, camera, buffer: FrameBuffer, config) -> int:
    viewport_matrix = camera.viewport.matrix
    computed = 0

    def compute(obj, object_buffer: ObjectFrameBuffer, parent_buffer):
        nonlocal computed
        ndc = object_buffer.require(Space.NDC)
        stamp = (ndc.stamp, camera.projection_revision)
        current = object_buffer.get(Space.SCREEN)
        if current is not None and current.stamp == stamp:
            return

        object_buffer.put(Space.SCREEN, SpaceGeometry(
            vertices=LazyVertexArray(ndc.vertices, viewport_matrix.transform),
            shapes=ndc.shapes,
            stamp=stamp,
        ))
        computed += 1

    buffer.for_objects(objects, compute)
    return computed


_STAGES: Dict[Space, Callable] = {
    Space.LOCAL: _local_stage,
    Space.WORLD: _world_stage,
    Space.EYE: _eye_stage,
    Space.PROJECTION: _projection_stage,
    Space.CLIP: _clip_stage,
    Space.NDC: _ndc_stage,
    Space.SCREEN: _screen_stage,
}

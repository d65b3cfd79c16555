# -*- coding: utf-8 -*-
"""
Абстрактный базовый рендерер.

render() – общий для всех подклассов кадр: конвейер до SCREEN,
топологическая сортировка моделей, упорядоченный буфер → draw().
Подклассы реализуют только отрисовку уже упорядоченных полигонов.
"""

import dataclasses
from abc import ABC, abstractmethod

from painter3d.core.framebuffer import FrameBuffer
from painter3d.core.pipeline import run_pipeline
from painter3d.core.spaces import Space
from painter3d.scene.camera import PerspectiveCamera
from painter3d.scene.toposort import topo_sort
from painter3d.utils.config import RendererConfig
from painter3d.utils.logger import logger
from painter3d.utils.profiler import Profiler


class BaseRenderer(ABC):
    pipeline_target = Space.SCREEN

    def __init__(self, config: RendererConfig = None, buffer: FrameBuffer = None,
                 pool=None):
        self.config = config or RendererConfig()
        self.buffer = buffer if buffer is not None else FrameBuffer()
        self.pool = pool
        self._default_camera = None

    @property
    def width(self) -> int:
        return self.config.viewport_width

    @property
    def height(self) -> int:
        return self.config.viewport_height

    def render(self, scene, camera=None):
        """Отрисовать один кадр; возвращает результат draw()."""
        if camera is None:
            if self._default_camera is None:
                self._default_camera = PerspectiveCamera(width=self.width, height=self.height)
            camera = self._default_camera
        camera.set_viewport(self.width, self.height)

        if camera.parent is None:
            scene.add(camera)

        objects = scene.objects()
        stale = self.buffer.prune(objects)
        if stale:
            logger.debug(f"[Renderer] Pruned {stale} stale buffer entries")

        with Profiler("Frame"):
            if not run_pipeline(self.pipeline_target, scene, camera, self.buffer, self.config):
                return self.draw(scene, [])
            order = topo_sort(self.buffer.models(objects), camera, self.pool)
            self.buffer.sort(key=lambda b: order.get(b, 0))

        return self.draw(scene, self.buffer.models(objects))

    def background(self, scene):
        """Фон кадра: цвет сцены, иначе цвет из конфигурации."""
        return scene.background or self.config.background

    def resize(self, w: int, h: int) -> None:
        """Обновить размер viewport (камера подстраивается в render())."""
        self.config = dataclasses.replace(self.config, viewport_width=w, viewport_height=h)
        logger.info(f"[Renderer] Viewport resized to {w}x{h}")

    @abstractmethod
    def draw(self, scene, models):
        """Нарисовать упорядоченные буферы моделей (дальние – первыми)."""

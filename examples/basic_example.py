#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Пример «Два куба и рамка»: сцена рисуется в PNG и SVG.

Кубы пересекаются – в лог уходит событие столкновения; рамка с
отверстием показывает заливку even‑odd.
"""

from painter3d import (
    Config,
    ImageRenderer,
    Material,
    PerspectiveCamera,
    Rect2,
    RendererConfig,
    Scene,
    SVGRenderer,
    TaskPool,
)
from painter3d.utils import logger


def build_scene():
    red_cube = Rect2(1, 1, x=-0.5, y=-0.5, z=0.5, id="red",
                     material=Material(color="crimson")).extrude_to_model(1)
    red_cube.rotation = (30, 45, 0)

    blue_cube = Rect2(1, 1, x=-0.5, y=-0.5, z=0.5, id="blue",
                      material=Material(color="royalblue")).extrude_to_model(1)
    blue_cube.position = (0.6, 0.3, -0.4)

    frame = Rect2(3, 3, x=-1.5, y=-1.5, z=-2,
                  holes=[[(0.75, 0.75), (2.25, 0.75), (2.25, 2.25), (0.75, 2.25)]],
                  id="frame", material=Material(color="#d0c090", opacity=0.8)).to_model()

    scene = Scene(frame, red_cube, blue_cube, background="#202030")
    scene.on("collision", lambda e: logger.info(
        f"[Example] Collision {e.collision_id}: {e.models[0].name} / {e.models[1].name}"))
    return scene


def main():
    config = RendererConfig.from_config(Config())
    scene = build_scene()

    camera = PerspectiveCamera(width=config.viewport_width, height=config.viewport_height)
    camera.position = (2, 2, 6)
    camera.look_at(0, 0, 0)

    with TaskPool() as pool:
        image = ImageRenderer(config, pool=pool)
        image.render(scene, camera)
        image.save("basic_example.png")

    svg = SVGRenderer(config)
    svg.render(scene, camera)
    svg.save("basic_example.svg")
    logger.info("[Example] Wrote basic_example.png and basic_example.svg")


if __name__ == "__main__":
    main()

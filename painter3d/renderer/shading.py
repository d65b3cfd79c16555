# -*- coding: utf-8 -*-
"""
Плоское затенение полигона: фоновый свет + один направленный.

Цвет материала – любая CSS‑строка, понятная PIL.ImageColor
("red", "#ff8800", "rgb(10, 20, 30)", "hsl(...)").
"""

from typing import Optional, Tuple

from PIL import ImageColor

from painter3d.utils.logger import logger

RGB = Tuple[int, int, int]


def shape_light(normal, ambient, directional) -> RGB:
    """Освещённость полигона с мировой нормалью `normal`."""
    reflected = max(0.0, normal.dot(directional.direction)) if normal is not None else 0.0
    return tuple(
        min(a + round(d * reflected), 255)
        for a, d in zip(ambient.value, directional.value)
    )


def shape_color(material, light: RGB = (0, 0, 0)) -> Optional[RGB]:
    """Цвет материала, умноженный на освещённость; None – цвет не задан."""
    if material is None or material.color is None:
        return None
    try:
        rgb = ImageColor.getrgb(material.color)[:3]
    except ValueError:
        logger.warning(f"[Shading] Unknown color {material.color!r}")
        return None
    return tuple(round(c * l / 255) for c, l in zip(rgb, light))


def css_rgb(rgb: RGB) -> str:
    return f"rgb({rgb[0]},{rgb[1]},{rgb[2]})"

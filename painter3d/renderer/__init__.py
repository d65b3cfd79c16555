"""
Экспорт основных рендер‑компонентов.
"""

from painter3d.renderer.base_renderer import BaseRenderer
from painter3d.renderer.shading import shape_color, shape_light
from painter3d.renderer.pipelines.raster import ImageRenderer
from painter3d.renderer.pipelines.svg import SVGRenderer

__all__ = [
    "BaseRenderer",
    "ImageRenderer",
    "SVGRenderer",
    "shape_color",
    "shape_light",
]

# painter3d/renderer/pipelines/__init__.py
"""
Пакет с готовыми рендерерами.
"""

from painter3d.renderer.pipelines.raster import ImageRenderer
from painter3d.renderer.pipelines.svg import SVGRenderer

__all__ = ["ImageRenderer", "SVGRenderer"]

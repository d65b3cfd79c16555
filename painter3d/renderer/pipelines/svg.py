# -*- coding: utf-8 -*-
"""
SVG‑рендерер: упорядоченные полигоны → строка SVG‑документа.

Начало координат viewBox – центр viewport, ось y экрана перевёрнута.
Полигоны с отверстиями выводятся как <path fill-rule="evenodd">.
"""

from xml.sax.saxutils import quoteattr

from painter3d.core.spaces import Space
from painter3d.renderer.base_renderer import BaseRenderer
from painter3d.renderer.shading import css_rgb, shape_color, shape_light

SVG_NS = "http://www.w3.org/2000/svg"


def _fmt(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


class SVGRenderer(BaseRenderer):
    def __init__(self, config=None, buffer=None, pool=None):
        super().__init__(config, buffer, pool)
        self.document = None

    def draw(self, scene, models) -> str:
        w, h = self.width, self.height
        background = self.background(scene)
        style = f" style={quoteattr(f'background-color: {background}')}" if background else ""
        lines = [f'<svg xmlns="{SVG_NS}" width="{w}" height="{h}" '
                 f'viewBox="{_fmt(-w / 2)} {_fmt(-h / 2)} {w} {h}"{style}>']

        for model_buffer in models:
            for polygon in model_buffer.polygons(Space.SCREEN):
                lines.append("  " + self._element(scene, polygon))

        lines.append("</svg>")
        self.document = "\n".join(lines)
        return self.document

    @staticmethod
    def _element(scene, polygon) -> str:
        attrs = [f"id={quoteattr(polygon.id)}"]
        if polygon.holes:
            contours = [polygon.points] + polygon.holes
            d = " ".join(
                "M " + " L ".join(f"{_fmt(p.x)} {_fmt(-p.y)}" for p in contour) + " Z"
                for contour in contours
            )
            tag = "path"
            attrs += ['fill-rule="evenodd"', f'd="{d}"']
        else:
            tag = "polygon"
            points = " ".join(f"{_fmt(p.x)},{_fmt(-p.y)}" for p in polygon.points)
            attrs.append(f'points="{points}"')

        color = shape_color(
            polygon.material,
            shape_light(polygon.normal, scene.ambient_light, scene.directional_light),
        )
        if color is not None:
            attrs.append(f'fill="{css_rgb(color)}"')
        if polygon.material.opacity is not None:
            attrs.append(f'opacity="{polygon.material.opacity}"')
        return f"<{tag} {' '.join(attrs)}/>"

    def save(self, path):
        if self.document is None:
            raise RuntimeError("Nothing rendered yet")
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.document)

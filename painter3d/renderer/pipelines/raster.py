# -*- coding: utf-8 -*-
"""
Растровый рендерер: закрашивает упорядоченные полигоны в PIL.Image
алгоритмом художника (без буфера глубины).
"""

from PIL import Image, ImageChops, ImageColor, ImageDraw

from painter3d.core.spaces import Space
from painter3d.renderer.base_renderer import BaseRenderer
from painter3d.renderer.shading import shape_color, shape_light

_DEFAULT_FILL = (0, 0, 0)


class ImageRenderer(BaseRenderer):
    """Каждый кадр – новое RGBA‑изображение размером с viewport."""

    def __init__(self, config=None, buffer=None, pool=None):
        super().__init__(config, buffer, pool)
        self.image = None

    def _to_pixel(self, v):
        # экран: начало в центре, y вверх; картинка: начало слева сверху
        return (v.x + self.width / 2.0, self.height / 2.0 - v.y)

    def draw(self, scene, models):
        size = (self.width, self.height)
        color = self.background(scene)
        background = ImageColor.getrgb(color)[:3] + (255,) if color else (0, 0, 0, 0)
        image = Image.new("RGBA", size, background)
        draw = ImageDraw.Draw(image)

        for model_buffer in models:
            for polygon in model_buffer.polygons(Space.SCREEN):
                if len(polygon.points) < 3:
                    continue
                color = shape_color(
                    polygon.material,
                    shape_light(polygon.normal, scene.ambient_light, scene.directional_light),
                ) or _DEFAULT_FILL
                opacity = polygon.material.opacity
                alpha = 255 if opacity is None else round(255 * max(0.0, min(1.0, opacity)))
                outline = [self._to_pixel(p) for p in polygon.points]

                if not polygon.holes and alpha == 255:
                    draw.polygon(outline, fill=color + (255,))
                    continue

                mask = self._even_odd_mask(size, [outline] + [
                    [self._to_pixel(p) for p in hole] for hole in polygon.holes if len(hole) > 2
                ])
                mask = mask.convert("L").point(lambda v: alpha if v else 0)
                image.paste(Image.new("RGBA", size, color + (255,)), (0, 0), mask)

        self.image = image
        return image

    @staticmethod
    def _even_odd_mask(size, contours):
        mask = Image.new("1", size, 0)
        for contour in contours:
            layer = Image.new("1", size, 0)
            ImageDraw.Draw(layer).polygon(contour, fill=1)
            mask = ImageChops.logical_xor(mask, layer)
        return mask

    def save(self, path):
        if self.image is None:
            raise RuntimeError("Nothing rendered yet")
        self.image.save(path)

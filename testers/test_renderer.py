# -*- coding: utf-8 -*-
from painter3d.renderer import ImageRenderer, SVGRenderer, shape_color, shape_light
from painter3d.scene import AmbientLight, DirectionalLight, Material, Rect2, Scene
from painter3d.math import Vec4
from painter3d.utils.config import RendererConfig


def test_shape_light_and_color():
    ambient = AmbientLight(intensity=0.5)
    directional = DirectionalLight(0, 0, 1, intensity=0.5)
    light = shape_light(Vec4.direction(0, 0, 1), ambient, directional)
    assert light == (255, 255, 255)
    assert shape_light(Vec4.direction(0, 0, -1), ambient, directional) == ambient.value

    assert shape_color(Material(color="red"), (255, 255, 255)) == (255, 0, 0)
    assert shape_color(Material(color="#0000ff"), (0, 0, 0)) == (0, 0, 0)
    assert shape_color(Material()) is None
    assert shape_color(Material(color="not-a-color")) is None


def test_svg_renderer_emits_polygons(cube_scene, camera):
    renderer = SVGRenderer()
    document = renderer.render(cube_scene, camera)
    assert document.startswith("<svg")
    assert document.count("<polygon") == 6
    assert 'viewBox="-400 -300 800 600"' in document
    assert "fill=\"rgb(" in document


def test_svg_renderer_culls_back_faces(cube_scene, camera):
    renderer = SVGRenderer(RendererConfig(backface_culling=True))
    assert renderer.render(cube_scene, camera).count("<polygon") == 3


def test_svg_path_for_polygon_with_holes(camera):
    frame = Rect2(2, 2, x=-1, y=-1, holes=[[(0.5, 0.5), (1.5, 0.5), (1.5, 1.5), (0.5, 1.5)]],
                  id="frame", material=Material(color="green", opacity=0.5))
    scene = Scene(frame.to_model(), camera)
    document = SVGRenderer().render(scene, camera)
    assert '<path id="frame" fill-rule="evenodd"' in document
    assert 'opacity="0.5"' in document


def test_image_renderer_paints_center(cube_scene, camera):
    renderer = ImageRenderer(RendererConfig(viewport_width=200, viewport_height=150))
    image = renderer.render(cube_scene, camera)
    assert image.size == (200, 150)
    r, g, b, a = image.getpixel((100, 75))
    assert a == 255
    assert r > 0 and g == 0 and b == 0
    # угол кадра остаётся фоном
    assert image.getpixel((0, 0))[3] == 0


def test_image_renderer_leaves_hole_empty(camera):
    frame = Rect2(2, 2, x=-1, y=-1, holes=[[(0.5, 0.5), (1.5, 0.5), (1.5, 1.5), (0.5, 1.5)]],
                  id="frame", material=Material(color="white"))
    scene = Scene(frame.to_model(), camera)
    image = ImageRenderer(RendererConfig(viewport_width=200, viewport_height=150)).render(scene, camera)
    # центр кадра попадает в отверстие
    assert image.getpixel((100, 75))[3] == 0
    assert image.getpixel((100 - 25, 75))[3] == 255


def test_render_attaches_camera_and_prunes(unit_cube, camera):
    scene = Scene(unit_cube)
    renderer = SVGRenderer()
    renderer.render(scene, camera)
    assert camera.parent is scene
    assert renderer.buffer.has(unit_cube)

    unit_cube.remove_from_parent()
    renderer.render(scene, camera)
    assert not renderer.buffer.has(unit_cube)


def test_render_with_singular_camera_draws_nothing(cube_scene, camera):
    camera.scale = (0, 1, 1)
    document = SVGRenderer().render(cube_scene, camera)
    assert document.startswith("<svg")
    assert "<polygon" not in document


def test_background_from_config(camera):
    scene = Scene(camera)
    renderer = ImageRenderer(RendererConfig(viewport_width=20, viewport_height=10,
                                            background="#ff0000"))
    image = renderer.render(scene, camera)
    assert image.getpixel((10, 5)) == (255, 0, 0, 255)

    # цвет сцены важнее конфигурации
    scene.background = "blue"
    assert "background-color: blue" in SVGRenderer(RendererConfig(background="#ff0000")).render(scene, camera)

import matplotlib.pyplot as plt
import pytest
from PIL import Image

from editor import ImageEditor
from plotting import render_scene_grid, render_to_file, scene_bounds
from plotting.vectorizer import DOT_RADIUS, process_node
from shapes import Circle, CompoundGraphic, Dot, Graphic


def test_scene_bounds_of_empty_scene():
    assert scene_bounds(CompoundGraphic()) is None


def test_scene_bounds_cover_circle():
    minx, miny, maxx, maxy = scene_bounds(CompoundGraphic(Circle(5, 3, 10)))
    assert minx == pytest.approx(-5, abs=1e-6)
    assert maxx == pytest.approx(15, abs=1e-6)
    assert miny == pytest.approx(-7, abs=1e-6)
    assert maxy == pytest.approx(13, abs=1e-6)


def test_scene_bounds_follow_move():
    scene = CompoundGraphic(Dot(0, 0))
    scene.move(10, 0)
    minx, _, maxx, _ = scene_bounds(scene)
    assert minx == pytest.approx(10 - DOT_RADIUS, abs=1e-6)
    assert maxx == pytest.approx(10 + DOT_RADIUS, abs=1e-6)


def test_nested_groups_get_outlines():
    editor = ImageEditor()
    root = editor.load()
    editor.group_selected([root.children[0]])
    fills, outlines = process_node(root)
    assert len(fills) == 2
    assert [depth for _, depth in outlines] == [1]


def test_negative_radius_drawn_by_magnitude():
    (geom, _), = process_node(Circle(0, 0, -2))[0]
    assert geom.bounds == pytest.approx((-2, -2, 2, 2), abs=1e-6)


def test_unknown_leaf_rejected():
    class Square(Graphic):
        def move(self, dx, dy):
            pass

        def draw(self):
            pass

    with pytest.raises(TypeError):
        process_node(CompoundGraphic(Square()))


def test_render_png_and_svg(tmp_path):
    scene = ImageEditor().load()
    png = tmp_path / "scene.png"
    svg = tmp_path / "scene.svg"
    render_to_file(scene, str(png), resolution=90)
    render_to_file(scene, str(svg))
    assert png.stat().st_size > 0
    assert svg.read_text(encoding="utf-8").lstrip().startswith("<?xml")
    plt.close("all")


def test_render_in_memory_image():
    img = render_to_file(ImageEditor().load(), None, format="png", return_image=True, resolution=90)
    assert isinstance(img, Image.Image)
    assert img.width > 0 and img.height > 0


def test_render_empty_scene(tmp_path):
    out = tmp_path / "empty.png"
    render_to_file(CompoundGraphic(), str(out), resolution=60)
    assert out.exists()


def test_svg_needs_path():
    with pytest.raises(ValueError):
        render_to_file(CompoundGraphic(), None, format="svg")


def test_unsupported_format(tmp_path):
    with pytest.raises(ValueError):
        render_to_file(CompoundGraphic(), str(tmp_path / "x.gif"), format="gif")


def test_render_scene_grid(tmp_path):
    editor = ImageEditor()
    before = editor.load()
    after = ImageEditor().load()
    out = tmp_path / "grid" / "snapshots.png"
    render_scene_grid([before, after, CompoundGraphic()], str(out), cols=2, titles=["a", "b"])
    assert out.exists()

import numpy as np
import pytest

from triadpicker.config import CanvasLayout, PickerConfig
from triadpicker.controller.picker import PickerSession
from triadpicker.model.geometry_primitives import Channel, Point2D, Triangle


@pytest.fixture
def session():
    s = PickerSession()
    s.set_triangle(Triangle(top=Point2D(50, 0), left=Point2D(0, 100), right=Point2D(100, 100)))
    return s


def test_requires_triangle_before_pointer_input():
    with pytest.raises(ValueError, match="not located"):
        PickerSession().update_from_point(Point2D(1, 1))


def test_rejects_degenerate_triangle():
    with pytest.raises(ValueError, match="degenerate"):
        PickerSession().set_triangle(Triangle(Point2D(0, 0), Point2D(1, 1), Point2D(2, 2)))


def test_locate_vertices_translates_to_canvas(triangle_rgba):
    rgba, w, h = triangle_rgba
    s = PickerSession(PickerConfig(layout=CanvasLayout(margin_x=0, pad_top=0, pad_bottom=0, fill=1.0)))
    rect = s.layout_image(301, 101, w, h)
    assert (rect.x, rect.y, rect.width, rect.height) == (100, 0, 101, 101)

    local = s.locate_vertices(rgba, w, h)
    assert local.top == Point2D(50, 0)
    assert s.image_triangle == local
    assert s.triangle.top == Point2D(150, 0)
    assert s.triangle.left == Point2D(100, 100)


def test_locate_vertices_on_blank_image_uses_bounds():
    s = PickerSession()
    triangle = s.locate_vertices(np.zeros((40, 30, 4), dtype=np.uint8), 30, 40)
    assert triangle.top == Point2D(15, 0)
    assert s.triangle == triangle


def test_point_in_triangle(session):
    weights, inside = session.point_in_triangle(Point2D(50, 66.67))
    assert inside
    assert weights == pytest.approx((1 / 3, 1 / 3, 1 / 3), abs=1e-3)

    _, inside = session.point_in_triangle(Point2D(0, 0))
    assert not inside


def test_update_from_point_and_field_edit(session):
    assert session.update_from_point(Point2D(500, 500)) is None

    vector = session.update_from_point(Point2D(50, 66.67))
    assert list(vector) == pytest.approx([33.33, 33.33, 33.33], abs=0.01)

    vector = session.update_from_field_edit(Channel.B, 60)
    assert list(vector) == pytest.approx([20.0, 20.0, 60.0])
    assert session.current_weights() is vector


def test_marker_follows_weights(session):
    session.update_from_point(Point2D(40, 80))
    marker = session.marker_position()
    assert marker.x == pytest.approx(40)
    assert marker.y == pytest.approx(80)

    # all weight on deadline (B), which the default map puts on the top corner
    session.update_from_field_edit("B", 100)
    assert session.marker_position().x == pytest.approx(50)
    assert session.marker_position().y == pytest.approx(0)


def test_drag_starts_only_inside(session):
    assert not session.press(Point2D(-10, -10))
    assert not session.dragging
    assert session.move(Point2D(50, 50)) is None

    assert session.press(Point2D(50, 50))
    assert session.dragging
    before = session.current_weights()
    moved = session.move(Point2D(30, 90))
    assert moved is not None and moved != before

    # leaving the triangle mid-drag keeps the last valid weights
    assert session.move(Point2D(500, 500)) is None
    assert session.current_weights() is moved

    session.release()
    assert not session.dragging
    assert session.move(Point2D(50, 50)) is None


def test_confirm_and_summary(session):
    calls = []

    def on_confirm(payload):
        calls.append(payload)

    subscription = session.on_confirm(on_confirm)
    session.update_from_field_edit("R", 50)

    text = session.summary_text()
    assert "50.00% for annual cost" in text
    assert "25.00% for deadline" in text

    session.confirm()
    subscription.detach()
    session.confirm()
    assert calls == [pytest.approx({"r": 0.5, "g": 0.25, "b": 0.25})]


def test_custom_channel_order_and_labels():
    config = PickerConfig(channel_order=("R", "G", "B"), channel_labels={"R": "cost", "G": "quality", "B": "time"})
    s = PickerSession(config)
    s.set_triangle(Triangle(top=Point2D(50, 0), left=Point2D(0, 100), right=Point2D(100, 100)))

    vector = s.update_from_point(Point2D(50, 0))
    assert list(vector) == pytest.approx([100.0, 0.0, 0.0])
    assert "100.00% for cost" in s.summary_text()


def test_reset(session):
    session.update_from_field_edit("G", 80)
    session.press(Point2D(50, 50))
    session.reset()
    assert not session.dragging
    assert list(session.current_weights()) == pytest.approx([100 / 3] * 3)


def test_relayout_moves_located_triangle(triangle_rgba):
    rgba, w, h = triangle_rgba
    s = PickerSession(PickerConfig(layout=CanvasLayout(margin_x=0, pad_top=0, pad_bottom=0, fill=1.0)))
    s.layout_image(301, 101, w, h)
    s.locate_vertices(rgba, w, h)
    assert s.triangle.top == Point2D(150, 0)

    rect = s.layout_image(501, 101, w, h)
    assert rect.x == 200
    assert s.triangle.top == Point2D(250, 0)
    assert s.triangle == s.image_triangle.translated(200, 0)
    # a click at the old apex position now misses
    assert s.update_from_point(Point2D(150, 0)) is None
    assert s.update_from_point(Point2D(250, 60)) is not None

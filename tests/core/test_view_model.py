"""Tests for ViewModel assembly: polyline, markers, regions, axes and overlays."""

import numpy as np
import pytest

from curvescope.core.engine import DisplayFlags
from curvescope.core.interaction import PointerButton
from curvescope.core.markers import MarkerKind
from curvescope.core.orientation import RotateDirection
from curvescope.core.view_model import HoverLabel, ViewModel, ZoomRect

# Two lobes: area 2 above the axis on [0, 2], area 1 below on [2, 4]
LOBES = [(0.0, 0.0), (1.0, 2.0), (2.0, 0.0), (3.0, -1.0), (4.0, 0.0)]


@pytest.fixture
def engine(engine_factory, square_samples):
    return engine_factory(square_samples)


def test_empty_view_model():
    vm = ViewModel.empty((100.0, 50.0), 90)
    assert vm.is_empty
    assert vm.polyline.shape == (0, 2)
    assert vm.markers == ()
    assert vm.orientation_degrees == 90


def test_polyline_in_device_space(engine):
    vm = engine.view_model()
    assert not vm.is_empty
    assert vm.scale == pytest.approx(100.0)
    expected = [[100.0 * i, 400.0 - 100.0 * i] for i in range(5)]
    np.testing.assert_allclose(vm.polyline, expected)
    assert not vm.polyline.flags.writeable


def test_markers_cover_visible_samples(engine):
    vm = engine.view_model()
    assert [m.index for m in vm.markers] == [0, 1, 2, 3, 4]
    assert (vm.markers[2].x, vm.markers[2].y) == pytest.approx((200.0, 200.0))


def test_marker_kinds(engine_factory):
    engine = engine_factory([(0.0, 1.5), (1.0, 2.2), (2.0, 3.1)])
    vm = engine.view_model()
    assert [m.kind for m in vm.markers] == [
        MarkerKind.ASCENDING_DIGITS, MarkerKind.NORMAL, MarkerKind.NORMAL,
    ]


def test_hovered_marker_is_highlighted(engine):
    engine.pointer_move(200, 200)
    vm = engine.view_model()
    assert vm.markers[2].kind is MarkerKind.HIGHLIGHTED
    assert vm.hover == HoverLabel(index=2, text="(2.0000; 2.0000)", anchor=(200.0, 200.0))


def test_markers_hidden_by_flag(engine):
    engine.set_show_markers(False)
    assert engine.view_model().markers == ()


def test_zoomed_view_keeps_context_samples(engine):
    engine.pointer_down(50, 50)
    engine.pointer_up(150, 150)
    vm = engine.view_model()
    # Window x 0.5..1.5: only sample 1 is inside, its neighbours extend the line
    assert [m.index for m in vm.markers] == [1]
    assert vm.polyline.shape == (3, 2)


def test_regions_off_by_default(engine_factory):
    engine = engine_factory(LOBES)
    assert engine.view_model().regions == ()


def test_region_shapes(engine_factory):
    engine = engine_factory(LOBES, flags=DisplayFlags(show_regions=True))
    vm = engine.view_model()
    # y padded to -1.5..2.5 at scale 100
    assert [r.label for r in vm.regions] == ["2.00", "1.00"]
    assert [r.area for r in vm.regions] == pytest.approx([2.0, 1.0])
    assert vm.regions[0].label_pos == pytest.approx((100.0, 150.0))
    assert vm.regions[1].label_pos == pytest.approx((300.0, 300.0))
    np.testing.assert_allclose(vm.regions[0].polygon[0], [0.0, 250.0])
    np.testing.assert_allclose(vm.regions[0].polygon[-1], [200.0, 250.0])


def test_regions_outside_window_are_skipped(engine_factory):
    engine = engine_factory(LOBES, flags=DisplayFlags(show_regions=True))
    mapper = engine.mapper()
    # Zoom into the left lobe only: x 0.25..1.75
    p1 = mapper.data_to_device(0.25, 0.5)
    p2 = mapper.data_to_device(1.75, 1.5)
    engine.pointer_down(*p1)
    engine.pointer_up(*p2)
    assert engine.zoom_depth == 2
    assert [r.label for r in engine.view_model().regions] == ["2.00"]


def test_axes_through_origin(engine):
    vm = engine.view_model()
    axes = {a.name: a for a in vm.axes}
    assert set(axes) == {"x", "y"}

    y_axis = axes["y"]
    assert y_axis.start == pytest.approx((0.0, 400.0))
    assert y_axis.end == pytest.approx((0.0, 0.0))
    assert y_axis.arrowhead == ((0.0, 0.0), (5.0, 20.0), (-5.0, 20.0))
    assert y_axis.label_pos == pytest.approx((10.0, 0.0))

    x_axis = axes["x"]
    assert x_axis.start == pytest.approx((0.0, 400.0))
    assert x_axis.end == pytest.approx((400.0, 400.0))
    assert x_axis.arrowhead == ((400.0, 400.0), (380.0, 395.0), (380.0, 405.0))


def test_axes_omitted_when_origin_out_of_view(engine_factory):
    engine = engine_factory([(1.0, 1.0), (2.0, 3.0)])
    assert engine.view_model().axes == ()


def test_axes_hidden_by_flag(engine):
    engine.set_show_axis(False)
    assert engine.view_model().axes == ()


def test_zoom_rect_while_dragging(engine):
    engine.pointer_down(50, 50)
    engine.pointer_move(150, 120, PointerButton.PRIMARY)
    rect = engine.view_model().zoom_rect
    assert rect == ZoomRect((50.0, 50.0), (150.0, 120.0))
    assert rect.outline[0] == rect.outline[-1]
    assert len(rect.outline) == 5


def test_orientation_reported_in_degrees(engine):
    engine.rotate(RotateDirection.LEFT)
    assert engine.view_model().orientation_degrees == -90

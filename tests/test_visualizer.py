import numpy as np
import pytest
import supervision as sv

from geoloop_draw import (
    DrawingState,
    DrawingStatus,
    GestureDrawingController,
    LoopVisualizer,
    RenderConfig,
    ScreenPoint,
)

CORNERS = [ScreenPoint(200, 150), ScreenPoint(600, 150), ScreenPoint(600, 450), ScreenPoint(200, 450)]


@pytest.fixture
def frame():
    return np.zeros((600, 800, 3), dtype=np.uint8)


@pytest.fixture
def visualizer():
    return LoopVisualizer(path_color=sv.Color(r=255, g=0, b=0), thickness=4)


def square_state(camera, closed):
    path = tuple(camera.screen_to_geo(p) for p in CORNERS)
    status = DrawingStatus.COMPLETED if closed else DrawingStatus.DRAWING
    return DrawingState(status=status, path=path, is_loop_closed=closed)


def test_idle_state_draws_nothing(visualizer, frame, camera):
    result = visualizer.draw_path(frame.copy(), DrawingState.idle(), camera)
    assert np.array_equal(result, frame)


def test_closed_loop_draws_closing_segment(visualizer, frame, camera):
    result = visualizer.draw_path(frame, square_state(camera, closed=True), camera)
    # closing segment runs from (200, 450) back to (200, 150); BGR red
    assert tuple(result[300, 200]) == (0, 0, 255)
    assert tuple(result[150, 400]) == (0, 0, 255)


def test_open_path_has_no_closing_segment(visualizer, frame, camera):
    result = visualizer.draw_path(frame, square_state(camera, closed=False), camera)
    assert tuple(result[300, 200]) == (0, 0, 0)
    assert tuple(result[300, 600]) == (0, 0, 255)


def test_single_point_draws_marker(visualizer, frame, camera):
    state = DrawingState(status=DrawingStatus.DRAWING, path=(camera.screen_to_geo(ScreenPoint(400, 300)),))
    result = visualizer.draw_path(frame, state, camera)
    assert result[298:302, 398:402].any()


def test_offline_banner_tints_top_rows(visualizer, frame):
    result = visualizer.draw_offline_banner(frame)
    assert result[5, 5].any()
    assert not result[500, 5].any()


def test_loading_overlay_tints_whole_frame(visualizer, frame):
    result = visualizer.draw_loading_overlay(frame)
    assert result[5, 5].any()
    assert result[595, 795].any()


def test_from_config():
    visualizer = LoopVisualizer.from_config(RenderConfig(path_color="#00FF00", thickness=2))
    assert visualizer.path_color.as_rgb() == (0, 255, 0)
    assert visualizer.thickness == 2


def test_draw_session_follows_controller_mode(visualizer, frame, camera, timer_factory):
    controller = GestureDrawingController(transform=camera, timer_factory=timer_factory)
    try:
        loading = visualizer.draw_session(frame.copy(), controller, camera)
        assert loading[595, 795].any()

        controller.session.set_map_ready()
        online = visualizer.draw_session(frame.copy(), controller, camera)
        assert not online.any()

        timer_factory.last.fire()  # cancelled: stays online
        assert not controller.show_offline_banner
    finally:
        controller.dispose()


def test_draw_session_offline_banner(visualizer, frame, camera, timer_factory):
    controller = GestureDrawingController(transform=camera, timer_factory=timer_factory)
    try:
        timer_factory.last.fire()
        offline = visualizer.draw_session(frame.copy(), controller, camera)
        assert offline[5, 5].any()
        assert not offline[500, 5].any()
    finally:
        controller.dispose()

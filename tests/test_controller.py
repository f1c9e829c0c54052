import pytest

from geoloop_draw import GestureDrawingController, ScreenPoint

SQUARE_GESTURE = [ScreenPoint(600, 150), ScreenPoint(600, 450), ScreenPoint(200, 450)]


@pytest.fixture
def controller(camera, timer_factory):
    c = GestureDrawingController(transform=camera, timer_factory=timer_factory)
    c.session.set_map_ready()
    yield c
    c.dispose()


def draw_square(controller):
    controller.on_pan_start(ScreenPoint(200, 150))
    for point in SQUARE_GESTURE:
        controller.on_pan_update(point)
    controller.on_pan_end()


def test_pan_start_converts_and_starts(controller, camera):
    controller.on_pan_start(ScreenPoint(200, 150))

    state = controller.session.state
    assert state.is_drawing
    assert state.path == (camera.screen_to_geo(ScreenPoint(200, 150)),)


def test_square_gesture_produces_closed_loop(controller, camera):
    draw_square(controller)

    state = controller.session.state
    assert state.is_completed
    assert state.is_loop_closed
    assert len(controller.session.polygon) == 4
    assert controller.session.was_dragged


def test_contains_uses_completed_loop(controller, camera):
    draw_square(controller)

    assert controller.contains(camera.screen_to_geo(ScreenPoint(400, 300)))
    assert not controller.contains(camera.screen_to_geo(ScreenPoint(700, 300)))


def test_contains_false_while_drawing(controller, camera):
    controller.on_pan_start(ScreenPoint(200, 150))
    for point in SQUARE_GESTURE:
        controller.on_pan_update(point)
    assert not controller.contains(camera.screen_to_geo(ScreenPoint(400, 300)))


def test_pan_update_and_end_ignored_when_idle(controller):
    controller.on_pan_update(ScreenPoint(300, 300))
    controller.on_pan_end()
    assert controller.session.state.is_idle


def test_small_moves_are_filtered(controller):
    controller.on_pan_start(ScreenPoint(200, 150))
    controller.on_pan_update(ScreenPoint(201, 150))  # well under 1 km at this zoom
    assert len(controller.session.state.path) == 1
    controller.on_pan_end()
    assert controller.session.state.is_completed
    assert not controller.session.was_dragged


def test_failed_conversion_is_skipped(timer_factory):
    controller = GestureDrawingController(transform=None, timer_factory=timer_factory)
    try:
        controller.on_pan_start(ScreenPoint(10, 10))
        assert controller.session.state.is_idle
    finally:
        controller.dispose()


def test_clear_resets_loop(controller):
    draw_square(controller)
    controller.clear()
    assert controller.session.state.is_idle


def test_loading_until_ready(camera, timer_factory):
    controller = GestureDrawingController(transform=camera, timer_factory=timer_factory)
    try:
        assert controller.show_loading
        controller.session.set_map_ready()
        assert not controller.show_loading
        assert not controller.show_offline_banner
    finally:
        controller.dispose()


@pytest.fixture
def offline_controller(camera, timer_factory):
    c = GestureDrawingController(transform=camera, timer_factory=timer_factory)
    timer_factory.last.fire()
    yield c
    c.dispose()


def test_offline_shows_banner_and_disables_drawing(offline_controller):
    assert offline_controller.session.is_offline
    assert offline_controller.show_offline_banner
    assert not offline_controller.drawing_enabled
    assert not offline_controller.show_loading

    offline_controller.on_pan_start(ScreenPoint(200, 150))
    assert offline_controller.session.state.is_idle


def test_dismiss_banner_keeps_offline(offline_controller):
    offline_controller.dismiss_banner()
    assert not offline_controller.show_offline_banner
    assert offline_controller.session.is_offline


def test_retry_hides_banner_and_rearms(offline_controller, timer_factory):
    offline_controller.retry()

    assert not offline_controller.show_offline_banner
    assert not offline_controller.session.is_offline
    assert offline_controller.show_loading
    assert offline_controller.drawing_enabled
    assert len(timer_factory.timers) == 2

    timer_factory.last.fire()
    assert offline_controller.show_offline_banner


def test_dispose_cancels_session_timer(camera, timer_factory):
    controller = GestureDrawingController(transform=camera, timer_factory=timer_factory)
    controller.dispose()
    assert controller.session.is_disposed
    assert timer_factory.last.cancelled

import pytest

from geoloop_draw import DrawingSession, GeoPoint, WebMercatorCamera


class FakeTimer:
    """Manual stand-in for threading.Timer: fires only when told to."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self, force=False):
        # force=True simulates a callback already running when cancel() landed
        if self.cancelled and not force:
            return
        self.function()


class FakeTimerFactory:
    def __init__(self):
        self.timers = []

    def __call__(self, interval, function):
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def last(self):
        return self.timers[-1]


@pytest.fixture
def timer_factory():
    return FakeTimerFactory()


@pytest.fixture
def session(timer_factory):
    s = DrawingSession(timer_factory=timer_factory)
    yield s
    s.dispose()


@pytest.fixture
def camera():
    return WebMercatorCamera(
        center=GeoPoint(lat=51.509364, lon=-0.128928),
        zoom=9.2,
        viewport_wh=(800, 600),
    )


@pytest.fixture
def square():
    return [
        GeoPoint(0, 0),
        GeoPoint(0, 2),
        GeoPoint(2, 2),
        GeoPoint(2, 0),
    ]

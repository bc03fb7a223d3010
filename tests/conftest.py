import pytest
from PySide6.QtCore import QCoreApplication, QObject, Signal

from core.controller import PlaylistController
from core.models import Track


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeTransport(QObject):
    """In-memory transport: loads stay pending until the test resolves them."""

    loaded = Signal(int)
    loadFailed = Signal(int, str)
    positionChanged = Signal(int, int)
    durationChanged = Signal(int, int)
    playingChanged = Signal(int, bool)
    ended = Signal(int)

    def __init__(self):
        super().__init__()
        self.calls: list[tuple] = []
        self.loads: list[tuple[str, int]] = []
        self.generation = 0
        self.playing = False
        self.released = False

    # --- transport API ---
    def load(self, locator, generation):
        self.calls.append(("load", locator))
        self.loads.append((locator, generation))
        self.generation = generation
        self.playing = False

    def play(self):
        self.calls.append(("play",))
        self.playing = True
        self.playingChanged.emit(self.generation, True)

    def pause(self):
        self.calls.append(("pause",))
        self.playing = False
        self.playingChanged.emit(self.generation, False)

    def stop(self):
        self.calls.append(("stop",))
        self.playing = False
        self.playingChanged.emit(self.generation, False)

    def seek(self, ms):
        self.calls.append(("seek", ms))

    def is_playing(self):
        return self.playing

    def release(self):
        self.calls.append(("release",))
        self.released = True

    # --- test helpers ---
    def last_generation(self):
        return self.loads[-1][1]

    def succeed(self, generation=None):
        self.loaded.emit(self.generation if generation is None else generation)

    def fail(self, generation=None, reason="corrupt file"):
        self.loadFailed.emit(self.generation if generation is None else generation, reason)

    def tick(self, ms, generation=None):
        self.positionChanged.emit(self.generation if generation is None else generation, ms)

    def report_duration(self, ms, generation=None):
        self.durationChanged.emit(self.generation if generation is None else generation, ms)

    def complete(self, generation=None):
        gen = self.generation if generation is None else generation
        self.playing = False
        self.playingChanged.emit(gen, False)
        self.ended.emit(gen)

    def count(self, name):
        return sum(1 for c in self.calls if c[0] == name)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def notes():
    return []


@pytest.fixture
def controller(transport, notes):
    c = PlaylistController(transport, notify=lambda message, notify_type="info": notes.append((notify_type, message)))
    yield c
    c.close()


@pytest.fixture
def abcd(controller):
    controller.append([Track(f"/music/{name}.mp3") for name in "ABCD"])
    return controller


def start(controller, transport, index, duration_ms=None):
    """play_at(index) and let the transport load it."""
    controller.play_at(index)
    transport.succeed()
    if duration_ms is not None:
        transport.report_duration(duration_ms)

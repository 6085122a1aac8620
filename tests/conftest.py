import os
import pathlib
import sys

import pytest

# Headless Qt for CI and local runs without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure project root is in sys.path
repo_root = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

from PySide6.QtWidgets import QApplication  # noqa: E402

from rerail.core.sample_map import build_sample_map  # noqa: E402
from rerail.core.viewport import Viewport  # noqa: E402

ORIGIN = 1_000_000_000


class FakeDialogs:
    """
    DialogService double that records requests instead of showing dialogs.
    Tests resolve a request by calling its stored continuation.
    """

    def __init__(self):
        self.station_requests = []
        self.railway_requests = []
        self.station_lists = []
        self.confirmations = []
        self.cancelled = []

    def open_station_dialog(self, initial, on_result):
        self.station_requests.append((initial, on_result))

    def open_railway_dialog(self, initial, on_result):
        self.railway_requests.append((initial, on_result))

    def open_station_list_dialog(self, data):
        self.station_lists.append(data)

    def open_confirmation(self, message, on_result):
        self.confirmations.append((message, on_result))

    def cancel_pending(self, kind):
        self.cancelled.append(kind)


@pytest.fixture
def fake_dialogs():
    return FakeDialogs()


@pytest.fixture(scope="session")
def qapp():
    """
    Ensure QApplication is instantiated only once.
    """
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def sample_map():
    """Provides the bundled sample map snapshot."""
    return build_sample_map()


@pytest.fixture
def viewport():
    """
    Provides an 800x600 viewport at the world origin, zoom level 5 (factor 50).
    """
    return Viewport(
        world_top_x=ORIGIN,
        world_top_y=ORIGIN,
        height_px=600,
        width_px=800,
        zoom_level_index=5,
    )

# tests/conftest.py
import os
import sys

import pytest

# Add backend/ to sys.path so that "import app" works without installing
BACKEND_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

# Deterministic formatting defaults, set before app.core.config is imported
os.environ["DEFAULT_TIME_ZONE"] = "UTC"
os.environ["DEFAULT_LOCALE"] = "en_US"
os.environ["GOOGLE_MAPS_API_KEY"] = "test-key"


def make_route(
    summary=None,
    duration=None,
    duration_in_traffic=None,
    distance=None,
    arrival_epoch=None,
    **extra,
):
    """Google-shaped route alternative with a single leg."""
    leg = {
        "start_location": {"lat": 5.6037, "lng": -0.1870},
        "end_location": {"lat": 5.5600, "lng": -0.2050},
    }
    if duration is not None:
        leg["duration"] = {"text": f"{duration} secs", "value": duration}
    if duration_in_traffic is not None:
        leg["duration_in_traffic"] = {"text": f"{duration_in_traffic} secs", "value": duration_in_traffic}
    if distance is not None:
        leg["distance"] = {"text": f"{distance} m", "value": distance}
    if arrival_epoch is not None:
        leg["arrival_time"] = {"text": "transit", "value": arrival_epoch}

    route = {"legs": [leg], "overview_polyline": {"points": "abc~xyz"}}
    if summary is not None:
        route["summary"] = summary
    route.update(extra)
    return route


@pytest.fixture
def route_factory():
    return make_route

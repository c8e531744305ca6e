import sys
from pathlib import Path

# Ensure `landing_pages` package is importable when running pytest from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402

from landing_pages.models import Coordinate, GeneratedContent, Location  # noqa: E402
from landing_pages.vendors.openai_content import DEFAULT_BUSINESS  # noqa: E402

AUSTIN = Coordinate(30.2672, -97.7431)
AUSTIN_AREA = [
    Location(city="Austin", state="TX", latitude=30.2672, longitude=-97.7431, distance=0.0),
    Location(city="Rollingwood", state="TX", latitude=30.2766, longitude=-97.7900, distance=2.9),
    Location(city="West Lake Hills", state="TX", latitude=30.2971, longitude=-97.8019, distance=4.1),
    Location(city="Round Rock", state="TX", latitude=30.5083, longitude=-97.6789, distance=17.1),
]


class FakeResolver:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def resolve(self, city, state):
        self.calls.append((city, state))
        if self.error:
            raise self.error
        return AUSTIN


class FakeFinder:
    def __init__(self, locations=None):
        self.locations = AUSTIN_AREA if locations is None else locations
        self.calls = []

    def find(self, center, radius_miles):
        self.calls.append((center, radius_miles))
        return list(self.locations)


class FakeComposer:
    def __init__(self, keyword="Widget Rental", formatted=None, known=True):
        self.content = GeneratedContent(business=DEFAULT_BUSINESS, keyword=keyword)
        self.formatted = formatted
        self.known = known
        self.calls = []
        self.seo_titles = []

    def format_city_name(self, city, state):
        return self.formatted or (city, state)

    def validate_location(self, city, state):
        return self.known

    def generate_seo_metadata(self, title, description, *, fallback=None):
        self.seo_titles.append(title)
        return fallback

    def generate_business_content(self, url):
        self.calls.append(url)
        return self.content


@pytest.fixture
def services():
    return FakeResolver(), FakeFinder(), FakeComposer()

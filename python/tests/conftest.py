"""
Pytest configuration and fixtures for watchjs tests.
"""
import pytest

from python.watchjs.assets import AssetResolver
from python.watchjs.document import AssetElement, Document


class TickClock:
    """Deterministic millisecond clock for cache-busting tokens."""

    def __init__(self, start: int = 1000) -> None:
        self.now = start

    def __call__(self) -> int:
        self.now += 1
        return self.now


@pytest.fixture
def clock():
    return TickClock()


@pytest.fixture
def document():
    return Document(
        [
            AssetElement(tag="link", attrs={"href": "app.css", "rel": "stylesheet"}),
            AssetElement(tag="script", attrs={"src": "main.js"}),
        ]
    )


@pytest.fixture
def resolver(document, clock):
    return AssetResolver(document, clock=clock)

"""Mapping between resource paths and document asset elements."""

from __future__ import annotations

import time
from typing import Callable, Optional

from .document import AssetElement, Document


ASSET_SCRIPT = "script"
ASSET_STYLESHEET = "stylesheet"

_EXTENSION_KINDS = {
    ".js": ASSET_SCRIPT,
    ".css": ASSET_STYLESHEET,
}

# kind -> (tag, locator attribute)
_LOCATORS = {
    ASSET_SCRIPT: ("script", "src"),
    ASSET_STYLESHEET: ("link", "href"),
}


def path_ext(path: str) -> str:
    """Text from the last '.' of *path*, or '' when there is none."""
    index = path.rfind(".")
    if index < 0:
        return ""
    return path[index:]


def classify(path: str) -> Optional[str]:
    return _EXTENSION_KINDS.get(path_ext(path))


def _now_ms() -> int:
    return int(time.time() * 1000)


class AssetResolver:
    """Builds fresh asset elements and finds live ones in a document."""

    def __init__(self, document: Document, *, clock: Optional[Callable[[], int]] = None) -> None:
        self.document = document
        self._clock = clock or _now_ms

    def classify(self, path: str) -> Optional[str]:
        return classify(path)

    def cache_token(self) -> str:
        return str(self._clock())

    def build(self, path: str) -> Optional[AssetElement]:
        """New element for *path* with a cache-busted locator, or None."""
        kind = classify(path)
        if kind is None:
            return None
        tag, attr = _LOCATORS[kind]
        element = AssetElement(tag=tag, id=path, attrs={attr: f"{path}?{self.cache_token()}"})
        if kind == ASSET_STYLESHEET:
            element.attrs["rel"] = "stylesheet"
        return element

    def find(self, path: str) -> Optional[AssetElement]:
        element = self.document.get_element_by_id(path)
        if element is not None:
            return element
        kind = classify(path)
        if kind is None:
            return None
        # Elements from the original page markup carry no identity marker.
        tag, attr = _LOCATORS[kind]
        return self.document.query_selector(tag, attr, path)

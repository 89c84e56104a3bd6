"""In-memory model of the live document the client patches."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional


logger = logging.getLogger(__name__)

ReloadListener = Callable[["Document"], None]


@dataclass(eq=False)
class AssetElement:
    """A script or link element living in the document head.

    Equality is identity: two elements with the same attributes are still
    distinct nodes.
    """

    tag: str
    id: Optional[str] = None
    attrs: Dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> Optional[str]:
        return self.attrs.get(name)

    @property
    def locator(self) -> Optional[str]:
        return self.attrs.get("src") or self.attrs.get("href")


class Document:
    """Ordered set of head elements plus a reload trigger."""

    def __init__(self, elements: Optional[List[AssetElement]] = None) -> None:
        self._head: List[AssetElement] = list(elements or [])
        self._on_reload: List[ReloadListener] = []
        self.reload_count = 0

    def __iter__(self) -> Iterator[AssetElement]:
        return iter(list(self._head))

    def __len__(self) -> int:
        return len(self._head)

    @property
    def head(self) -> List[AssetElement]:
        return list(self._head)

    def register_on_reload(self, callback: ReloadListener) -> None:
        self._on_reload.append(callback)

    def get_element_by_id(self, element_id: str) -> Optional[AssetElement]:
        for element in self._head:
            if element.id == element_id:
                return element
        return None

    def query_selector(self, tag: str, attr: str, value: str) -> Optional[AssetElement]:
        """Return the first ``tag[attr='value']`` element."""
        for element in self._head:
            if element.tag == tag and element.attrs.get(attr) == value:
                return element
        return None

    def append(self, element: AssetElement) -> None:
        self._head.append(element)
        logger.info("appended <%s id=%r %s>", element.tag, element.id, element.locator)

    def remove(self, element: AssetElement) -> bool:
        for index, candidate in enumerate(self._head):
            if candidate is element:
                del self._head[index]
                logger.info("removed <%s id=%r %s>", element.tag, element.id, element.locator)
                return True
        return False

    def reload(self) -> None:
        self.reload_count += 1
        logger.info("document reload requested")
        for callback in list(self._on_reload):
            try:
                callback(self)
            except Exception:
                logger.exception("reload listener failed")

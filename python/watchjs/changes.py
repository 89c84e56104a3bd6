"""Decides how each reported change is applied to the live document."""

from __future__ import annotations

import logging
from typing import Iterable

from .assets import AssetResolver
from .document import Document
from .protocol import (
    ACTION_IGNORE,
    ACTION_INJECT,
    ACTION_RELOAD,
    KIND_CREATE,
    KIND_DELETE,
    KIND_MODIFY,
    ChangeDescriptor,
)


logger = logging.getLogger(__name__)


class ChangeApplier:
    """Applies change batches in order, stopping at the first reload."""

    def __init__(self, document: Document, resolver: AssetResolver) -> None:
        self.document = document
        self.resolver = resolver

    def apply(self, changes: Iterable[ChangeDescriptor]) -> None:
        for change in changes:
            if change.action == ACTION_IGNORE:
                continue
            if change.action == ACTION_RELOAD:
                self.document.reload()
                return
            if change.action != ACTION_INJECT:
                logger.debug("unknown action %r for %s, treating as inject", change.action, change.path)

            logger.debug("live updating %s", change.path)
            if change.kind == KIND_CREATE:
                applied = self.inject(change.path)
            elif change.kind == KIND_DELETE:
                self.remove(change.path)
                applied = True
            elif change.kind == KIND_MODIFY:
                applied = self.modify(change.path)
            else:
                logger.debug("unknown change kind %r for %s", change.kind, change.path)
                applied = True
            if not applied:
                logger.info("don't know how to handle %s, reloading document", change.path)
                self.document.reload()
                return

    def inject(self, path: str) -> bool:
        """Add the asset for *path*; False when no asset can be built for it."""
        existing = self.resolver.find(path)
        if existing is not None:
            existing.id = path
            return True
        asset = self.resolver.build(path)
        if asset is None:
            return False
        self.document.append(asset)
        return True

    def remove(self, path: str) -> None:
        existing = self.resolver.find(path)
        if existing is not None:
            self.document.remove(existing)

    def modify(self, path: str) -> bool:
        self.remove(path)
        return self.inject(path)

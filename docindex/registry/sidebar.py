"""Sidebar builder — receives the item index for a crate's documentation page."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Optional

from docindex.registry.models import SidebarIndex, SidebarItem
from docindex.validator import validate_sidebar

if TYPE_CHECKING:
    from docindex.page import Page

logger = logging.getLogger(__name__)


class SidebarBuilder:
    """Stores the sidebar index handed over by a crate's payload.

    A later index replaces the earlier one, since a page documents a
    single crate. Malformed indexes are logged and ignored.
    """

    def __init__(self):
        self._index: Optional[SidebarIndex] = None
        self._listeners: list[Callable[[SidebarIndex], None]] = []

    def install(self, page: Page) -> SidebarBuilder:
        page.install_sidebar_builder(self)
        return self

    def add_listener(self, listener: Callable[[SidebarIndex], None]) -> None:
        self._listeners.append(listener)

    def build(self, index: SidebarIndex | Mapping) -> bool:
        """Accept an index. Returns False if it was rejected as malformed."""
        issues = validate_sidebar(index)
        if issues:
            for issue in issues:
                logger.warning("Skipping malformed sidebar index: %s", issue)
            return False

        if not isinstance(index, SidebarIndex):
            index = SidebarIndex.from_mapping(index)
        else:
            # Normalize plain pairs to SidebarItem
            index = SidebarIndex.from_mapping(index.items, crate=index.crate)

        if self._index is not None:
            logger.debug("Replacing sidebar index for %r", self._index.crate)
        self._index = index

        for listener in self._listeners:
            try:
                listener(index)
            except Exception:
                logger.exception("Sidebar listener failed")
        return True

    @property
    def index(self) -> Optional[SidebarIndex]:
        return self._index

    def kinds(self) -> list[str]:
        return self._index.kinds if self._index else []

    def items(self, kind: str) -> list[SidebarItem]:
        if self._index is None:
            return []
        return list(self._index.items.get(kind, []))

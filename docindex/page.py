"""Page — the page-global namespace shared by contributors and hosts.

A documentation page exposes two rendezvous points: the implementor
registrar (optional at contribution time, with a pending slot for early
arrivals) and the sidebar builder (must already be installed).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from docindex.exceptions import RegistrarAlreadyInstalled
from docindex.registry.models import Contribution, CrateName, RecordLike

if TYPE_CHECKING:
    from docindex.registry.registrar import ImplementorRegistrar
    from docindex.registry.sidebar import SidebarBuilder

logger = logging.getLogger(__name__)


@dataclass
class PendingContributions:
    """Accumulates contributions that arrived before the registrar.

    ``merged()`` is the combined view: per-crate sequences concatenated in
    arrival order, crates in first-seen order. Draining hands the parked
    contributions over one by one, in arrival order.
    """

    contributions: list[Contribution] = field(default_factory=list)

    def add(self, contribution: Contribution) -> None:
        self.contributions.append(contribution)

    @property
    def deposits(self) -> int:
        return len(self.contributions)

    def merged(self) -> Contribution:
        entries: dict[CrateName, list[RecordLike]] = {}
        for contribution in self.contributions:
            for crate, records in contribution.entries.items():
                if isinstance(records, (list, tuple)):
                    entries.setdefault(crate, []).extend(records)
        return Contribution(entries=entries)

    def drain(self) -> Iterator[Contribution]:
        while self.contributions:
            yield self.contributions.pop(0)


class Page:
    """Holds the page-global slots.

    The implementor slot holds at most one of: an installed registrar, a
    pending accumulator, or nothing.
    """

    def __init__(self, title: str = ""):
        self.title = title
        self._registrar: Optional[ImplementorRegistrar] = None
        self._pending: Optional[PendingContributions] = None
        self._sidebar_builder: Optional[SidebarBuilder] = None

    @property
    def registrar(self) -> Optional[ImplementorRegistrar]:
        return self._registrar

    @property
    def pending(self) -> Optional[PendingContributions]:
        return self._pending

    @property
    def sidebar_builder(self) -> Optional[SidebarBuilder]:
        return self._sidebar_builder

    def deposit(self, contribution: Contribution) -> None:
        """Park a contribution until a registrar is installed."""
        if self._registrar is not None:
            raise RegistrarAlreadyInstalled(
                f"Page {self.title!r} has a registrar; contributions go to it directly"
            )
        if self._pending is None:
            logger.debug("Creating pending slot on page %r", self.title)
            self._pending = PendingContributions()
        self._pending.add(contribution)

    def install_registrar(self, registrar: ImplementorRegistrar) -> None:
        """Install the registrar and drain anything parked before it.

        All pending contributions are merged before this returns.
        """
        if self._registrar is not None:
            raise RegistrarAlreadyInstalled(f"Page {self.title!r} already has a registrar")

        pending, self._pending = self._pending, None
        self._registrar = registrar

        if pending is not None:
            logger.debug(
                "Draining %d pending contribution(s) for %d crate(s)",
                pending.deposits,
                len(pending.merged().entries),
            )
            for contribution in pending.drain():
                try:
                    registrar.register(contribution)
                except Exception:
                    # Every parked contribution is offered to the registrar.
                    logger.exception(
                        "Dropping pending contribution for %s", ", ".join(map(str, contribution.entries))
                    )

    def install_sidebar_builder(self, builder: SidebarBuilder) -> None:
        if self._sidebar_builder is not None:
            logger.warning("Replacing sidebar builder on page %r", self.title)
        self._sidebar_builder = builder


# Shared page instance
_default_page: Optional[Page] = None


def default_page() -> Page:
    """Return the process-wide page, creating it on first use."""
    global _default_page
    if _default_page is None:
        _default_page = Page()
    return _default_page


def reset_default_page() -> None:
    global _default_page
    _default_page = None

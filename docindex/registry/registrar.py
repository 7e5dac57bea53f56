"""Implementor registrar — merges per-crate contributions into the page's view."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from docindex.payload.records import parse_record
from docindex.registry.models import (
    Contribution,
    CrateName,
    ImplementorRecord,
    RecordLike,
    RegistryState,
)
from docindex.validator import validate_crate_slice, validate_record

if TYPE_CHECKING:
    from docindex.page import Page

logger = logging.getLogger(__name__)

Listener = Callable[[CrateName, list[ImplementorRecord]], None]


class ImplementorRegistrar:
    """Page-scoped receiver of implementor contributions.

    Records are kept per crate in the order received. A record already
    present for the same crate is ignored. A malformed crate slice is
    logged and skipped as a whole; a malformed record is logged and
    skipped alone. Neither aborts the rest of a contribution.
    """

    def __init__(self, capability: str = ""):
        self.capability = capability
        self._state: RegistryState = {}
        self._seen: dict[CrateName, set[str]] = {}
        self._listeners: list[Listener] = []

    def install(self, page: Page) -> ImplementorRegistrar:
        page.install_registrar(self)
        return self

    def add_listener(self, listener: Listener) -> None:
        """Register a page-update hook called with (crate, added_records)."""
        self._listeners.append(listener)

    def register(self, contribution: Contribution | Mapping) -> dict[CrateName, list[ImplementorRecord]]:
        """Merge a contribution. Returns the records actually added, per crate."""
        if isinstance(contribution, Contribution):
            entries = contribution.entries
            if contribution.capability and not self.capability:
                self.capability = contribution.capability
        elif isinstance(contribution, Mapping):
            entries = contribution
        else:
            logger.warning(
                "Ignoring malformed contribution of type %s", type(contribution).__name__
            )
            return {}

        added: dict[CrateName, list[ImplementorRecord]] = {}
        for crate, records in entries.items():
            issues = validate_crate_slice(crate, records)
            if issues:
                for issue in issues:
                    logger.warning("Skipping malformed contribution: %s", issue)
                continue

            usable = []
            for i, record in enumerate(records):
                issue = validate_record(record, f"{crate}[{i}]")
                if issue:
                    logger.warning("Skipping malformed implementor: %s", issue)
                else:
                    usable.append(record)

            new = self.merge(crate, usable)
            if new:
                added[crate] = new
        return added

    def merge(self, crate: CrateName, records: list[RecordLike]) -> list[ImplementorRecord]:
        """Append a crate's records, skipping ones already registered."""
        seen = self._seen.setdefault(crate, set())
        added = []

        for raw in records:
            record = raw if isinstance(raw, ImplementorRecord) else parse_record(raw, crate=crate)
            if record.key in seen:
                logger.debug("Ignoring duplicate implementor for %s: %s", crate, record.label)
                continue
            seen.add(record.key)
            added.append(record)

        if added:
            self._state.setdefault(crate, []).extend(added)
            self._notify(crate, added)
        return added

    def _notify(self, crate: CrateName, added: list[ImplementorRecord]) -> None:
        for listener in self._listeners:
            try:
                listener(crate, added)
            except Exception:
                logger.exception("Implementor listener failed for crate %s", crate)

    @property
    def state(self) -> RegistryState:
        """Snapshot of the registry: crate -> records, in received order."""
        return {crate: list(records) for crate, records in self._state.items()}

    def crates(self) -> list[CrateName]:
        return list(self._state)

    def implementors(self, crate: CrateName) -> list[ImplementorRecord]:
        return list(self._state.get(crate, []))

    def total(self) -> int:
        return sum(len(records) for records in self._state.values())

"""Contributors — hand a crate's payload to the page's receiver.

Implementor payloads go to the registrar if one is installed, otherwise
they are parked in the page's pending slot. Sidebar payloads have no
fallback: without an installed builder they are reported and dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional

from docindex.page import Page, default_page
from docindex.registry.models import (
    Contribution,
    CrateName,
    PayloadKind,
    RecordLike,
    SidebarIndex,
)

logger = logging.getLogger(__name__)


def contribute_implementors(
    crate: CrateName,
    records: list[RecordLike],
    page: Optional[Page] = None,
    capability: str = "",
) -> bool:
    """Contribute one crate's implementor records.

    Returns True if a registrar received them directly, False if they were
    parked for a registrar installed later.
    """
    return contribute(Contribution.single(crate, records, capability=capability), page)


def contribute(contribution: Contribution, page: Optional[Page] = None) -> bool:
    page = page or default_page()

    if page.registrar is not None:
        page.registrar.register(contribution)
        return True

    page.deposit(contribution)
    return False


def contribute_sidebar(items: SidebarIndex | Mapping, page: Optional[Page] = None) -> bool:
    """Hand a sidebar index to the page's sidebar builder.

    Returns True if the builder accepted it.
    """
    page = page or default_page()

    if page.sidebar_builder is None:
        logger.error("No sidebar builder installed on page %r; dropping sidebar index", page.title)
        return False

    return page.sidebar_builder.build(items)


def submit(payload: Contribution | SidebarIndex, page: Optional[Page] = None) -> bool:
    """Route a payload of either kind to its receiver."""
    kind = getattr(payload, "kind", None)

    if kind == PayloadKind.IMPLEMENTORS:
        return contribute(payload, page)
    if kind == PayloadKind.SIDEBAR:
        return contribute_sidebar(payload, page)

    logger.warning("Ignoring payload of unknown kind: %s", type(payload).__name__)
    return False

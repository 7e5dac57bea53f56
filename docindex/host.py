"""Host — assemble a page from a manifest or a list of data files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from docindex.config import PageConfig, RegistrarTiming
from docindex.page import Page
from docindex.payload.loader import ScriptResult, run_scripts
from docindex.registry.models import PayloadKind
from docindex.registry.registrar import ImplementorRegistrar
from docindex.registry.sidebar import SidebarBuilder

logger = logging.getLogger(__name__)


@dataclass
class PageView:
    """Everything a page ends up holding once its scripts have run."""

    page: Page
    registrar: ImplementorRegistrar
    sidebar: SidebarBuilder
    results: list[ScriptResult] = field(default_factory=list)

    @property
    def parked(self) -> int:
        """Number of scripts whose payload went through the pending slot."""
        return sum(
            1
            for r in self.results
            if r.kind == PayloadKind.IMPLEMENTORS and not r.delivered and not r.error
        )

    @property
    def failed(self) -> list[ScriptResult]:
        """Scripts that could not be read or parsed."""
        return [r for r in self.results if r.error]


def assemble_page(
    scripts: list[str | Path],
    title: str = "",
    timing: RegistrarTiming = RegistrarTiming.LAST,
) -> PageView:
    """Run data files against a fresh page.

    The sidebar builder is always installed up front. The implementor
    registrar is installed before or after the scripts depending on
    ``timing``.
    """
    page = Page(title=title)
    sidebar = SidebarBuilder().install(page)
    registrar = ImplementorRegistrar()

    if timing == RegistrarTiming.FIRST:
        registrar.install(page)

    results = run_scripts(scripts, page)

    if timing == RegistrarTiming.LAST:
        registrar.install(page)

    logger.info(
        "Assembled page %r: %d crate(s), %d implementor(s)",
        title,
        len(registrar.crates()),
        registrar.total(),
    )
    return PageView(page=page, registrar=registrar, sidebar=sidebar, results=results)


def assemble_from_config(config: PageConfig) -> PageView:
    return assemble_page(config.scripts, title=config.title, timing=config.install_registrar)

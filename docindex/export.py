"""Pydantic models for JSON export of a page's registry and sidebar.

These models mirror the docindex dataclasses and provide JSON
serialization for ``--json`` output.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from docindex.host import PageView
from docindex.registry.models import ImplementorRecord, SidebarIndex
from docindex.registry.registrar import ImplementorRegistrar


# ---------------------------------------------------------------------------
# Implementors
# ---------------------------------------------------------------------------


class ImplementorRecordModel(BaseModel):
    """Mirrors docindex.registry.models.ImplementorRecord."""

    crate: str = ""
    label: str = ""
    item_kind: str = "unknown"
    path: str = ""
    anchor: str = ""
    html: str = ""


class CrateImplementorsModel(BaseModel):
    crate: str
    implementors: list[ImplementorRecordModel] = Field(default_factory=list)


class ImplementorsModel(BaseModel):
    """Registry state: crates in received order, records in received order."""

    capability: str = ""
    crates: list[CrateImplementorsModel] = Field(default_factory=list)
    total_count: int = 0


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------


class SidebarItemModel(BaseModel):
    name: str
    description: str = ""


class SidebarSectionModel(BaseModel):
    kind: str
    items: list[SidebarItemModel] = Field(default_factory=list)


class SidebarModel(BaseModel):
    """Mirrors docindex.registry.models.SidebarIndex."""

    crate: str = ""
    sections: list[SidebarSectionModel] = Field(default_factory=list)


class PageModel(BaseModel):
    title: str = ""
    implementors: ImplementorsModel = Field(default_factory=ImplementorsModel)
    sidebar: Optional[SidebarModel] = None


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def record_to_model(record: ImplementorRecord) -> ImplementorRecordModel:
    return ImplementorRecordModel(
        crate=record.crate,
        label=record.label,
        item_kind=record.item_kind.value,
        path=record.path,
        anchor=record.anchor,
        html=record.html,
    )


def registry_to_model(registrar: ImplementorRegistrar) -> ImplementorsModel:
    state = registrar.state
    return ImplementorsModel(
        capability=registrar.capability,
        crates=[
            CrateImplementorsModel(
                crate=crate, implementors=[record_to_model(r) for r in records]
            )
            for crate, records in state.items()
        ],
        total_count=registrar.total(),
    )


def sidebar_to_model(index: SidebarIndex) -> SidebarModel:
    return SidebarModel(
        crate=index.crate,
        sections=[
            SidebarSectionModel(
                kind=kind,
                items=[
                    SidebarItemModel(name=item.name, description=item.description)
                    for item in items
                ],
            )
            for kind, items in index.items.items()
        ],
    )


def page_to_model(view: PageView) -> PageModel:
    index = view.sidebar.index
    return PageModel(
        title=view.page.title,
        implementors=registry_to_model(view.registrar),
        sidebar=sidebar_to_model(index) if index is not None else None,
    )

"""Registry data models — implementor records, contributions, and sidebar indexes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Union

CrateName = str


class PayloadKind(Enum):
    """Which page-global receiver a contribution is meant for."""

    IMPLEMENTORS = "implementors"
    SIDEBAR = "sidebar"


class ItemKind(Enum):
    """Kind of the documented item an implementor record points at."""

    STRUCT = "struct"
    ENUM = "enum"
    UNION = "union"
    TRAIT = "trait"
    TYPE = "type"
    PRIMITIVE = "primitive"
    FOREIGN_TYPE = "foreigntype"
    UNKNOWN = "unknown"

    @classmethod
    def from_label(cls, label: str) -> ItemKind:
        try:
            return cls(label.strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class ImplementorRecord:
    """One entry stating that a type provides a capability.

    ``html`` is the fragment exactly as emitted by the documentation
    generator. The structured fields are filled in by
    ``docindex.payload.records.parse_record`` and are empty when the
    fragment could not be understood.
    """

    html: str = ""
    crate: CrateName = ""  # Crate that contributed the record
    label: str = ""  # Plain-text rendering, e.g. "impl Hash for Match"
    item_kind: ItemKind = ItemKind.UNKNOWN
    path: str = ""  # Qualified path of the implementing type, e.g. "aho_corasick::Match"
    anchor: str = ""  # Link target of the implementing type

    @property
    def key(self) -> str:
        """Identity used for duplicate detection within a crate."""
        if self.html:
            return self.html
        return f"{self.item_kind.value}:{self.path}:{self.label}"

    @property
    def type_name(self) -> str:
        return self.path.rsplit("::", 1)[-1] if self.path else ""


# Contributors hand over either raw fragments or already structured records.
RecordLike = Union[str, ImplementorRecord]


@dataclass
class Contribution:
    """A mapping from crate name to an ordered sequence of implementor records."""

    entries: dict[CrateName, list[RecordLike]] = field(default_factory=dict)
    capability: str = ""  # e.g. "Hash"; informational only

    kind = PayloadKind.IMPLEMENTORS

    @classmethod
    def single(
        cls, crate: CrateName, records: list[RecordLike], capability: str = ""
    ) -> Contribution:
        # Copied, not validated: malformed slices are left for the registrar to report.
        if isinstance(records, (list, tuple)):
            records = list(records)
        return cls(entries={crate: records}, capability=capability)

    @property
    def crates(self) -> list[CrateName]:
        return list(self.entries)

    @property
    def record_count(self) -> int:
        return sum(len(r) for r in self.entries.values() if isinstance(r, (list, tuple)))


RegistryState = dict[CrateName, list[ImplementorRecord]]


class SidebarItem(NamedTuple):
    """A named item in a sidebar index, with an optional short description."""

    name: str
    description: str = ""


@dataclass
class SidebarIndex:
    """Items of one crate's documentation page, grouped by kind label.

    Kind order and item order are kept exactly as given.
    """

    items: dict[str, list[SidebarItem]] = field(default_factory=dict)
    crate: CrateName = ""

    kind = PayloadKind.SIDEBAR

    @classmethod
    def from_mapping(cls, mapping: dict, crate: CrateName = "") -> SidebarIndex:
        """Build an index from the wire shape ``{kind: [[name, desc], ...]}``.

        Entries are converted without validation; see
        ``docindex.validator.validate_sidebar`` for checking them first.
        """
        return cls(
            items={
                kind: [SidebarItem(*entry) for entry in entries]
                for kind, entries in mapping.items()
            },
            crate=crate,
        )

    def to_mapping(self) -> dict[str, list[list[str]]]:
        return {
            kind: [[item.name, item.description] for item in entries]
            for kind, entries in self.items.items()
        }

    @property
    def kinds(self) -> list[str]:
        return list(self.items)

    @property
    def item_count(self) -> int:
        return sum(len(entries) for entries in self.items.values())

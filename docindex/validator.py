"""Validator — check contribution and sidebar payloads for structural problems.

Every function returns a list of issues found. Empty list means valid.
The registry uses these checks to skip malformed payloads instead of
aborting, and ``docindex validate`` uses them to report on data files.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from docindex.exceptions import PayloadError
from docindex.registry.models import Contribution, ImplementorRecord, PayloadKind, SidebarIndex

KNOWN_SIDEBAR_KINDS = {
    "attr",
    "constant",
    "derive",
    "enum",
    "fn",
    "macro",
    "mod",
    "primitive",
    "static",
    "struct",
    "trait",
    "type",
    "union",
}


def validate_crate_slice(crate, records) -> list[str]:
    """Check a crate name and that its records form a sequence."""
    if not isinstance(crate, str):
        return [f"Crate name must be a string, got {type(crate).__name__}"]
    if not crate:
        return ["Crate name is empty"]
    if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
        return [f"{crate}: records must be a sequence, got {type(records).__name__}"]
    return []


def validate_record(record, where: str = "") -> str | None:
    """Return the issue with a single record, or None if it is usable."""
    prefix = f"{where}: " if where else ""
    if isinstance(record, ImplementorRecord):
        if not (record.html or record.path or record.label):
            return f"{prefix}record has no content"
        return None
    if not isinstance(record, str):
        return f"{prefix}record must be a string or ImplementorRecord, got {type(record).__name__}"
    return None


def validate_crate_entry(crate, records) -> list[str]:
    """Validate one crate's slice of an implementors contribution."""
    issues = validate_crate_slice(crate, records)
    if issues:
        return issues

    for i, record in enumerate(records):
        issue = validate_record(record, f"{crate}[{i}]")
        if issue:
            issues.append(issue)
    return issues


def validate_contribution(contribution) -> list[str]:
    """Validate a whole implementors contribution (or its raw mapping)."""
    entries = contribution.entries if isinstance(contribution, Contribution) else contribution
    if not isinstance(entries, Mapping):
        return [f"Contribution must be a mapping, got {type(entries).__name__}"]

    issues: list[str] = []
    for crate, records in entries.items():
        issues.extend(validate_crate_entry(crate, records))
    return issues


def validate_sidebar(index, strict_kinds: bool = False) -> list[str]:
    """Validate a sidebar index (or its raw ``{kind: [[name, desc], ...]}`` mapping).

    With ``strict_kinds`` set, kind labels outside ``KNOWN_SIDEBAR_KINDS``
    are reported too.
    """
    items = index.items if isinstance(index, SidebarIndex) else index
    if not isinstance(items, Mapping):
        return [f"Sidebar index must be a mapping, got {type(items).__name__}"]

    issues: list[str] = []
    for kind, entries in items.items():
        if not isinstance(kind, str) or not kind:
            issues.append(f"Invalid kind label: {kind!r}")
            continue
        if strict_kinds and kind not in KNOWN_SIDEBAR_KINDS:
            issues.append(f"Unknown kind label '{kind}'")
        if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
            issues.append(f"{kind}: entries must be a sequence, got {type(entries).__name__}")
            continue
        for i, entry in enumerate(entries):
            if isinstance(entry, (str, bytes)) or not isinstance(entry, Sequence) or len(entry) != 2:
                issues.append(f"{kind}[{i}]: expected a (name, description) pair, got {entry!r}")
                continue
            name, description = entry
            if not isinstance(name, str) or not name:
                issues.append(f"{kind}[{i}]: item name must be a non-empty string")
            if not isinstance(description, str):
                issues.append(f"{kind}[{i}]: description must be a string")

    return issues


def validate_data_file(path: str | Path) -> list[str]:
    """Validate a generated data file (implementors or sidebar script)."""
    from docindex.payload.loader import (
        detect_payload_kind,
        load_implementors_file,
        parse_sidebar_script,
        read_script,
    )

    path = Path(path)
    if not path.exists():
        return [f"File not found: {path}"]

    try:
        text = read_script(path)
        kind = detect_payload_kind(text)
        if kind is None:
            return [f"{path}: not a recognized implementors or sidebar script"]
        if kind == PayloadKind.SIDEBAR:
            mapping = parse_sidebar_script(text, source=str(path))
            return [f"{path}: {issue}" for issue in validate_sidebar(mapping)]
        _, contribution = load_implementors_file(path)
    except PayloadError as e:
        return [str(e)]

    issues = [f"{path}: {issue}" for issue in validate_contribution(contribution)]
    if not contribution.entries:
        issues.append(f"{path}: no implementors found")
    return issues

"""Loader — turn generated implementors and sidebar scripts into payloads.

Two wire shapes are recognized. Implementor scripts carry one assignment
per crate::

    implementors["aho_corasick"] = ["impl ... for ...",];

and sidebar scripts carry a single call::

    initSidebarItems({"enum":[["Abi",""]],"fn":[["parse_ident",""]]});

The scripts are never executed; the data literals are decoded as JSON.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from docindex.exceptions import PayloadError
from docindex.page import Page
from docindex.registry.contributor import contribute, contribute_sidebar
from docindex.registry.models import Contribution, PayloadKind, SidebarIndex
from docindex.validator import validate_sidebar

logger = logging.getLogger(__name__)

IMPLEMENTORS_LINE = re.compile(
    r'^\s*implementors\[(?P<crate>"(?:[^"\\]|\\.)*")\]\s*=\s*(?P<records>\[.*\])\s*;?\s*$'
)
SIDEBAR_CALL = re.compile(r"initSidebarItems\(\s*(?P<body>\{.*\})\s*\)\s*;?", re.DOTALL)
TRAILING_COMMA = re.compile(r",\s*\]$")


@dataclass
class ScriptResult:
    """Outcome of running one data file against a page."""

    path: str
    kind: Optional[PayloadKind]  # None if the file was not recognized
    delivered: bool  # False if parked (implementors), dropped (sidebar) or failed
    crates: int = 0
    records: int = 0
    error: str = ""  # Set when the file could not be read or parsed


def detect_payload_kind(text: str) -> Optional[PayloadKind]:
    if "initSidebarItems(" in text:
        return PayloadKind.SIDEBAR
    if "implementors[" in text or "var implementors" in text:
        return PayloadKind.IMPLEMENTORS
    return None


def capability_from_path(path: str | Path) -> str:
    """``implementors/core/hash/trait.Hash.js`` -> ``Hash``."""
    stem = Path(path).name.removesuffix(".js")
    _, _, name = stem.partition(".")
    return name or stem


def parse_implementors_script(text: str, source: str = "") -> Contribution:
    """Collect every ``implementors["crate"] = [...]`` line of a script."""
    contribution = Contribution()

    for lineno, line in enumerate(text.splitlines(), start=1):
        match = IMPLEMENTORS_LINE.match(line)
        if not match:
            continue
        try:
            crate = json.loads(match.group("crate"))
            records = json.loads(TRAILING_COMMA.sub("]", match.group("records")))
        except json.JSONDecodeError as e:
            raise PayloadError(f"invalid implementors literal: {e.msg}", source, lineno) from e

        # Later generator versions emit {"text": ...} objects instead of strings.
        records = [r["text"] if isinstance(r, dict) and "text" in r else r for r in records]
        contribution.entries.setdefault(crate, []).extend(records)

    return contribution


def parse_sidebar_script(text: str, source: str = "") -> dict:
    """Return the raw ``{kind: [[name, description], ...]}`` mapping of a script."""
    match = SIDEBAR_CALL.search(text)
    if not match:
        raise PayloadError("no initSidebarItems(...) call found", source)
    try:
        mapping = json.loads(match.group("body"))
    except json.JSONDecodeError as e:
        raise PayloadError(f"invalid sidebar literal: {e.msg}", source) from e
    if not isinstance(mapping, dict):
        raise PayloadError("sidebar literal is not an object", source)
    return mapping


def read_script(path: str | Path) -> str:
    """Read a data file as UTF-8; unreadable files raise ``PayloadError``."""
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise PayloadError(
            f"cannot read file: not valid UTF-8 ({e.reason} at byte {e.start})", str(path)
        ) from e
    except OSError as e:
        raise PayloadError(f"cannot read file: {e.strerror or e}", str(path)) from e


def load_implementors_file(path: str | Path) -> tuple[str, Contribution]:
    """Load an implementors script. Returns (capability, contribution)."""
    path = Path(path)
    capability = capability_from_path(path)
    contribution = parse_implementors_script(read_script(path), source=str(path))
    contribution.capability = capability
    return capability, contribution


def load_sidebar_file(path: str | Path, crate: str = "") -> SidebarIndex:
    """Load a sidebar script; the crate defaults to the file's directory name."""
    path = Path(path)
    mapping = parse_sidebar_script(read_script(path), source=str(path))
    issues = validate_sidebar(mapping)
    if issues:
        raise PayloadError("; ".join(issues), str(path))
    return SidebarIndex.from_mapping(mapping, crate=crate or path.parent.name)


def run_scripts(paths: list[str | Path], page: Page) -> list[ScriptResult]:
    """Evaluate data files against a page in the given order.

    This emulates the browser loading the scripts one after another. A
    file that cannot be read or parsed is logged and recorded with its
    error; the remaining files still run.
    """
    results = []

    for path in paths:
        path = Path(path)
        kind = None
        try:
            text = read_script(path)
            kind = detect_payload_kind(text)
            if kind == PayloadKind.IMPLEMENTORS:
                result = _run_implementors(path, text, page)
            elif kind == PayloadKind.SIDEBAR:
                result = _run_sidebar(path, text, page)
            else:
                raise PayloadError("not a recognized implementors or sidebar script", str(path))
        except PayloadError as e:
            logger.warning("Skipping data file: %s", e)
            result = ScriptResult(path=str(path), kind=kind, delivered=False, error=str(e))

        logger.debug("Ran %s (%s, delivered=%s)", path, kind.value if kind else "?", result.delivered)
        results.append(result)

    return results


def _run_implementors(path: Path, text: str, page: Page) -> ScriptResult:
    contribution = parse_implementors_script(text, source=str(path))
    contribution.capability = capability_from_path(path)
    delivered = contribute(contribution, page)
    return ScriptResult(
        path=str(path),
        kind=PayloadKind.IMPLEMENTORS,
        delivered=delivered,
        crates=len(contribution.entries),
        records=contribution.record_count,
    )


def _run_sidebar(path: Path, text: str, page: Page) -> ScriptResult:
    # Handed over unvalidated; the sidebar builder rejects malformed indexes itself.
    mapping = parse_sidebar_script(text, source=str(path))
    index = SidebarIndex(items=mapping, crate=path.parent.name)
    delivered = contribute_sidebar(index, page)
    return ScriptResult(
        path=str(path),
        kind=PayloadKind.SIDEBAR,
        delivered=delivered,
        crates=1,
        records=sum(len(entries) for entries in mapping.values() if isinstance(entries, list)),
    )

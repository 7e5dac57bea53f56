"""Implementor records — structured view of pre-rendered implementor fragments.

The documentation generator emits each implementor as an HTML fragment,
for example::

    impl <a class="trait" href="..." title="trait core::hash::Hash">Hash</a>
    for <a class="struct" href="aho_corasick/struct.Match.html"
    title="struct aho_corasick::Match">Match</a>

This module recovers the plain-text label and the implementing type from
such a fragment. The fragment itself is kept verbatim as the record's
identity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from html.parser import HTMLParser

from docindex.registry.models import CrateName, ImplementorRecord, ItemKind

logger = logging.getLogger(__name__)


@dataclass
class _Link:
    css_class: str
    href: str
    title: str
    text: str = ""
    preceding_text: str = ""  # Label text before this link


@dataclass
class _FragmentScan:
    text: list[str] = field(default_factory=list)
    links: list[_Link] = field(default_factory=list)


class _FragmentParser(HTMLParser):
    """Collects text and <a> elements from an implementor fragment."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.scan = _FragmentScan()
        self._open: _Link | None = None

    def handle_starttag(self, tag, attrs):
        if tag != "a":
            return
        attributes = dict(attrs)
        self._open = _Link(
            css_class=attributes.get("class") or "",
            href=attributes.get("href") or "",
            title=attributes.get("title") or "",
            preceding_text="".join(self.scan.text),
        )

    def handle_endtag(self, tag):
        if tag == "a" and self._open is not None:
            self.scan.links.append(self._open)
            self._open = None

    def handle_data(self, data):
        self.scan.text.append(data)
        if self._open is not None:
            self._open.text += data


def _scan(html: str) -> _FragmentScan:
    parser = _FragmentParser()
    parser.feed(html)
    parser.close()
    return parser.scan


def fragment_text(html: str) -> str:
    """Plain text of a fragment, with entities decoded and whitespace collapsed."""
    return _squash("".join(_scan(html).text))


def parse_record(html: str, crate: CrateName = "") -> ImplementorRecord:
    """Build a structured record from an implementor fragment.

    Unrecognized fragments yield a record with only ``html``, ``crate``
    and ``label`` filled in. Fragments the HTML parser rejects outright
    are kept as-is, labelled with their raw text.
    """
    try:
        scan = _scan(html)
    except (AssertionError, ValueError) as e:
        logger.warning("Keeping unparseable implementor fragment for %s as-is: %s", crate or "?", e)
        return ImplementorRecord(html=html, crate=crate, label=_squash(html))

    label = _squash("".join(scan.text))
    target = _implementing_link(scan.links)
    if target is None:
        return ImplementorRecord(html=html, crate=crate, label=label)

    kind_label, _, path = target.title.partition(" ")
    if not path:
        kind_label, path = target.css_class, target.text

    return ImplementorRecord(
        html=html,
        crate=crate,
        label=label,
        item_kind=ItemKind.from_label(kind_label or target.css_class),
        path=path.strip(),
        anchor=target.href,
    )


def _implementing_link(links: list[_Link]) -> _Link | None:
    """The first link right after the ``for`` keyword names the implementing type."""
    for link in links:
        before = _squash(link.preceding_text)
        if before == "for" or before.endswith(" for"):
            return link
    return None


def _squash(text: str) -> str:
    return " ".join(text.replace("\xa0", " ").split())

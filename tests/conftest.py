"""Shared fixtures: small copies of generated data files."""

import pytest

from docindex.page import reset_default_page

HASH_TRAIT = (
    '<a class=\\"trait\\" href=\\"https://doc.rust-lang.org/nightly/core/hash/trait.Hash.html\\" '
    'title=\\"trait core::hash::Hash\\">Hash</a>'
)

IMPLEMENTORS_SCRIPT = (
    "(function() {var implementors = {};\n"
    'implementors["aho_corasick"] = ["impl ' + HASH_TRAIT + ' for <a class=\\"struct\\" '
    'href=\\"aho_corasick/struct.Match.html\\" title=\\"struct aho_corasick::Match\\">Match</a>",];\n'
    'implementors["pest"] = ["impl&lt;\'i&gt; ' + HASH_TRAIT + ' for <a class=\\"struct\\" '
    'href=\\"pest/struct.Position.html\\" title=\\"struct pest::Position\\">Position</a>&lt;\'i&gt;",'
    '"impl&lt;\'i&gt; ' + HASH_TRAIT + ' for <a class=\\"struct\\" '
    'href=\\"pest/struct.Span.html\\" title=\\"struct pest::Span\\">Span</a>&lt;\'i&gt;",];\n'
    "\n"
    "            if (window.register_implementors) {\n"
    "                window.register_implementors(implementors);\n"
    "            } else {\n"
    "                window.pending_implementors = implementors;\n"
    "            }\n"
    "        \n"
    "})()\n"
)

SIDEBAR_SCRIPT = (
    'initSidebarItems({"enum":[["Abi",""],["BinOp",""],["Lit","Literal kind."]],'
    '"fn":[["parse_ident",""],["parse_path",""]],'
    '"struct":[["Ident",""]]});'
)


@pytest.fixture(autouse=True)
def _fresh_default_page():
    reset_default_page()
    yield
    reset_default_page()


@pytest.fixture
def data_dir(tmp_path):
    """A directory laid out like generated documentation output."""
    impl_dir = tmp_path / "implementors" / "core" / "hash"
    impl_dir.mkdir(parents=True)
    (impl_dir / "trait.Hash.js").write_text(IMPLEMENTORS_SCRIPT, encoding="utf-8")

    syn_dir = tmp_path / "syn"
    syn_dir.mkdir()
    (syn_dir / "sidebar-items.js").write_text(SIDEBAR_SCRIPT, encoding="utf-8")
    return tmp_path

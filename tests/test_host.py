"""Tests for page assembly and JSON export."""

from docindex.config import RegistrarTiming
from docindex.export import page_to_model, registry_to_model
from docindex.host import assemble_page
from docindex.registry.models import ItemKind


def _scripts(data_dir) -> list:
    return [
        data_dir / "syn" / "sidebar-items.js",
        data_dir / "implementors" / "core" / "hash" / "trait.Hash.js",
    ]


def test_registrar_timing_gives_same_state(data_dir):
    first = assemble_page(_scripts(data_dir), timing=RegistrarTiming.FIRST)
    last = assemble_page(_scripts(data_dir), timing=RegistrarTiming.LAST)

    assert first.registrar.state == last.registrar.state
    assert first.parked == 0
    assert last.parked == 1


def test_assembled_page(data_dir):
    view = assemble_page(_scripts(data_dir), title="syn")

    assert view.page.title == "syn"
    assert view.page.pending is None
    assert view.sidebar.index.crate == "syn"
    assert view.registrar.implementors("aho_corasick")[0].item_kind == ItemKind.STRUCT


def test_export_models(data_dir):
    view = assemble_page(_scripts(data_dir), title="syn")

    page = page_to_model(view)
    assert page.title == "syn"
    assert page.sidebar.sections[1].kind == "fn"

    implementors = registry_to_model(view.registrar)
    pest = implementors.crates[1]
    assert pest.crate == "pest"
    assert [r.label for r in pest.implementors] == [
        "impl<'i> Hash for Position<'i>",
        "impl<'i> Hash for Span<'i>",
    ]
    assert pest.implementors[0].item_kind == "struct"


def test_bad_files_do_not_abort_assembly(data_dir, tmp_path):
    bad_sidebar = tmp_path / "broken" / "sidebar-items.js"
    bad_sidebar.parent.mkdir()
    bad_sidebar.write_text('initSidebarItems({"enum":[["Abi"]]});')
    unreadable = tmp_path / "trait.Bin.js"
    unreadable.write_bytes(b"\xff\xfe implementors[")

    view = assemble_page(
        [bad_sidebar, unreadable, data_dir / "implementors" / "core" / "hash" / "trait.Hash.js"]
    )

    assert view.registrar.total() == 3
    assert view.sidebar.index is None
    assert view.parked == 1
    assert [r.path for r in view.failed] == [str(unreadable)]

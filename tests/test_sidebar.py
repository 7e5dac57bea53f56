"""Tests for the sidebar builder and sidebar contributor."""

import logging

from docindex.page import Page
from docindex.registry.contributor import contribute_sidebar, submit
from docindex.registry.models import SidebarIndex, SidebarItem
from docindex.registry.sidebar import SidebarBuilder


def test_builder_observes_exact_mapping():
    page = Page()
    builder = SidebarBuilder().install(page)
    observed = []
    builder.add_listener(observed.append)

    mapping = {"enum": [("Abi", ""), ("BinOp", "")], "fn": [("parse_ident", "")]}
    assert contribute_sidebar(mapping, page=page) is True

    assert len(observed) == 1
    assert observed[0].to_mapping() == {
        "enum": [["Abi", ""], ["BinOp", ""]],
        "fn": [["parse_ident", ""]],
    }
    assert builder.kinds() == ["enum", "fn"]
    assert builder.items("enum") == [SidebarItem("Abi"), SidebarItem("BinOp")]


def test_missing_builder_is_logged_not_parked(caplog):
    page = Page(title="syn")
    with caplog.at_level(logging.ERROR, logger="docindex.registry.contributor"):
        assert contribute_sidebar({"fn": [["parse_ident", ""]]}, page=page) is False

    assert "No sidebar builder" in caplog.text
    assert page.pending is None

    # Installing a builder later does not replay the dropped index
    builder = SidebarBuilder().install(page)
    assert builder.index is None


def test_descriptions_kept():
    builder = SidebarBuilder()
    builder.build({"enum": [["Lit", "Literal kind."]]})
    assert builder.items("enum")[0].description == "Literal kind."


def test_malformed_index_rejected(caplog):
    builder = SidebarBuilder()
    with caplog.at_level(logging.WARNING, logger="docindex.registry.sidebar"):
        assert builder.build({"enum": [["Abi"]]}) is False
        assert builder.build({"fn": "parse_ident"}) is False
        assert builder.build(["enum", "Abi"]) is False

    assert builder.index is None
    assert "(name, description) pair" in caplog.text


def test_later_index_replaces_earlier():
    builder = SidebarBuilder()
    builder.build({"enum": [["Abi", ""]]})
    builder.build({"struct": [["Ident", ""]]})
    assert builder.kinds() == ["struct"]
    assert builder.items("enum") == []


def test_sidebar_index_object_accepted():
    page = Page()
    builder = SidebarBuilder().install(page)
    index = SidebarIndex(items={"fn": [("parse_type", "")]}, crate="syn")
    assert submit(index, page=page) is True
    assert builder.index.crate == "syn"
    assert builder.items("fn") == [SidebarItem("parse_type", "")]


def test_empty_builder_queries():
    builder = SidebarBuilder()
    assert builder.kinds() == []
    assert builder.items("fn") == []

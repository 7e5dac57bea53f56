"""Tests for the docindex command line."""

import json

import yaml
from click.testing import CliRunner

from docindex.cli import main


def _hash_file(data_dir) -> str:
    return str(data_dir / "implementors" / "core" / "hash" / "trait.Hash.js")


def test_implementors_json(data_dir):
    result = CliRunner().invoke(main, ["implementors", _hash_file(data_dir), "--json"])
    assert result.exit_code == 0, result.output

    data = json.loads(result.output)
    assert data["capability"] == "Hash"
    assert data["total_count"] == 3
    assert [c["crate"] for c in data["crates"]] == ["aho_corasick", "pest"]
    assert data["crates"][0]["implementors"][0]["path"] == "aho_corasick::Match"


def test_implementors_table(data_dir):
    result = CliRunner().invoke(main, ["implementors", _hash_file(data_dir)])
    assert result.exit_code == 0, result.output
    assert "Implementors of Hash" in result.output
    assert "parked" in result.output


def test_implementors_registrar_first(data_dir):
    result = CliRunner().invoke(main, ["implementors", _hash_file(data_dir), "--registrar-first"])
    assert result.exit_code == 0, result.output
    assert "parked" not in result.output


def test_implementors_bad_file(tmp_path):
    path = tmp_path / "trait.Bad.js"
    path.write_text('implementors["a"] = ["oops,];')
    result = CliRunner().invoke(main, ["implementors", str(path)])
    assert result.exit_code == 1


def test_sidebar_json(data_dir):
    result = CliRunner().invoke(
        main, ["sidebar", str(data_dir / "syn" / "sidebar-items.js"), "--json"]
    )
    assert result.exit_code == 0, result.output

    data = json.loads(result.output)
    assert data["crate"] == "syn"
    assert [s["kind"] for s in data["sections"]] == ["enum", "fn", "struct"]
    assert data["sections"][0]["items"][2] == {"name": "Lit", "description": "Literal kind."}


def test_page_manifest(data_dir):
    manifest = data_dir / "page.yaml"
    with open(manifest, "w") as f:
        yaml.dump(
            {
                "title": "syn",
                "implementors": ["implementors/core/hash/trait.Hash.js"],
                "sidebar": ["syn/sidebar-items.js"],
            },
            f,
        )

    result = CliRunner().invoke(main, ["page", str(manifest), "--json"])
    assert result.exit_code == 0, result.output

    data = json.loads(result.output)
    assert data["title"] == "syn"
    assert data["implementors"]["total_count"] == 3
    assert data["sidebar"]["crate"] == "syn"


def test_page_bad_manifest(tmp_path):
    manifest = tmp_path / "page.yaml"
    manifest.write_text("install_registrar: never\n")
    result = CliRunner().invoke(main, ["page", str(manifest)])
    assert result.exit_code == 1


def test_validate(data_dir, tmp_path):
    bad = tmp_path / "sidebar-items.js"
    bad.write_text('initSidebarItems({"enum":[["Abi"]]});')

    ok = CliRunner().invoke(main, ["validate", _hash_file(data_dir)])
    assert ok.exit_code == 0

    failed = CliRunner().invoke(main, ["validate", _hash_file(data_dir), str(bad)])
    assert failed.exit_code == 1


def test_implementors_unreadable_file(data_dir, tmp_path):
    path = tmp_path / "trait.Bin.js"
    path.write_bytes(b"\xff\xfe implementors[")
    result = CliRunner().invoke(main, ["implementors", str(path), _hash_file(data_dir)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Implementors of Hash" in result.output


def test_validate_unreadable_file(tmp_path):
    path = tmp_path / "trait.Bin.js"
    path.write_bytes(b"\xff\xfe implementors[")
    result = CliRunner().invoke(main, ["validate", str(path)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Traceback" not in result.output

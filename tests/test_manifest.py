# tests/test_manifest.py
"""Tests for loading block manifests produced by the scanner."""

import json
from pathlib import Path

import pytest

from egogen.core.blocks import BlockKind
from egogen.core.position import Pos
from egogen.exceptions import ManifestError
from egogen.manifest import load_manifest, package_from_dict


def _manifest() -> dict:
    return {
        "name": "views",
        "templates": [
            {"path": "index.ego", "blocks": [
                {"kind": "declaration", "content": "func Index(c *Context)", "line": 1},
                {"kind": "header", "content": 'import "fmt"', "line": 2},
                {"kind": "text", "content": "<h1>", "line": 3},
                {"kind": "print", "content": "c.Title"},
                {"kind": "write", "content": "c.Raw", "line": 4},
                {"kind": "code", "content": "_ = fmt.Sprint", "line": 5},
            ]},
        ],
    }


class TestPackageFromDict:
    def test_builds_package(self):
        pkg = package_from_dict(_manifest())
        assert pkg.name == "views"
        assert len(pkg.templates) == 1
        t = pkg.templates[0]
        assert t.path == "index.ego"
        assert [b.kind for b in t.blocks] == [
            BlockKind.DECLARATION, BlockKind.HEADER, BlockKind.TEXT,
            BlockKind.PRINT, BlockKind.WRITE, BlockKind.CODE,
        ]
        assert t.blocks[2].pos == Pos("index.ego", 3)
        assert t.blocks[3].pos == Pos("index.ego", 0)

    def test_missing_name_is_allowed(self):
        data = _manifest()
        del data["name"]
        assert package_from_dict(data).name == ""

    def test_unknown_kind(self):
        data = _manifest()
        data["templates"][0]["blocks"][0]["kind"] = "comment"
        with pytest.raises(ManifestError, match="unknown block kind 'comment'"):
            package_from_dict(data)

    def test_missing_content(self):
        data = _manifest()
        del data["templates"][0]["blocks"][1]["content"]
        with pytest.raises(ManifestError, match="index.ego: block 1: missing 'content'"):
            package_from_dict(data)

    def test_bad_line(self):
        data = _manifest()
        data["templates"][0]["blocks"][0]["line"] = "one"
        with pytest.raises(ManifestError, match="'line' must be a non-negative integer"):
            package_from_dict(data)

    def test_templates_must_be_a_list(self):
        with pytest.raises(ManifestError, match="'templates' must be list"):
            package_from_dict({"name": "x", "templates": {}})

    def test_top_level_must_be_object(self):
        with pytest.raises(ManifestError):
            package_from_dict([])


class TestLoadManifest:
    def test_load_from_file(self, tmp_path: Path):
        path = tmp_path / "views.json"
        path.write_text(json.dumps(_manifest()), encoding="utf-8")
        pkg = load_manifest(path)
        assert pkg.templates[0].declaration_block().content == "func Index(c *Context)"

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "views.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ManifestError, match="invalid JSON"):
            load_manifest(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ManifestError, match="cannot read manifest"):
            load_manifest(tmp_path / "nope.json")

# tests/test_imports.py
"""Tests for import-only header parsing and import de-duplication."""

import pytest

from egogen.core.imports import (
    ImportSpec,
    dedupe_imports,
    is_valid_import_path,
    parse_imports_only,
    unquote_go_string,
)
from egogen.exceptions import HeaderParseError


class TestParseImportsOnly:
    """The grammar covers the package clause and import declarations."""

    def test_single_and_grouped_imports(self):
        src = (
            "package views\n"
            "\n"
            'import "fmt"\n'
            "import (\n"
            '\t"os"\n'
            '\tstr "strings"\n'
            '\t_ "embed"\n'
            '\t. "math"\n'
            ")\n"
            "import `net/http`\n"
        )
        parsed = parse_imports_only(src)
        assert parsed.package == "views"
        assert [(s.name, s.path) for s in parsed.imports] == [
            (None, '"fmt"'),
            (None, '"os"'),
            ("str", '"strings"'),
            ("_", '"embed"'),
            (".", '"math"'),
            (None, "`net/http`"),
        ]
        assert parsed.stopped_at is None

    def test_spec_lines_are_recorded(self):
        parsed = parse_imports_only('package x\nimport (\n\t"a"\n\n\t"b"\n)\n')
        assert [s.line for s in parsed.imports] == [3, 5]

    def test_comments_are_ignored(self):
        src = 'package x // trailing\n/* block\ncomment */\nimport /* inline */ "fmt" // why\n'
        parsed = parse_imports_only(src)
        assert [s.path for s in parsed.imports] == ['"fmt"']

    def test_explicit_semicolons(self):
        parsed = parse_imports_only('package x; import "a"; import ("b"; "c")')
        assert [s.path for s in parsed.imports] == ['"a"', '"b"', '"c"']

    def test_empty_group(self):
        assert parse_imports_only("package x\nimport ()\n").imports == []

    def test_no_imports(self):
        parsed = parse_imports_only("package x\n")
        assert parsed.imports == []
        assert parsed.stopped_at is None

    def test_parsing_stops_at_first_non_import(self):
        src = 'package x\nimport "fmt"\n\nfunc helper() string { return "x" }\nimport "os"\n'
        parsed = parse_imports_only(src)
        assert [s.path for s in parsed.imports] == ['"fmt"']
        assert parsed.stopped_at.value == "func"
        assert parsed.stopped_at.line == 4

    def test_trailing_garbage_after_imports_is_not_scanned(self):
        parsed = parse_imports_only('package x\nimport "fmt"\n@@@ "unterminated\n')
        assert [s.path for s in parsed.imports] == ['"fmt"']
        assert parsed.stopped_at.value == "@"


class TestParseErrors:
    """Invalid header text raises HeaderParseError carrying the source."""

    def test_unclosed_group(self):
        src = "package x\nimport (\n"
        with pytest.raises(HeaderParseError) as excinfo:
            parse_imports_only(src)
        assert "ego.go:3:1: expected ')', found 'EOF'" in str(excinfo.value)
        assert excinfo.value.source == src

    def test_import_without_path(self):
        with pytest.raises(HeaderParseError) as excinfo:
            parse_imports_only("package x\nimport fmt\n")
        assert "expected 'STRING', found newline" in str(excinfo.value)

    def test_keyword_as_alias(self):
        with pytest.raises(HeaderParseError) as excinfo:
            parse_imports_only('package x\nimport func "fmt"\n')
        assert "expected 'STRING', found 'func'" in str(excinfo.value)

    def test_invalid_import_path(self):
        with pytest.raises(HeaderParseError) as excinfo:
            parse_imports_only('package x\nimport "a b"\n')
        assert 'ego.go:2:8: invalid import path: "a b"' in str(excinfo.value)

    def test_empty_import_path(self):
        with pytest.raises(HeaderParseError):
            parse_imports_only('package x\nimport ""\n')

    def test_unterminated_string(self):
        with pytest.raises(HeaderParseError) as excinfo:
            parse_imports_only('package x\nimport "fmt\n')
        assert "string literal not terminated" in str(excinfo.value)

    def test_unterminated_comment(self):
        with pytest.raises(HeaderParseError) as excinfo:
            parse_imports_only("package x\n/* never closed\n")
        assert "comment not terminated" in str(excinfo.value)

    def test_missing_package_clause(self):
        with pytest.raises(HeaderParseError) as excinfo:
            parse_imports_only('import "fmt"\n')
        assert "expected 'package', found 'import'" in str(excinfo.value)

    def test_blank_package_name(self):
        with pytest.raises(HeaderParseError) as excinfo:
            parse_imports_only("package _\n")
        assert "invalid package name _" in str(excinfo.value)

    def test_two_specs_on_one_line_without_separator(self):
        with pytest.raises(HeaderParseError):
            parse_imports_only('package x\nimport ("a" "b")\n')

    def test_custom_filename_in_message(self):
        with pytest.raises(HeaderParseError) as excinfo:
            parse_imports_only("package x\nimport (\n", filename="views.go")
        assert str(excinfo.value).startswith("writeHeader: views.go:3:1:")


class TestGoStrings:
    def test_unquote_interpreted(self):
        assert unquote_go_string('"a\\tb\\x41\\u00e9\\101"') == "a\tbAéA"

    def test_unquote_raw(self):
        assert unquote_go_string("`a\\tb`") == "a\\tb"

    def test_unquote_rejects_unknown_escape(self):
        with pytest.raises(ValueError):
            unquote_go_string('"\\q"')
        with pytest.raises(ValueError):
            unquote_go_string('"\\\'"')

    def test_valid_import_paths(self):
        assert is_valid_import_path("github.com/user/repo/v2")
        assert not is_valid_import_path("")
        assert not is_valid_import_path("a b")
        assert not is_valid_import_path("a:b")


class TestDedupeImports:
    """Imports are unique by (alias, path); the first occurrence wins."""

    def test_identical_pairs_collapse(self):
        specs = [ImportSpec('"fmt"'), ImportSpec('"os"'), ImportSpec('"fmt"')]
        assert [s.path for s in dedupe_imports(specs)] == ['"fmt"', '"os"']

    def test_same_path_different_alias_is_kept_in_first_seen_order(self):
        specs = [ImportSpec('"strings"', "str"), ImportSpec('"strings"'), ImportSpec('"strings"', "str")]
        assert [s.render() for s in dedupe_imports(specs)] == ['str "strings"', '"strings"']

    def test_quoting_style_is_part_of_the_key(self):
        specs = [ImportSpec('"fmt"'), ImportSpec("`fmt`")]
        assert len(dedupe_imports(specs)) == 2

    def test_first_occurrence_keeps_its_line(self):
        specs = [ImportSpec('"fmt"', line=2), ImportSpec('"fmt"', line=9)]
        assert dedupe_imports(specs)[0].line == 2

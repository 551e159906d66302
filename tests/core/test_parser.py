"""Tests for the default fetch-cell parser."""

import pytest

from fetchcell.contracts import DirectiveSyntaxError, FetchSpec
from fetchcell.core.parser import is_relative_path, parse_fetch_cell, parse_fetch_line
from tests.fixtures import sequential_ids


class TestParseFetchLine:
    """Tests for parse_fetch_line()."""

    def test_variable_kind(self) -> None:
        assert parse_fetch_line("text: notes = notes.txt") == FetchSpec(
            fetch_type="text", file_path="notes.txt", var_name="notes", is_rel_path=True
        )

    def test_url_with_query_keeps_equals_in_path(self) -> None:
        spec = parse_fetch_line("json: cfg = https://example.com/c.json?v=2")
        assert isinstance(spec, FetchSpec)
        assert spec.var_name == "cfg"
        assert spec.file_path == "https://example.com/c.json?v=2"
        assert spec.is_rel_path is False

    def test_script_takes_bare_path(self) -> None:
        spec = parse_fetch_line("js: https://cdn.example.com/lib.js?v=1")
        assert spec == FetchSpec(fetch_type="js", file_path="https://cdn.example.com/lib.js?v=1", is_rel_path=False)

    def test_quoted_path_is_unquoted(self) -> None:
        spec = parse_fetch_line('blob: img = "images/logo.png"')
        assert isinstance(spec, FetchSpec)
        assert spec.file_path == "images/logo.png"

    def test_unknown_kind_passes_through(self) -> None:
        spec = parse_fetch_line("xml: doc = feed.xml")
        assert spec == FetchSpec(fetch_type="xml", file_path="feed.xml", var_name="doc", is_rel_path=True)

    @pytest.mark.parametrize(
        ("line", "error"),
        [
            ("text notes.txt", "missing ':' after fetch type"),
            (": notes.txt", "missing fetch type"),
            ("te xt: notes.txt", "invalid fetch type 'te xt'"),
            ("text: notes =", "missing file path"),
            ("text: notes.txt", "text fetch requires 'name = path': missing variable name"),
            ("json: class = a.json", "json fetch requires 'name = path': 'class' is a reserved word"),
            ("css: theme = theme.css", "css fetch does not take a variable name"),
        ],
    )
    def test_syntax_errors(self, line: str, error: str) -> None:
        assert parse_fetch_line(line) == error


class TestIsRelativePath:
    """Tests for is_relative_path()."""

    @pytest.mark.parametrize(
        ("path", "relative"),
        [
            ("data/a.csv", True),
            ("./a.csv", True),
            ("/srv/data/a.csv", False),
            ("https://example.com/a.csv", False),
            ("file:///tmp/a.csv", False),
        ],
    )
    def test_classification(self, path: str, relative: bool) -> None:
        assert is_relative_path(path) is relative


class TestParseFetchCell:
    """Tests for parse_fetch_cell()."""

    def test_skips_blank_and_comment_lines(self) -> None:
        cell = "\n# comment\n// another\ntext: a = a.txt\n\ncss: b.css\n"
        directives = parse_fetch_cell(cell, id_factory=sequential_ids("d"))

        assert [d.id for d in directives] == ["d-1", "d-2"]
        assert [d.spec.file_path for d in directives] == ["a.txt", "b.css"]

    def test_errors_carry_line_and_source(self) -> None:
        cell = "text: a = a.txt\n   css theme.css  \n"
        directives = parse_fetch_cell(cell, id_factory=sequential_ids("d"))

        assert directives[0].syntax_error is None
        assert directives[1].syntax_error == DirectiveSyntaxError(
            error="missing ':' after fetch type", line=2, source="css theme.css"
        )

    def test_empty_cell(self) -> None:
        assert parse_fetch_cell("") == []

    def test_default_ids_are_unique(self) -> None:
        directives = parse_fetch_cell("text: a = a.txt\ntext: b = b.txt\ntext: c = c.txt")
        assert len({d.id for d in directives}) == 3

# src/fetchcell/core/parser.py
"""Default fetch-cell parser.

Each non-blank line of a fetch cell is one directive:

    text: csv_data = data/measurements.csv
    json: config = https://example.com/config.json
    blob: image = "images/logo.png"
    js: https://cdn.example.com/lib.js
    css: styles/notebook.css

Variable kinds (text, json, blob) require ``name = path``; js and css take a
bare path. Lines starting with ``//`` or ``#`` are comments. A path is
relative (resolved through the parent context) unless it carries a URL
scheme or is an absolute filesystem path.

Kinds outside the recognised set are passed through untouched: deciding that
a kind is unsupported belongs to the executor, which reports it as a
directive-level failure rather than a cell-level syntax error.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from fetchcell.contracts import Directive, DirectiveSyntaxError, FetchSpec, FetchType
from fetchcell.core.identifiers import generate_directive_id, validate_variable_name

_COMMENT_PREFIXES = ("//", "#")
_FETCH_TYPE_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
_URL_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def is_relative_path(file_path: str) -> bool:
    """Whether a path should be resolved through the parent context."""
    return not (_URL_SCHEME_PATTERN.match(file_path) or file_path.startswith("/"))


def parse_fetch_line(line: str) -> FetchSpec | str:
    """Parse one directive line.

    Returns:
        FetchSpec on success, otherwise the syntax error description
    """
    fetch_type, sep, remainder = line.partition(":")
    fetch_type = fetch_type.strip()
    if not sep:
        return "missing ':' after fetch type"
    if not fetch_type:
        return "missing fetch type"
    if not _FETCH_TYPE_PATTERN.match(fetch_type):
        return f"invalid fetch type '{fetch_type}'"

    remainder = remainder.strip()
    kind = FetchType.parse(fetch_type)

    # "=" only introduces a variable name when it appears before the path;
    # URLs routinely carry "=" in their query string.
    var_name = ""
    file_path = remainder
    head, eq, tail = remainder.partition("=")
    if eq and head.strip().isidentifier():
        var_name = head.strip()
        file_path = tail.strip()

    file_path = _strip_quotes(file_path)
    if not file_path:
        return "missing file path"

    if kind is not None and kind.binds_variable:
        problem = validate_variable_name(var_name)
        if problem is not None:
            return f"{fetch_type} fetch requires 'name = path': {problem}"
    elif kind is not None and var_name:
        return f"{fetch_type} fetch does not take a variable name"

    return FetchSpec(
        fetch_type=fetch_type,
        file_path=file_path,
        var_name=var_name,
        is_rel_path=is_relative_path(file_path),
    )


def parse_fetch_cell(
    cell_text: str,
    *,
    id_factory: Callable[[], str] = generate_directive_id,
) -> list[Directive]:
    """Parse a fetch cell into directives, in line order.

    Malformed lines become directives carrying a DirectiveSyntaxError; this
    function does not raise for bad input.

    Args:
        cell_text: Raw cell text
        id_factory: Produces a directive id per line

    Returns:
        One Directive per non-blank, non-comment line
    """
    directives: list[Directive] = []
    for line_number, raw_line in enumerate(cell_text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith(_COMMENT_PREFIXES):
            continue
        parsed = parse_fetch_line(line)
        if isinstance(parsed, str):
            directives.append(
                Directive(
                    id=id_factory(),
                    parsed=DirectiveSyntaxError(error=parsed, line=line_number, source=line),
                )
            )
        else:
            directives.append(Directive(id=id_factory(), parsed=parsed))
    return directives

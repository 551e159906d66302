# src/fetchcell/contracts/directives.py
"""Directive types produced by the parser and consumed by the engine.

A Directive wraps exactly one of two parse results:
- FetchSpec: a well-formed fetch request
- DirectiveSyntaxError: the line could not be parsed

The wire shape used by host integrations is:

    {"id": "...", "parsed": {"error": "..."}}
    {"id": "...", "parsed": {"fetchType": "text", "filePath": "a.txt",
                             "varName": "x", "isRelPath": true}}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fetchcell.contracts.enums import FetchType


@dataclass(frozen=True, slots=True)
class FetchSpec:
    """A well-formed fetch request.

    fetch_type is kept as the raw string so an unrecognised kind still
    reaches the executor, which reports it as a directive-level failure.
    var_name is empty for kinds that do not bind a variable (js, css).
    """

    fetch_type: str
    file_path: str
    var_name: str = ""
    is_rel_path: bool = False

    @property
    def kind(self) -> FetchType | None:
        """Recognised FetchType, or None for an unknown kind."""
        return FetchType.parse(self.fetch_type)

    def to_wire(self) -> dict[str, Any]:
        return {
            "fetchType": self.fetch_type,
            "filePath": self.file_path,
            "varName": self.var_name,
            "isRelPath": self.is_rel_path,
        }


@dataclass(frozen=True, slots=True)
class DirectiveSyntaxError:
    """A directive line that failed to parse.

    Attributes:
        error: Parser's description of the problem
        line: 1-indexed line number within the cell, when known
        source: Raw text of the offending line, when known
    """

    error: str
    line: int | None = None
    source: str | None = None

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {"error": self.error}
        if self.line is not None:
            wire["line"] = self.line
        if self.source is not None:
            wire["source"] = self.source
        return wire


@dataclass(frozen=True, slots=True)
class Directive:
    """One parsed fetch request within a cell.

    id is unique within a single cell evaluation and stable for the
    directive's lifetime.
    """

    id: str
    parsed: FetchSpec | DirectiveSyntaxError

    def __post_init__(self) -> None:
        if not isinstance(self.parsed, FetchSpec | DirectiveSyntaxError):
            raise TypeError(f"Directive.parsed must be FetchSpec or DirectiveSyntaxError, got {type(self.parsed).__name__}")

    @property
    def syntax_error(self) -> DirectiveSyntaxError | None:
        """The parse error, or None for a well-formed directive."""
        if isinstance(self.parsed, DirectiveSyntaxError):
            return self.parsed
        return None

    @property
    def spec(self) -> FetchSpec:
        """The fetch request.

        Raises:
            ValueError: If the directive carries a syntax error
        """
        if isinstance(self.parsed, DirectiveSyntaxError):
            raise ValueError(f"Directive {self.id} has a syntax error: {self.parsed.error}")
        return self.parsed

    def to_wire(self) -> dict[str, Any]:
        return {"id": self.id, "parsed": self.parsed.to_wire()}

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Directive:
        """Build a Directive from the host wire shape.

        An error record takes precedence: a parsed dict that carries "error"
        is a syntax error regardless of any other keys.

        Raises:
            KeyError: If required keys are missing
        """
        parsed = data["parsed"]
        if "error" in parsed:
            return cls(
                id=data["id"],
                parsed=DirectiveSyntaxError(
                    error=parsed["error"],
                    line=parsed.get("line"),
                    source=parsed.get("source"),
                ),
            )
        return cls(
            id=data["id"],
            parsed=FetchSpec(
                fetch_type=parsed["fetchType"],
                file_path=parsed["filePath"],
                var_name=parsed.get("varName", ""),
                is_rel_path=bool(parsed.get("isRelPath", False)),
            ),
        )

"""Domain models for rules, matches, findings and text edits."""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Checkable",
    "Finding",
    "Match",
    "PatternKind",
    "ShapeRule",
    "TextEdit",
]

from typing import Protocol

import astroid


class PatternKind(Enum):
    """Closed set of patterns a finding can report."""

    NULLABLE_RETURN_TYPE = "nullable_return_type"
    NULLABLE_VARIABLE_TYPE = "nullable_variable_type"
    NULLABLE_RETURNING_CALL = "nullable_returning_call"
    THROW_STATEMENT = "throw_statement"
    TRY_CATCH_BLOCK = "try_catch_block"
    THROWING_CALL = "throwing_call"


@dataclass(frozen=True)
class TextEdit:
    """A single-span replacement of the source text covered by ``node``."""

    node: astroid.nodes.NodeNG
    replacement: str
    lineno: int
    col_offset: int
    end_lineno: int
    end_col_offset: int

    @classmethod
    def replacing(cls, node: astroid.nodes.NodeNG, replacement: str) -> "TextEdit":
        """Build an edit spanning exactly the anchor node."""
        lineno = getattr(node, "lineno", None) or 0
        col_offset = getattr(node, "col_offset", None) or 0
        return cls(
            node=node,
            replacement=replacement,
            lineno=lineno,
            col_offset=col_offset,
            end_lineno=getattr(node, "end_lineno", None) or lineno,
            end_col_offset=getattr(node, "end_col_offset", None) or col_offset,
        )

    def overlaps(self, other: "TextEdit") -> bool:
        """True if the two spans share at least one character."""
        return (self.lineno, self.col_offset) < (other.end_lineno, other.end_col_offset) and (
            other.lineno,
            other.col_offset,
        ) < (self.end_lineno, self.end_col_offset)


@dataclass(frozen=True)
class Finding:
    """One reported instance of a disallowed pattern, with an optional fix."""

    kind: PatternKind
    code: str
    message_id: str
    message: str
    location: str
    node: astroid.nodes.NodeNG
    message_args: tuple[str, ...] = ()
    fix: TextEdit | None = None
    """At most one edit; None when the fix is unsafe or disabled."""

    @property
    def fixable(self) -> bool:
        return self.fix is not None

    @staticmethod
    def _location_from_node(node: astroid.nodes.NodeNG) -> str:
        """Compute path:lineno:col_offset from an astroid node. Used by from_node."""
        root = node.root()
        path = getattr(root, "file", "") or ""
        lineno = getattr(node, "lineno", 0)
        col_offset = getattr(node, "col_offset", 0)
        return f"{path}:{lineno}:{col_offset}"

    @classmethod
    def from_node(
        cls,
        *,
        kind: PatternKind,
        code: str,
        message_id: str,
        message: str,
        node: astroid.nodes.NodeNG,
        message_args: tuple[str, ...] = (),
        fix: TextEdit | None = None,
    ) -> "Finding":
        """Build a Finding with location derived from node."""
        return cls(
            kind=kind,
            code=code,
            message_id=message_id,
            message=message,
            location=cls._location_from_node(node),
            node=node,
            message_args=message_args,
            fix=fix,
        )


class Checkable(Protocol):
    """One-and-done check: given a node, return findings."""

    name: str
    codes: tuple[str, ...]

    def check(self, node: astroid.nodes.NodeNG) -> list[Finding]:
        """Interrogate a node for disallowed patterns."""
        ...


@dataclass(frozen=True)
class Match:
    """A shape matcher hit, before suppression and exception filtering."""

    kind: PatternKind
    message_id: str
    node: astroid.nodes.NodeNG
    """The matched construct; fixes replace exactly this node."""
    anchor: astroid.nodes.NodeNG
    """Where the finding is reported."""
    names: tuple[str, ...] = ()
    """Names checked against the exception list."""
    type_hint: str | None = None


class ShapeRule(Protocol):
    """One shape matcher within a rule profile."""

    kind: PatternKind

    def match(self, node: astroid.nodes.NodeNG) -> Match | None:
        """Cheap structural test of a single node."""
        ...

    def refine(self, match: Match) -> Match | None:
        """Costlier confirmation, run only for unsuppressed, non-excepted matches."""
        ...

"""
Generic pattern engine.

One engine instance is built per rule profile. The pipeline for a visited
node is: shape match, suppression, exception list, refinement (return-flow
analysis), emission.
"""

from collections.abc import Sequence

import astroid

from typesafe_lint.domain.allow_list import AllowList
from typesafe_lint.domain.emitter import FindingEmitter
from typesafe_lint.domain.rules import Finding, ShapeRule
from typesafe_lint.domain.suppression import SuppressionResolver, ZoneClassifier


class PatternEngine:
    """Runs a fixed set of shape rules against single nodes."""

    def __init__(
        self,
        *,
        shape_rules: Sequence[ShapeRule],
        resolver: SuppressionResolver,
        allow_list: AllowList,
        emitter: FindingEmitter,
        zones: ZoneClassifier,
        auto_fix: bool = True,
        disable_fixes_in_tests: bool = False,
    ) -> None:
        self._shape_rules = tuple(shape_rules)
        self._resolver = resolver
        self._allow_list = allow_list
        self._emitter = emitter
        self._zones = zones
        self._auto_fix = auto_fix
        self._disable_fixes_in_tests = disable_fixes_in_tests

    @property
    def codes(self) -> tuple[str, ...]:
        return self._emitter.codes

    def check(self, node: astroid.nodes.NodeNG) -> list[Finding]:
        """Findings for this node alone; children are visited separately."""
        findings: list[Finding] = []
        for shape_rule in self._shape_rules:
            match = shape_rule.match(node)
            if match is None:
                continue
            if self._zones.is_excluded(node):
                return []
            if self._resolver.is_suppressed(match.node):
                continue
            if any(self._allow_list.is_excepted(name) for name in match.names):
                continue
            confirmed = shape_rule.refine(match)
            if confirmed is None:
                continue
            findings.append(self._emitter.emit(confirmed, self._fixes_enabled(node)))
        return findings

    def _fixes_enabled(self, node: astroid.nodes.NodeNG) -> bool:
        if not self._auto_fix:
            return False
        return not (self._disable_fixes_in_tests and self._zones.is_test_file(node))

import unittest
from dataclasses import dataclass

import astroid

from typesafe_lint.domain.allow_list import AllowList
from typesafe_lint.domain.emitter import FindingEmitter, MessageSpec
from typesafe_lint.domain.engine import PatternEngine
from typesafe_lint.domain.rules import Match, PatternKind
from typesafe_lint.domain.suppression import SuppressionResolver, ZoneClassifier


@dataclass
class RecordingShape:
    """Matches every Call and records which pipeline stages ran."""

    kind: PatternKind = PatternKind.NULLABLE_RETURNING_CALL
    confirm: bool = True
    refined: int = 0

    def match(self, node):
        if not isinstance(node, astroid.nodes.Call):
            return None
        return Match(
            kind=self.kind,
            message_id="useOptionalFromNullable",
            node=node,
            anchor=node,
            names=("handler",),
        )

    def refine(self, match):
        self.refined += 1
        return match if self.confirm else None


def build_engine(shape, *, rules=(), exclude=(), auto_fix=True, disable_fixes_in_tests=False):
    return PatternEngine(
        shape_rules=(shape,),
        resolver=SuppressionResolver("optional", {"from_nullable"}),
        allow_list=AllowList(rules),
        emitter=FindingEmitter(
            namespace="optional",
            messages={"useOptionalFromNullable": MessageSpec("useOptionalFromNullable", "W9502", "wrap")},
            fix_builders={PatternKind.NULLABLE_RETURNING_CALL: lambda m: "fixed"},
        ),
        zones=ZoneClassifier(exclude),
        auto_fix=auto_fix,
        disable_fixes_in_tests=disable_fixes_in_tests,
    )


class TestPatternEngine(unittest.TestCase):
    def test_non_matching_node(self) -> None:
        shape = RecordingShape()
        self.assertEqual(build_engine(shape).check(astroid.extract_node("x")), [])

    def test_match_is_refined_and_emitted(self) -> None:
        shape = RecordingShape()
        findings = build_engine(shape).check(astroid.extract_node("lookup(x)"))
        self.assertEqual(len(findings), 1)
        self.assertEqual(findings[0].fix.replacement, "fixed")
        self.assertEqual(shape.refined, 1)

    def test_suppressed_match_skips_refinement(self) -> None:
        shape = RecordingShape()
        node = astroid.extract_node("optional.from_nullable(__(lookup(x)))")
        self.assertEqual(build_engine(shape).check(node), [])
        self.assertEqual(shape.refined, 0)

    def test_excepted_name_skips_refinement(self) -> None:
        shape = RecordingShape()
        self.assertEqual(build_engine(shape, rules=["hand*"]).check(astroid.extract_node("f()")), [])
        self.assertEqual(shape.refined, 0)

    def test_refinement_can_reject(self) -> None:
        shape = RecordingShape(confirm=False)
        self.assertEqual(build_engine(shape).check(astroid.extract_node("f()")), [])

    def test_excluded_zone(self) -> None:
        module = astroid.parse("f()", path="/p/generated/api.py")
        call = module.body[0].value
        self.assertEqual(build_engine(RecordingShape(), exclude=["*/generated/*"]).check(call), [])

    def test_auto_fix_off(self) -> None:
        findings = build_engine(RecordingShape(), auto_fix=False).check(astroid.extract_node("f()"))
        self.assertIsNone(findings[0].fix)

    def test_fixes_disabled_in_test_files_only_when_asked(self) -> None:
        module = astroid.parse("f()", path="/p/tests/test_api.py")
        call = module.body[0].value
        gated = build_engine(RecordingShape(), disable_fixes_in_tests=True).check(call)
        ungated = build_engine(RecordingShape()).check(call)
        self.assertEqual(len(gated), 1)
        self.assertIsNone(gated[0].fix)
        self.assertIsNotNone(ungated[0].fix)

    def test_repeatable(self) -> None:
        engine = build_engine(RecordingShape())
        node = astroid.extract_node("f()")
        first = [(f.code, f.location, f.fix) for f in engine.check(node)]
        second = [(f.code, f.location, f.fix) for f in engine.check(node)]
        self.assertEqual(first, second)

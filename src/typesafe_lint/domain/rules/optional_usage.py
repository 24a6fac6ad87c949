"""Optional usage rule (W9501-W9503): nullable return types, nullable variables, nullable calls."""

from collections.abc import Iterable
from dataclasses import replace

import astroid

from typesafe_lint.domain.allow_list import AllowList
from typesafe_lint.domain.config import RuleOptions
from typesafe_lint.domain.constants import (
    DEFAULT_OPTIONAL_NAMESPACE,
    OPTIONAL_FROM_NULLABLE,
    OPTIONAL_WRAPPER_METHODS,
    REPORT_ONLY_CALL_NAMES,
)
from typesafe_lint.domain.emitter import FindingEmitter, MessageSpec
from typesafe_lint.domain.engine import PatternEngine
from typesafe_lint.domain.matchers import ShapeMatcher
from typesafe_lint.domain.protocols import SourceReaderProtocol
from typesafe_lint.domain.return_flow import ReturnFlowAnalyzer
from typesafe_lint.domain.rules import Checkable, Finding, Match, PatternKind
from typesafe_lint.domain.suppression import FunctionScope, SuppressionResolver, ZoneClassifier

OPTIONAL_MESSAGES: dict[str, MessageSpec] = {
    "noNullableReturn": MessageSpec(
        message_id="noNullableReturn",
        code="W9501",
        template=(
            "Functions should return Optional[{type}] instead of {type} | None. Change the "
            "return type and update return statements to use {namespace}.some(value) or "
            "{namespace}.none()."
        ),
    ),
    "useOptionalFromNullable": MessageSpec(
        message_id="useOptionalFromNullable",
        code="W9502",
        template=(
            "Calls to functions returning nullable values should be wrapped with "
            "{namespace}.from_nullable(). This keeps None from propagating through the code."
        ),
    ),
    "noNullableUnion": MessageSpec(
        message_id="noNullableUnion",
        code="W9503",
        template=(
            "Union types with None should use Optional[{type}] instead of {type} | None. "
            "Change the type annotation and initialize with {namespace}.some(value) or "
            "{namespace}.none()."
        ),
    ),
}


class NullableReturnShape:
    """Function-like nodes declared or observed to return None as a value."""

    kind: PatternKind = PatternKind.NULLABLE_RETURN_TYPE

    def match(self, node: astroid.nodes.NodeNG) -> Match | None:
        if not isinstance(node, (astroid.nodes.FunctionDef, astroid.nodes.Lambda)):
            return None
        names = (FunctionScope.function_name(node),)
        returns = getattr(node, "returns", None)
        if isinstance(node, astroid.nodes.FunctionDef) and returns is not None:
            if ShapeMatcher.is_void_annotation(returns):
                return None
            if ShapeMatcher.is_nullable_annotation(returns):
                return Match(
                    kind=self.kind,
                    message_id="noNullableReturn",
                    node=node,
                    anchor=returns,
                    names=names,
                    type_hint=ReturnFlowAnalyzer.type_hint_from_annotation(returns),
                )
        # Undecided until the return statements are analysed in refine().
        return Match(
            kind=self.kind,
            message_id="noNullableReturn",
            node=node,
            anchor=node,
            names=names,
        )

    def refine(self, match: Match) -> Match | None:
        if match.type_hint is not None:
            return match
        flow = ReturnFlowAnalyzer.analyze(match.node)
        if not flow.is_flagged:
            return None
        return replace(match, type_hint=flow.type_hint)


class NullableVariableShape:
    """Annotated assignments whose declared type admits None."""

    kind: PatternKind = PatternKind.NULLABLE_VARIABLE_TYPE

    def match(self, node: astroid.nodes.NodeNG) -> Match | None:
        if not isinstance(node, astroid.nodes.AnnAssign):
            return None
        # Class-body annotations declare fields, not variables.
        if not isinstance(node.target, astroid.nodes.AssignName) or isinstance(
            node.parent, astroid.nodes.ClassDef
        ):
            return None
        if not ShapeMatcher.is_nullable_annotation(node.annotation):
            return None
        return Match(
            kind=self.kind,
            message_id="noNullableUnion",
            node=node,
            anchor=node.annotation,
            names=FunctionScope.enclosing_names(node),
            type_hint=ReturnFlowAnalyzer.type_hint_from_annotation(node.annotation),
        )

    def refine(self, match: Match) -> Match | None:
        return match


class NullableCallShape:
    """Calls to well-known operations that return None on a miss."""

    kind: PatternKind = PatternKind.NULLABLE_RETURNING_CALL

    def match(self, node: astroid.nodes.NodeNG) -> Match | None:
        if not ShapeMatcher.is_nullable_returning_call(node):
            return None
        return Match(
            kind=self.kind,
            message_id="useOptionalFromNullable",
            node=node,
            anchor=node,
            names=FunctionScope.enclosing_names(node),
        )

    def refine(self, match: Match) -> Match | None:
        return match


class OptionalUsageRule(Checkable):
    """Rule for W9501-W9503: represent absence with the Optional wrapper, not None."""

    name: str = "optional-usage"
    codes: tuple[str, ...] = ("W9501", "W9502", "W9503")

    def __init__(
        self,
        options: RuleOptions,
        source_reader: SourceReaderProtocol,
        namespace: str = DEFAULT_OPTIONAL_NAMESPACE,
        exclude_paths: Iterable[str] = (),
    ) -> None:
        self._namespace = namespace
        self._source_reader = source_reader
        emitter = FindingEmitter(
            namespace=namespace,
            messages=OPTIONAL_MESSAGES,
            fix_builders={PatternKind.NULLABLE_RETURNING_CALL: self._wrap_nullable_call},
        )
        self._engine = PatternEngine(
            shape_rules=(NullableReturnShape(), NullableVariableShape(), NullableCallShape()),
            resolver=SuppressionResolver(namespace, OPTIONAL_WRAPPER_METHODS),
            allow_list=AllowList(options.allow_exceptions),
            emitter=emitter,
            zones=ZoneClassifier(exclude_paths),
            auto_fix=options.auto_fix,
        )

    def check(self, node: astroid.nodes.NodeNG) -> list[Finding]:
        """Check one node; call once per visited node."""
        return self._engine.check(node)

    def _wrap_nullable_call(self, match: Match) -> str | None:
        """`d.get(k)` -> `optional.from_nullable(d.get(k))`."""
        # Wrapping the coroutine of an awaited call would change what is awaited.
        if ShapeMatcher.is_awaited(match.node):
            return None
        if ShapeMatcher.call_name(match.node) in REPORT_ONLY_CALL_NAMES:
            return None
        call_text = self._source_reader.get_source_segment(match.node)
        return f"{self._namespace}.{OPTIONAL_FROM_NULLABLE}({call_text})"

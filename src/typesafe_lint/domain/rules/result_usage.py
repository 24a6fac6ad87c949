"""Result usage rule (W9511-W9514): raise statements, try/except blocks, raising calls."""

from collections.abc import Iterable

import astroid

from typesafe_lint.domain.allow_list import AllowList
from typesafe_lint.domain.config import RuleOptions
from typesafe_lint.domain.constants import (
    DEFAULT_RESULT_NAMESPACE,
    RESULT_ERROR,
    RESULT_TRY,
    RESULT_TRY_ASYNC,
    RESULT_WRAPPER_METHODS,
)
from typesafe_lint.domain.emitter import FindingEmitter, MessageSpec
from typesafe_lint.domain.engine import PatternEngine
from typesafe_lint.domain.matchers import ShapeMatcher
from typesafe_lint.domain.protocols import SourceReaderProtocol
from typesafe_lint.domain.rules import Checkable, Finding, Match, PatternKind
from typesafe_lint.domain.suppression import FunctionScope, SuppressionResolver, ZoneClassifier

RESULT_MESSAGES: dict[str, MessageSpec] = {
    "noThrowStatement": MessageSpec(
        message_id="noThrowStatement",
        code="W9511",
        template=(
            "Use {namespace}.error() instead of raise statements for functional error "
            "handling. This makes failures part of the return type."
        ),
    ),
    "noTryCatchBlock": MessageSpec(
        message_id="noTryCatchBlock",
        code="W9512",
        template=(
            "Use {namespace}.try_() or {namespace}.try_async() instead of try/except blocks "
            "for type-safe error handling."
        ),
    ),
    "useResultTry": MessageSpec(
        message_id="useResultTry",
        code="W9513",
        template=(
            "Calls to functions that may raise should be wrapped with {namespace}.try_(). "
            "This ensures exceptions are handled safely."
        ),
    ),
    "useResultTryAsync": MessageSpec(
        message_id="useResultTryAsync",
        code="W9514",
        template=(
            "Awaited calls that may raise should be wrapped with {namespace}.try_async(). "
            "This ensures exceptions are handled safely."
        ),
    ),
}


# The interpreter drives dunder methods (__next__, __getattr__, __exit__, ...)
# through the exceptions they raise, and __init__ must return None.
def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


class RaiseShape:
    kind: PatternKind = PatternKind.THROW_STATEMENT

    def match(self, node: astroid.nodes.NodeNG) -> Match | None:
        if not ShapeMatcher.is_throw_statement(node):
            return None
        return Match(
            kind=self.kind,
            message_id="noThrowStatement",
            node=node,
            anchor=node,
            names=FunctionScope.enclosing_names(node),
        )

    def refine(self, match: Match) -> Match | None:
        return match


class TryShape:
    kind: PatternKind = PatternKind.TRY_CATCH_BLOCK

    def match(self, node: astroid.nodes.NodeNG) -> Match | None:
        if not ShapeMatcher.is_try_block(node):
            return None
        return Match(
            kind=self.kind,
            message_id="noTryCatchBlock",
            node=node,
            anchor=node,
            names=FunctionScope.enclosing_names(node),
        )

    def refine(self, match: Match) -> Match | None:
        return match


class RaisingCallShape:
    """Calls to well-known raising operations not already handled by a try body."""

    kind: PatternKind = PatternKind.THROWING_CALL

    def match(self, node: astroid.nodes.NodeNG) -> Match | None:
        if not ShapeMatcher.is_throwing_call(node):
            return None
        if SuppressionResolver.is_handled_by_try(node):
            return None
        return Match(
            kind=self.kind,
            message_id="useResultTryAsync" if ShapeMatcher.is_awaited(node) else "useResultTry",
            node=node,
            anchor=node,
            names=(ShapeMatcher.call_name(node), *FunctionScope.enclosing_names(node)),
        )

    def refine(self, match: Match) -> Match | None:
        return match


class ResultUsageRule(Checkable):
    """Rule for W9511-W9514: represent failure with the Result wrapper, not exceptions."""

    name: str = "result-usage"
    codes: tuple[str, ...] = ("W9511", "W9512", "W9513", "W9514")

    def __init__(
        self,
        options: RuleOptions,
        source_reader: SourceReaderProtocol,
        namespace: str = DEFAULT_RESULT_NAMESPACE,
        exclude_paths: Iterable[str] = (),
    ) -> None:
        self._namespace = namespace
        self._source_reader = source_reader
        emitter = FindingEmitter(
            namespace=namespace,
            messages=RESULT_MESSAGES,
            fix_builders={
                PatternKind.THROW_STATEMENT: self._return_error,
                PatternKind.TRY_CATCH_BLOCK: self._wrap_try_body,
                PatternKind.THROWING_CALL: self._wrap_raising_call,
            },
        )
        self._engine = PatternEngine(
            shape_rules=(RaiseShape(), TryShape(), RaisingCallShape()),
            resolver=SuppressionResolver(namespace, RESULT_WRAPPER_METHODS),
            allow_list=AllowList(options.allow_exceptions),
            emitter=emitter,
            zones=ZoneClassifier(exclude_paths),
            auto_fix=options.auto_fix,
            disable_fixes_in_tests=options.allow_test_files,
        )

    def check(self, node: astroid.nodes.NodeNG) -> list[Finding]:
        """Check one node; call once per visited node."""
        return self._engine.check(node)

    def _return_error(self, match: Match) -> str | None:
        """`raise X(...)` -> `return result.error(X(...))` where that keeps control flow."""
        node = match.node
        if node.exc is None or node.cause is not None:
            return None
        # A class body nested in a def is not a place `return` may appear.
        function_node = node.frame()
        if not isinstance(function_node, astroid.nodes.FunctionDef):
            return None
        if function_node.is_generator() or _is_dunder(function_node.name):
            return None
        # A local except clause would no longer see the failure.
        if SuppressionResolver.is_handled_by_try(node):
            return None
        exc_text = self._source_reader.get_source_segment(node.exc)
        if not isinstance(
            node.exc, (astroid.nodes.Call, astroid.nodes.Name, astroid.nodes.Attribute)
        ):
            exc_text = f"Exception({exc_text})"
        return f"return {self._namespace}.{RESULT_ERROR}({exc_text})"

    def _wrap_try_body(self, match: Match) -> str | None:
        """
        Single-expression try bodies become a wrapped lambda.

            try:                         ->  value = result.try_(lambda: parse(raw))
                value = parse(raw)
            except ValueError:
                ...
        """
        node = match.node
        if not isinstance(node, astroid.nodes.Try):
            return None
        if len(node.body) != 1 or node.orelse or node.finalbody:
            return None
        statement = node.body[0]
        prefix = ""
        if isinstance(statement, astroid.nodes.Expr):
            expr = statement.value
        elif (
            isinstance(statement, astroid.nodes.Assign)
            and len(statement.targets) == 1
            and isinstance(statement.targets[0], astroid.nodes.AssignName)
        ):
            expr = statement.value
            prefix = f"{statement.targets[0].name} = "
        else:
            return None

        is_async = isinstance(expr, astroid.nodes.Await)
        wrapped = expr.value if is_async else expr
        # A lambda body cannot await or yield.
        if not ResultUsageRule._is_lambda_safe(wrapped):
            return None
        wrapped_text = self._source_reader.get_source_segment(wrapped)
        if is_async:
            return f"{prefix}await {self._namespace}.{RESULT_TRY_ASYNC}(lambda: {wrapped_text})"
        return f"{prefix}{self._namespace}.{RESULT_TRY}(lambda: {wrapped_text})"

    def _wrap_raising_call(self, match: Match) -> str | None:
        call_text = self._source_reader.get_source_segment(match.node)
        method = RESULT_TRY_ASYNC if ShapeMatcher.is_awaited(match.node) else RESULT_TRY
        return f"{self._namespace}.{method}(lambda: {call_text})"

    @staticmethod
    def _is_lambda_safe(expr: astroid.nodes.NodeNG) -> bool:
        forbidden = (
            astroid.nodes.Await,
            astroid.nodes.Yield,
            astroid.nodes.YieldFrom,
            astroid.nodes.NamedExpr,
        )
        return next(expr.nodes_of_class(forbidden), None) is None

"""Return-flow analysis: classify how a function exits and guess its value type."""

from dataclasses import dataclass
from enum import Enum

import astroid

from typesafe_lint.domain.constants import PLACEHOLDER_TYPE
from typesafe_lint.domain.matchers import ShapeMatcher

_LITERAL_TYPES: tuple[tuple[type, str], ...] = (
    # bool before int: bool is an int subclass
    (bool, "bool"),
    (int, "int"),
    (float, "float"),
    (str, "str"),
    (bytes, "bytes"),
)

_CONTAINER_TYPES: dict[type, str] = {
    astroid.nodes.List: "list",
    astroid.nodes.Dict: "dict",
    astroid.nodes.Set: "set",
    astroid.nodes.Tuple: "tuple",
    astroid.nodes.ListComp: "list",
    astroid.nodes.DictComp: "dict",
    astroid.nodes.SetComp: "set",
}


class ReturnClassification(Enum):
    VOID = "void"
    VALUE_RETURNING = "value_returning"
    MIXED = "mixed"


@dataclass(frozen=True)
class ReturnFlow:
    """Outcome of analysing one function-like node."""

    classification: ReturnClassification
    has_nullable_value: bool
    type_hint: str

    @property
    def is_flagged(self) -> bool:
        """Mixed exits always report; all-valued exits only with a nullable value."""
        if self.classification is ReturnClassification.MIXED:
            return True
        return self.classification is ReturnClassification.VALUE_RETURNING and (
            self.has_nullable_value
        )


class ReturnFlowAnalyzer:
    """Stateless analysis of return statements and annotations."""

    @staticmethod
    def collect_returns(function_node: astroid.nodes.NodeNG) -> list[astroid.nodes.Return]:
        """
        Return statements that exit this function, in source order.

        Nested functions, lambdas and classes own their returns and are not
        descended into.
        """
        returns: list[astroid.nodes.Return] = []
        stack = list(reversed(getattr(function_node, "body", None) or []))
        while stack:
            current = stack.pop()
            if isinstance(current, astroid.nodes.Return):
                returns.append(current)
                continue
            if isinstance(
                current,
                (astroid.nodes.FunctionDef, astroid.nodes.Lambda, astroid.nodes.ClassDef),
            ):
                continue
            stack.extend(reversed(list(current.get_children())))
        return returns

    @staticmethod
    def analyze(function_node: astroid.nodes.NodeNG) -> ReturnFlow:
        """Classify the exits of a def, async def or lambda."""
        if isinstance(function_node, astroid.nodes.Lambda) and not isinstance(
            function_node, astroid.nodes.FunctionDef
        ):
            values = [function_node.body]
            return ReturnFlow(
                classification=ReturnClassification.VALUE_RETURNING,
                has_nullable_value=ShapeMatcher.contains_nullable_value(function_node.body),
                type_hint=ReturnFlowAnalyzer.infer_type(values),
            )

        # A generator's `return x` sets StopIteration.value, not the call result.
        if isinstance(function_node, astroid.nodes.FunctionDef) and function_node.is_generator():
            return ReturnFlow(ReturnClassification.VOID, False, PLACEHOLDER_TYPE)

        returns = ReturnFlowAnalyzer.collect_returns(function_node)
        values = [r.value for r in returns if r.value is not None]
        if not values:
            classification = ReturnClassification.VOID
        elif len(values) == len(returns):
            classification = ReturnClassification.VALUE_RETURNING
        else:
            classification = ReturnClassification.MIXED
        return ReturnFlow(
            classification=classification,
            has_nullable_value=any(ShapeMatcher.contains_nullable_value(v) for v in values),
            type_hint=ReturnFlowAnalyzer.infer_type(values),
        )

    @staticmethod
    def infer_type(values: list[astroid.nodes.NodeNG]) -> str:
        """First concrete non-None type among the return values, else the placeholder."""
        for value in values:
            found = ReturnFlowAnalyzer._concrete_type(value)
            if found is not None:
                return found
        return PLACEHOLDER_TYPE

    @staticmethod
    def _concrete_type(expr: astroid.nodes.NodeNG) -> str | None:
        if isinstance(expr, astroid.nodes.Const):
            if expr.value is None:
                return None
            for python_type, name in _LITERAL_TYPES:
                if isinstance(expr.value, python_type):
                    return name
            return None
        if isinstance(expr, astroid.nodes.JoinedStr):
            return "str"
        container = _CONTAINER_TYPES.get(type(expr))
        if container is not None:
            return container
        if isinstance(expr, astroid.nodes.IfExp):
            return ReturnFlowAnalyzer._concrete_type(
                expr.body
            ) or ReturnFlowAnalyzer._concrete_type(expr.orelse)
        if isinstance(expr, astroid.nodes.BoolOp):
            for operand in expr.values:
                found = ReturnFlowAnalyzer._concrete_type(operand)
                if found is not None:
                    return found
            return None
        if isinstance(expr, astroid.nodes.Call) and isinstance(expr.func, astroid.nodes.Name):
            if ReturnFlowAnalyzer._looks_like_class_name(expr.func.name):
                return expr.func.name
            return None
        if isinstance(expr, astroid.nodes.Name) and ReturnFlowAnalyzer._looks_like_class_name(
            expr.name
        ):
            return expr.name
        return None

    @staticmethod
    def _looks_like_class_name(name: str) -> bool:
        """CapWords, but not a SCREAMING_CASE constant."""
        return bool(name) and name[0].isupper() and not name.isupper()

    @staticmethod
    def type_hint_from_annotation(annotation: astroid.nodes.NodeNG) -> str:
        """Name of the single non-None member of a nullable annotation, else 'T'."""
        members = [
            m for m in ShapeMatcher.union_members(annotation) if not ShapeMatcher.is_none_type(m)
        ]
        if len(members) != 1:
            return PLACEHOLDER_TYPE
        member = members[0]
        if isinstance(member, astroid.nodes.Name):
            return member.name
        if isinstance(member, astroid.nodes.Attribute):
            return member.as_string()
        if isinstance(member, astroid.nodes.Const) and isinstance(member.value, str):
            forward_ref = member.value.strip()
            if forward_ref.replace(".", "").isidentifier():
                return forward_ref
        return PLACEHOLDER_TYPE


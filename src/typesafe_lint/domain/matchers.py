"""
Shape matchers: pure structural predicates over single astroid nodes.

Only a fixed set of shapes is recognised. Anything else is not a match, so
the rules err on the side of false negatives.
"""

import astroid

from typesafe_lint.domain.constants import (
    DEFAULTABLE_CALL_NAMES,
    NONE_TYPE_NAMES,
    NULLABLE_CALL_NAMES,
    OPTIONAL_ALIASES,
    PATTERN_CALL_NAMES,
    THROWING_FUNCTION_NAMES,
    THROWING_MEMBER_CALLS,
    UNION_ALIASES,
)


class ShapeMatcher:
    """Static predicates shared by the optional and result rules."""

    @staticmethod
    def is_none_literal(node: astroid.nodes.NodeNG | None) -> bool:
        """True for the `None` constant."""
        return isinstance(node, astroid.nodes.Const) and node.value is None

    @staticmethod
    def is_none_type(node: astroid.nodes.NodeNG) -> bool:
        """True if an annotation member spells the None type."""
        if ShapeMatcher.is_none_literal(node):
            return True
        if isinstance(node, astroid.nodes.Name):
            return node.name in NONE_TYPE_NAMES
        if isinstance(node, astroid.nodes.Attribute):
            return node.attrname == "NoneType"
        return False

    @staticmethod
    def _typing_alias(node: astroid.nodes.NodeNG) -> str:
        """Name of a (possibly `typing.`-qualified) generic alias, else ''."""
        if isinstance(node, astroid.nodes.Name):
            return node.name
        if isinstance(node, astroid.nodes.Attribute):
            return node.attrname
        return ""

    @staticmethod
    def union_members(annotation: astroid.nodes.NodeNG) -> list[astroid.nodes.NodeNG]:
        """Flatten `A | B`, `Optional[A]` and `Union[A, B]` into their members."""
        if isinstance(annotation, astroid.nodes.BinOp) and annotation.op == "|":
            return ShapeMatcher.union_members(annotation.left) + ShapeMatcher.union_members(
                annotation.right
            )
        if isinstance(annotation, astroid.nodes.Subscript):
            alias = ShapeMatcher._typing_alias(annotation.value)
            if alias in OPTIONAL_ALIASES:
                # Optional[A] is A | None; the None member is synthesised.
                none_member = astroid.nodes.Const(
                    None,
                    lineno=annotation.lineno,
                    col_offset=annotation.col_offset,
                    parent=annotation,
                    end_lineno=annotation.end_lineno,
                    end_col_offset=annotation.end_col_offset,
                )
                return ShapeMatcher.union_members(annotation.slice) + [none_member]
            if alias in UNION_ALIASES:
                slice_node = annotation.slice
                elements = (
                    slice_node.elts
                    if isinstance(slice_node, astroid.nodes.Tuple)
                    else [slice_node]
                )
                members: list[astroid.nodes.NodeNG] = []
                for element in elements:
                    members.extend(ShapeMatcher.union_members(element))
                return members
        return [annotation]

    @staticmethod
    def is_nullable_annotation(annotation: astroid.nodes.NodeNG | None) -> bool:
        """
        True if the annotation is the None type itself, or a union with at
        least one None member alongside any other members.
        """
        if annotation is None:
            return False
        return any(ShapeMatcher.is_none_type(m) for m in ShapeMatcher.union_members(annotation))

    @staticmethod
    def is_void_annotation(annotation: astroid.nodes.NodeNG | None) -> bool:
        """`-> None` is how Python spells a procedure, not a nullable result."""
        return annotation is not None and ShapeMatcher.is_none_type(annotation)

    @staticmethod
    def contains_nullable_value(expr: astroid.nodes.NodeNG | None) -> bool:
        """
        True if evaluating the expression may yield None.

        Either branch of `a if c else b` and any operand of `a or b` / `a and b`
        may be the evaluated value, so a None literal in any of them counts.
        """
        if expr is None:
            return False
        if ShapeMatcher.is_none_literal(expr):
            return True
        if isinstance(expr, astroid.nodes.IfExp):
            return ShapeMatcher.contains_nullable_value(
                expr.body
            ) or ShapeMatcher.contains_nullable_value(expr.orelse)
        if isinstance(expr, astroid.nodes.BoolOp):
            return any(ShapeMatcher.contains_nullable_value(v) for v in expr.values)
        return False

    @staticmethod
    def call_name(call: astroid.nodes.Call) -> str:
        """Bare callee name or attribute name, '' for anything else."""
        func = call.func
        if isinstance(func, astroid.nodes.Name):
            return func.name
        if isinstance(func, astroid.nodes.Attribute):
            return func.attrname
        return ""

    @staticmethod
    def looks_like_pattern(arg: astroid.nodes.NodeNG) -> bool:
        """String/bytes literal, f-string, bare name, or `re.compile(...)`."""
        if isinstance(arg, astroid.nodes.Const):
            return isinstance(arg.value, (str, bytes))
        if isinstance(arg, (astroid.nodes.JoinedStr, astroid.nodes.Name)):
            return True
        if isinstance(arg, astroid.nodes.Call) and isinstance(arg.func, astroid.nodes.Attribute):
            receiver = arg.func.expr
            return (
                arg.func.attrname == "compile"
                and isinstance(receiver, astroid.nodes.Name)
                and receiver.name == "re"
            )
        return False

    @staticmethod
    def supplies_default(call: astroid.nodes.Call) -> bool:
        """True if a get/pop style lookup was given a fallback value."""
        args = call.args or []
        if any(isinstance(a, astroid.nodes.Starred) for a in args):
            return True
        if len(args) >= 2:
            return True
        return any(kw.arg in ("default", None) for kw in call.keywords or [])

    @staticmethod
    def is_nullable_returning_call(node: astroid.nodes.NodeNG) -> bool:
        """True for calls to the fixed table of operations that return None on a miss."""
        if not isinstance(node, astroid.nodes.Call):
            return False
        name = ShapeMatcher.call_name(node)
        if name in PATTERN_CALL_NAMES:
            # match/search are also used by non-regex APIs
            return bool(node.args) and ShapeMatcher.looks_like_pattern(node.args[0])
        if name not in NULLABLE_CALL_NAMES:
            return False
        if name in DEFAULTABLE_CALL_NAMES:
            return not ShapeMatcher.supplies_default(node)
        return True

    @staticmethod
    def is_throw_statement(node: astroid.nodes.NodeNG) -> bool:
        return isinstance(node, astroid.nodes.Raise)

    @staticmethod
    def is_try_block(node: astroid.nodes.NodeNG) -> bool:
        return isinstance(node, (astroid.nodes.Try, astroid.nodes.TryStar))

    @staticmethod
    def is_throwing_call(node: astroid.nodes.NodeNG) -> bool:
        """True for calls to well-known operations that raise on bad input."""
        if not isinstance(node, astroid.nodes.Call):
            return False
        func = node.func
        if isinstance(func, astroid.nodes.Name):
            return func.name in THROWING_FUNCTION_NAMES
        if isinstance(func, astroid.nodes.Attribute) and isinstance(
            func.expr, astroid.nodes.Name
        ):
            return (func.expr.name, func.attrname) in THROWING_MEMBER_CALLS
        return False

    @staticmethod
    def is_awaited(node: astroid.nodes.NodeNG) -> bool:
        return isinstance(node.parent, astroid.nodes.Await)

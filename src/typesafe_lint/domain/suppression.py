"""Suppression context: wrapper calls, handled try bodies, exempt zones."""

from collections.abc import Iterable
from fnmatch import fnmatch
from pathlib import PurePath

import astroid

from typesafe_lint.domain.constants import (
    TEST_DIRECTORY_NAMES,
    TEST_FILE_NAMES,
    TEST_FILE_PREFIX,
    TEST_FILE_SUFFIX,
)

_FUNCTION_NODES = (astroid.nodes.FunctionDef, astroid.nodes.Lambda)


class FunctionScope:
    """Helpers for locating and naming the function that owns a node."""

    @staticmethod
    def enclosing_function(node: astroid.nodes.NodeNG) -> astroid.nodes.NodeNG | None:
        """
        Nearest def, async def or lambda strictly above node.

        None at module level and for statements in a class body, even a
        class defined inside a function.
        """
        child = node
        current = node.parent
        while current is not None:
            if isinstance(current, _FUNCTION_NODES):
                return current
            if isinstance(current, astroid.nodes.ClassDef) and child in current.body:
                return None
            child = current
            current = current.parent
        return None

    @staticmethod
    def function_name(function_node: astroid.nodes.NodeNG) -> str:
        """
        Name of a function-like node.

        A lambda takes the name it is bound to (`key = lambda: ...`); any
        other lambda is anonymous and named ''.
        """
        if isinstance(function_node, astroid.nodes.FunctionDef):
            return function_node.name
        parent = function_node.parent
        if isinstance(parent, astroid.nodes.Assign) and parent.value is function_node:
            targets = parent.targets
            if len(targets) == 1 and isinstance(targets[0], astroid.nodes.AssignName):
                return targets[0].name
        if isinstance(parent, astroid.nodes.AnnAssign) and parent.value is function_node:
            if isinstance(parent.target, astroid.nodes.AssignName):
                return parent.target.name
        return ""

    @staticmethod
    def enclosing_names(node: astroid.nodes.NodeNG) -> tuple[str, ...]:
        """The enclosing function's name, or nothing at module level."""
        function_node = FunctionScope.enclosing_function(node)
        if function_node is None:
            return ()
        return (FunctionScope.function_name(function_node),)


class SuppressionResolver:
    """
    Decides whether a node already sits inside a wrapping-type constructor.

    A node is suppressed when some ancestor is a call `<namespace>.<method>(...)`
    and the path from that call down to the node starts at one of its
    arguments. The receiver and method names must match exactly.
    """

    def __init__(self, namespace: str, methods: Iterable[str]) -> None:
        self._namespace = namespace
        self._methods = frozenset(methods)

    @property
    def namespace(self) -> str:
        return self._namespace

    def is_wrapper_call(self, node: astroid.nodes.NodeNG) -> bool:
        if not isinstance(node, astroid.nodes.Call):
            return False
        func = node.func
        return (
            isinstance(func, astroid.nodes.Attribute)
            and isinstance(func.expr, astroid.nodes.Name)
            and func.expr.name == self._namespace
            and func.attrname in self._methods
        )

    def is_suppressed(self, node: astroid.nodes.NodeNG) -> bool:
        child = node
        parent = node.parent
        while parent is not None:
            if self.is_wrapper_call(parent) and self._entered_through_arguments(parent, child):
                return True
            child, parent = parent, parent.parent
        return False

    @staticmethod
    def _entered_through_arguments(
        call: astroid.nodes.Call, child: astroid.nodes.NodeNG
    ) -> bool:
        if any(arg is child for arg in call.args or []):
            return True
        return any(keyword is child for keyword in call.keywords or [])

    @staticmethod
    def is_handled_by_try(node: astroid.nodes.NodeNG) -> bool:
        """True if node runs inside a try body of its own function."""
        child = node
        parent = node.parent
        while parent is not None and not isinstance(parent, _FUNCTION_NODES):
            if isinstance(parent, (astroid.nodes.Try, astroid.nodes.TryStar)) and any(
                stmt is child for stmt in parent.body
            ):
                return True
            child, parent = parent, parent.parent
        return False


class ZoneClassifier:
    """Classifies source files: excluded from checking, or test code."""

    def __init__(self, exclude_paths: Iterable[str] = ()) -> None:
        self._exclude_paths = tuple(exclude_paths)

    @staticmethod
    def file_of(node: astroid.nodes.NodeNG) -> str:
        return getattr(node.root(), "file", None) or ""

    def is_excluded(self, node: astroid.nodes.NodeNG) -> bool:
        path = self.file_of(node)
        if not path or not self._exclude_paths:
            return False
        posix = PurePath(path).as_posix()
        return any(fnmatch(posix, pattern) for pattern in self._exclude_paths)

    @staticmethod
    def is_test_path(path: str) -> bool:
        """pytest naming: test_*.py, *_test.py, conftest.py, or under a tests directory."""
        if not path:
            return False
        pure = PurePath(path)
        name = pure.name
        if name in TEST_FILE_NAMES:
            return True
        if name.endswith(".py") and (
            name.startswith(TEST_FILE_PREFIX) or name.endswith(TEST_FILE_SUFFIX)
        ):
            return True
        return any(part in TEST_DIRECTORY_NAMES for part in pure.parts[:-1])

    def is_test_file(self, node: astroid.nodes.NodeNG) -> bool:
        return self.is_test_path(self.file_of(node))

import unittest
from unittest.mock import ANY, MagicMock

import astroid

from typesafe_lint.domain.config import ConfigurationLoader
from typesafe_lint.infrastructure.gateways.astroid_gateway import AstroidGateway
from typesafe_lint.infrastructure.services.guidance_service import GuidanceService
from typesafe_lint.use_cases.checks.optional_usage import OptionalUsageChecker
from tests.linter_test_utils import run_checker
from tests.unit.checker_test_utils import CheckerTestCase, parse_module


def make_checker(linter, config: dict[str, object] | None = None) -> OptionalUsageChecker:
    return OptionalUsageChecker(
        linter,
        source_reader=AstroidGateway(),
        config_loader=ConfigurationLoader(config or {}),
        registry=GuidanceService().get_registry(),
    )


class TestOptionalUsageChecker(unittest.TestCase, CheckerTestCase):
    def setUp(self) -> None:
        self.linter = MagicMock()
        self.checker = make_checker(self.linter)

    def test_msgs_come_from_registry(self) -> None:
        self.assertEqual(set(self.checker.msgs), {"W9501", "W9502", "W9503"})
        self.assertEqual(self.checker.msgs["W9502"][1], "use-optional-from-nullable")

    def test_nullable_return(self) -> None:
        module = parse_module("def find(key) -> str | None:\n    return None\n")
        function = next(module.nodes_of_class(astroid.nodes.FunctionDef))
        self.checker.visit_functiondef(function)
        self.assertAddsMessage(self.checker, "W9501", node=function.returns, args=ANY)

    def test_message_text_is_passed_as_argument(self) -> None:
        module = parse_module("x = items.pop()\n")
        call = next(module.nodes_of_class(astroid.nodes.Call))
        self.checker.visit_call(call)
        msg_id, _line, node, args = self.linter.add_message.call_args[0][:4]
        self.assertEqual(msg_id, "W9502")
        self.assertIs(node, call)
        self.assertEqual(len(args), 1)
        self.assertIn("optional.from_nullable()", args[0])

    def test_clean_code(self) -> None:
        module = parse_module("def add(a: int, b: int) -> int:\n    return a + b\n")
        for node in module.nodes_of_class((astroid.nodes.FunctionDef, astroid.nodes.Call)):
            if isinstance(node, astroid.nodes.FunctionDef):
                self.checker.visit_functiondef(node)
            else:
                self.checker.visit_call(node)
        self.assertNoMessages(self.checker)

    def test_configured_namespace(self) -> None:
        checker = make_checker(self.linter, {"optional_namespace": "maybe"})
        module = parse_module("x = maybe.from_nullable(items.pop())\n")
        for call in module.nodes_of_class(astroid.nodes.Call):
            checker.visit_call(call)
        self.assertNoMessages(checker)


class TestOptionalUsageCheckerWalk(unittest.TestCase):
    def test_walk_reports_every_shape(self) -> None:
        code = (
            "def lookup(key):\n"
            "    value: int | None = cache.get(key)\n"
            "    if value:\n"
            "        return value\n"
            "    return None\n"
            "fallback = lambda: None\n"
        )
        messages = run_checker(
            OptionalUsageChecker,
            code,
            source_reader=AstroidGateway(),
            config_loader=ConfigurationLoader({}),
            registry=GuidanceService().get_registry(),
        )
        self.assertEqual(sorted(messages), ["W9501", "W9501", "W9502", "W9503"])

    def test_excluded_path(self) -> None:
        messages = run_checker(
            OptionalUsageChecker,
            "x = items.pop()\n",
            filename="/project/src/gen/models.py",
            source_reader=AstroidGateway(),
            config_loader=ConfigurationLoader({"exclude_paths": ["*/gen/*"]}),
            registry=GuidanceService().get_registry(),
        )
        self.assertEqual(messages, [])

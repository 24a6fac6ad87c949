"""Optional usage checks (W9501, W9502, W9503)."""

from collections.abc import Mapping
from typing import TYPE_CHECKING

import astroid

if TYPE_CHECKING:
    from pylint.lint import PyLinter

from pylint.checkers import BaseChecker

from typesafe_lint.domain.config import ConfigurationLoader
from typesafe_lint.domain.protocols import SourceReaderProtocol
from typesafe_lint.domain.registry_types import RuleRegistryEntry
from typesafe_lint.domain.rule_msgs import RuleMsgBuilder
from typesafe_lint.domain.rules.optional_usage import OptionalUsageRule


class OptionalUsageChecker(BaseChecker):
    """W9501-W9503: None used for absence. Thin: delegates to OptionalUsageRule."""

    name: str = "typesafe-optional-usage"
    CODES = ["W9501", "W9502", "W9503"]

    def __init__(
        self,
        linter: "PyLinter",
        source_reader: SourceReaderProtocol,
        config_loader: ConfigurationLoader,
        registry: Mapping[str, RuleRegistryEntry],
    ) -> None:
        self.msgs = RuleMsgBuilder.build_msgs_for_codes(
            registry, self.CODES)  # type: ignore[assignment]
        super().__init__(linter)
        self.config_loader = config_loader
        self._rule = OptionalUsageRule(
            options=config_loader.optional_options,
            source_reader=source_reader,
            namespace=config_loader.optional_namespace,
            exclude_paths=config_loader.exclude_paths,
        )

    def _report(self, node: astroid.nodes.NodeNG) -> None:
        for finding in self._rule.check(node):
            self.add_message(
                finding.code,
                node=finding.node,
                args=(finding.message,),
            )

    def visit_functiondef(self, node: astroid.nodes.FunctionDef) -> None:
        """Delegate W9501 to domain rule."""
        self._report(node)

    visit_asyncfunctiondef = visit_functiondef

    def visit_lambda(self, node: astroid.nodes.Lambda) -> None:
        """Delegate W9501 (implicit lambda returns) to domain rule."""
        self._report(node)

    def visit_annassign(self, node: astroid.nodes.AnnAssign) -> None:
        """Delegate W9503 to domain rule."""
        self._report(node)

    def visit_call(self, node: astroid.nodes.Call) -> None:
        """Delegate W9502 to domain rule."""
        self._report(node)

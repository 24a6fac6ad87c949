"""Result usage checks (W9511, W9512, W9513, W9514)."""

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
from typesafe_lint.domain.rules.result_usage import ResultUsageRule


class ResultUsageChecker(BaseChecker):
    """W9511-W9514: exceptions used for failure. Thin: delegates to ResultUsageRule."""

    name: str = "typesafe-result-usage"
    CODES = ["W9511", "W9512", "W9513", "W9514"]

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
        self._rule = ResultUsageRule(
            options=config_loader.result_options,
            source_reader=source_reader,
            namespace=config_loader.result_namespace,
            exclude_paths=config_loader.exclude_paths,
        )

    def _report(self, node: astroid.nodes.NodeNG) -> None:
        for finding in self._rule.check(node):
            self.add_message(
                finding.code,
                node=finding.node,
                args=(finding.message,),
            )

    def visit_raise(self, node: astroid.nodes.Raise) -> None:
        """Delegate W9511 to domain rule."""
        self._report(node)

    def visit_try(self, node: astroid.nodes.Try) -> None:
        """Delegate W9512 to domain rule."""
        self._report(node)

    visit_trystar = visit_try

    def visit_call(self, node: astroid.nodes.Call) -> None:
        """Delegate W9513/W9514 to domain rule."""
        self._report(node)

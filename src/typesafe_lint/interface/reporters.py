"""Protocol for finding reporting - no infrastructure imports."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from typesafe_lint.domain.entities import AnalysisReport, FixOutcome


class FindingReporter(Protocol):
    """Protocol for reporting analysis and fix results."""

    def report_findings(self, report: "AnalysisReport") -> None:
        """One line per finding: path:line:col: CODE message [fixable]."""
        ...

    def report_fixes(self, outcomes: "list[FixOutcome]") -> None:
        ...

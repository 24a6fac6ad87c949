"""Use Case: Apply Fixes - write the attached text edits back to source files."""

from collections.abc import Sequence

from typesafe_lint.domain.entities import AnalysisReport, FileFindings, FixOutcome
from typesafe_lint.domain.protocols import FixerGatewayProtocol
from typesafe_lint.domain.rules import TextEdit


class ApplyFixesUseCase:
    """
    Apply every attached fix of an analysis report.

    Edits of one file must not overlap. When two fixes nest (a raising call
    inside a raise statement), the one starting first wins and the other is
    skipped; running the fix again picks it up from the rewritten source.
    """

    def __init__(self, fixer_gateway: FixerGatewayProtocol) -> None:
        self.fixer_gateway = fixer_gateway

    def execute(self, report: AnalysisReport) -> list[FixOutcome]:
        outcomes: list[FixOutcome] = []
        for file_findings in report.files:
            if not file_findings.fixable:
                continue
            outcomes.append(self.fix_file(file_findings))
        return outcomes

    def fix_file(self, file_findings: FileFindings) -> FixOutcome:
        edits = [f.fix for f in file_findings.fixable if f.fix is not None]
        selected = ApplyFixesUseCase.select_non_overlapping(edits)
        modified = self.fixer_gateway.apply_fixes(file_findings.path, selected)
        return FixOutcome(
            path=file_findings.path,
            applied=len(selected) if modified else 0,
            skipped=len(edits) - len(selected),
            modified=modified,
        )

    @staticmethod
    def select_non_overlapping(edits: Sequence[TextEdit]) -> list[TextEdit]:
        """Greedy pick in source order; outer spans sort before the spans they contain."""
        ordered = sorted(
            edits,
            key=lambda e: (e.lineno, e.col_offset, -e.end_lineno, -e.end_col_offset),
        )
        selected: list[TextEdit] = []
        for edit in ordered:
            if any(edit.overlaps(kept) for kept in selected):
                continue
            selected.append(edit)
        return selected

"""Terminal reporter for analysis and fix results."""

import typer

from typesafe_lint.domain.entities import AnalysisReport, FixOutcome
from typesafe_lint.domain.rules import Finding
from typesafe_lint.infrastructure.services.guidance_service import GuidanceService
from typesafe_lint.interface.reporters import FindingReporter


class TerminalReporter(FindingReporter):
    """Writes results with typer.echo; colour only when attached to a terminal."""

    def __init__(self, guidance: GuidanceService | None = None) -> None:
        self._guidance = guidance

    @staticmethod
    def format_finding(finding: Finding) -> str:
        line = f"{finding.location}: {finding.code} {finding.message}"
        if finding.fixable:
            line += " [fixable]"
        return line

    def report_findings(self, report: AnalysisReport) -> None:
        for path in report.unparsed:
            typer.secho(f"{path}: skipped, file could not be parsed", fg=typer.colors.YELLOW, err=True)
        for finding in report.findings:
            typer.echo(self.format_finding(finding))
        self._report_manual_steps(report.findings)
        findings = report.findings
        if not findings:
            typer.secho("No findings.", fg=typer.colors.GREEN)
            return
        fixable = sum(1 for f in findings if f.fixable)
        typer.secho(
            f"{len(findings)} finding(s), {fixable} fixable with 'typesafe-lint fix'.",
            fg=typer.colors.RED,
        )

    def _report_manual_steps(self, findings: tuple[Finding, ...]) -> None:
        """Registry guidance, once per rule, for findings the fix command cannot handle."""
        if self._guidance is None:
            return
        codes = list(dict.fromkeys(f.code for f in findings if not f.fixable))
        steps = [(code, self._guidance.get_manual_instructions(code)) for code in codes]
        steps = [(code, text) for code, text in steps if text]
        if not steps:
            return
        typer.echo("Fix by hand:")
        for code, text in steps:
            typer.echo(f"  {code}: {text}")

    def report_fixes(self, outcomes: list[FixOutcome]) -> None:
        modified = [o for o in outcomes if o.modified]
        for outcome in modified:
            typer.echo(f"{outcome.path}: applied {outcome.applied} fix(es)")
        for outcome in outcomes:
            if not outcome.modified:
                typer.secho(f"{outcome.path}: not modified", fg=typer.colors.YELLOW, err=True)
            if outcome.skipped:
                typer.secho(
                    f"{outcome.path}: {outcome.skipped} overlapping fix(es) left for the next run",
                    fg=typer.colors.YELLOW,
                )
        typer.secho(f"Modified {len(modified)} file(s).", fg=typer.colors.GREEN)

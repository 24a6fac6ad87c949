"""Result entities passed from use cases to the interface layer."""

from dataclasses import dataclass, field

from typesafe_lint.domain.rules import Finding


@dataclass(frozen=True)
class FileFindings:
    """Findings of one source file, in visiting order."""

    path: str
    findings: tuple[Finding, ...] = ()
    parsed: bool = True

    @property
    def fixable(self) -> tuple[Finding, ...]:
        return tuple(f for f in self.findings if f.fix is not None)


@dataclass(frozen=True)
class FixOutcome:
    """What a fix run did to one file."""

    path: str
    applied: int
    skipped: int
    modified: bool


@dataclass(frozen=True)
class AnalysisReport:
    files: tuple[FileFindings, ...] = field(default_factory=tuple)

    @property
    def findings(self) -> tuple[Finding, ...]:
        return tuple(f for report in self.files for f in report.findings)

    @property
    def unparsed(self) -> tuple[str, ...]:
        return tuple(report.path for report in self.files if not report.parsed)

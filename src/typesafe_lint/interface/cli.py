"""CLI entry points for typesafe-lint - Thin Controller using Typer."""

from dataclasses import dataclass
from pathlib import Path

import typer

from typesafe_lint.interface.reporters import FindingReporter
from typesafe_lint.use_cases.analyze_files import AnalyzeFilesUseCase
from typesafe_lint.use_cases.apply_fixes import ApplyFixesUseCase


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    analyze_files: AnalyzeFilesUseCase
    apply_fixes: ApplyFixesUseCase
    reporter: FindingReporter


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_target_paths(paths: list[Path] | None) -> list[str]:
        """Explicit paths, else src/ if it exists, else '.'."""
        if paths:
            return [str(p) for p in paths]
        src_dir = Path.cwd() / "src"
        if src_dir.is_dir():
            return [str(src_dir)]
        return ["."]

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="typesafe-lint",
            help="Flag None-able results and raise/try error handling; rewrite them to optional/result.",
            add_completion=False,
        )

        @app.command()
        def check(
            paths: list[Path] | None = typer.Argument(None, help="Files or directories (default: src/ or .)"),  # noqa: B008
        ) -> None:
            """Report findings. Exits 1 when any finding exists."""
            report = deps.analyze_files.execute(CLIAppFactory.resolve_target_paths(paths))
            deps.reporter.report_findings(report)
            if report.findings:
                raise typer.Exit(code=1)

        @app.command()
        def fix(
            paths: list[Path] | None = typer.Argument(None, help="Files or directories (default: src/ or .)"),  # noqa: B008
        ) -> None:
            """Apply every attached fix in place."""
            report = deps.analyze_files.execute(CLIAppFactory.resolve_target_paths(paths))
            outcomes = deps.apply_fixes.execute(report)
            deps.reporter.report_fixes(outcomes)

        return app

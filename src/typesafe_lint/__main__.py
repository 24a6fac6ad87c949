"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import logging

from typesafe_lint.infrastructure.di.container import TypesafeContainer
from typesafe_lint.infrastructure.reporters import TerminalReporter
from typesafe_lint.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    container = TypesafeContainer()
    deps = CLIDependencies(
        analyze_files=container.get_analyze_files_use_case(),
        apply_fixes=container.get_apply_fixes_use_case(),
        reporter=TerminalReporter(container.get_guidance_service()),
    )
    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()

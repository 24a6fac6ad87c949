"""
Pylint plugin entry point - composition root for the checker plugin.
Lives in infrastructure as it creates the container and wires dependencies.
"""

from pylint.lint import PyLinter

from typesafe_lint.infrastructure.di.container import TypesafeContainer
from typesafe_lint.use_cases.checks.optional_usage import OptionalUsageChecker
from typesafe_lint.use_cases.checks.result_usage import ResultUsageChecker


def register(linter: PyLinter) -> None:
    """Register checkers."""
    container = TypesafeContainer.get_instance()
    config_loader = container.get_config_loader()
    source_reader = container.get_astroid_gateway()
    registry = container.get_guidance_service().get_registry()

    linter.register_checker(OptionalUsageChecker(
        linter, source_reader=source_reader, config_loader=config_loader, registry=registry))
    linter.register_checker(ResultUsageChecker(
        linter, source_reader=source_reader, config_loader=config_loader, registry=registry))

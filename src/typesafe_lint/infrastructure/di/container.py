from typing import Any, Optional, TypeVar, cast

from typesafe_lint.domain.config import ConfigurationLoader
from typesafe_lint.domain.rules.optional_usage import OptionalUsageRule
from typesafe_lint.domain.rules.result_usage import ResultUsageRule
from typesafe_lint.infrastructure.config_file_loader import ConfigFileLoader
from typesafe_lint.infrastructure.gateways.astroid_gateway import AstroidGateway
from typesafe_lint.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from typesafe_lint.infrastructure.gateways.libcst_fixer_gateway import LibCSTFixerGateway
from typesafe_lint.infrastructure.services.guidance_service import GuidanceService
from typesafe_lint.use_cases.analyze_files import AnalyzeFilesUseCase
from typesafe_lint.use_cases.apply_fixes import ApplyFixesUseCase

T = TypeVar("T")


class TypesafeContainer:
    """Dependency Injection Container for typesafe-lint."""

    _instance: Optional["TypesafeContainer"] = None

    def __init__(self, config_loader: ConfigurationLoader | None = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config_loader)

    def _register_defaults(self, config_loader: ConfigurationLoader | None) -> None:
        """Register default implementations for protocols."""
        if config_loader is None:
            config_loader = ConfigurationLoader(ConfigFileLoader.load_config_from_fs())
        self.register_singleton("ConfigurationLoader", config_loader)
        self.register_singleton("AstroidGateway", AstroidGateway())
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("LibCSTFixerGateway", LibCSTFixerGateway())
        self.register_singleton("GuidanceService", GuidanceService())

    @classmethod
    def get_instance(cls) -> "TypesafeContainer":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None

    def register_singleton(self, key: str, instance: Any) -> None:
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        if key not in self._singletons:
            raise KeyError(f"Dependency {key} not registered")
        return self._singletons[key]

    def get_typed(self, key: str, _type: type[T]) -> T:
        return cast(T, self.get(key))

    def get_config_loader(self) -> ConfigurationLoader:
        return self.get_typed("ConfigurationLoader", ConfigurationLoader)

    def get_astroid_gateway(self) -> AstroidGateway:
        return self.get_typed("AstroidGateway", AstroidGateway)

    def get_guidance_service(self) -> GuidanceService:
        return self.get_typed("GuidanceService", GuidanceService)

    def get_rules(self) -> tuple[OptionalUsageRule, ResultUsageRule]:
        """Both rule profiles, built from the run's configuration."""
        config_loader = self.get_config_loader()
        source_reader = self.get_astroid_gateway()
        return (
            OptionalUsageRule(
                options=config_loader.optional_options,
                source_reader=source_reader,
                namespace=config_loader.optional_namespace,
                exclude_paths=config_loader.exclude_paths,
            ),
            ResultUsageRule(
                options=config_loader.result_options,
                source_reader=source_reader,
                namespace=config_loader.result_namespace,
                exclude_paths=config_loader.exclude_paths,
            ),
        )

    def get_analyze_files_use_case(self) -> AnalyzeFilesUseCase:
        return AnalyzeFilesUseCase(
            source_reader=self.get_astroid_gateway(),
            filesystem=self.get_typed("FileSystemGateway", FileSystemGateway),
            rules=self.get_rules(),
        )

    def get_apply_fixes_use_case(self) -> ApplyFixesUseCase:
        return ApplyFixesUseCase(
            fixer_gateway=self.get_typed("LibCSTFixerGateway", LibCSTFixerGateway),
        )

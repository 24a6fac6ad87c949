"""Configuration loader for rule settings. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from typesafe_lint.domain.constants import DEFAULT_OPTIONAL_NAMESPACE, DEFAULT_RESULT_NAMESPACE

# snake_case key -> accepted camelCase alias
_OPTION_ALIASES: dict[str, str] = {
    "allow_exceptions": "allowExceptions",
    "auto_fix": "autoFix",
    "allow_test_files": "allowTestFiles",
}


@dataclass(frozen=True)
class RuleOptions:
    """Per-rule options; resolved once per run."""

    allow_exceptions: tuple[str, ...] = ()
    auto_fix: bool = True
    allow_test_files: bool = True


class ConfigurationLoader:
    """
    Immutable configuration for rule settings.

    Created by Infrastructure from the [tool.typesafe-lint] table. Domain does not
    read the filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict) at composition root.
    Invalid values are reported with logging.warning and replaced by defaults.
    """

    def __init__(self, config_dict: dict[str, object]) -> None:
        """Set config once at construction. No mutable class or instance state after init."""
        self._config = config_dict
        self._optional_options = self._rule_options("optional", allows_test_files=False)
        self._result_options = self._rule_options("result", allows_test_files=True)

    @property
    def optional_namespace(self) -> str:
        return self._identifier("optional_namespace", DEFAULT_OPTIONAL_NAMESPACE)

    @property
    def result_namespace(self) -> str:
        return self._identifier("result_namespace", DEFAULT_RESULT_NAMESPACE)

    @property
    def exclude_paths(self) -> list[str]:
        """Glob patterns of files that produce no findings."""
        raw = self._config.get("exclude_paths", [])
        if isinstance(raw, list):
            return [str(x) for x in raw if isinstance(x, str)]
        logging.warning("Configuration Warning: 'exclude_paths' must be a list of strings.")
        return []

    @property
    def optional_options(self) -> RuleOptions:
        return self._optional_options

    @property
    def result_options(self) -> RuleOptions:
        return self._result_options

    def _identifier(self, key: str, default: str) -> str:
        raw = self._config.get(key, default)
        if isinstance(raw, str) and raw.isidentifier():
            return raw
        logging.warning(
            "Configuration Warning: '%s' must be a Python identifier; using '%s'.", key, default
        )
        return default

    def _rule_options(self, section: str, *, allows_test_files: bool) -> RuleOptions:
        raw = self._config.get(section, {})
        if not isinstance(raw, dict):
            logging.warning("Configuration Warning: '%s' must be a table; using defaults.", section)
            raw = {}
        defaults = RuleOptions()

        exceptions = ConfigurationLoader._lookup(raw, "allow_exceptions", [])
        if not isinstance(exceptions, list) or not all(isinstance(x, str) for x in exceptions):
            logging.warning(
                "Configuration Warning: '%s.allow_exceptions' must be a list of strings.", section
            )
            exceptions = list(defaults.allow_exceptions)

        auto_fix = ConfigurationLoader._lookup(raw, "auto_fix", defaults.auto_fix)
        if not isinstance(auto_fix, bool):
            logging.warning("Configuration Warning: '%s.auto_fix' must be a boolean.", section)
            auto_fix = defaults.auto_fix

        allow_test_files = defaults.allow_test_files
        if allows_test_files:
            allow_test_files = ConfigurationLoader._lookup(
                raw, "allow_test_files", defaults.allow_test_files
            )
            if not isinstance(allow_test_files, bool):
                logging.warning(
                    "Configuration Warning: '%s.allow_test_files' must be a boolean.", section
                )
                allow_test_files = defaults.allow_test_files

        return RuleOptions(
            allow_exceptions=tuple(exceptions),
            auto_fix=auto_fix,
            allow_test_files=allow_test_files,
        )

    @staticmethod
    def _lookup(raw: dict[str, object], key: str, default: object) -> object:
        """snake_case key first, then its camelCase alias."""
        if key in raw:
            return raw[key]
        return raw.get(_OPTION_ALIASES[key], default)

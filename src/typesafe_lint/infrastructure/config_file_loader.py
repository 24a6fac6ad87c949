"""Load [tool.typesafe-lint] from pyproject.toml. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

TOOL_SECTION_NAMES: tuple[str, ...] = ("typesafe-lint", "typesafe_lint")


class ConfigFileLoader:
    """Loads config from the nearest pyproject.toml."""

    @staticmethod
    def load_config_from_fs(
        start: Path | None = None,
    ) -> dict[str, object]:
        """Return the [tool.typesafe-lint] table of the nearest pyproject.toml, or {}."""
        current_path = (start or Path.cwd()).resolve()
        while True:
            config_file = current_path / "pyproject.toml"
            if config_file.is_file():
                try:
                    with config_file.open("rb") as f:
                        data = toml_lib.load(f)
                except (OSError, toml_lib.TOMLDecodeError) as exc:
                    logging.warning("Configuration Warning: cannot read %s: %s", config_file, exc)
                    return {}
                tool_section = data.get("tool", {}) or {}
                for name in TOOL_SECTION_NAMES:
                    section = tool_section.get(name)
                    if isinstance(section, dict):
                        return section
                return {}
            if current_path.parent == current_path:
                return {}
            current_path = current_path.parent

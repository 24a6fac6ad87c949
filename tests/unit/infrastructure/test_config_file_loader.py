from pathlib import Path

from typesafe_lint.infrastructure.config_file_loader import ConfigFileLoader


def write_pyproject(directory: Path, text: str) -> None:
    (directory / "pyproject.toml").write_text(text, encoding="utf-8")


class TestLoadConfigFromFs:
    def test_reads_own_table_only(self, tmp_path: Path) -> None:
        write_pyproject(
            tmp_path,
            '[tool.typesafe-lint]\nresult_namespace = "res"\n\n[tool.other]\nx = 1\n',
        )
        assert ConfigFileLoader.load_config_from_fs(tmp_path) == {"result_namespace": "res"}

    def test_underscore_section_name(self, tmp_path: Path) -> None:
        write_pyproject(tmp_path, "[tool.typesafe_lint.result]\nauto_fix = false\n")
        assert ConfigFileLoader.load_config_from_fs(tmp_path) == {"result": {"auto_fix": False}}

    def test_walks_up_to_nearest_pyproject(self, tmp_path: Path) -> None:
        write_pyproject(tmp_path, '[tool.typesafe-lint]\nexclude_paths = ["*/gen/*"]\n')
        nested = tmp_path / "src" / "pkg"
        nested.mkdir(parents=True)
        assert ConfigFileLoader.load_config_from_fs(nested) == {"exclude_paths": ["*/gen/*"]}

    def test_pyproject_without_section(self, tmp_path: Path) -> None:
        write_pyproject(tmp_path, '[project]\nname = "demo"\n')
        assert ConfigFileLoader.load_config_from_fs(tmp_path) == {}

    def test_invalid_toml_is_logged(self, tmp_path: Path, caplog) -> None:
        write_pyproject(tmp_path, "[tool.typesafe-lint\n")
        assert ConfigFileLoader.load_config_from_fs(tmp_path) == {}
        assert "cannot read" in caplog.text

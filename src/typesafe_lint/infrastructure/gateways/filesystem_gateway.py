"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from pathlib import Path

from typesafe_lint.domain.protocols import FileSystemProtocol

# Directories that never hold project sources.
_SKIPPED_DIRECTORIES: frozenset[str] = frozenset(
    {".git", ".hg", ".venv", "venv", "__pycache__", ".tox", ".nox", "node_modules", "build", "dist"}
)


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def glob_python_files(self, path: str) -> list[str]:
        """Get all Python files in path (recursive if directory)."""
        path_obj = Path(path).resolve()
        if path_obj.is_dir():
            return [
                str(p)
                for p in path_obj.glob("**/*.py")
                if not _SKIPPED_DIRECTORIES.intersection(p.relative_to(path_obj).parts[:-1])
            ]
        return [str(path_obj)] if path_obj.suffix == ".py" and path_obj.is_file() else []

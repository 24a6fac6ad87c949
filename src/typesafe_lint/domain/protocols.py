"""Ports implemented by infrastructure gateways. Domain code depends only on these."""

from pathlib import Path
from typing import Protocol

import astroid

from typesafe_lint.domain.rules import TextEdit


class SourceReaderProtocol(Protocol):
    """Reads parsed modules and the exact source text behind nodes."""

    def parse_file(self, file_path: str | Path) -> astroid.nodes.Module | None:
        """Parse a file; None when it cannot be read or parsed."""
        ...

    def get_source_segment(self, node: astroid.nodes.NodeNG) -> str:
        """Original source text spanned by node."""
        ...


class FixerGatewayProtocol(Protocol):
    """Applies text edits to files on disk."""

    def apply_fixes(self, file_path: str | Path, edits: list[TextEdit]) -> bool:
        """Apply all edits to one file. True if the file was modified."""
        ...


class FileSystemProtocol(Protocol):
    """Discovers source files."""

    def glob_python_files(self, path: str) -> list[str]:
        """All Python files in path (recursive if directory)."""
        ...

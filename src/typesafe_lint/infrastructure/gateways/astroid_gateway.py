"""Astroid gateway: parses files and reads the source text behind nodes."""

import logging
from pathlib import Path

import astroid

from typesafe_lint.domain.protocols import SourceReaderProtocol

logger = logging.getLogger(__name__)


class AstroidGateway(SourceReaderProtocol):
    """Source access for the rules and the file walker."""

    def parse_file(self, file_path: str | Path) -> astroid.nodes.Module | None:
        """Parse a file and return the astroid Module node, or None if it is unusable."""
        path = Path(file_path)
        try:
            source = path.read_text(encoding="utf-8")
            return astroid.parse(source, module_name=path.stem, path=str(path))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s: %s", path, exc)
        except astroid.AstroidSyntaxError as exc:
            logger.warning("Cannot parse %s: %s", path, exc)
        return None

    def get_source_segment(self, node: astroid.nodes.NodeNG) -> str:
        """
        Exact source text of node, as written.

        Column offsets are UTF-8 byte offsets, so slicing happens on bytes.
        Falls back to astroid's regenerated text when no source is available.
        """
        lineno = node.lineno
        end_lineno = node.end_lineno
        col_offset = node.col_offset
        end_col_offset = node.end_col_offset
        if None in (lineno, end_lineno, col_offset, end_col_offset):
            return node.as_string()
        stream = node.root().stream()
        if stream is None:
            return node.as_string()
        with stream:
            lines = stream.read().splitlines(keepends=True)
        if end_lineno > len(lines):
            logger.debug("Source of %s is shorter than its node positions", node.root().name)
            return node.as_string()
        if lineno == end_lineno:
            segment = lines[lineno - 1][col_offset:end_col_offset]
        else:
            segment = (
                lines[lineno - 1][col_offset:]
                + b"".join(lines[lineno:end_lineno - 1])
                + lines[end_lineno - 1][:end_col_offset]
            )
        return segment.decode("utf-8")

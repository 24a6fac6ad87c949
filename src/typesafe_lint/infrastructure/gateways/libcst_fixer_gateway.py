"""LibCST based Fixer Gateway."""

import logging
from pathlib import Path

import libcst as cst

from typesafe_lint.domain.protocols import FixerGatewayProtocol
from typesafe_lint.domain.rules import TextEdit

logger = logging.getLogger(__name__)


class LibCSTFixerGateway(FixerGatewayProtocol):
    """Gateway for applying text edits, verified with LibCST before writing."""

    def apply_fixes(self, file_path: str | Path, edits: list[TextEdit]) -> bool:
        """
        Apply a list of edits to a file.

        Args:
            file_path: Path to the file to modify
            edits: Non-overlapping edits whose positions refer to the file's current text

        Returns:
            True if the file was modified, False otherwise

        Raises:
            ValueError: if two edits overlap.
        """
        if not edits:
            return False
        LibCSTFixerGateway._reject_overlaps(edits)
        path = Path(file_path)
        try:
            original = path.read_bytes()
            updated = LibCSTFixerGateway.apply_to_source(original, edits)
            # Never write a file that no longer parses.
            cst.parse_module(updated.decode("utf-8"))
            # The parser accepts `return` anywhere; the compiler does not.
            compile(updated, str(path), "exec", dont_inherit=True)
            if updated == original:
                return False
            path.write_bytes(updated)
            return True
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot apply fixes to %s: %s", path, exc)
        except (cst.ParserSyntaxError, SyntaxError) as exc:
            logger.warning("Fixes for %s would produce invalid code, skipped: %s", path, exc)
        return False

    @staticmethod
    def apply_to_source(source: bytes, edits: list[TextEdit]) -> bytes:
        """Splice the edits into source, last edit first so earlier offsets stay valid."""
        line_starts = LibCSTFixerGateway._line_starts(source)
        result = source
        for edit in sorted(edits, key=lambda e: (e.lineno, e.col_offset), reverse=True):
            start = line_starts[edit.lineno - 1] + edit.col_offset
            end = line_starts[edit.end_lineno - 1] + edit.end_col_offset
            result = result[:start] + edit.replacement.encode("utf-8") + result[end:]
        return result

    @staticmethod
    def _line_starts(source: bytes) -> list[int]:
        starts = [0]
        for line in source.splitlines(keepends=True):
            starts.append(starts[-1] + len(line))
        return starts

    @staticmethod
    def _reject_overlaps(edits: list[TextEdit]) -> None:
        ordered = sorted(edits, key=lambda e: (e.lineno, e.col_offset))
        for previous, current in zip(ordered, ordered[1:]):
            if previous.overlaps(current):
                raise ValueError(
                    f"Overlapping edits at {previous.lineno}:{previous.col_offset} "
                    f"and {current.lineno}:{current.col_offset}"
                )

"""Use Case: Analyze Files - run both rules over every node of every source file."""

from collections.abc import Iterator, Sequence

import astroid

from typesafe_lint.domain.entities import AnalysisReport, FileFindings
from typesafe_lint.domain.protocols import FileSystemProtocol, SourceReaderProtocol
from typesafe_lint.domain.rules import Checkable, Finding


class AnalyzeFilesUseCase:
    """Walk parsed modules the way pylint visits them and collect findings."""

    def __init__(
        self,
        source_reader: SourceReaderProtocol,
        filesystem: FileSystemProtocol,
        rules: Sequence[Checkable],
    ) -> None:
        self.source_reader = source_reader
        self.filesystem = filesystem
        self.rules = tuple(rules)

    def execute(self, paths: Sequence[str]) -> AnalysisReport:
        """Analyze every Python file under the given paths, each file once."""
        seen: set[str] = set()
        reports: list[FileFindings] = []
        for path in paths:
            for file_path in sorted(self.filesystem.glob_python_files(path)):
                if file_path in seen:
                    continue
                seen.add(file_path)
                reports.append(self.analyze_file(file_path))
        return AnalysisReport(files=tuple(reports))

    def analyze_file(self, file_path: str) -> FileFindings:
        module = self.source_reader.parse_file(file_path)
        if module is None:
            return FileFindings(path=file_path, parsed=False)
        return FileFindings(path=file_path, findings=tuple(self.analyze_module(module)))

    def analyze_module(self, module: astroid.nodes.Module) -> list[Finding]:
        findings: list[Finding] = []
        for node in AnalyzeFilesUseCase.walk(module):
            for rule in self.rules:
                findings.extend(rule.check(node))
        return findings

    @staticmethod
    def walk(root: astroid.nodes.NodeNG) -> Iterator[astroid.nodes.NodeNG]:
        """Pre-order traversal in source order, without recursion."""
        stack = [root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(list(node.get_children())))

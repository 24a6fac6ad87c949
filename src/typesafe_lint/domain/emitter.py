"""Finding and autofix emission."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from typesafe_lint.domain.constants import PLACEHOLDER_TYPE
from typesafe_lint.domain.rules import Finding, Match, PatternKind, TextEdit

FixBuilder = Callable[[Match], str | None]
"""Returns the replacement text for match.node, or None when no safe rewrite exists."""

# Changing a declared type would silently change every caller's contract.
NEVER_FIXABLE: frozenset[PatternKind] = frozenset(
    {PatternKind.NULLABLE_RETURN_TYPE, PatternKind.NULLABLE_VARIABLE_TYPE}
)


@dataclass(frozen=True)
class MessageSpec:
    """Stable message id, pylint code, and a str.format template."""

    message_id: str
    code: str
    template: str

    def render(self, *, namespace: str, type_hint: str) -> str:
        return self.template.format(namespace=namespace, type=type_hint)


class FindingEmitter:
    """Turns confirmed matches into findings, attaching at most one fix each."""

    def __init__(
        self,
        namespace: str,
        messages: Mapping[str, MessageSpec],
        fix_builders: Mapping[PatternKind, FixBuilder],
    ) -> None:
        self._namespace = namespace
        self._messages = dict(messages)
        self._fix_builders = {
            kind: builder for kind, builder in fix_builders.items() if kind not in NEVER_FIXABLE
        }

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(spec.code for spec in self._messages.values())

    def emit(self, match: Match, fixes_enabled: bool) -> Finding:
        spec = self._messages[match.message_id]
        type_hint = match.type_hint or PLACEHOLDER_TYPE
        return Finding.from_node(
            kind=match.kind,
            code=spec.code,
            message_id=spec.message_id,
            message=spec.render(namespace=self._namespace, type_hint=type_hint),
            node=match.anchor,
            message_args=(type_hint,) if match.type_hint is not None else (),
            fix=self._build_fix(match) if fixes_enabled else None,
        )

    def _build_fix(self, match: Match) -> TextEdit | None:
        builder = self._fix_builders.get(match.kind)
        if builder is None:
            return None
        replacement = builder(match)
        if replacement is None:
            return None
        return TextEdit.replacing(match.node, replacement)

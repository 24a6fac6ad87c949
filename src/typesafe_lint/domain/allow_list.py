"""Exception list: function names exempt from a rule, as literals or `*` globs."""

import re
from collections.abc import Iterable

WILDCARD: str = "*"


class AllowList:
    """
    Matches names against user-configured exception rules.

    Glob rules are anchored: `get*` matches `getUser` but not `forget`.
    Compiled patterns are cached per instance, keyed by the rule text.
    """

    def __init__(self, rules: Iterable[str] = ()) -> None:
        self._rules: tuple[str, ...] = tuple(r for r in rules if isinstance(r, str))
        self._compiled: dict[str, re.Pattern[str]] = {}

    @property
    def rules(self) -> tuple[str, ...]:
        return self._rules

    def is_excepted(self, name: str) -> bool:
        """True if any rule matches the name."""
        return any(self._matches(rule, name) for rule in self._rules)

    def _matches(self, rule: str, name: str) -> bool:
        if WILDCARD not in rule:
            # Anonymous functions have no name to compare against.
            return bool(name) and rule == name
        return self._pattern(rule).fullmatch(name) is not None

    def _pattern(self, rule: str) -> re.Pattern[str]:
        pattern = self._compiled.get(rule)
        if pattern is None:
            body = ".*".join(re.escape(part) for part in rule.split(WILDCARD))
            pattern = re.compile(f"^{body}$", re.DOTALL)
            self._compiled[rule] = pattern
        return pattern

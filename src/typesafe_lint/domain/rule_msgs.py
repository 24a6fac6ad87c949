"""
Pylint message tables for the typesafe rules, built from the parsed rule registry.

The registry is handed in already loaded, so this module stays free of file access.
"""

from collections.abc import Mapping
from typing import cast

from typesafe_lint.domain.constants import TYPESAFE_PREFIX
from typesafe_lint.domain.registry_types import RuleRegistryEntry


class RuleMsgBuilder:
    """Lookups over `typesafe.<code>` registry entries."""

    @staticmethod
    def get_entry(
        registry: Mapping[str, RuleRegistryEntry], rule_code: str
    ) -> RuleRegistryEntry | None:
        """
        Find the entry for W95xx, a pylint symbol (`no-raise-statement`) or a
        message id (`noThrowStatement`). The entry is a copy.
        """
        entry = registry.get(f"{TYPESAFE_PREFIX}{rule_code}")
        if isinstance(entry, dict):
            return cast(RuleRegistryEntry, dict(entry))
        candidates = (
            candidate
            for key, candidate in registry.items()
            if key.startswith(TYPESAFE_PREFIX) and isinstance(candidate, dict)
        )
        for candidate in candidates:
            if rule_code in (candidate.get("symbol"), candidate.get("message_id")):
                return cast(RuleRegistryEntry, dict(candidate))
        return None

    @staticmethod
    def build_msgs_for_codes(
        registry: Mapping[str, RuleRegistryEntry], codes: list[str]
    ) -> dict[str, tuple[str, str, str]]:
        """
        `msgs` table of a checker: code -> (template, symbol, description).

        Codes without an entry or without a message_template are left out, and
        pylint then refuses to emit them.
        """
        msgs: dict[str, tuple[str, str, str]] = {}
        for code in codes:
            entry = RuleMsgBuilder.get_entry(registry, code) or {}
            template = entry.get("message_template")
            if not template:
                continue
            description = entry.get("display_name") or entry.get("short_description") or code
            msgs[code] = (str(template), str(entry.get("symbol") or code), str(description))
        return msgs

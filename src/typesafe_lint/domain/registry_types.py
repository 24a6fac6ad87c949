from typing import TypedDict


class RuleRegistryEntry(TypedDict, total=False):
    rule_id: str
    symbol: str
    message_id: str
    display_name: str
    short_description: str
    message_template: str
    manual_instructions: str
    references: list[str]

import unittest

from typesafe_lint.domain.allow_list import AllowList


class TestAllowList(unittest.TestCase):
    def test_prefix_glob(self) -> None:
        allow_list = AllowList(["get*"])
        self.assertTrue(allow_list.is_excepted("getUser"))
        self.assertTrue(allow_list.is_excepted("getById"))
        self.assertFalse(allow_list.is_excepted("fetchUser"))

    def test_globs_are_anchored(self) -> None:
        allow_list = AllowList(["get*"])
        self.assertFalse(allow_list.is_excepted("forget"))
        self.assertFalse(allow_list.is_excepted("target_getter"))

    def test_empty_configuration_excepts_nothing(self) -> None:
        allow_list = AllowList()
        self.assertFalse(allow_list.is_excepted("getUser"))
        self.assertFalse(allow_list.is_excepted(""))

    def test_literal_rule_needs_equality(self) -> None:
        allow_list = AllowList(["parse"])
        self.assertTrue(allow_list.is_excepted("parse"))
        self.assertFalse(allow_list.is_excepted("parse_args"))

    def test_empty_name_only_matches_wildcards(self) -> None:
        self.assertFalse(AllowList([""]).is_excepted(""))
        self.assertTrue(AllowList(["*"]).is_excepted(""))

    def test_regex_metacharacters_are_literal(self) -> None:
        allow_list = AllowList(["load.*"])
        self.assertTrue(allow_list.is_excepted("load.config"))
        self.assertFalse(allow_list.is_excepted("loadXconfig"))

    def test_infix_and_suffix_wildcards(self) -> None:
        allow_list = AllowList(["*_unsafe", "try*parse"])
        self.assertTrue(allow_list.is_excepted("read_unsafe"))
        self.assertTrue(allow_list.is_excepted("try_int_parse"))
        self.assertFalse(allow_list.is_excepted("try_int_parser"))

    def test_pattern_compiled_once_per_rule(self) -> None:
        allow_list = AllowList(["get*"])
        allow_list.is_excepted("getA")
        first = allow_list._compiled["get*"]
        allow_list.is_excepted("getB")
        self.assertIs(allow_list._compiled["get*"], first)
        self.assertEqual(list(allow_list._compiled), ["get*"])

    def test_non_string_rules_are_ignored(self) -> None:
        allow_list = AllowList(["get*", 3])  # type: ignore[list-item]
        self.assertEqual(allow_list.rules, ("get*",))

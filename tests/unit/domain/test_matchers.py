import unittest

import astroid

from typesafe_lint.domain.matchers import ShapeMatcher


def annotation_of(code: str) -> astroid.nodes.NodeNG:
    return astroid.extract_node(code).annotation


class TestNullableAnnotation(unittest.TestCase):
    def test_pep604_union_with_none(self) -> None:
        self.assertTrue(ShapeMatcher.is_nullable_annotation(annotation_of("x: int | None")))

    def test_none_first_in_union(self) -> None:
        self.assertTrue(ShapeMatcher.is_nullable_annotation(annotation_of("x: None | str")))

    def test_typing_optional(self) -> None:
        self.assertTrue(ShapeMatcher.is_nullable_annotation(annotation_of("x: Optional[str]")))

    def test_qualified_typing_optional(self) -> None:
        self.assertTrue(
            ShapeMatcher.is_nullable_annotation(annotation_of("x: typing.Optional[str]"))
        )

    def test_union_subscript(self) -> None:
        self.assertTrue(ShapeMatcher.is_nullable_annotation(annotation_of("x: Union[int, None]")))

    def test_bare_none_type(self) -> None:
        self.assertTrue(ShapeMatcher.is_nullable_annotation(annotation_of("x: None")))

    def test_nonetype_in_union(self) -> None:
        self.assertTrue(ShapeMatcher.is_nullable_annotation(annotation_of("x: int | NoneType")))

    def test_union_without_none(self) -> None:
        self.assertFalse(ShapeMatcher.is_nullable_annotation(annotation_of("x: int | str")))

    def test_plain_type(self) -> None:
        self.assertFalse(ShapeMatcher.is_nullable_annotation(annotation_of("x: list[int]")))

    def test_missing_annotation(self) -> None:
        self.assertFalse(ShapeMatcher.is_nullable_annotation(None))

    def test_void_annotation_is_only_bare_none(self) -> None:
        self.assertTrue(ShapeMatcher.is_void_annotation(annotation_of("x: None")))
        self.assertFalse(ShapeMatcher.is_void_annotation(annotation_of("x: int | None")))

    def test_union_members_flatten_nested_unions(self) -> None:
        members = ShapeMatcher.union_members(annotation_of("x: int | str | None"))
        self.assertEqual(len(members), 3)


class TestContainsNullableValue(unittest.TestCase):
    def test_none_literal(self) -> None:
        self.assertTrue(ShapeMatcher.contains_nullable_value(astroid.extract_node("None")))

    def test_conditional_either_branch(self) -> None:
        self.assertTrue(
            ShapeMatcher.contains_nullable_value(astroid.extract_node("user if ok else None"))
        )
        self.assertTrue(
            ShapeMatcher.contains_nullable_value(astroid.extract_node("None if ok else user"))
        )

    def test_short_circuit_any_operand(self) -> None:
        self.assertTrue(ShapeMatcher.contains_nullable_value(astroid.extract_node("a or None")))
        self.assertTrue(
            ShapeMatcher.contains_nullable_value(astroid.extract_node("a and b and None"))
        )

    def test_nested_conditional(self) -> None:
        expr = astroid.extract_node("a if x else (b or None)")
        self.assertTrue(ShapeMatcher.contains_nullable_value(expr))

    def test_plain_values(self) -> None:
        for code in ("user", "0", "''", "a or b", "f()", "[None]"):
            with self.subTest(code=code):
                self.assertFalse(ShapeMatcher.contains_nullable_value(astroid.extract_node(code)))

    def test_missing_expression(self) -> None:
        self.assertFalse(ShapeMatcher.contains_nullable_value(None))


class TestNullableReturningCall(unittest.TestCase):
    def test_known_names(self) -> None:
        for code in (
            "items.pop()",
            "mapping.get(key)",
            "text.find('x')",
            "tree.find('tag')",
            "shutil.which('git')",
            "importlib.util.find_spec('yaml')",
            "document.getElementById('main')",
        ):
            with self.subTest(code=code):
                self.assertTrue(ShapeMatcher.is_nullable_returning_call(astroid.extract_node(code)))

    def test_get_and_pop_with_default(self) -> None:
        for code in (
            "mapping.get(key, 0)",
            "mapping.get(key, default=0)",
            "mapping.pop(key, None)",
            "mapping.get(*args)",
        ):
            with self.subTest(code=code):
                self.assertFalse(
                    ShapeMatcher.is_nullable_returning_call(astroid.extract_node(code))
                )

    def test_pattern_calls_need_pattern_argument(self) -> None:
        self.assertTrue(
            ShapeMatcher.is_nullable_returning_call(astroid.extract_node("re.match(r'\\d+', s)"))
        )
        self.assertTrue(
            ShapeMatcher.is_nullable_returning_call(astroid.extract_node("re.search(PATTERN, s)"))
        )
        self.assertTrue(
            ShapeMatcher.is_nullable_returning_call(
                astroid.extract_node("s.fullmatch(re.compile('a+'))")
            )
        )
        self.assertFalse(
            ShapeMatcher.is_nullable_returning_call(astroid.extract_node("router.match(1)"))
        )
        self.assertFalse(
            ShapeMatcher.is_nullable_returning_call(astroid.extract_node("router.match()"))
        )

    def test_unknown_call(self) -> None:
        self.assertFalse(ShapeMatcher.is_nullable_returning_call(astroid.extract_node("fetch(x)")))

    def test_non_call_node(self) -> None:
        self.assertFalse(ShapeMatcher.is_nullable_returning_call(astroid.extract_node("get")))

    def test_call_name(self) -> None:
        self.assertEqual(ShapeMatcher.call_name(astroid.extract_node("a.b.get(1)")), "get")
        self.assertEqual(ShapeMatcher.call_name(astroid.extract_node("which('x')")), "which")
        self.assertEqual(ShapeMatcher.call_name(astroid.extract_node("handlers[0]()")), "")


class TestFailureShapes(unittest.TestCase):
    def test_raise_and_try(self) -> None:
        raise_node = astroid.extract_node("raise ValueError('bad')")
        try_node = astroid.extract_node(
            """
            try:
                work()
            except ValueError:
                pass
            """
        )
        self.assertTrue(ShapeMatcher.is_throw_statement(raise_node))
        self.assertTrue(ShapeMatcher.is_try_block(try_node))
        self.assertFalse(ShapeMatcher.is_throw_statement(try_node))
        self.assertFalse(ShapeMatcher.is_try_block(raise_node))

    def test_throwing_calls(self) -> None:
        for code in ("json.loads(raw)", "int(text)", "open(path)", "yaml.safe_load(f)"):
            with self.subTest(code=code):
                self.assertTrue(ShapeMatcher.is_throwing_call(astroid.extract_node(code)))

    def test_non_throwing_calls(self) -> None:
        for code in ("loads(raw)", "self.json.loads(raw)", "str(x)", "client.open()"):
            with self.subTest(code=code):
                self.assertFalse(ShapeMatcher.is_throwing_call(astroid.extract_node(code)))

    def test_awaited_call(self) -> None:
        node = astroid.extract_node(
            """
            async def f():
                return await load(x) #@
            """
        )
        self.assertTrue(ShapeMatcher.is_awaited(node.value.value))
        self.assertFalse(ShapeMatcher.is_awaited(node.value))

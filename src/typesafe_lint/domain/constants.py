"""
Typesafe Lint: shared constants for shape matching and message lookup.
"""

TYPESAFE_PREFIX: str = "typesafe."

# Fallback type name when the non-None base type cannot be determined.
PLACEHOLDER_TYPE: str = "T"

DEFAULT_OPTIONAL_NAMESPACE: str = "optional"
DEFAULT_RESULT_NAMESPACE: str = "result"

# Wrapping-type constructors. `from` and `try` are keywords, so the runtime
# libraries expose them with a trailing underscore.
OPTIONAL_WRAPPER_METHODS: frozenset[str] = frozenset(
    {"from_", "from_async", "from_nullable"}
)
RESULT_WRAPPER_METHODS: frozenset[str] = frozenset(
    {"from_", "from_async", "try_", "try_async"}
)

OPTIONAL_FROM_NULLABLE: str = "from_nullable"
RESULT_TRY: str = "try_"
RESULT_TRY_ASYNC: str = "try_async"
RESULT_ERROR: str = "error"

NONE_TYPE_NAMES: frozenset[str] = frozenset({"None", "NoneType"})
OPTIONAL_ALIASES: frozenset[str] = frozenset({"Optional"})
UNION_ALIASES: frozenset[str] = frozenset({"Union"})

# Well-known operations that return None on a miss.
NULLABLE_CALL_NAMES: frozenset[str] = frozenset(
    {
        "get",
        "pop",
        "find",
        "findtext",
        "getElementById",
        "which",
        "find_spec",
    }
)
# Lookups that only return None when no default is supplied.
DEFAULTABLE_CALL_NAMES: frozenset[str] = frozenset({"get", "pop"})
# Also the name of str.find, which returns -1 instead; reported but never rewritten.
REPORT_ONLY_CALL_NAMES: frozenset[str] = frozenset({"find"})
# Regex entry points; also used by unrelated APIs, so the first argument
# must look like a pattern.
PATTERN_CALL_NAMES: frozenset[str] = frozenset({"match", "search", "fullmatch"})

THROWING_FUNCTION_NAMES: frozenset[str] = frozenset(
    {
        "int",
        "float",
        "open",
        "urlopen",
        "literal_eval",
        "b64decode",
        "import_module",
    }
)
THROWING_MEMBER_CALLS: frozenset[tuple[str, str]] = frozenset(
    {
        ("json", "loads"),
        ("json", "load"),
        ("yaml", "safe_load"),
        ("yaml", "load"),
        ("tomllib", "loads"),
        ("tomllib", "load"),
        ("pickle", "loads"),
        ("pickle", "load"),
        ("ast", "literal_eval"),
        ("base64", "b64decode"),
        ("importlib", "import_module"),
        ("subprocess", "check_output"),
        ("subprocess", "check_call"),
        ("shutil", "rmtree"),
        ("os", "remove"),
    }
)

TEST_FILE_PREFIX: str = "test_"
TEST_FILE_SUFFIX: str = "_test.py"
TEST_FILE_NAMES: frozenset[str] = frozenset({"conftest.py"})
TEST_DIRECTORY_NAMES: frozenset[str] = frozenset({"test", "tests", "testing"})

"""
Tests for the JavaScript statement adapter.

Tree-sitter dependent tests are skipped when tree-sitter-language-pack is
not installed.
"""

import pytest

from hookshift.core.grouping import group_statements, render
from hookshift.errors import ParseError
from hookshift.parsing import declared_names, parse_statements
from tests.conftest import requires_tree_sitter


COUNTER_SOURCE = """\
const count = state(0)
const increment = () => { count.value++ }
// reset helper
const resetCount = () => { count.value = 0 }
console.log('ready')
"""


@requires_tree_sitter
class TestParseStatements:
    """Test conversion of tree-sitter nodes into statements."""

    def test_top_level_statements(self):
        statements = parse_statements(COUNTER_SOURCE)

        assert [s.code for s in statements] == [
            "const count = state(0)",
            "const increment = () => { count.value++ }",
            "// reset helper\nconst resetCount = () => { count.value = 0 }",
            "console.log('ready')",
        ]

    def test_declarations(self):
        statements = parse_statements(COUNTER_SOURCE)

        assert [s.declared_name for s in statements] == ["count", "increment", "resetCount", None]

    def test_identifiers_in_traversal_order(self):
        statements = parse_statements(COUNTER_SOURCE)

        assert statements[0].identifiers == ("count", "state")
        assert statements[1].identifiers == ("increment", "count", "value")
        assert statements[3].identifiers == ("console", "log")

    def test_destructuring_is_not_a_declaration(self):
        statements = parse_statements("const { a, b } = props")

        assert statements[0].declared_name is None
        assert statements[0].identifiers == ("a", "b", "props")

    def test_shorthand_properties(self):
        statements = parse_statements("const result = { count, total }")

        assert statements[0].identifiers == ("result", "count", "total")

    def test_syntax_error(self):
        with pytest.raises(ParseError):
            parse_statements("const = (")

    def test_lenient_mode(self):
        statements = parse_statements("const a = 1\nconst = (", strict=False)

        assert statements is not None

    def test_declared_names(self):
        assert declared_names(parse_statements(COUNTER_SOURCE)) == {"count", "increment", "resetCount"}


@requires_tree_sitter
class TestComments:
    """Comments are carried along, never dropped."""

    def test_leading_comments_join_next_statement(self):
        statements = parse_statements("/* state */\n// counter\nconst count = state(0)")

        assert len(statements) == 1
        assert statements[0].code == "/* state */\n// counter\nconst count = state(0)"
        assert statements[0].declared_name == "count"

    def test_comment_text_adds_no_identifiers(self):
        statements = parse_statements(COUNTER_SOURCE)

        assert statements[2].identifiers == ("resetCount", "count", "value")

    def test_same_line_comment_stays_with_statement(self):
        statements = parse_statements("const count = state(0) // initial\ncount.value++")

        assert [s.code for s in statements] == [
            "const count = state(0) // initial",
            "count.value++",
        ]

    def test_trailing_comments_become_unworded_statement(self):
        statements = parse_statements("const count = state(0)\n// done\n// really")

        assert len(statements) == 2
        assert statements[1].code == "// done\n// really"
        assert statements[1].identifiers == ()
        assert statements[1].declared_name is None

    def test_comment_only_source(self):
        statements = parse_statements("// nothing here")

        assert [s.code for s in statements] == ["// nothing here"]

    def test_trailing_comment_survives_grouping(self):
        source = COUNTER_SOURCE + "// end of body\n"
        statements = parse_statements(source)

        text = render(group_statements(statements, declared_names(statements)))

        assert text.endswith("console.log('ready')\n// end of body")


@requires_tree_sitter
class TestParsedGrouping:
    """End-to-end: parse, group, render."""

    def test_counter_roundtrip(self):
        statements = parse_statements(COUNTER_SOURCE)

        text = render(group_statements(statements, declared_names(statements)))

        assert text == (
            "// Count\n"
            "const count = state(0)\n"
            "// reset helper\n"
            "const resetCount = () => { count.value = 0 }\n"
            "\n"
            "// Misc\n"
            "const increment = () => { count.value++ }\n"
            "console.log('ready')"
        )

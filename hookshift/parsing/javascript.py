"""
JavaScript statement adapter — tree-sitter AST → Statement units

Parses a JavaScript snippet holding the top-level statements of a generated
function body and turns each statement into a Statement:
- const/let/var whose first declarator binds a plain identifier → declared_name
- every identifier-like node in the subtree → identifiers (traversal order)

Identifier-like nodes follow the ESTree notion of Identifier, which also
covers member-expression properties and object keys.

Comments are never dropped. Leading comments become part of the next
statement's code, a comment on the line a statement ends on stays with that
statement, and comments after the last statement form one unworded
statement. Comments never contribute identifiers.

Uses tree-sitter-language-pack for the grammar. When it is not installed,
parse_statements() returns None instead of failing.

Usage:
    from hookshift.parsing import parse_statements

    statements = parse_statements("const count = state(0)\\ncount.value++")
"""

from typing import Iterator, List, Optional, Set, TYPE_CHECKING

from ..core.statements import Statement
from ..errors import ParseError

if TYPE_CHECKING:
    from tree_sitter import Node, Parser


IDENTIFIER_TYPES = frozenset({
    "identifier",
    "property_identifier",
    "shorthand_property_identifier",
    "shorthand_property_identifier_pattern",
})

DECLARATION_TYPES = frozenset({"lexical_declaration", "variable_declaration"})

SKIPPED_TYPES = frozenset({"empty_statement"})

# Lazy import for tree-sitter to allow graceful degradation
_language_pack_available = None
_parser: Optional['Parser'] = None


def _check_language_pack() -> bool:
    """Check if tree-sitter-language-pack is available."""
    global _language_pack_available
    if _language_pack_available is None:
        try:
            import tree_sitter_language_pack  # noqa: F401
            _language_pack_available = True
        except ImportError:
            _language_pack_available = False
    return _language_pack_available


def _get_parser() -> Optional['Parser']:
    global _parser
    if _parser is None and _check_language_pack():
        from tree_sitter_language_pack import get_parser
        _parser = get_parser("javascript")
    return _parser


def is_available() -> bool:
    """True if JavaScript parsing is possible in this environment."""
    return _check_language_pack()


def parse_statements(source: str, strict: bool = True) -> Optional[List[Statement]]:
    """
    Parse top-level JavaScript statements.

    Args:
        source: JavaScript source (statements of one function body)
        strict: Raise ParseError when tree-sitter reports a syntax error

    Returns:
        Statements in source order, or None if tree-sitter is unavailable

    Raises:
        ParseError: If strict and the source contains a syntax error
    """
    parser = _get_parser()
    if parser is None:
        return None

    content = source.encode("utf-8")
    tree = parser.parse(content)
    root = tree.root_node

    if strict and root.has_error:
        line = _first_error_line(root)
        raise ParseError(f"Syntax error near line {line}", line=line)

    statements: List[Statement] = []
    code_start = 0
    comment_start = comment_end = None
    last_row = -1
    for node in root.named_children:
        if node.type in SKIPPED_TYPES:
            continue
        if node.type == "comment":
            if comment_start is None and statements and node.start_point[0] == last_row:
                # Same-line trailer stays with the statement it follows
                statements[-1].code = content[code_start:node.end_byte].decode("utf-8")
                continue
            if comment_start is None:
                comment_start = node.start_byte
            comment_end = node.end_byte
            continue

        code_start = node.start_byte if comment_start is None else comment_start
        statements.append(_to_statement(node, content, code_start))
        comment_start = None
        last_row = node.end_point[0]

    # Comments after the last statement become a statement of their own
    if comment_start is not None:
        statements.append(Statement(code=content[comment_start:comment_end].decode("utf-8")))
    return statements


def declared_names(statements: List[Statement]) -> Set[str]:
    """Names declared by the given statements (the default tracked set)."""
    return {s.declared_name for s in statements if s.declared_name is not None}


def _to_statement(node: 'Node', content: bytes, start_byte: int) -> Statement:
    return Statement(
        code=content[start_byte:node.end_byte].decode("utf-8"),
        identifiers=tuple(_iter_identifiers(node, content)),
        declared_name=_declared_name(node, content),
    )


def _declared_name(node: 'Node', content: bytes) -> Optional[str]:
    if node.type not in DECLARATION_TYPES:
        return None
    for child in node.named_children:
        if child.type == "variable_declarator":
            name_node = child.child_by_field_name("name")
            if name_node is not None and name_node.type == "identifier":
                return _text(name_node, content)
            return None
    return None


def _iter_identifiers(node: 'Node', content: bytes) -> Iterator[str]:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type in IDENTIFIER_TYPES:
            yield _text(current, content)
        # Reverse so children come off the stack in source order
        stack.extend(reversed(current.children))


def _first_error_line(root: 'Node') -> int:
    stack = [root]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current.start_point[0] + 1
        stack.extend(reversed(current.children))
    return root.start_point[0] + 1


def _text(node: 'Node', content: bytes) -> str:
    return content[node.start_byte:node.end_byte].decode("utf-8")

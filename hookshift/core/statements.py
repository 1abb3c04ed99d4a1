"""
Statements — Opaque statement units and the per-invocation arena

A Statement is one top-level unit of a generated function body. The engine
never looks inside it beyond two things:
- declared_name: set when the statement is a variable declaration
- identifiers: every identifier reference in its subtree, in traversal order

Identity, not content, matters. Two statements with the same text are still
two statements. Inside one invocation every statement is addressed by an
integer handle (its input position) handed out by StatementArena.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple


@dataclass(eq=False)
class Statement:
    """
    One imperative statement, as produced by the upstream rewrite.

    Attributes:
        code: Source text of the statement (emitted unchanged)
        identifiers: Identifier references in the statement's subtree,
            in traversal order, duplicates included. For a declaration
            this includes the declared name itself.
        declared_name: Name bound by a variable declaration, else None
    """
    code: str
    identifiers: Tuple[str, ...] = ()
    declared_name: Optional[str] = None

    def __post_init__(self):
        self.identifiers = tuple(self.identifiers)

    @property
    def is_declaration(self) -> bool:
        return self.declared_name is not None

    def __repr__(self) -> str:
        return f"Statement({self.code!r})"


class StatementArena:
    """
    Integer handles for the statements of one invocation.

    Handle i is the statement at input position i. All clustering state is
    keyed by handle, so hashing never depends on statement contents.
    """

    def __init__(self, statements: Iterable[Statement]):
        self._statements: List[Statement] = list(statements)

    def __len__(self) -> int:
        return len(self._statements)

    def __iter__(self) -> Iterator[int]:
        return iter(range(len(self._statements)))

    def __getitem__(self, handle: int) -> Statement:
        return self._statements[handle]

    def resolve(self, handles: Iterable[int]) -> List[Statement]:
        """Map handles back to their statements, preserving order."""
        return [self._statements[h] for h in handles]

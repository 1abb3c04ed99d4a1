"""
Signatures — Weighted, tokenized, stemmed fingerprints of statements

A declaration is fingerprinted by the name it declares. Any other statement
is fingerprinted by the tracked names it mentions (deduplicated, first-seen
order). Names are split and stemmed; each sub-token inherits the weight of
the name it came from.

An empty signature marks the statement as unworded: it cannot take part in
clustering and goes straight to the residual bucket.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import AbstractSet, Dict, List, Tuple

from .statements import Statement, StatementArena
from .tokenizer import tokenize_name


@dataclass(frozen=True)
class Token:
    """One stemmed word of a signature with its weight."""
    value: str
    weight: Fraction = Fraction(1)


Signature = Tuple[Token, ...]


WeightedName = Tuple[str, Fraction]


def collect_names(statement: Statement, tracked: AbstractSet[str]) -> List[WeightedName]:
    """
    Raw (name, weight) pairs that make up a statement's signature.

    Declarations contribute only their declared name. Other statements
    contribute every tracked identifier they reference, once each. Every
    name currently weighs 1.
    """
    if statement.declared_name is not None:
        return [(statement.declared_name, Fraction(1))]

    names: List[WeightedName] = []
    seen = set()
    for identifier in statement.identifiers:
        if identifier in tracked and identifier not in seen:
            seen.add(identifier)
            names.append((identifier, Fraction(1)))
    return names


def process_names(names: List[WeightedName], stemming: bool = True) -> Signature:
    """Split (and stem) names into tokens carrying their name's weight."""
    tokens: List[Token] = []
    for name, weight in names:
        for value in tokenize_name(name, stemming):
            tokens.append(Token(value, weight))
    return tuple(tokens)


class SignatureCache:
    """
    Signature memo owned by one grouping invocation.

    Two layers:
    - by handle: each statement is fingerprinted once
    - by weighted name sequence: statements that collect the same names share
      one processed signature
    """

    def __init__(self, arena: StatementArena, tracked: AbstractSet[str], stemming: bool = True):
        self.arena = arena
        self.tracked = frozenset(tracked)
        self.stemming = stemming
        self._by_handle: Dict[int, Signature] = {}
        self._by_names: Dict[Tuple[WeightedName, ...], Signature] = {}

    def get(self, handle: int) -> Signature:
        signature = self._by_handle.get(handle)
        if signature is not None:
            return signature

        names = collect_names(self.arena[handle], self.tracked)
        key = tuple(names)
        signature = self._by_names.get(key)
        if signature is None:
            signature = process_names(names, self.stemming)
            self._by_names[key] = signature

        self._by_handle[handle] = signature
        return signature

    def is_worded(self, handle: int) -> bool:
        return bool(self.get(handle))

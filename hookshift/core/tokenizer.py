"""
Identifier Tokenizer — Split names into comparable word tokens

Extracts word tokens from any naming convention:
- camelCase: resetCount → [reset, count]
- snake_case: reset_count → [reset, count]
- kebab-case: reset-count → [reset, count]
- PascalCase: ResetCount → [reset, count]
- SCREAMING_CASE: RESET_COUNT → [reset, count]
- digits: item2Name → [item, 2, name]

Stemming reduces every token to its Porter root so that morphological
variants (user/users, load/loading) compare equal. The same stem() is used
by every comparison site: signatures, affinity, and label suppression.
"""

import re
from functools import lru_cache
from typing import Tuple

import snowballstemmer


_stemmer = snowballstemmer.stemmer("porter")


def split_identifier(name: str) -> Tuple[str, ...]:
    """
    Split an identifier into lowercase word tokens.

    Boundaries are:
    1. Acronym endings (HTMLParser → HTML_Parser)
    2. Lower → upper case changes (getUser → get_User)
    3. Letter ↔ digit transitions (item2Name → item_2_Name)
    4. Any non-alphanumeric separator (_, -, ., $, space)

    Args:
        name: Any identifier name

    Returns:
        Tuple of lowercase tokens, in order

    Examples:
        >>> split_identifier("resetCount")
        ('reset', 'count')
        >>> split_identifier("HTMLParser")
        ('html', 'parser')
        >>> split_identifier("item2Name")
        ('item', '2', 'name')
        >>> split_identifier("$refs")
        ('refs',)
    """
    return _split(name)


@lru_cache(maxsize=4096)
def _split(name: str) -> Tuple[str, ...]:
    if not name:
        return ()

    cleaned = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
    cleaned = re.sub(r'([a-z])([A-Z])', r'\1_\2', cleaned)
    cleaned = re.sub(r'([a-zA-Z])([0-9])', r'\1_\2', cleaned)
    cleaned = re.sub(r'([0-9])([a-zA-Z])', r'\1_\2', cleaned)

    tokens = re.split(r'[^a-zA-Z0-9]+', cleaned)
    return tuple(t.lower() for t in tokens if t)


@lru_cache(maxsize=4096)
def stem(token: str) -> str:
    """Reduce a lowercase token to its Porter stem."""
    return _stemmer.stemWord(token)


@lru_cache(maxsize=4096)
def tokenize_name(name: str, stemming: bool = False) -> Tuple[str, ...]:
    """
    Tokenize an identifier, optionally stemming every token.

    >>> tokenize_name("loadUsers", stemming=True)
    ('load', 'user')
    """
    tokens = _split(name)
    if stemming:
        return tuple(stem(t) for t in tokens)
    return tokens

"""
Label Synthesis — A readable name for each cluster

The label is made of the words that keep coming back in the cluster's own
declarations. Every reference to a declared name is split into surface
(unstemmed) words and counted. Frequent words survive, then near-duplicates
are suppressed:
- same stem: keep the shorter surface form (user over users)
- stems within one edit: keep the more frequent word

Survivors are capitalized and joined with spaces. With no survivor the
cluster falls back to a positional name.
"""

from collections import Counter
from typing import Dict, List

from .affinity import tokens_close
from .clusters import Cluster
from .statements import StatementArena
from .tokenizer import split_identifier, stem


DEFAULT_FALLBACK = "Group #{index}"


def count_words(cluster: Cluster, arena: StatementArena) -> Counter:
    """Surface word counts over references to the cluster's declared names."""
    declared = set(cluster.declared_names)
    counts: Counter = Counter()
    for handle in cluster:
        for identifier in arena[handle].identifiers:
            if identifier in declared:
                counts.update(split_identifier(identifier))
    return counts


def suppress_variants(words: List[str], counts: Dict[str, int], max_distance: int = 1) -> List[str]:
    """Remove words that are a longer or rarer variant of another candidate."""
    stems = {w: stem(w) for w in words}

    def dominated(a: str) -> bool:
        for b in words:
            if a == b:
                continue
            if stems[a] == stems[b] and len(a) > len(b):
                return True
            if counts[a] < counts[b] and tokens_close(stems[a], stems[b], max_distance):
                return True
        return False

    return [w for w in words if not dominated(w)]


def capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


class LabelSynthesizer:
    """Derives cluster labels for one invocation."""

    def __init__(
        self,
        arena: StatementArena,
        min_count: int = 2,
        max_distance: int = 1,
        fallback: str = DEFAULT_FALLBACK,
    ):
        self.arena = arena
        self.min_count = min_count
        self.max_distance = max_distance
        self.fallback = fallback

    def candidates(self, cluster: Cluster) -> List[str]:
        """Frequent words, most frequent first (first seen wins ties)."""
        counts = count_words(cluster, self.arena)
        frequent = [w for w in counts if counts[w] >= self.min_count]
        frequent.sort(key=lambda w: -counts[w])
        return suppress_variants(frequent, counts, self.max_distance)

    def label(self, cluster: Cluster, index: int) -> str:
        """Label for the cluster at 0-based ranked position index."""
        words = self.candidates(cluster)
        if words:
            return " ".join(capitalize(w) for w in words)
        return self.fallback.format(index=index + 1)

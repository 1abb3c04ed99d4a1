"""
Affinity — Pairwise closeness of two statement signatures

Every token of one signature is compared with every token of the other.
Tokens whose stems are within max_distance edits of each other count as a
match, and each match adds the mean of the two weights to the score.

Scores are exact Fractions: the cluster builder keys clusters by the exact
score value, so they must compare equal wherever they are computed.
"""

from fractions import Fraction

from rapidfuzz.distance import Levenshtein

from .signature import Signature


def tokens_close(a: str, b: str, max_distance: int = 1) -> bool:
    """True if two stemmed tokens are within max_distance edits."""
    return Levenshtein.distance(a, b, score_cutoff=max_distance) <= max_distance


def affinity_score(sig_a: Signature, sig_b: Signature, max_distance: int = 1) -> Fraction:
    """
    Measure how close two statements should be.

    Returns:
        Sum of mean weights over matching token pairs; 0 means no affinity.
    """
    score = Fraction(0)
    for token_a in sig_a:
        for token_b in sig_b:
            if tokens_close(token_a.value, token_b.value, max_distance):
                score += (token_a.weight + token_b.weight) / 2
    return score

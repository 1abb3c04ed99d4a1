"""
Core — Statement grouping engine

Contains the pieces of the grouping pipeline, leaf to root:
- Tokenizer: identifier → word tokens, optional stemming
- Statements: opaque statement units and the handle arena
- Signature: statement → weighted stemmed fingerprint
- Affinity: pairwise signature score
- Clusters: score-keyed cluster build and resolution
- Analysis: declared names, dependencies, usage
- Ranking: providers before consumers
- Labels: readable group names
- Grouping: the pipeline and output assembly
"""

from .tokenizer import split_identifier, tokenize_name, stem
from .statements import Statement, StatementArena
from .signature import Token, Signature, SignatureCache, collect_names, process_names
from .affinity import affinity_score, tokens_close
from .clusters import Cluster, ClusterBuilder, BuildResult
from .analysis import analyze_clusters
from .ranking import rank_clusters, rank_key
from .labels import LabelSynthesizer, count_words, suppress_variants
from .grouping import (
    GroupingEngine, GroupingContext, GroupingResult, LabeledCluster,
    group_statements, render,
)

__all__ = [
    # Tokenizer
    "split_identifier", "tokenize_name", "stem",
    # Statements
    "Statement", "StatementArena",
    # Signature
    "Token", "Signature", "SignatureCache", "collect_names", "process_names",
    # Affinity
    "affinity_score", "tokens_close",
    # Clusters
    "Cluster", "ClusterBuilder", "BuildResult",
    # Analysis & ranking
    "analyze_clusters", "rank_clusters", "rank_key",
    # Labels
    "LabelSynthesizer", "count_words", "suppress_variants",
    # Pipeline
    "GroupingEngine", "GroupingContext", "GroupingResult", "LabeledCluster",
    "group_statements", "render",
]

"""
Cluster Ranking — Providers before consumers

Composite ordering, highest first:
1. usage_count (clusters other clusters depend on)
2. declared names minus external dependencies (net providers)
3. number of declared names
4. the affinity score that spawned the cluster

Python's sort is stable, so full ties keep creation order.
"""

from typing import List

from .clusters import Cluster


def rank_key(cluster: Cluster):
    declarations = len(cluster.declared_names)
    balance = declarations - len(cluster.external_dependencies)
    return (-cluster.usage_count, -balance, -declarations, -cluster.affinity_score)


def rank_clusters(clusters: List[Cluster]) -> List[Cluster]:
    """Drop empty clusters and order the rest."""
    return sorted((c for c in clusters if len(c)), key=rank_key)

"""
Cluster Analysis — What each cluster provides and what it consumes

- declared_names: names declared by the cluster's declaration members
- external_dependencies: tracked names the cluster uses but does not declare
- usage_count: how often other clusters depend on what this one declares
"""

from typing import AbstractSet, List

from .clusters import Cluster
from .statements import StatementArena


def analyze_clusters(clusters: List[Cluster], arena: StatementArena, tracked: AbstractSet[str]):
    """Fill in the analysis fields of every cluster, in place."""
    for cluster in clusters:
        cluster.declared_names = [
            arena[h].declared_name for h in cluster if arena[h].is_declaration
        ]
        declared = set(cluster.declared_names)
        cluster.external_dependencies = {
            identifier
            for h in cluster
            for identifier in arena[h].identifiers
            if identifier in tracked and identifier not in declared
        }

    # Used by other clusters
    for cluster in clusters:
        cluster.usage_count = 0
        for name in cluster.declared_names:
            for other in clusters:
                if other is not cluster and name in other.external_dependencies:
                    cluster.usage_count += 1

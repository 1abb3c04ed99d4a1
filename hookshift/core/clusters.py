"""
Cluster Builder — Score-keyed grouping of worded statements

Two explicit phases:

1. Candidate edges. Every ordered pair of worded statements is scored. A
   positive score joins both statements to the first cluster that carries
   exactly that score and already holds one of them, or starts a new one.
   Clusters are keyed by the originating score, not by connectivity: two
   statements tied to a common third can end up apart when their scores
   differ. This is not union-find and must not become one.

2. Resolution. Each statement keeps only its highest-scoring cluster (first
   created wins ties) and leaves all others. A cluster that drops to a
   single member is emptied and its member moves into the winning cluster.
   A moved member that has not had its turn yet still picks its own home
   later; one that already has is pulled out of every other cluster.

Worded statements with no positive score never join a cluster; they are
reported as residual so that no statement is lost.
"""

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Dict, Iterator, List, Optional, Sequence, Set

from .affinity import affinity_score
from .signature import SignatureCache

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Cluster:
    """
    A group of statements presented together under one label.

    Members are statement handles kept in insertion order. The analysis
    fields are filled in by analyze_clusters().
    """
    affinity_score: Fraction
    members: Dict[int, None] = field(default_factory=dict)
    declared_names: List[str] = field(default_factory=list)
    external_dependencies: Set[str] = field(default_factory=set)
    usage_count: int = 0

    def __contains__(self, handle: int) -> bool:
        return handle in self.members

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[int]:
        return iter(self.members)

    def add(self, handle: int):
        self.members[handle] = None

    def discard(self, handle: int):
        self.members.pop(handle, None)

    def clear(self):
        self.members.clear()

    @property
    def handles(self) -> List[int]:
        return list(self.members)


@dataclass
class BuildResult:
    """Clusters in creation order plus worded statements left outside."""
    clusters: List[Cluster]
    unclustered: List[int]


class ClusterBuilder:
    """Builds and resolves score-keyed clusters for one invocation."""

    def __init__(self, signatures: SignatureCache, max_distance: int = 1):
        self.signatures = signatures
        self.max_distance = max_distance
        self.clusters: List[Cluster] = []
        self._resolved: Set[int] = set()

    def build(self, worded: Sequence[int]) -> BuildResult:
        self.clusters = []
        self._collect_candidates(worded)
        unclustered = self._resolve(worded)
        return BuildResult(
            clusters=[c for c in self.clusters if len(c)],
            unclustered=unclustered,
        )

    # =========================================================================
    # Phase 1: candidate edges
    # =========================================================================

    def _collect_candidates(self, worded: Sequence[int]):
        for a in worded:
            for b in worded:
                if a == b:
                    continue
                score = affinity_score(
                    self.signatures.get(a),
                    self.signatures.get(b),
                    self.max_distance,
                )
                if score > 0:
                    cluster = self._find_cluster(score, a, b)
                    if cluster is None:
                        cluster = Cluster(affinity_score=score)
                        self.clusters.append(cluster)
                    cluster.add(a)
                    cluster.add(b)

    def _find_cluster(self, score: Fraction, a: int, b: int) -> Optional[Cluster]:
        for cluster in self.clusters:
            if cluster.affinity_score == score and (a in cluster or b in cluster):
                return cluster
        return None

    # =========================================================================
    # Phase 2: resolution
    # =========================================================================

    def _resolve(self, worded: Sequence[int]) -> List[int]:
        unclustered: List[int] = []
        self._resolved = set()

        for handle in worded:
            self._resolved.add(handle)
            containing = [c for c in self.clusters if handle in c]
            if not containing:
                unclustered.append(handle)
                continue

            home = containing[0]
            for cluster in containing[1:]:
                if cluster.affinity_score > home.affinity_score:
                    home = cluster

            for cluster in containing:
                if cluster is not home:
                    self._detach(handle, cluster, home)

        if unclustered:
            logger.debug("%d worded statement(s) without affinity", len(unclustered))
        return unclustered

    def _detach(self, handle: int, cluster: Cluster, home: Cluster):
        cluster.discard(handle)

        # Never leave a singleton behind
        if len(cluster) == 1:
            orphan = next(iter(cluster))
            cluster.clear()
            home.add(orphan)

            # An unresolved orphan still gets its own turn to pick a home
            if orphan not in self._resolved:
                return
            for other in self.clusters:
                if other is not home and orphan in other:
                    self._detach(orphan, other, home)

"""
Statement Grouping — Reorganize a generated function body into labeled blocks

Pipeline for one batch of statements:
    statements + tracked names
      → signatures (worded / unworded)
      → score-keyed clusters (build, then resolve)
      → analysis (declared names, dependencies, usage)
      → ranking (providers first)
      → labels
      → ordered sequence of label markers and original statements

Statements are reordered and annotated only, never rewritten. Every input
statement appears exactly once in the output: statements that do not end up
in a cluster are emitted in a trailing residual block, in input order.

Usage:
    from hookshift.core.grouping import group_statements

    items = group_statements(statements, tracked={"count", "resetCount"})
    for item in items:
        print(item if isinstance(item, str) else item.code)
"""

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Iterable, List, Optional, Sequence, Union

from ..config import Config
from .analysis import analyze_clusters
from .clusters import Cluster, ClusterBuilder
from .labels import LabelSynthesizer
from .ranking import rank_clusters
from .signature import SignatureCache
from .statements import Statement, StatementArena

logger = logging.getLogger(__name__)


OutputItem = Union[str, Statement]


@dataclass
class LabeledCluster:
    """A ranked cluster with its synthesized label and member statements."""
    label: str
    cluster: Cluster
    statements: List[Statement]

    def stats(self) -> str:
        """Debug summary in the form of the marker annotation."""
        c = self.cluster
        return (
            f"score: {c.affinity_score}, dec: {len(c.declared_names)}, "
            f"deps: {len(c.external_dependencies)}, usage: {c.usage_count}"
        )


@dataclass
class GroupingResult:
    """
    Everything one grouping invocation produced.

    Attributes:
        groups: Ranked clusters with labels
        residual: Statements outside every cluster, input order
        items: Final sequence of marker strings and statements
    """
    groups: List[LabeledCluster] = field(default_factory=list)
    residual: List[Statement] = field(default_factory=list)
    items: List[OutputItem] = field(default_factory=list)

    @property
    def statements(self) -> List[Statement]:
        return [item for item in self.items if isinstance(item, Statement)]

    def to_dict(self) -> dict:
        return {
            "groups": [
                {
                    "label": g.label,
                    "score": str(g.cluster.affinity_score),
                    "declarations": list(g.cluster.declared_names),
                    "dependencies": sorted(g.cluster.external_dependencies),
                    "usage": g.cluster.usage_count,
                    "statements": [s.code for s in g.statements],
                }
                for g in self.groups
            ],
            "residual": [s.code for s in self.residual],
        }


class GroupingContext:
    """
    State private to one invocation: the arena and its signature cache.

    Nothing here outlives the call, so repeated calls cannot see each
    other's cached signatures.
    """

    def __init__(self, statements: Iterable[Statement], tracked: AbstractSet[str], config: Config):
        self.arena = StatementArena(statements)
        self.tracked = frozenset(tracked)
        self.config = config
        self.signatures = SignatureCache(
            self.arena,
            self.tracked,
            stemming=config.grouping.stemming,
        )


class GroupingEngine:
    """Groups statements by identifier affinity and labels the groups."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    def group(self, statements: Sequence[Statement], tracked: Iterable[str]) -> GroupingResult:
        context = GroupingContext(statements, set(tracked), self.config)
        arena = context.arena

        # Classify statements
        worded: List[int] = []
        unworded: List[int] = []
        for handle in arena:
            if context.signatures.is_worded(handle):
                worded.append(handle)
            else:
                unworded.append(handle)

        builder = ClusterBuilder(
            context.signatures,
            max_distance=self.config.grouping.max_edit_distance,
        )
        built = builder.build(worded)

        analyze_clusters(built.clusters, arena, context.tracked)
        ranked = rank_clusters(built.clusters)

        labels = LabelSynthesizer(
            arena,
            min_count=self.config.labels.min_token_count,
            max_distance=self.config.grouping.max_edit_distance,
            fallback=self.config.labels.fallback_label,
        )
        groups = [
            LabeledCluster(
                label=labels.label(cluster, index),
                cluster=cluster,
                statements=arena.resolve(cluster),
            )
            for index, cluster in enumerate(ranked)
        ]

        residual_handles = sorted(built.unclustered + unworded)
        result = GroupingResult(
            groups=groups,
            residual=arena.resolve(residual_handles),
        )
        result.items = self._assemble(result)

        for group in groups:
            logger.debug(
                "group %r (%s): %s",
                group.label,
                group.stats(),
                [s.code for s in group.statements],
            )
        logger.debug(
            "%d statement(s) in %d group(s), %d residual",
            len(arena), len(groups), len(result.residual),
        )
        return result

    def _assemble(self, result: GroupingResult) -> List[OutputItem]:
        labels = self.config.labels
        items: List[OutputItem] = []

        for group in result.groups:
            marker = group.label
            if labels.annotate_stats:
                marker = f"{marker} ({group.stats()})"
            items.append(f"{labels.marker_prefix}{marker}")
            items.extend(group.statements)

        if result.residual:
            if result.groups:
                items.append(f"{labels.marker_prefix}{labels.misc_label}")
            items.extend(result.residual)

        return items


def group_statements(
    statements: Sequence[Statement],
    tracked: Iterable[str],
    config: Optional[Config] = None,
) -> List[OutputItem]:
    """
    Reorder statements into labeled topic blocks.

    Args:
        statements: Statements of one generated function body, in order
        tracked: Names meaningful to the surrounding scope
        config: Optional configuration (defaults apply otherwise)

    Returns:
        Marker strings interleaved with the original Statement objects
    """
    return GroupingEngine(config).group(statements, tracked).items


def render(items: Sequence[OutputItem]) -> str:
    """
    Render grouped output as source text.

    Markers become their own lines; statements are emitted as their original
    code. A blank line separates each marker from the block before it.
    """
    lines: List[str] = []
    for item in items:
        if isinstance(item, Statement):
            lines.append(item.code)
        else:
            if lines:
                lines.append("")
            lines.append(item)
    return "\n".join(lines)

"""
Tests for the cluster builder

Covers the two phases separately:
- candidate edges keyed by exact score (not union-find)
- resolution to one cluster per statement, no singletons
"""

from hookshift.core.clusters import Cluster, ClusterBuilder
from hookshift.core.signature import SignatureCache
from hookshift.core.statements import StatementArena


def build(statements, tracked):
    arena = StatementArena(statements)
    signatures = SignatureCache(arena, tracked)
    worded = [h for h in arena if signatures.is_worded(h)]
    builder = ClusterBuilder(signatures)
    return builder, builder.build(worded)


def members(cluster, statements):
    return [statements[h] for h in cluster]


class TestCluster:
    """Test the Cluster container."""

    def test_members_keep_insertion_order(self):
        cluster = Cluster(affinity_score=1)
        for handle in (3, 1, 2, 1):
            cluster.add(handle)

        assert cluster.handles == [3, 1, 2]
        assert len(cluster) == 3

    def test_discard_missing_is_noop(self):
        cluster = Cluster(affinity_score=1)
        cluster.discard(7)

        assert len(cluster) == 0


class TestCandidatePhase:
    """Test score-keyed cluster creation."""

    def test_pair_forms_cluster(self, statement_factory):
        count = statement_factory.declare("count", "state")
        reset = statement_factory.declare("resetCount", "count")

        _, result = build(statement_factory.statements, {"count", "resetCount"})

        assert len(result.clusters) == 1
        assert members(result.clusters[0], statement_factory.statements) == [count, reset]
        assert result.clusters[0].affinity_score == 1

    def test_same_score_disconnected_pairs_stay_apart(self, statement_factory):
        """Clusters are keyed by score AND shared membership, not score alone."""
        statement_factory.declare("userName")
        statement_factory.declare("userNames")
        statement_factory.declare("itemCount")
        statement_factory.declare("itemCounts")

        _, result = build(statement_factory.statements, set())

        assert len(result.clusters) == 2
        assert [c.affinity_score for c in result.clusters] == [2, 2]
        assert result.clusters[0].handles == [0, 1]
        assert result.clusters[1].handles == [2, 3]

    def test_no_transitive_merge(self, statement_factory):
        """
        A statement tied to two groups with different scores joins only
        the stronger one; the two groups are not merged.
        """
        user = statement_factory.declare("user")
        users = statement_factory.declare("users")
        item_count = statement_factory.declare("itemCount")
        mixed = statement_factory.expression("user", "itemCount")

        _, result = build(statement_factory.statements, {"user", "users", "itemCount"})
        statements = statement_factory.statements

        assert len(result.clusters) == 2
        weak, strong = result.clusters
        assert weak.affinity_score == 1
        assert members(weak, statements) == [user, users]
        assert strong.affinity_score == 2
        assert members(strong, statements) == [item_count, mixed]


class TestResolutionPhase:
    """Test resolution of multi-membership."""

    def test_statement_keeps_highest_score(self, statement_factory):
        statement_factory.declare("user")
        statement_factory.declare("users")
        statement_factory.declare("itemCount")
        statement_factory.expression("user", "itemCount")

        builder, _ = build(statement_factory.statements, {"user", "users", "itemCount"})

        homes = [c for c in builder.clusters if 3 in c]
        assert len(homes) == 1
        assert homes[0].affinity_score == 2

    def test_singleton_merges_into_home(self, statement_factory):
        """A losing cluster left with one member hands it to the winner."""
        statement_factory.declare("userName")
        statement_factory.declare("userNames")
        statement_factory.declare("userId")

        builder, result = build(statement_factory.statements, set())

        assert len(result.clusters) == 1
        assert result.clusters[0].affinity_score == 2
        assert result.clusters[0].handles == [0, 1, 2]
        # The emptied loser still exists in the builder, but is filtered out
        assert any(len(c) == 0 for c in builder.clusters)

    def test_tie_goes_to_first_created(self):
        """Equal scores: the first created cluster is home."""
        builder = ClusterBuilder(signatures=None)
        first = Cluster(affinity_score=1, members={0: None, 1: None, 2: None})
        second = Cluster(affinity_score=1, members={0: None, 3: None, 4: None})
        builder.clusters = [first, second]

        unclustered = builder._resolve([0, 1, 2, 3, 4])

        assert unclustered == []
        assert first.handles == [0, 1, 2]
        assert second.handles == [3, 4]

    def test_orphan_leaves_every_other_cluster(self):
        """A member moved by the singleton rule ends up in exactly one cluster."""
        builder = ClusterBuilder(signatures=None)
        home = Cluster(affinity_score=3, members={0: None, 5: None})
        loser = Cluster(affinity_score=1, members={0: None, 1: None})
        other = Cluster(affinity_score=2, members={1: None, 2: None, 3: None})
        builder.clusters = [home, loser, other]

        builder._resolve([0, 1, 2, 3, 5])

        non_empty = [c for c in builder.clusters if len(c)]
        seen = [h for c in non_empty for h in c]
        assert sorted(seen) == [0, 1, 2, 3, 5]
        assert len(seen) == len(set(seen))
        assert all(len(c) >= 2 for c in non_empty)

    def test_moved_member_still_picks_its_best_cluster(self):
        """
        A member moved by the singleton rule before its own turn keeps the
        right to choose its highest-scoring cluster.
        """
        builder = ClusterBuilder(signatures=None)
        home = Cluster(affinity_score=2, members={0: None, 5: None})
        loser = Cluster(affinity_score=1, members={0: None, 1: None})
        other = Cluster(affinity_score=3, members={1: None, 2: None, 3: None})
        builder.clusters = [home, loser, other]

        builder._resolve([0, 1, 2, 3, 5])

        assert home.handles == [0, 5]
        assert len(loser) == 0
        assert other.handles == [1, 2, 3]

    def test_higher_score_pair_is_not_swallowed(self, statement_factory):
        """The score-3 pair stays apart from the score-2 cluster it overlaps."""
        statement_factory.expression("name")
        statement_factory.expression("user", "item")
        statement_factory.expression("users", "userName", "count")
        statement_factory.expression("users", "count")
        statement_factory.expression("names", "item", "itemCount")
        tracked = {"name", "names", "user", "users", "item", "itemCount", "userName", "count"}

        _, result = build(statement_factory.statements, tracked)

        assert [(c.affinity_score, c.handles) for c in result.clusters] == [
            (2, [1, 4, 0]),
            (3, [2, 3]),
        ]

    def test_zero_affinity_statement_is_unclustered(self, counter_body):
        """increment shares no word with count/resetCount and is reported."""
        statements, tracked = counter_body

        _, result = build(statements, tracked)

        assert result.unclustered == [1]
        assert [c.handles for c in result.clusters] == [[0, 2]]

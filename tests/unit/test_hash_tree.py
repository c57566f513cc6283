"""
Hash Tree Unit Tests
Tests for hashtree/merkle/hash_tree.py (tree maintenance)

Covers:
1. Empty tree shape
2. Depth and capacity growth at powers of two
3. Leaf placement and padding layout
4. Worked root examples
5. Determinism and insertion-order sensitivity
6. Internal node consistency after every insertion
"""
import pytest

from hashtree.crypto.hashing import combine, hash_text
from hashtree.merkle import PLACEHOLDER, HashTree
from hashtree.schemas.errors import EmptyTreeError, LeafIndexError

from fixtures import make_digests, make_tree, make_values


def reference_root(leaf_slots: list[str]) -> str:
    """Fold a full row of leaf slots pairwise up to a root."""
    level = list(leaf_slots)
    while len(level) > 1:
        level = [combine(level[i], level[i + 1]) for i in range(0, len(level), 2)]
    return level[0]


def expected_depth(n: int) -> int:
    if n == 0:
        return 0
    depth = 1
    while (1 << depth) < n:
        depth += 1
    return depth


class TestEmptyTree:
    """Tests for a freshly created tree."""

    def test_new_tree_is_empty(self, empty_tree):
        assert empty_tree.inserted_count == 0
        assert empty_tree.elements == []
        assert empty_tree.depth == 0
        assert empty_tree.capacity == 0
        assert empty_tree.is_empty
        assert len(empty_tree) == 0

    def test_root_of_empty_tree_raises(self, empty_tree):
        with pytest.raises(EmptyTreeError, match="empty"):
            _ = empty_tree.root

    def test_leaf_of_empty_tree_raises(self, empty_tree):
        with pytest.raises(EmptyTreeError):
            empty_tree.leaf(0)

    def test_levels_of_empty_tree(self, empty_tree):
        assert empty_tree.levels() == []

    def test_build_with_no_values(self):
        tree = HashTree.build([])
        assert tree.is_empty
        assert tree.elements == []


class TestDepthAndCapacity:
    """Tests for structure growth."""

    @pytest.mark.parametrize("count, depth", [
        (1, 1), (2, 1), (3, 2), (4, 2), (5, 3), (8, 3), (9, 4), (16, 4), (17, 5),
    ])
    def test_depth_table(self, count, depth):
        tree = make_tree(count)
        assert tree.depth == depth
        assert tree.capacity == 2 ** depth

    def test_array_length_matches_depth(self):
        for count in range(1, 40):
            tree = make_tree(count)
            assert len(tree.elements) == 2 ** (tree.depth + 1) - 1, f"count={count}"
            assert tree.internal_node_count == 2 ** tree.depth - 1

    def test_depth_is_ceil_log2(self):
        for count in range(1, 70):
            assert make_tree(count).depth == expected_depth(count), f"count={count}"

    def test_depth_grows_only_after_powers_of_two(self):
        tree = HashTree()
        previous = tree.depth
        for n, value in enumerate(make_values(70), start=1):
            tree.add_unhashed(value)
            grew = tree.depth - previous
            assert grew in (0, 1)
            crossed = n == 1 or (n - 1 >= 2 and (n - 1) & (n - 2) == 0)
            assert bool(grew) == crossed, f"n={n}"
            previous = tree.depth

    def test_inserted_count_tracks_adds(self):
        tree = HashTree()
        for n, value in enumerate(make_values(10), start=1):
            tree.add_unhashed(value)
            assert tree.inserted_count == n
            assert len(tree) == n


class TestLeafPlacement:
    """Tests for leaf order and padding layout."""

    def test_real_leaves_in_insertion_order(self):
        for count in range(1, 34):
            tree = make_tree(count)
            assert tree.leaves[:count] == make_digests(count), f"count={count}"

    def test_single_leaf_pads_with_itself(self):
        h = hash_text("Merkle Tree")
        tree = HashTree.build([h])
        assert tree.leaves == [h, h]

    def test_three_leaves_padding(self):
        a, b, c = make_digests(3)
        tree = HashTree.build([a, b, c])
        assert tree.leaves == [a, b, c, c]

    def test_five_leaves_padding_copies_fifth(self):
        digests = make_digests(5)
        tree = HashTree.build(digests)

        assert tree.depth == 3
        assert tree.leaves[:5] == digests
        assert tree.leaves[5:] == [digests[4]] * 3

    def test_padding_keeps_level_opening_leaf(self):
        """Leaves landing inside existing padding replace one copy each."""
        d = make_digests(7)

        six = HashTree.build(d[:6])
        assert six.leaves == d[:6] + [d[4], d[4]]

        seven = HashTree.build(d[:7])
        assert seven.leaves == d[:7] + [d[4]]

    def test_full_level_has_no_padding(self):
        digests = make_digests(8)
        tree = HashTree.build(digests)
        assert tree.leaves == digests

    def test_no_placeholders_survive(self):
        for count in range(1, 20):
            assert PLACEHOLDER not in make_tree(count).elements

    def test_add_stores_value_as_given(self):
        tree = HashTree.build(["not-a-digest"])
        assert tree.leaf(0) == "not-a-digest"

    def test_leaf_accessor_bounds(self):
        tree = make_tree(3)
        assert tree.leaf(3) == tree.leaf(2)
        with pytest.raises(LeafIndexError):
            tree.leaf(4)
        with pytest.raises(LeafIndexError):
            tree.leaf(-1)


class TestWorkedRoots:
    """Root values for small trees."""

    def test_one_leaf_root(self):
        h = hash_text("Merkle Tree")
        tree = HashTree.build(["Merkle Tree"], raw=True)

        assert tree.root == combine(h, h)
        assert tree.depth == 1

    def test_two_leaf_root(self):
        a = hash_text("Merkle Tree")
        b = hash_text("Ralph Merkle")
        tree = HashTree.build(["Merkle Tree", "Ralph Merkle"], raw=True)

        assert tree.root == combine(a, b)
        assert tree.depth == 1
        assert tree.elements == [combine(a, b), a, b]

    def test_four_leaf_root(self, four_leaf_tree, merkle_digests):
        a, b, c, d = merkle_digests
        assert four_leaf_tree.root == combine(combine(a, b), combine(c, d))
        assert four_leaf_tree.depth == 2

    def test_root_matches_reference_fold(self):
        for count in range(1, 40):
            tree = make_tree(count)
            assert tree.root == reference_root(tree.leaves), f"count={count}"


class TestDeterminism:
    """Tests for reproducible construction."""

    def test_build_twice_same_root(self):
        values = make_values(11)
        assert HashTree.build(values, raw=True).root == HashTree.build(values, raw=True).root

    def test_insertion_order_matters(self):
        assert HashTree.build(["a", "b"]).root != HashTree.build(["b", "a"]).root

    def test_raw_build_equals_hashed_build(self):
        values = make_values(6)
        raw = HashTree.build(values, raw=True)
        hashed = HashTree.build([hash_text(v) for v in values])

        assert raw.elements == hashed.elements

    def test_incremental_adds_equal_build(self):
        values = make_values(13)
        tree = HashTree()
        for value in values:
            tree.add_unhashed(value)

        assert tree.elements == HashTree.build(values, raw=True).elements

    def test_different_values_different_roots(self):
        assert make_tree(4, "x").root != make_tree(4, "y").root


class TestRehash:
    """Tests for internal node recomputation."""

    def test_internal_nodes_consistent_after_every_add(self):
        tree = HashTree()
        for value in make_values(33):
            tree.add_unhashed(value)
            for i in range(tree.internal_node_count):
                assert tree.elements[i] == combine(
                    tree.elements[2 * i + 1], tree.elements[2 * i + 2]
                ), f"node {i} after {tree.inserted_count} leaves"

    def test_rehash_is_idempotent(self):
        tree = make_tree(9)
        before = list(tree.elements)
        tree.rehash()
        assert tree.elements == before

    def test_rehash_restores_corrupted_internal_node(self):
        tree = make_tree(4)
        expected = list(tree.elements)
        tree.elements[0] = "corrupted"
        tree.elements[1] = "corrupted"
        tree.rehash()
        assert tree.elements == expected

    def test_rehash_left_only_child(self):
        """A node with only a left child takes the child's value."""
        tree = HashTree()
        tree.elements = ["", "x"]
        tree.rehash()
        assert tree.elements == ["x", "x"]

    @pytest.mark.slow
    def test_large_tree(self):
        tree = make_tree(1025)
        assert tree.depth == 11
        assert len(tree.elements) == 2 ** 12 - 1
        assert tree.root == reference_root(tree.leaves)


class TestLevels:
    """Tests for level rendering support."""

    def test_levels_shape(self):
        tree = make_tree(5)
        levels = tree.levels()

        assert [len(row) for row in levels] == [1, 2, 4, 8]
        assert levels[0] == [tree.root]
        assert levels[-1] == tree.leaves

    def test_repr_mentions_counts(self):
        text = repr(make_tree(3))
        assert "inserted_count=3" in text
        assert "depth=2" in text

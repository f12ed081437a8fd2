import math

import pytest

from huffcode.errors import EmptyInput
from huffcode.huffman import (
    HuffNode,
    build_code_table,
    build_tree,
    count_frequencies,
    iter_leaves,
    tree_depth,
)


def check_conservation(node):
    if node.is_leaf:
        return
    assert node.freq == node.left.freq + node.right.freq
    check_conservation(node.left)
    check_conservation(node.right)


def is_prefix_free(code):
    words = list(code.values())
    for i, a in enumerate(words):
        for j, b in enumerate(words):
            if i != j and b.startswith(a):
                return False
    return True


def weighted_cost(counts, code):
    return sum(f * len(code[s]) for s, f in counts.items())


def test_count_frequencies():
    counts = count_frequencies("aaabbc")
    assert counts == {"a": 3, "b": 2, "c": 1}
    assert list(counts) == ["a", "b", "c"]


def test_count_frequencies_unicode():
    counts = count_frequencies("ñañ🎉")
    assert counts == {"ñ": 2, "a": 1, "🎉": 1}


def test_build_tree_empty_raises():
    with pytest.raises(EmptyInput):
        build_tree({})
    with pytest.raises(EmptyInput):
        build_tree(count_frequencies(""))


def test_build_tree_rejects_zero_frequency():
    with pytest.raises(ValueError):
        build_tree({"a": 3, "b": 0})


def test_single_symbol_is_leaf():
    root = build_tree(count_frequencies("aaaa"))
    assert root.is_leaf
    assert root.sym == "a"
    assert root.freq == 4
    assert build_code_table(root) == {"a": "0"}
    assert tree_depth(root) == 0


def test_aaabbc_merge_order():
    root = build_tree(count_frequencies("aaabbc"))
    assert root.freq == 6
    # a(3) empata con el nodo interno c+b (3): a se extrae primero y va a la izquierda
    assert root.left.is_leaf and root.left.sym == "a"
    inner = root.right
    assert inner.freq == 3
    assert inner.left.sym == "b" and inner.right.sym == "c"

    code = build_code_table(root)
    assert code == {"a": "0", "b": "10", "c": "11"}
    assert weighted_cost({"a": 3, "b": 2, "c": 1}, code) == 9


def test_larger_child_goes_left():
    root = build_tree({"x": 1, "y": 5})
    assert root.left.sym == "y"
    assert root.right.sym == "x"


def test_tie_break_is_deterministic():
    counts = {"a": 1, "b": 1, "c": 1, "d": 1}
    codes = [build_code_table(build_tree(counts)) for _ in range(5)]
    assert all(c == codes[0] for c in codes)
    assert sorted(len(c) for c in codes[0].values()) == [2, 2, 2, 2]


def test_leaves_match_frequency_map():
    counts = count_frequencies("the quick brown fox jumps over the lazy dog")
    root = build_tree(counts)
    check_conservation(root)
    leaves = {leaf.sym: leaf.freq for leaf in iter_leaves(root)}
    assert leaves == dict(counts)
    assert root.freq == sum(counts.values())


@pytest.mark.parametrize("text", [
    "aaabbc",
    "abracadabra",
    "mississippi river",
    "ab",
    "Καλημέρα κόσμε, ¡hola mundo! 日本語",
])
def test_code_table_is_prefix_free(text):
    code = build_code_table(build_tree(count_frequencies(text)))
    assert set(code) == set(text)
    assert is_prefix_free(code)


@pytest.mark.parametrize("counts,expected", [
    ({"a": 45, "b": 13, "c": 12, "d": 16, "e": 9, "f": 5}, 224),
    ({"a": 1, "b": 1, "c": 1, "d": 1}, 8),
    ({"a": 1, "b": 2, "c": 4, "d": 8}, 25),
    ({"a": 3, "b": 2, "c": 1}, 9),
    ({"a": 7, "b": 7}, 14),
])
def test_weighted_length_is_optimal(counts, expected):
    code = build_code_table(build_tree(counts))
    assert weighted_cost(counts, code) == expected


def test_kraft_and_entropy_bounds():
    text = "it was the best of times, it was the worst of times"
    counts = count_frequencies(text)
    code = build_code_table(build_tree(counts))

    # Árbol completo: la suma de Kraft es exactamente 1
    assert sum(2.0 ** -len(c) for c in code.values()) == pytest.approx(1.0)

    total = sum(counts.values())
    H = -sum(f / total * math.log2(f / total) for f in counts.values())
    Lavg = weighted_cost(counts, code) / total
    assert H <= Lavg < H + 1

    fixed = math.ceil(math.log2(len(counts)))
    assert Lavg <= fixed


def test_iter_leaves_left_to_right():
    root = build_tree(count_frequencies("aaabbc"))
    assert [leaf.sym for leaf in iter_leaves(root)] == ["a", "b", "c"]
    assert tree_depth(root) == 2


def test_node_ordering():
    a = HuffNode(3, sym="a", order=0)
    b = HuffNode(3, sym="b", order=1)
    c = HuffNode(1, sym="c", order=2)
    assert c < a < b


@pytest.mark.parametrize("bad", [2.5, 1.0, "3", True])
def test_build_tree_rejects_non_integer_frequency(bad):
    with pytest.raises(ValueError):
        build_tree({"a": bad, "b": 1})

import pytest

from relnorm.combinations import Combinations, binomial
from relnorm.models import Descriptor
from relnorm.ordered_set import OrderedSet


def test_iteration_is_sorted_and_deduplicated():
    s = OrderedSet([3, 1, 2, 3])
    assert list(s) == [1, 2, 3]
    assert len(s) == 3
    assert s[0] == 1
    assert s.first() == 1


def test_equality_ignores_insertion_order():
    assert OrderedSet([1, 2, 3]) == OrderedSet([3, 2, 1])
    assert hash(OrderedSet([1, 2])) == hash(OrderedSet([2, 1]))
    assert OrderedSet([1]) != OrderedSet([1, 2])


def test_empty_set():
    s = OrderedSet()
    assert s.is_empty()
    with pytest.raises(IndexError):
        s.first()


def test_subset_predicates_accept_plain_sets():
    s = OrderedSet([1, 2, 3])
    assert s.contains({1, 2})
    assert s.contains(OrderedSet([1, 2, 3]))
    assert not s.strictly_contains([1, 2, 3])
    assert s.strictly_contains([2])
    assert OrderedSet([1]).is_contained_in([1, 2])
    assert OrderedSet([1]).is_strictly_contained_in(OrderedSet([1, 2]))
    assert not OrderedSet([1, 4]).is_contained_in({1, 2})
    assert s.contains_element(2)
    assert 5 not in s


def test_algebra():
    a = OrderedSet([1, 2, 3])
    b = OrderedSet([3, 4])
    assert a | b == OrderedSet([1, 2, 3, 4])
    assert a & b == OrderedSet([3])
    assert a - b == OrderedSet([1, 2])
    assert a ^ b == OrderedSet([1, 2, 4])
    assert a.symmetric_difference([3, 9]) == OrderedSet([1, 2, 9])
    assert a.union(b, [7]) == OrderedSet([1, 2, 3, 4, 7])
    assert a.with_element(0) == OrderedSet([0, 1, 2, 3])
    assert a.without_element(2) == OrderedSet([1, 3])
    # исходное множество не меняется
    assert list(a) == [1, 2, 3]


def test_algebra_keeps_subclass():
    d = Descriptor.of("A", "B")
    assert isinstance(d.union(Descriptor.of("C")), Descriptor)
    assert isinstance(d.difference(Descriptor.of("A")), Descriptor)
    assert isinstance(d.with_element(Descriptor.of("C").first()), Descriptor)


def test_str():
    assert str(Descriptor.of("B", "A")) == "A, B"


def test_combinations_order():
    combos = list(Combinations(Descriptor.of("A", "B", "C"), 2))
    assert combos == [Descriptor.of("A", "B"), Descriptor.of("A", "C"), Descriptor.of("B", "C")]
    assert all(isinstance(combo, Descriptor) for combo in combos)


def test_combinations_count():
    combos = Combinations(OrderedSet(range(5)), 3)
    assert combos.count() == 10
    assert len(combos) == len(list(combos))
    assert len(Combinations(OrderedSet([1, 2]), 2)) == 1


@pytest.mark.parametrize("size", [0, 4])
def test_combinations_rejects_bad_size(size):
    with pytest.raises(ValueError):
        Combinations(Descriptor.of("A", "B", "C"), size)


def test_binomial():
    assert binomial(5, 2) == 10
    assert binomial(3, 0) == 1
    assert binomial(3, 5) == 0
    assert binomial(3, -1) == 0

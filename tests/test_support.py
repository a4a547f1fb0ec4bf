import pytest

from moviemine.rule_mining import (
    AssociationRule,
    CountingSupportIndex,
    InternalConsistencyError,
    InvalidArgumentError,
    minimum_support_count,
)


def test_unseen_itemset_has_zero_count() -> None:
    index = CountingSupportIndex(10)
    assert index.get_count({"a"}) == 0
    assert {"a"} not in index


def test_set_and_increment() -> None:
    index = CountingSupportIndex(4)
    index.set_count(["a", "b"], 2)
    index.increment({"b", "a"})
    index.increment({"c"})

    assert index.get_count(frozenset("ab")) == 3
    assert index.get_count({"c"}) == 1
    assert len(index) == 2


def test_support_is_count_over_transactions() -> None:
    index = CountingSupportIndex(4)
    index.set_count({"a"}, 3)
    assert index.support({"a"}) == pytest.approx(0.75)
    assert index.support({"z"}) == 0.0


def test_confidence() -> None:
    index = CountingSupportIndex(10)
    index.set_count({"b"}, 7)
    index.set_count({"a", "b"}, 5)
    rule = AssociationRule({"b"}, {"a"})
    assert index.confidence(rule) == pytest.approx(5 / 7)


def test_confidence_rejects_zero_support_antecedent() -> None:
    index = CountingSupportIndex(10)
    index.set_count({"a", "b"}, 5)
    with pytest.raises(InternalConsistencyError):
        index.confidence(AssociationRule({"b"}, {"a"}))


def test_negative_count_rejected() -> None:
    index = CountingSupportIndex(10)
    with pytest.raises(InvalidArgumentError):
        index.set_count({"a"}, -1)


@pytest.mark.parametrize(
    "min_support, transaction_count, expected",
    [
        (0.2, 10, 2),
        (0.07, 100, 7),
        (1.0, 3, 3),
        (1 / 3, 3, 1),
        (0.01, 10, 1),
        (0.41, 5, 3),
    ],
)
def test_minimum_support_count(min_support, transaction_count, expected) -> None:
    count = minimum_support_count(min_support, transaction_count)
    assert count == expected
    assert count / transaction_count >= min_support
    assert (count - 1) / transaction_count < min_support

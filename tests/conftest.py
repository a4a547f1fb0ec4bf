"""pytest configuration and shared fixtures."""
import itertools
import os
import random
import sys

import pytest

# Ensure tests/ dir is on path so the shared data below can be imported
sys.path.insert(0, os.path.dirname(__file__))


def as_sets(*transactions):
    return [frozenset(transaction) for transaction in transactions]


TEXTBOOK_TRANSACTIONS = as_sets(
    "ab", "bcd", "acde", "ade", "abc", "abcd", "a", "abc", "abd", "bce"
)

TEXTBOOK_FREQUENT_ITEMSETS = {
    frozenset(itemset) for itemset in [
        "a", "b", "c", "d", "e",
        "ab", "ac", "ad", "ae", "bc", "bd", "cd", "ce", "de",
        "abc", "abd", "acd", "bcd", "ade",
    ]
}

BASKET_TRANSACTIONS = as_sets(
    {"Bread", "Milk"},
    {"Bread", "Diapers", "Beer", "Eggs"},
    {"Milk", "Diapers", "Beer", "Cola"},
    {"Bread", "Milk", "Diapers", "Beer"},
    {"Bread", "Milk", "Diapers", "Cola"},
)


def brute_force_counts(transactions):
    """Count every non-empty itemset that occurs in at least one transaction."""
    counts = {}
    for transaction in transactions:
        items = sorted(transaction)
        for size in range(1, len(items) + 1):
            for combination in itertools.combinations(items, size):
                itemset = frozenset(combination)
                counts[itemset] = counts.get(itemset, 0) + 1
    return counts


def random_transactions(seed, count=40, universe="abcdefgh", max_size=6):
    rng = random.Random(seed)
    return [frozenset(rng.sample(universe, rng.randint(0, max_size))) for _ in range(count)]


@pytest.fixture
def textbook_transactions():
    return list(TEXTBOOK_TRANSACTIONS)


@pytest.fixture
def basket_transactions():
    return list(BASKET_TRANSACTIONS)


@pytest.fixture
def single_path_transactions():
    return [frozenset({"m1", "m2", "m3"}) for _ in range(5)]

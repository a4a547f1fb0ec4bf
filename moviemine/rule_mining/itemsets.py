"""Value types exchanged between miners, the rule generator and callers."""
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Hashable, Iterable, List, Mapping, Tuple

import pandas as pd

from .errors import InvalidArgumentError
from .support import SupportIndex

Itemset = FrozenSet[Hashable]


def normalize_transactions(transactions: Iterable[Iterable[Hashable]]) -> List[Itemset]:
    """Turn any sequence of item iterables into a list of frozensets."""
    return [frozenset(transaction) for transaction in transactions]


def itemset_sort_key(itemset: Itemset, index: SupportIndex) -> Tuple:
    # Descending count; ties by size, then by the sorted items
    return -index.get_count(itemset), len(itemset), tuple(sorted(itemset))


def sort_by_support(itemsets: Iterable[Itemset], index: SupportIndex) -> List[Itemset]:
    return sorted(itemsets, key=lambda itemset: itemset_sort_key(itemset, index))


def build_stats(algorithm: str, itemsets: List[Itemset], index: SupportIndex, execution_time: float) -> dict:
    return {
        'num_itemsets': len(itemsets),
        'execution_time': execution_time,
        'average_support': (sum(index.support(itemset) for itemset in itemsets) / len(itemsets)
                            if itemsets else 0.0),
        'algorithm': algorithm,
        'mode': 'itemsets'
    }


@dataclass
class MiningResult:
    """
    Frequent itemsets found by one mining call.

    Attributes:
        frequent_itemsets: Itemsets with support >= min_support, ordered by
            descending support
        index: Support index able to report the exact count of every
            frequent itemset (and of every subset of one)
        transaction_count: Number of transactions mined
        min_support: Threshold the itemsets were mined with
        stats: Mining statistics (algorithm, execution_time, ...)
    """
    frequent_itemsets: List[Itemset]
    index: SupportIndex
    transaction_count: int
    min_support: float = 0.0
    stats: Dict[str, Any] = field(default_factory=dict)
    _members: FrozenSet = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self._members = frozenset(self.frequent_itemsets)

    def support(self, itemset: Iterable[Hashable]) -> float:
        return self.index.support(itemset)

    def count(self, itemset: Iterable[Hashable]) -> int:
        return self.index.get_count(itemset)

    def to_frame(self) -> pd.DataFrame:
        """Frequent itemsets as a DataFrame with 'support' and 'itemsets' columns."""
        if not self.frequent_itemsets:
            return pd.DataFrame(columns=['support', 'itemsets'])
        return pd.DataFrame({
            'support': [self.index.support(itemset) for itemset in self.frequent_itemsets],
            'itemsets': list(self.frequent_itemsets)
        })

    def __len__(self):
        return len(self.frequent_itemsets)

    def __iter__(self):
        return iter(self.frequent_itemsets)

    def __contains__(self, itemset):
        return frozenset(itemset) in self._members


@dataclass(frozen=True)
class AssociationRule:
    """An implication antecedent -> consequent between two disjoint itemsets."""
    antecedent: Itemset
    consequent: Itemset

    def __post_init__(self):
        antecedent = frozenset(self.antecedent)
        consequent = frozenset(self.consequent)
        if not antecedent or not consequent:
            raise InvalidArgumentError("Rule antecedent and consequent must be non-empty")
        if antecedent & consequent:
            raise InvalidArgumentError(
                f"Rule antecedent and consequent must be disjoint, "
                f"both contain {sorted(antecedent & consequent)}"
            )
        object.__setattr__(self, 'antecedent', antecedent)
        object.__setattr__(self, 'consequent', consequent)

    @property
    def itemset(self) -> Itemset:
        return self.antecedent | self.consequent

    def __str__(self):
        return describe_rule(self)


def describe_itemset(itemset: Iterable[Hashable], labels: Mapping[Hashable, str] = None) -> str:
    """
    Render an itemset as '{a, b, c}'.

    Args:
        itemset: Items to render, shown in sorted order
        labels: Optional mapping from item to display name (e.g. movie id to
            title). Items without a label are shown as-is.
    """
    labels = labels or {}
    return '{' + ', '.join(str(labels.get(item, item)) for item in sorted(itemset)) + '}'


def describe_rule(rule: AssociationRule, labels: Mapping[Hashable, str] = None) -> str:
    return f"{describe_itemset(rule.antecedent, labels)} -> {describe_itemset(rule.consequent, labels)}"

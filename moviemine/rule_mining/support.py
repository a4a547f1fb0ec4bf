"""
Support counting shared by all miners.

A support index maps an itemset to its exact occurrence count over the
transactions of one mining call and normalizes counts into supports.
"""
import math
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Hashable, Iterable

from .errors import InternalConsistencyError, InvalidArgumentError


class SupportIndex(ABC):
    """
    Base class for support count functions.

    Subclasses decide how counts are stored; support and confidence are
    derived here so every miner reports them the same way.
    """

    def __init__(self, transaction_count: int):
        if transaction_count < 0:
            raise InvalidArgumentError(
                f"transaction_count must be non-negative, got {transaction_count}"
            )
        self.transaction_count = transaction_count

    @abstractmethod
    def get_count(self, itemset: Iterable[Hashable]) -> int:
        """Return the count of itemset, or 0 if it was never seen."""
        pass

    @abstractmethod
    def set_count(self, itemset: Iterable[Hashable], count: int) -> None:
        """Record the count of itemset."""
        pass

    def increment(self, itemset: Iterable[Hashable]) -> None:
        self.set_count(itemset, self.get_count(itemset) + 1)

    def support(self, itemset: Iterable[Hashable]) -> float:
        if self.transaction_count == 0:
            return 0.0
        return self.get_count(itemset) / self.transaction_count

    def confidence(self, rule) -> float:
        """
        Confidence of an association rule.

        Args:
            rule: AssociationRule whose antecedent must have a non-zero count

        Returns:
            count(antecedent | consequent) / count(antecedent)

        Raises:
            InternalConsistencyError: if the antecedent was never counted
        """
        antecedent_count = self.get_count(rule.antecedent)
        if antecedent_count == 0:
            raise InternalConsistencyError(
                f"Confidence requested for rule {rule} whose antecedent has zero support"
            )
        return self.get_count(rule.antecedent | rule.consequent) / antecedent_count


class CountingSupportIndex(SupportIndex):
    """Support index backed by a plain dict from itemset to count."""

    def __init__(self, transaction_count: int):
        super().__init__(transaction_count)
        self._counts: Dict[FrozenSet, int] = {}

    def get_count(self, itemset: Iterable[Hashable]) -> int:
        return self._counts.get(frozenset(itemset), 0)

    def set_count(self, itemset: Iterable[Hashable], count: int) -> None:
        if count < 0:
            raise InvalidArgumentError(f"Support count must be non-negative, got {count}")
        self._counts[frozenset(itemset)] = count

    def __len__(self):
        return len(self._counts)

    def __contains__(self, itemset):
        return frozenset(itemset) in self._counts

    def __repr__(self):
        return (f"CountingSupportIndex(transaction_count={self.transaction_count}, "
                f"itemsets={len(self._counts)})")


def minimum_support_count(min_support: float, transaction_count: int) -> int:
    """
    Smallest count c such that c / transaction_count >= min_support.

    Computed with the same float division the miners use when comparing
    supports, so a threshold expressed as a count and one expressed as a
    ratio always select the same itemsets.
    """
    count = math.ceil(min_support * transaction_count)
    while count > 0 and (count - 1) / transaction_count >= min_support:
        count -= 1
    while count / transaction_count < min_support:
        count += 1
    return count

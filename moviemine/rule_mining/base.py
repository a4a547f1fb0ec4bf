"""
Base interfaces for rule mining algorithms.
"""
from abc import ABC, abstractmethod
from typing import Hashable, Iterable, List

from .errors import InvalidArgumentError
from .itemsets import AssociationRule, Itemset, MiningResult, normalize_transactions


def validate_threshold(name: str, value: float) -> float:
    """Reject thresholds outside (0, 1]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(f"{name} must be a number in (0, 1], got {value!r}")
    if not 0.0 < value <= 1.0:
        raise InvalidArgumentError(f"{name} must be within the interval (0, 1], got {value}")
    return float(value)


def validate_transactions(transactions: Iterable[Iterable[Hashable]]) -> List[Itemset]:
    """Normalize transactions to frozensets and reject an empty list."""
    if transactions is None:
        raise InvalidArgumentError("transactions must not be None")
    normalized = normalize_transactions(transactions)
    if not normalized:
        raise InvalidArgumentError("Cannot mine an empty transaction list")
    return normalized


class FrequentItemsetMiner(ABC):
    """
    Base class for frequent itemset mining algorithms.

    These algorithms discover frequent co-occurring item combinations
    without forming rules (no antecedent -> consequent structure). Every
    implementation returns the same kind of MiningResult, so results of
    different algorithms can be compared itemset by itemset.
    """

    algorithm = 'abstract'

    def __init__(self, min_support: float = 0.01):
        self.min_support = validate_threshold('min_support', min_support)

    def find_frequent_itemsets(
        self,
        transactions: Iterable[Iterable[Hashable]],
        min_support: float = None
    ) -> MiningResult:
        """
        Mine frequent itemsets from transactions.

        Args:
            transactions: Non-empty sequence of item collections
            min_support: Overrides the miner's threshold for this call

        Returns:
            MiningResult with itemsets ordered by descending support
        """
        threshold = self.min_support if min_support is None else validate_threshold('min_support', min_support)
        return self._mine(validate_transactions(transactions), threshold)

    @abstractmethod
    def _mine(self, transactions: List[Itemset], min_support: float) -> MiningResult:
        """Run the algorithm on validated input."""
        pass

    def mine_rules(
        self,
        transactions: Iterable[Iterable[Hashable]],
        min_confidence: float = 0.5,
        min_support: float = None
    ) -> List[AssociationRule]:
        """Mine frequent itemsets, then derive rules from them."""
        from .rule_generator import RuleGenerator

        result = self.find_frequent_itemsets(transactions, min_support)
        return RuleGenerator(min_confidence).generate_rules(result)

    def __repr__(self):
        return f"{type(self).__name__}(min_support={self.min_support})"


class AssociationRuleMiner(ABC):
    """
    Base class for association rule mining algorithms.

    These algorithms derive rules in the form antecedent -> consequent from
    an already mined set of frequent itemsets.
    """

    def __init__(self, min_confidence: float = 0.5):
        self.min_confidence = validate_threshold('min_confidence', min_confidence)

    def generate_rules(self, result: MiningResult, min_confidence: float = None) -> List[AssociationRule]:
        """
        Generate association rules from a mining result.

        Args:
            result: Output of any FrequentItemsetMiner
            min_confidence: Overrides the generator's threshold for this call

        Returns:
            Rules with confidence >= min_confidence
        """
        threshold = (self.min_confidence if min_confidence is None
                     else validate_threshold('min_confidence', min_confidence))
        return self._generate(result, threshold)

    @abstractmethod
    def _generate(self, result: MiningResult, min_confidence: float) -> List[AssociationRule]:
        pass

    def __repr__(self):
        return f"{type(self).__name__}(min_confidence={self.min_confidence})"

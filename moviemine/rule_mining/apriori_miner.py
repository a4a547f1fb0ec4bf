"""Level-wise Apriori frequent itemset mining."""
import logging
import time
from typing import Dict, List, Optional

from .base import FrequentItemsetMiner
from .errors import InternalConsistencyError
from .itemsets import Itemset, MiningResult, build_stats, sort_by_support
from .support import CountingSupportIndex, SupportIndex, minimum_support_count

logger = logging.getLogger(__name__)


class AprioriMiner(FrequentItemsetMiner):
    """
    Classic Apriori.

    Level k candidates are built by self-joining the frequent (k-1)-itemsets
    and counted against every transaction. The counts of all candidates,
    frequent or not, end up in the returned CountingSupportIndex.
    """

    algorithm = 'apriori'

    def _mine(self, transactions: List[Itemset], min_support: float) -> MiningResult:
        start_time = time.time()
        transaction_count = len(transactions)
        min_count = minimum_support_count(min_support, transaction_count)
        index = CountingSupportIndex(transaction_count)

        levels: Dict[int, List[Itemset]] = {1: self._frequent_items(transactions, index, min_count)}
        logger.debug("Apriori level 1: %d frequent items", len(levels[1]))

        k = 1
        while levels[k]:
            k += 1
            candidates = self.generate_candidates(levels[k - 1])

            for transaction in transactions:
                for candidate in self.subset(candidates, transaction):
                    index.increment(candidate)

            levels[k] = self.next_itemsets(candidates, index, min_count)
            logger.debug("Apriori level %d: %d candidates, %d frequent", k, len(candidates), len(levels[k]))

        frequent_itemsets = sort_by_support(
            [itemset for level in levels.values() for itemset in level], index
        )
        execution_time = time.time() - start_time
        logger.info("Apriori mined %d frequent itemsets from %d transactions in %.3fs",
                    len(frequent_itemsets), transaction_count, execution_time)

        return MiningResult(
            frequent_itemsets=frequent_itemsets,
            index=index,
            transaction_count=transaction_count,
            min_support=min_support,
            stats=build_stats(self.algorithm, frequent_itemsets, index, execution_time)
        )

    @staticmethod
    def _frequent_items(transactions: List[Itemset], index: SupportIndex, min_count: int) -> List[Itemset]:
        """Pass 1: count every distinct item once per transaction."""
        for transaction in transactions:
            for item in transaction:
                index.increment(frozenset([item]))

        items = {item for transaction in transactions for item in transaction}
        return [frozenset([item]) for item in sorted(items)
                if index.get_count(frozenset([item])) >= min_count]

    def generate_candidates(self, itemsets: List[Itemset]) -> List[Itemset]:
        """
        Build the k-itemset candidates from the frequent (k-1)-itemsets.

        Two itemsets merge when their sorted items agree on everything but
        the last position.
        """
        sorted_itemsets = [sorted(itemset) for itemset in itemsets]
        candidates = []

        for i in range(len(sorted_itemsets)):
            for j in range(i + 1, len(sorted_itemsets)):
                candidate = self.try_merge(sorted_itemsets[i], sorted_itemsets[j])
                if candidate is not None:
                    candidates.append(candidate)

        return candidates

    @staticmethod
    def try_merge(first: List, second: List) -> Optional[Itemset]:
        """
        Merge two sorted itemsets of equal size that share all but their last item.

        Returns:
            The merged itemset, or None if the prefixes differ

        Raises:
            InternalConsistencyError: if both itemsets are identical
        """
        length = len(first)
        if first[:length - 1] != second[:length - 1]:
            return None

        if first[length - 1] == second[length - 1]:
            raise InternalConsistencyError(
                f"Duplicate itemset {first} reached the candidate merge step"
            )

        return frozenset(first) | {second[length - 1]}

    @staticmethod
    def subset(candidates: List[Itemset], transaction: Itemset) -> List[Itemset]:
        """Return the candidates fully contained in transaction."""
        return [candidate for candidate in candidates if candidate <= transaction]

    @staticmethod
    def next_itemsets(candidates: List[Itemset], index: SupportIndex, min_count: int) -> List[Itemset]:
        return [candidate for candidate in candidates if index.get_count(candidate) >= min_count]


def apriori(transactions, min_support: float = 0.01) -> MiningResult:
    """Find frequent itemsets with Apriori."""
    return AprioriMiner(min_support).find_frequent_itemsets(transactions)

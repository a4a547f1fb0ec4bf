"""FP-Growth frequent itemset mining over an FP-tree."""
import logging
import time
from typing import Dict, FrozenSet, List

from .base import FrequentItemsetMiner
from .fp_tree import FPTree
from .itemsets import Itemset, MiningResult, build_stats, sort_by_support
from .support import minimum_support_count

logger = logging.getLogger(__name__)


class FPGrowthMiner(FrequentItemsetMiner):
    """
    Pattern growth without candidate generation.

    The transactions are compressed into an FP-tree once; frequent itemsets
    are then grown item by item from conditional trees. The initial tree is
    returned as the result's support index, with the count of every mined
    itemset recorded on it.
    """

    algorithm = 'fpgrowth'

    def _mine(self, transactions: List[Itemset], min_support: float) -> MiningResult:
        start_time = time.time()
        transaction_count = len(transactions)
        min_count = minimum_support_count(min_support, transaction_count)

        tree = FPTree.from_transactions(transactions, min_count)
        logger.debug("Initial FP-tree: %r", tree)

        found: Dict[FrozenSet, int] = {}
        self.grow(tree, frozenset(), found)

        for itemset, count in found.items():
            tree.set_count(itemset, count)

        frequent_itemsets = sort_by_support(found, tree)
        execution_time = time.time() - start_time
        logger.info("FP-Growth mined %d frequent itemsets from %d transactions in %.3fs",
                    len(frequent_itemsets), transaction_count, execution_time)

        return MiningResult(
            frequent_itemsets=frequent_itemsets,
            index=tree,
            transaction_count=transaction_count,
            min_support=min_support,
            stats=build_stats(self.algorithm, frequent_itemsets, tree, execution_time)
        )

    def grow(self, tree: FPTree, prefix: Itemset, found: Dict[FrozenSet, int]) -> None:
        """
        Collect every frequent extension of prefix found in tree.

        Args:
            tree: Tree conditioned on prefix (the initial tree for an empty prefix)
            prefix: Itemset every pattern in tree extends
            found: Accumulator mapping each frequent itemset to its count
        """
        if tree.is_empty():
            return

        if tree.is_single_path():
            found.update(tree.extract_combinations_from_single_path(prefix))
            return

        for item in tree.header_items_by_ascending_support():
            extended = prefix | {item}
            found[extended] = tree.item_count(item)

            conditional = tree.conditional_tree(item)
            logger.debug("Conditional tree for %s: %r", sorted(extended), conditional)
            if not conditional.is_empty():
                self.grow(conditional, extended, found)


def fpgrowth(transactions, min_support: float = 0.01) -> MiningResult:
    """Find frequent itemsets with FP-Growth."""
    return FPGrowthMiner(min_support).find_frequent_itemsets(transactions)

"""
MLxtend-based frequent itemset mining.

Wraps mlxtend's Apriori and FP-Growth behind the FrequentItemsetMiner
interface so their output can be compared with the native miners.
"""
import logging
import time
from typing import List

import pandas as pd
from mlxtend.frequent_patterns import apriori, fpgrowth
from mlxtend.preprocessing import TransactionEncoder

from .base import FrequentItemsetMiner
from .errors import InvalidArgumentError
from .itemsets import Itemset, MiningResult, build_stats, sort_by_support
from .support import CountingSupportIndex

logger = logging.getLogger(__name__)


class MLxtendMiner(FrequentItemsetMiner):
    """
    MLxtend frequent itemset miner.

    Supports algorithms:
    - 'fpgrowth': FP-Growth (default)
    - 'apriori': Apriori

    mlxtend reports supports as fractions; they are turned back into exact
    counts so the result carries the same kind of index as the native miners.
    """

    VALID_ALGORITHMS = ['fpgrowth', 'apriori']

    def __init__(self, algorithm: str = 'fpgrowth', min_support: float = 0.01):
        super().__init__(min_support)
        self.algorithm = algorithm.lower()

        if self.algorithm not in self.VALID_ALGORITHMS:
            raise InvalidArgumentError(
                f"Algorithm must be one of {self.VALID_ALGORITHMS}, got '{self.algorithm}'"
            )

    def _prepare_data(self, transactions: List[Itemset]) -> pd.DataFrame:
        """
        One-hot encode transactions for mlxtend.

        Args:
            transactions: Normalized transactions

        Returns:
            Boolean DataFrame with one column per item
        """
        rows = [sorted(transaction) for transaction in transactions]
        te = TransactionEncoder()
        te_array = te.fit(rows).transform(rows)
        return pd.DataFrame(te_array, columns=te.columns_)

    def _mine(self, transactions: List[Itemset], min_support: float) -> MiningResult:
        start_time = time.time()
        transaction_count = len(transactions)
        df_encoded = self._prepare_data(transactions)

        if df_encoded.shape[1] == 0:
            frequent_itemsets_df = pd.DataFrame(columns=['support', 'itemsets'])
        elif self.algorithm == 'fpgrowth':
            frequent_itemsets_df = fpgrowth(df_encoded, min_support=min_support, use_colnames=True)
        else:
            frequent_itemsets_df = apriori(df_encoded, min_support=min_support, use_colnames=True)

        index = CountingSupportIndex(transaction_count)
        for _, row in frequent_itemsets_df.iterrows():
            index.set_count(row['itemsets'], int(round(float(row['support']) * transaction_count)))

        frequent_itemsets = sort_by_support(
            [frozenset(itemset) for itemset in frequent_itemsets_df['itemsets']], index
        )
        execution_time = time.time() - start_time
        logger.info("MLxtend %s mined %d frequent itemsets in %.3fs",
                    self.algorithm, len(frequent_itemsets), execution_time)

        return MiningResult(
            frequent_itemsets=frequent_itemsets,
            index=index,
            transaction_count=transaction_count,
            min_support=min_support,
            stats=build_stats(f'MLxtend_{self.algorithm}', frequent_itemsets, index, execution_time)
        )

    def __repr__(self):
        return f"MLxtendMiner(algorithm='{self.algorithm}', min_support={self.min_support})"

"""
Transaction sources.

A transaction database turns owner-level records (e.g. one user's ratings)
into the list of itemsets the miners consume.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, FrozenSet, Hashable, List

import pandas as pd

from ..rule_mining.errors import InvalidArgumentError


class TransactionDatabase(ABC):
    """Base class for anything that can hand out transactions."""

    @abstractmethod
    def select(self, *predicates: Callable[[Any], bool]) -> List[FrozenSet]:
        """
        Return the transactions whose owner passes every predicate.

        Args:
            *predicates: Tests applied to each transaction owner; with no
                predicates every transaction is returned

        Returns:
            List of transactions (frozensets of items)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """Number of transactions in the database."""
        pass

    def __len__(self):
        return self.size()


class FrameDatabase(TransactionDatabase):
    """
    Transaction database over a long-format ratings DataFrame.

    Each owner (e.g. a user) becomes one transaction holding every item
    (e.g. movie) they rated.

    Args:
        ratings: One row per (owner, item) pair
        owner_col: Column identifying the transaction owner
        item_col: Column holding the item
        owners: Optional DataFrame indexed by owner id; when given,
            predicates receive the owner's row instead of the bare id
    """

    def __init__(
        self,
        ratings: pd.DataFrame,
        owner_col: str = 'user_id',
        item_col: str = 'movie_id',
        owners: pd.DataFrame = None
    ):
        missing = [col for col in (owner_col, item_col) if col not in ratings.columns]
        if missing:
            raise InvalidArgumentError(f"Ratings are missing columns: {missing}")

        self.owner_col = owner_col
        self.item_col = item_col
        self.owners = owners

        self._transactions: Dict[Hashable, FrozenSet] = {
            owner: frozenset(group[item_col].dropna())
            for owner, group in ratings.groupby(owner_col, sort=False)
        }

        if owners is not None:
            unknown = [owner for owner in self._transactions if owner not in owners.index]
            if unknown:
                raise InvalidArgumentError(
                    f"Owners missing from the owner table: {', '.join(str(owner) for owner in unknown)}"
                )

    def _owner_record(self, owner: Hashable) -> Any:
        if self.owners is None:
            return owner
        return self.owners.loc[owner]

    def select(self, *predicates: Callable[[Any], bool]) -> List[FrozenSet]:
        selected = []
        for owner, transaction in self._transactions.items():
            record = self._owner_record(owner) if predicates else None
            if all(predicate(record) for predicate in predicates):
                selected.append(transaction)
        return selected

    def size(self) -> int:
        return len(self._transactions)

    def __repr__(self):
        return f"FrameDatabase(owners={self.size()}, owner_col='{self.owner_col}', item_col='{self.item_col}')"


def frame_to_transactions(data: pd.DataFrame) -> List[FrozenSet[str]]:
    """
    Convert a categorical DataFrame to transactions, one per row.

    Every non-missing cell becomes the item 'column__value'.

    Args:
        data: DataFrame with categorical (or discretized) values

    Returns:
        List of transactions
    """
    transactions = []
    for _, row in data.iterrows():
        transaction = []
        for col in data.columns:
            value = row[col]
            # Skip NaN values
            if pd.notna(value):
                transaction.append(f"{col}__{value}")
        transactions.append(frozenset(transaction))
    return transactions

"""
FP-tree: a compressed prefix tree over transactions.

Nodes live in an arena of parallel lists and refer to each other by integer
index (parent, children per item, next node holding the same item), so a
tree can be copied with plain list copies and never shares mutable state
with the tree it was copied from.
"""
import itertools
from collections import Counter
from typing import Callable, Dict, FrozenSet, Hashable, Iterable, Iterator, List, Sequence

from .errors import InternalConsistencyError
from .support import SupportIndex

ROOT = 0
NO_NODE = -1


class FPTree(SupportIndex):
    """
    FP-tree with a header table of node-link chains.

    The tree doubles as a support index over the transactions it was built
    from: counts recorded through set_count are returned as-is, any other
    itemset is counted by walking the node-link chain of its last item.

    Args:
        transaction_count: Number of transactions the tree summarizes
        min_count: Support count an item needs to stay in the tree
        rank: Position of every indexed item in the insertion order (lower
            rank means closer to the root)
    """

    def __init__(self, transaction_count: int, min_count: int, rank: Dict[Hashable, int] = None):
        super().__init__(transaction_count)
        self.min_count = min_count
        self._rank: Dict[Hashable, int] = dict(rank or {})

        # Arena, index 0 is the root and holds no item
        self._items: List[Hashable] = [None]
        self._counts: List[int] = [0]
        self._parents: List[int] = [NO_NODE]
        self._children: List[Dict[Hashable, int]] = [{}]
        self._links: List[int] = [NO_NODE]

        # Header table: first and last node of every item's chain
        self._header: Dict[Hashable, int] = {}
        self._tails: Dict[Hashable, int] = {}

        self._recorded: Dict[FrozenSet, int] = {}

    @classmethod
    def from_transactions(cls, transactions: Sequence[Iterable[Hashable]], min_count: int) -> 'FPTree':
        """
        Build a tree in one pass over the transactions.

        Items occurring in fewer than min_count transactions are dropped from
        every transaction; the remaining items are inserted in descending
        order of their global count, ties broken by the items' own order.
        """
        transactions = [frozenset(transaction) for transaction in transactions]
        item_counts = Counter(item for transaction in transactions for item in transaction)
        frequent = {item: count for item, count in item_counts.items() if count >= min_count}
        order = sorted(frequent, key=lambda item: (-frequent[item], item))

        tree = cls(len(transactions), min_count, {item: position for position, item in enumerate(order)})
        for transaction in transactions:
            tree.insert(tree.order_items(transaction))
        return tree

    def order_items(self, items: Iterable[Hashable]) -> List[Hashable]:
        """Keep the indexed items of items, sorted by rank."""
        return sorted((item for item in items if item in self._rank), key=self._rank.__getitem__)

    def insert(self, path: Sequence[Hashable], count: int = 1) -> None:
        """
        Add a rank-ordered item path, sharing any existing prefix.

        Args:
            path: Items sorted by rank, all of them indexed by the tree
            count: Weight added to every node along the path
        """
        node = ROOT
        for item in path:
            node = self._child_or_new(node, item)
            self._counts[node] += count
        self._recorded.clear()

    def _child_or_new(self, parent: int, item: Hashable) -> int:
        child = self._children[parent].get(item)
        if child is not None:
            return child

        child = len(self._items)
        self._items.append(item)
        self._counts.append(0)
        self._parents.append(parent)
        self._children.append({})
        self._links.append(NO_NODE)
        self._children[parent][item] = child

        if item in self._header:
            self._links[self._tails[item]] = child
        else:
            self._header[item] = child
        self._tails[item] = child
        return child

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def node_count(self) -> int:
        """Number of item nodes, root excluded."""
        return len(self._items) - 1

    def is_empty(self) -> bool:
        return not self._children[ROOT]

    def is_single_path(self) -> bool:
        """True if no node has more than one child, i.e. the tree is one branch."""
        node = ROOT
        while self._children[node]:
            if len(self._children[node]) > 1:
                return False
            node = next(iter(self._children[node].values()))
        return True

    def header_items(self) -> List[Hashable]:
        return list(self._header)

    def chain(self, item: Hashable) -> Iterator[int]:
        """Indices of the nodes holding item, following the node-links."""
        node = self._header.get(item, NO_NODE)
        while node != NO_NODE:
            yield node
            node = self._links[node]

    def item_count(self, item: Hashable) -> int:
        """Total count along item's node-link chain."""
        return sum(self._counts[node] for node in self.chain(item))

    def header_items_by_ascending_support(self) -> List[Hashable]:
        """Header items, least frequent first; ties put the deeper-ranked item first."""
        totals = {item: self.item_count(item) for item in self._header}
        return sorted(totals, key=lambda item: (totals[item], -self._rank[item]))

    def path_to_root(self, node: int) -> List[Hashable]:
        """Items on the ancestor path of node, nearest ancestor first."""
        items = []
        node = self._parents[node]
        while node not in (ROOT, NO_NODE):
            items.append(self._items[node])
            node = self._parents[node]
        return items

    def has_cyclic_links(self) -> bool:
        """Check every node-link chain for a cycle."""
        for item, first in self._header.items():
            seen = set()
            node = first
            while node != NO_NODE:
                if node in seen:
                    return True
                seen.add(node)
                node = self._links[node]
        return False

    # ------------------------------------------------------------------
    # Conditional trees
    # ------------------------------------------------------------------

    def clone(self) -> 'FPTree':
        """Structural copy sharing no mutable state with this tree."""
        other = FPTree(self.transaction_count, self.min_count, self._rank)
        other._items = list(self._items)
        other._counts = list(self._counts)
        other._parents = list(self._parents)
        other._children = [dict(children) for children in self._children]
        other._links = list(self._links)
        other._header = dict(self._header)
        other._tails = dict(self._tails)
        return other

    def conditional_tree(self, item: Hashable) -> 'FPTree':
        """
        Tree of the prefix paths leading to item, weighted by item's counts.

        The result holds only the ancestors of item's nodes, with every item
        whose total count falls below min_count spliced out. It is a fresh
        tree; this tree is left untouched.

        Raises:
            KeyError: if item is not in the header table
        """
        if item not in self._header:
            raise KeyError(f"Item {item!r} is not indexed by this tree")

        weighted = self.clone()
        weighted._weigh_by_item(item)

        # Drop item's nodes and everything that does not lead to one of them
        prefixes = weighted._splice(
            lambda node: weighted._items[node] != item and weighted._counts[node] > 0
        )

        infrequent = {other for other in prefixes._header if prefixes.item_count(other) < self.min_count}
        if not infrequent:
            return prefixes
        return prefixes._splice(lambda node: prefixes._items[node] not in infrequent)

    def _weigh_by_item(self, item: Hashable) -> None:
        """Set every other node's count to the weight of item's nodes below it."""
        weights = [0] * len(self._items)
        for node in self.chain(item):
            weight = self._counts[node]
            weights[node] = weight
            parent = self._parents[node]
            while parent != ROOT:
                weights[parent] += weight
                parent = self._parents[parent]

        for node in range(1, len(self._items)):
            if self._items[node] != item:
                self._counts[node] = weights[node]

    def _splice(self, keep: Callable[[int], bool]) -> 'FPTree':
        """
        Copy of this tree without the nodes failing keep.

        A removed node's children are re-parented onto its nearest kept
        ancestor; children landing next to a sibling with the same item are
        merged into it, adding their counts.
        """
        tree = FPTree(self.transaction_count, self.min_count, self._rank)
        stack = [(child, ROOT) for child in reversed(list(self._children[ROOT].values()))]

        while stack:
            node, parent = stack.pop()
            if keep(node):
                target = tree._child_or_new(parent, self._items[node])
                tree._counts[target] += self._counts[node]
            else:
                target = parent
            stack.extend((child, target) for child in reversed(list(self._children[node].values())))

        return tree

    def extract_combinations_from_single_path(self, prefix: Iterable[Hashable] = ()) -> Dict[FrozenSet, int]:
        """
        All frequent itemsets of a single-path tree.

        Every non-empty combination of the path's items, joined with prefix,
        maps to its exact count: the count of the deepest chosen node.

        Raises:
            InternalConsistencyError: if the tree branches
        """
        if not self.is_single_path():
            raise InternalConsistencyError("Combinations can only be extracted from a single-path tree")

        prefix = frozenset(prefix)
        path = []
        node = ROOT
        while self._children[node]:
            node = next(iter(self._children[node].values()))
            path.append((self._items[node], self._counts[node]))

        combinations = {}
        for size in range(1, len(path) + 1):
            for chosen in itertools.combinations(path, size):
                itemset = prefix | {item for item, _ in chosen}
                combinations[itemset] = min(count for _, count in chosen)
        return combinations

    # ------------------------------------------------------------------
    # Support index
    # ------------------------------------------------------------------

    def get_count(self, itemset: Iterable[Hashable]) -> int:
        itemset = frozenset(itemset)
        if itemset in self._recorded:
            return self._recorded[itemset]
        return self.count_by_traversal(itemset)

    def set_count(self, itemset: Iterable[Hashable], count: int) -> None:
        self._recorded[frozenset(itemset)] = count

    def count_by_traversal(self, itemset: Iterable[Hashable]) -> int:
        """
        Count the transactions containing itemset by walking the tree.

        Only items indexed by the tree are known; an itemset holding any
        other item (or no item at all) counts as 0.
        """
        itemset = frozenset(itemset)
        if not itemset or any(item not in self._rank for item in itemset):
            return 0

        last = max(itemset, key=self._rank.__getitem__)
        rest = itemset - {last}
        total = 0
        for node in self.chain(last):
            if rest <= set(self.path_to_root(node)):
                total += self._counts[node]
        return total

    # ------------------------------------------------------------------

    def _subtree_equals(self, node: int, other: 'FPTree', other_node: int) -> bool:
        if self._items[node] != other._items[other_node] or self._counts[node] != other._counts[other_node]:
            return False
        children = self._children[node]
        other_children = other._children[other_node]
        if children.keys() != other_children.keys():
            return False
        return all(self._subtree_equals(children[item], other, other_children[item]) for item in children)

    def __eq__(self, other):
        if not isinstance(other, FPTree):
            return NotImplemented
        return self._subtree_equals(ROOT, other, ROOT)

    __hash__ = None

    def __repr__(self):
        return (f"FPTree(nodes={self.node_count}, items={len(self._header)}, "
                f"min_count={self.min_count}, transaction_count={self.transaction_count})")

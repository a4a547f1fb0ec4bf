from typing import Any, Dict, Hashable, Iterable, List, Tuple

import pandas as pd

from ..rule_mining.itemsets import AssociationRule, MiningResult
from ..rule_mining.support import SupportIndex


def rule_metrics(rule: AssociationRule, index: SupportIndex) -> Dict[str, float]:
    """
    Quality metrics of a rule, all derived from the support index.

    Args:
        rule: Rule whose antecedent has a non-zero count
        index: Support index of the mining run the rule came from

    Returns:
        Dict with support, confidence, lift, leverage, zhangs_metric and
        interestingness
    """
    support = index.support(rule.itemset)
    confidence = index.confidence(rule)
    antecedent_support = index.support(rule.antecedent)
    consequent_support = index.support(rule.consequent)

    lift = confidence / consequent_support if consequent_support > 0 else 0.0
    leverage = support - antecedent_support * consequent_support

    # Zhang's metric
    if 0 < consequent_support < 1:
        if confidence >= consequent_support:
            zhangs_metric = (confidence - consequent_support) / (1 - consequent_support)
        else:
            zhangs_metric = (confidence - consequent_support) / consequent_support
    else:
        zhangs_metric = 0.0

    return {
        'support': support,
        'confidence': confidence,
        'lift': lift,
        'leverage': leverage,
        'zhangs_metric': round(zhangs_metric, 4),
        'interestingness': round(support * confidence, 4)
    }


def rules_to_records(rules: Iterable[AssociationRule], index: SupportIndex) -> List[Dict[str, Any]]:
    """One dict per rule: 'antecedents', 'consequents' and the rule metrics."""
    records = []
    for rule in rules:
        record = {'antecedents': rule.antecedent, 'consequents': rule.consequent}
        record.update(rule_metrics(rule, index))
        records.append(record)
    return records


def rules_to_frame(rules: Iterable[AssociationRule], index: SupportIndex) -> pd.DataFrame:
    records = rules_to_records(rules, index)
    if not records:
        return pd.DataFrame(columns=['antecedents', 'consequents', 'support', 'confidence', 'lift',
                                     'leverage', 'zhangs_metric', 'interestingness'])
    return pd.DataFrame(records)


def itemsets_to_records(result: MiningResult) -> List[Dict[str, Any]]:
    return [
        {'items': itemset, 'count': result.count(itemset), 'support': result.support(itemset)}
        for itemset in result.frequent_itemsets
    ]


def filter_rules(rules, criterion: str, threshold: float):
    """
    Filters rules based on a criterion >= threshold.

    Args:
        rules: List of rule records
        criterion: The rule metric to filter on (e.g., 'support', 'confidence', 'zhangs_metric')
        threshold: Minimum value for the criterion (inclusive)

    Returns:
        List of rules meeting the criterion
    """
    return [rule for rule in rules if rule.get(criterion, float("-inf")) >= threshold]


def filter_rules_by_pattern(
    rules,
    antecedent_contains: list = None,
    consequent_contains: list = None,
    antecedent_excludes: list = None,
    consequent_excludes: list = None,
    match_any: bool = False
):
    """
    Filter rules by the items on either side.

    Args:
        rules: List of rule records
        antecedent_contains: Items that must appear in the antecedent
        consequent_contains: Items that must appear in the consequent
        antecedent_excludes: Items that must NOT appear in the antecedent
        consequent_excludes: Items that must NOT appear in the consequent
        match_any: If True, a 'contains' list matches when ANY of its items
            is present. If False, ALL must be.

    Returns:
        List of filtered rules
    """
    def matches_items(itemset, items, match_any_item):
        if not items:
            return True
        if match_any_item:
            return any(item in itemset for item in items)
        return all(item in itemset for item in items)

    def excludes_items(itemset, items):
        if not items:
            return True
        return not any(item in itemset for item in items)

    filtered = []
    for rule in rules:
        ant = rule['antecedents']
        cons = rule['consequents']

        if (matches_items(ant, antecedent_contains, match_any)
                and matches_items(cons, consequent_contains, match_any)
                and excludes_items(ant, antecedent_excludes)
                and excludes_items(cons, consequent_excludes)):
            filtered.append(rule)

    return filtered


def filter_rules_by_consequent(rules, targets: List[Hashable], match_any: bool = True):
    """Keep rules whose consequent holds the target items."""
    return filter_rules_by_pattern(rules, consequent_contains=targets, match_any=match_any)


def filter_rules_by_antecedent(rules, items: List[Hashable], match_any: bool = True):
    """Keep rules whose antecedent holds the given items."""
    return filter_rules_by_pattern(rules, antecedent_contains=items, match_any=match_any)


def filter_itemsets(itemsets, criterion: str = 'support', threshold: float = 0.0) -> Tuple[List[Dict], Dict]:
    """
    Filters frequent itemsets based on a criterion >= threshold.
    Returns both filtered itemsets and a stats dictionary.

    Args:
        itemsets: List of itemset records (each with 'items' and 'support' keys)
        criterion: The metric to filter on (default: 'support')
        threshold: Minimum value for the criterion (inclusive)

    Returns:
        Tuple of (filtered_itemsets, stats)
    """
    filtered_itemset_list = [itemset for itemset in itemsets if itemset.get(criterion, float("-inf")) >= threshold]

    count = len(filtered_itemset_list)
    if count == 0:
        return filtered_itemset_list, {"num_itemsets": 0, "average_support": 0.0}

    avg_support = sum(item.get("support", 0) for item in filtered_itemset_list) / count

    stats = {
        "num_itemsets": count,
        "average_support": round(avg_support, 3),
    }

    return filtered_itemset_list, stats

from .rule import (
    rule_metrics,
    rules_to_records,
    rules_to_frame,
    itemsets_to_records,
    filter_rules,
    filter_rules_by_pattern,
    filter_rules_by_consequent,
    filter_rules_by_antecedent,
    filter_itemsets
)

__all__ = [
    'rule_metrics',
    'rules_to_records',
    'rules_to_frame',
    'itemsets_to_records',
    'filter_rules',
    'filter_rules_by_pattern',
    'filter_rules_by_consequent',
    'filter_rules_by_antecedent',
    'filter_itemsets'
]

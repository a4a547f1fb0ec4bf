"""
Frequent itemset and association rule mining over transaction data,
e.g. the sets of movies individual users rated.
"""
from .rule_mining import (
    AprioriMiner,
    AssociationRule,
    CountingSupportIndex,
    FPGrowthMiner,
    FPTree,
    InternalConsistencyError,
    InvalidArgumentError,
    MiningError,
    MiningResult,
    MLxtendMiner,
    RuleGenerator,
    SupportIndex,
    apriori,
    fpgrowth,
    generate_rules,
)

__all__ = [
    'AprioriMiner',
    'AssociationRule',
    'CountingSupportIndex',
    'FPGrowthMiner',
    'FPTree',
    'InternalConsistencyError',
    'InvalidArgumentError',
    'MiningError',
    'MiningResult',
    'MLxtendMiner',
    'RuleGenerator',
    'SupportIndex',
    'apriori',
    'fpgrowth',
    'generate_rules',
]

"""
Rule Mining Module

Supports different rule mining approaches:
- Frequent itemset mining (Apriori, FP-Growth, MLxtend reference miners)
- Association rule mining from any frequent itemset result
"""
from .errors import MiningError, InvalidArgumentError, InternalConsistencyError
from .support import SupportIndex, CountingSupportIndex, minimum_support_count
from .itemsets import AssociationRule, MiningResult, describe_itemset, describe_rule
from .base import FrequentItemsetMiner, AssociationRuleMiner
from .apriori_miner import AprioriMiner, apriori
from .fp_tree import FPTree
from .fpgrowth_miner import FPGrowthMiner, fpgrowth
from .rule_generator import RuleGenerator, generate_rules
from .mlxtend_miner import MLxtendMiner

__all__ = [
    'MiningError', 'InvalidArgumentError', 'InternalConsistencyError',
    'SupportIndex', 'CountingSupportIndex', 'minimum_support_count',
    'AssociationRule', 'MiningResult', 'describe_itemset', 'describe_rule',
    'FrequentItemsetMiner', 'AssociationRuleMiner',
    'AprioriMiner', 'apriori',
    'FPTree',
    'FPGrowthMiner', 'fpgrowth',
    'RuleGenerator', 'generate_rules',
    'MLxtendMiner'
]

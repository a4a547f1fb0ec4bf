import logging
from typing import List, Dict, Any, Tuple, Iterable, Hashable

from ..postprocessing.rule import filter_rules, filter_itemsets, rules_to_records, itemsets_to_records
from ..rule_mining.apriori_miner import AprioriMiner
from ..rule_mining.base import FrequentItemsetMiner
from ..rule_mining.errors import InvalidArgumentError
from ..rule_mining.fpgrowth_miner import FPGrowthMiner
from ..rule_mining.mlxtend_miner import MLxtendMiner
from ..rule_mining.rule_generator import RuleGenerator

from .config import MinerConfig, RuleMiningConfig, FilterConfig

logger = logging.getLogger(__name__)

VALID_MODES = ['rules', 'itemsets', 'both']


def create_miner(config: MinerConfig) -> FrequentItemsetMiner:
    algorithm = config.algorithm.lower()

    if algorithm == 'apriori':
        return AprioriMiner(min_support=config.min_support)

    elif algorithm == 'fpgrowth':
        return FPGrowthMiner(min_support=config.min_support)

    elif algorithm.startswith('mlxtend_'):
        return MLxtendMiner(
            algorithm=algorithm[len('mlxtend_'):],
            min_support=config.min_support
        )

    else:
        raise InvalidArgumentError(f"Unknown miner algorithm: {config.algorithm}")


def apply_filters(
    data: List[Dict],
    filters: List[FilterConfig],
    mode: str = 'rules'
) -> List[Dict]:
    if not filters:
        return data

    result = data

    for f in filters:
        if result and f.metric not in result[0]:
            # Metric belongs to the other record kind, e.g. confidence on itemsets
            logger.debug("Skipping %s filter on %s records without that metric", f.metric, mode)
            continue
        if mode == 'rules':
            result = filter_rules(result, criterion=f.metric, threshold=f.threshold)
        else:
            result, _ = filter_itemsets(result, criterion=f.metric, threshold=f.threshold)

    return result


def run_rule_mining(
    transactions: Iterable[Iterable[Hashable]],
    config: RuleMiningConfig
) -> Tuple[List[Dict], Dict[str, Any]]:
    """
    Mine itemsets and/or rules as described by config.

    Args:
        transactions: Non-empty sequence of item collections
        config: Miner, mode and post-mining filters

    Returns:
        Tuple of (records, stats); records are itemset records, rule records
        or both, depending on config.mode
    """
    mode = config.mode
    if mode not in VALID_MODES:
        raise InvalidArgumentError(f"Mode must be one of {VALID_MODES}, got '{mode}'")

    miner = create_miner(config.miner_config)
    result = miner.find_frequent_itemsets(transactions)

    results = []
    stats = {}

    if mode in ['itemsets', 'both']:
        itemsets = apply_filters(itemsets_to_records(result), config.filters, mode='itemsets')
        results.extend(itemsets)
        stats['itemsets'] = dict(result.stats)
        stats['itemsets']['count'] = len(itemsets)

    if mode in ['rules', 'both']:
        generator = RuleGenerator(min_confidence=config.miner_config.min_confidence)
        rules = apply_filters(rules_to_records(generator.generate_rules(result), result.index),
                              config.filters, mode='rules')
        results.extend(rules)
        stats['rules'] = {
            'num_rules': len(rules),
            'average_confidence': sum(r['confidence'] for r in rules) / len(rules) if rules else 0.0,
            'algorithm': result.stats.get('algorithm'),
            'mode': 'rules',
            'count': len(rules)
        }

    logger.info("Rule mining run (%s, mode=%s) produced %d records",
                config.miner_config.algorithm, mode, len(results))
    return results, stats

"""Association rule generation from mined frequent itemsets."""
import logging
import time
from typing import Dict, List

from .base import AssociationRuleMiner
from .itemsets import AssociationRule, Itemset, MiningResult
from .support import SupportIndex

logger = logging.getLogger(__name__)


class RuleGenerator(AssociationRuleMiner):
    """
    Confidence-filtered rules from a MiningResult.

    For each frequent itemset the rules are grown level by level: first all
    rules with a single-item consequent, then, from every rule that passed,
    rules with one more item moved from the antecedent to the consequent.
    For a fixed itemset confidence can only drop as the consequent grows, so
    a rule below the threshold is never grown further.
    """

    def _generate(self, result: MiningResult, min_confidence: float) -> List[AssociationRule]:
        start_time = time.time()
        index = result.index
        confidences: Dict[AssociationRule, float] = {}

        for itemset in result.frequent_itemsets:
            if len(itemset) < 2:
                # Any rule needs at least one item on each side
                continue
            confidences.update(self._rules_for_itemset(itemset, index, min_confidence))

        rules = sorted(confidences, key=lambda rule: (
            -confidences[rule],
            -index.get_count(rule.itemset),
            tuple(sorted(rule.antecedent)),
            tuple(sorted(rule.consequent))
        ))
        logger.info("Generated %d rules with confidence >= %s from %d itemsets in %.3fs",
                    len(rules), min_confidence, len(result.frequent_itemsets), time.time() - start_time)
        return rules

    def _rules_for_itemset(
        self,
        itemset: Itemset,
        index: SupportIndex,
        min_confidence: float
    ) -> Dict[AssociationRule, float]:
        kept: Dict[AssociationRule, float] = {}
        evaluated = set()

        level = [AssociationRule(itemset - {item}, {item}) for item in sorted(itemset)]
        while level:
            survivors = []
            for rule in level:
                if rule in evaluated:
                    continue
                evaluated.add(rule)
                confidence = index.confidence(rule)
                if confidence >= min_confidence:
                    kept[rule] = confidence
                    survivors.append(rule)
            level = self.next_rules(survivors)

        return kept

    @staticmethod
    def next_rules(rules: List[AssociationRule]) -> List[AssociationRule]:
        """Move each antecedent item, one at a time, into the consequent."""
        next_level = []
        for rule in rules:
            if len(rule.antecedent) < 2:
                # Nothing left to move without emptying the antecedent
                continue
            for item in sorted(rule.antecedent):
                next_level.append(AssociationRule(rule.antecedent - {item}, rule.consequent | {item}))
        return next_level


def generate_rules(result: MiningResult, min_confidence: float = 0.5) -> List[AssociationRule]:
    """Generate association rules with confidence >= min_confidence."""
    return RuleGenerator(min_confidence).generate_rules(result)

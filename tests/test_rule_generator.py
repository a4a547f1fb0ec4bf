import itertools

import pytest

from conftest import random_transactions
from moviemine.rule_mining import (
    AprioriMiner,
    AssociationRule,
    CountingSupportIndex,
    FPGrowthMiner,
    InternalConsistencyError,
    InvalidArgumentError,
    MiningResult,
    RuleGenerator,
    apriori,
    fpgrowth,
    generate_rules,
)


def brute_force_rules(result, min_confidence):
    rules = set()
    for itemset in result:
        for size in range(1, len(itemset)):
            for antecedent in itertools.combinations(sorted(itemset), size):
                antecedent = frozenset(antecedent)
                if result.count(itemset) / result.count(antecedent) >= min_confidence:
                    rules.add(AssociationRule(antecedent, itemset - antecedent))
    return rules


@pytest.fixture
def textbook_result(textbook_transactions):
    return fpgrowth(textbook_transactions, min_support=0.2)


def test_textbook_rules(textbook_result) -> None:
    rules = generate_rules(textbook_result, min_confidence=0.7)

    assert AssociationRule({"b"}, {"a"}) in rules
    assert AssociationRule({"d", "e"}, {"a"}) in rules
    assert AssociationRule({"a"}, {"b"}) not in rules
    assert AssociationRule({"c", "d"}, {"b"}) not in rules


def test_multi_item_consequent(textbook_result) -> None:
    rules = generate_rules(textbook_result, min_confidence=0.6)

    # conf = count(ade) / count(e) = 2 / 3
    assert AssociationRule({"e"}, {"a", "d"}) in rules


@pytest.mark.parametrize("min_confidence", [0.3, 0.6, 0.8, 1.0])
def test_complete_and_sound(textbook_result, min_confidence) -> None:
    rules = generate_rules(textbook_result, min_confidence=min_confidence)

    assert set(rules) == brute_force_rules(textbook_result, min_confidence)
    assert len(rules) == len(set(rules))
    for rule in rules:
        assert textbook_result.index.confidence(rule) >= min_confidence


@pytest.mark.parametrize("seed", [3, 11, 99])
def test_complete_on_random_data(seed) -> None:
    result = apriori(random_transactions(seed), min_support=0.12)
    rules = generate_rules(result, min_confidence=0.55)

    assert set(rules) == brute_force_rules(result, 0.55)


def test_rules_sorted_by_confidence(textbook_result) -> None:
    index = textbook_result.index
    rules = generate_rules(textbook_result, min_confidence=0.5)
    keys = [(-index.confidence(rule), -index.get_count(rule.itemset)) for rule in rules]

    assert keys == sorted(keys)
    assert index.confidence(rules[0]) == pytest.approx(1.0)


def test_both_miners_give_the_same_rules(textbook_transactions) -> None:
    from_apriori = generate_rules(apriori(textbook_transactions, 0.2), 0.6)
    from_fpgrowth = generate_rules(fpgrowth(textbook_transactions, 0.2), 0.6)

    assert from_apriori == from_fpgrowth


def test_mine_rules_shortcut(basket_transactions) -> None:
    rules = AprioriMiner(0.4).mine_rules(basket_transactions, min_confidence=0.7)
    same = FPGrowthMiner(0.4).mine_rules(basket_transactions, min_confidence=0.7)

    assert rules == same
    assert AssociationRule({"Beer"}, {"Diapers"}) in rules


def test_singleton_itemsets_give_no_rules() -> None:
    result = apriori([{"a"}, {"b"}, {"a"}], min_support=0.3)
    assert generate_rules(result, min_confidence=0.1) == []


def test_full_confidence_threshold(textbook_result) -> None:
    rules = generate_rules(textbook_result, min_confidence=1.0)
    assert all(textbook_result.index.confidence(rule) == pytest.approx(1.0) for rule in rules)
    assert AssociationRule({"e"}, {"a"}) not in rules


def test_index_missing_antecedent_counts() -> None:
    index = CountingSupportIndex(10)
    index.set_count({"a", "b"}, 5)
    result = MiningResult([frozenset("ab")], index, 10)

    with pytest.raises(InternalConsistencyError):
        generate_rules(result, min_confidence=0.5)


@pytest.mark.parametrize("min_confidence", [0, -1, 1.01, None, "high"])
def test_invalid_min_confidence(min_confidence) -> None:
    with pytest.raises(InvalidArgumentError):
        RuleGenerator(min_confidence)


def test_override_threshold_per_call(textbook_result) -> None:
    generator = RuleGenerator(0.9)
    assert len(generator.generate_rules(textbook_result, 0.5)) > len(generator.generate_rules(textbook_result))


def test_rule_value_semantics() -> None:
    rule = AssociationRule(["a", "b"], {"c"})

    assert rule == AssociationRule(frozenset("ab"), frozenset("c"))
    assert hash(rule) == hash(AssociationRule({"b", "a"}, ["c"]))
    assert rule.itemset == frozenset("abc")
    assert str(rule) == "{a, b} -> {c}"


@pytest.mark.parametrize("antecedent, consequent", [(set(), {"a"}), ({"a"}, set()), ({"a", "b"}, {"b"})])
def test_invalid_rules(antecedent, consequent) -> None:
    with pytest.raises(InvalidArgumentError):
        AssociationRule(antecedent, consequent)

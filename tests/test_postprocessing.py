import pytest

from moviemine.postprocessing import (
    filter_itemsets,
    filter_rules,
    filter_rules_by_antecedent,
    filter_rules_by_consequent,
    filter_rules_by_pattern,
    itemsets_to_records,
    rule_metrics,
    rules_to_frame,
    rules_to_records,
)
from moviemine.rule_mining import AssociationRule, fpgrowth, generate_rules


@pytest.fixture
def textbook_result(textbook_transactions):
    return fpgrowth(textbook_transactions, min_support=0.2)


@pytest.fixture
def rule_records(textbook_result):
    rules = generate_rules(textbook_result, min_confidence=0.6)
    return rules_to_records(rules, textbook_result.index)


def test_rule_metrics(textbook_result) -> None:
    metrics = rule_metrics(AssociationRule({"b"}, {"a"}), textbook_result.index)

    assert metrics["support"] == pytest.approx(0.5)
    assert metrics["confidence"] == pytest.approx(5 / 7)
    assert metrics["lift"] == pytest.approx((5 / 7) / 0.8)
    assert metrics["leverage"] == pytest.approx(0.5 - 0.7 * 0.8)
    assert metrics["zhangs_metric"] == pytest.approx(-0.1071)
    assert metrics["interestingness"] == pytest.approx(0.3571)


def test_positive_zhangs_metric(textbook_result) -> None:
    # conf({d,e} -> {a}) = 1.0 against a consequent support of 0.8
    metrics = rule_metrics(AssociationRule({"d", "e"}, {"a"}), textbook_result.index)
    assert metrics["zhangs_metric"] == pytest.approx(1.0)
    assert metrics["lift"] == pytest.approx(1.25)


def test_rules_to_frame(textbook_result, rule_records) -> None:
    rules = generate_rules(textbook_result, min_confidence=0.6)
    frame = rules_to_frame(rules, textbook_result.index)

    assert len(frame) == len(rule_records)
    assert {"antecedents", "consequents", "support", "confidence", "lift"} <= set(frame.columns)
    assert frame["confidence"].is_monotonic_decreasing


def test_rules_to_frame_empty(textbook_result) -> None:
    frame = rules_to_frame([], textbook_result.index)
    assert frame.empty
    assert "confidence" in frame.columns


def test_itemsets_to_records(textbook_result) -> None:
    records = itemsets_to_records(textbook_result)

    assert len(records) == 19
    assert records[0] == {"items": frozenset("a"), "count": 8, "support": pytest.approx(0.8)}


def test_filter_rules(rule_records) -> None:
    strong = filter_rules(rule_records, "confidence", 0.9)

    assert strong
    assert all(record["confidence"] >= 0.9 for record in strong)
    assert filter_rules(rule_records, "unknown_metric", 0.0) == []


def test_filter_rules_by_pattern(rule_records) -> None:
    filtered = filter_rules_by_pattern(rule_records, antecedent_contains=["e"], consequent_excludes=["d"])

    assert filtered
    for record in filtered:
        assert "e" in record["antecedents"]
        assert "d" not in record["consequents"]


def test_filter_rules_by_consequent(rule_records) -> None:
    any_of = filter_rules_by_consequent(rule_records, ["a", "d"])
    all_of = filter_rules_by_consequent(rule_records, ["a", "d"], match_any=False)

    assert len(all_of) < len(any_of)
    assert all({"a", "d"} <= record["consequents"] for record in all_of)


def test_filter_rules_by_antecedent(rule_records) -> None:
    filtered = filter_rules_by_antecedent(rule_records, ["b"])
    assert filtered
    assert all("b" in record["antecedents"] for record in filtered)


def test_filter_itemsets(textbook_result) -> None:
    filtered, stats = filter_itemsets(itemsets_to_records(textbook_result), "support", 0.5)

    assert {record["items"] for record in filtered} == {frozenset(x) for x in ["a", "b", "c", "d", "ab", "bc"]}
    assert stats["num_itemsets"] == 6


def test_filter_itemsets_none_left(textbook_result) -> None:
    filtered, stats = filter_itemsets(itemsets_to_records(textbook_result), "support", 0.95)
    assert filtered == []
    assert stats == {"num_itemsets": 0, "average_support": 0.0}

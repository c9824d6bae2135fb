"""Unit tests for domain models and their validation"""

import pytest
from datetime import date
from penny_engine.domain.exceptions import (
    InvalidBudgetError,
    InvalidInputError,
    InvalidTransactionDataError,
)
from penny_engine.domain.models import (
    Budget,
    Category,
    ConfidenceGate,
    DetectedItem,
    EstimatedImpact,
    IncomeCategory,
    Priority,
    ProjectedMonthEnd,
    SpendingStreak,
    StreakRisk,
    Transaction,
)


@pytest.mark.parametrize(
    "category,multiplier,minimum,price_range",
    [
        (Category.FOOD, 1.2, 0.6, (5.0, 50.0)),
        (Category.SHOPPING, 1.0, 0.7, (10.0, 200.0)),
        (Category.TRANSPORT, 0.8, 0.8, (2.0, 100.0)),
        (Category.ENTERTAINMENT, 1.1, 0.65, (8.0, 80.0)),
        (Category.BILLS, 0.7, 0.85, (20.0, 500.0)),
        (Category.OTHER, 0.9, 0.75, (5.0, 100.0)),
    ],
)
def test_category_constants(category, multiplier, minimum, price_range):
    assert category.detection_confidence_multiplier == multiplier
    assert category.minimum_detection_confidence == minimum
    assert category.typical_price_range == price_range
    assert category.icon


@pytest.mark.parametrize(
    "label,expected",
    [
        ("pizza slice", Category.FOOD),
        ("Concert", Category.ENTERTAINMENT),
        ("running_shoes", Category.SHOPPING),
        ("utility bill", Category.BILLS),
        ("movie ticket", Category.TRANSPORT),  # first match in category order wins
        ("zebra", None),
    ],
)
def test_category_from_label(label, expected):
    assert Category.from_label(label) is expected


def test_confidence_gate_caps_at_one():
    gate = ConfidenceGate.for_detection(Category.FOOD, 0.9)

    assert gate.raw == 0.9
    assert gate.adjusted == 1.0
    assert gate.meets_threshold is True


def test_confidence_gate_below_category_minimum():
    gate = ConfidenceGate.for_detection(Category.BILLS, 0.8)

    assert gate.adjusted == pytest.approx(0.56)
    assert gate.threshold == 0.85
    assert gate.meets_threshold is False
    assert gate.raw_below(0.8) is False
    assert gate.adjusted_below(0.8) is True


def test_transaction_amount_must_be_positive():
    with pytest.raises(InvalidTransactionDataError):
        Transaction.expense(0.0, Category.FOOD, date(2025, 6, 1))


def test_transaction_kind_must_match_category():
    with pytest.raises(InvalidTransactionDataError):
        Transaction(amount=10.0, date=date(2025, 6, 1), category=Category.FOOD, income_category=IncomeCategory.GIFT)
    with pytest.raises(InvalidTransactionDataError):
        Transaction(amount=10.0, date=date(2025, 6, 1), is_income=True)


def test_transaction_ids_are_unique():
    first = Transaction.expense(5.0, Category.FOOD, date(2025, 6, 1))
    second = Transaction.expense(5.0, Category.FOOD, date(2025, 6, 1))
    assert first.transaction_id != second.transaction_id


def test_display_category():
    assert Transaction.expense(5.0, Category.BILLS, date(2025, 6, 1)).display_category == "Bills"
    assert Transaction.income(5.0, IncomeCategory.GIFT, date(2025, 6, 1)).display_category == "Gift/Transfer"


def test_budget_validation():
    with pytest.raises(InvalidBudgetError):
        Budget(monthly_budget=0.0)
    with pytest.raises(InvalidBudgetError):
        Budget(category_budgets={Category.FOOD: -1.0})


def test_budget_updates_return_new_values():
    budget = Budget()

    updated = budget.with_category_budget(Category.FOOD, 450.0)

    assert updated.budget_for(Category.FOOD) == 450.0
    assert budget.budget_for(Category.FOOD) == 300.0
    assert budget.with_monthly_budget(2000.0).monthly_budget == 2000.0
    assert budget.monthly_budget == 1000.0


def test_budget_for_missing_category_is_zero():
    assert Budget(category_budgets={Category.FOOD: 100.0}).budget_for(Category.BILLS) == 0.0


def test_streak_validation():
    with pytest.raises(InvalidInputError):
        SpendingStreak(current_streak=-1)
    with pytest.raises(InvalidInputError):
        SpendingStreak(current_streak=5, longest_streak=3)


def test_detected_item_confidence_bounds():
    with pytest.raises(InvalidInputError):
        DetectedItem(category=Category.FOOD, confidence=1.5, estimated_price=10.0)


@pytest.mark.parametrize(
    "impact,summary",
    [
        (EstimatedImpact(budget_savings=30.0, time_to_afford=30, streak_protection=0.9), "Save $30 • 30 days to afford • Protects streak"),
        (EstimatedImpact(streak_protection=0.7), "Protects streak"),
        (EstimatedImpact(), "Minimal impact"),
    ],
)
def test_estimated_impact_summary(impact, summary):
    assert impact.summary == summary


@pytest.mark.parametrize(
    "confidence,description",
    [(0.9, "High Confidence"), (0.7, "Medium Confidence"), (0.5, "Low Confidence")],
)
def test_projection_confidence_description(confidence, description):
    projection = ProjectedMonthEnd(projected_total_spending=0.0, projected_overage=0.0, confidence_level=confidence)
    assert projection.confidence_description == description


def test_priority_rank_order():
    ranks = [p.rank for p in (Priority.LOW, Priority.MEDIUM, Priority.HIGH, Priority.CRITICAL)]
    assert ranks == [1, 2, 3, 4]


def test_streak_risk_description():
    assert StreakRisk.NONE.description == "No impact on streak"
    assert StreakRisk.HIGH.description == "High risk to streak"

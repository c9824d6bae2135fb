"""Decision facade - single entry point producing an AffordabilityResult"""

from typing import List, Optional, Tuple

from penny_engine.config import settings
from penny_engine.domain.affordability import evaluate_affordability
from penny_engine.domain.models import (
    AffordabilityResult,
    BudgetImpact,
    Category,
    ConfidenceGate,
    DetectedItem,
    LedgerSnapshot,
    SpendingStreak,
    StreakRisk,
    TransactionPreview,
)
from penny_engine.domain.recommendations import generate_recommendations
from penny_engine.infrastructure.observability.logging import log_evaluation
from penny_engine.infrastructure.observability.metrics import record_evaluation

# Streaks longer than this get called out when a purchase is unaffordable
NOTABLE_STREAK_DAYS = 7


def price_range(estimated_price: float, spread: Optional[float] = None) -> Tuple[float, float]:
    spread = settings.price_range_spread if spread is None else spread
    return estimated_price * (1 - spread), estimated_price * (1 + spread)


def suggested_adjustments(gate: ConfidenceGate) -> List[str]:
    """Review hints for a preview; lower adjusted confidence asks for more checks"""
    adjustments = []
    if gate.adjusted_below(settings.amount_review_confidence):
        adjustments.append("Consider adjusting the amount")
    if gate.adjusted_below(settings.category_review_confidence):
        adjustments.append("Verify the category")
    return adjustments


def build_transaction_preview(item: DetectedItem, gate: ConfidenceGate) -> TransactionPreview:
    label = item.raw_label or item.category.value.lower()
    return TransactionPreview(
        amount=item.estimated_price,
        category=item.category,
        note=f"Camera detected: {label}",
        confidence=gate.adjusted,
        suggested_adjustments=suggested_adjustments(gate),
    )


def explain_decision(
    can_afford: bool,
    estimated_price: float,
    category: Category,
    impact: BudgetImpact,
    gate: ConfidenceGate,
    current_streak: int,
) -> str:
    """Plain-language explanation of the outcome; wording is presentation only"""
    confidence_text = "high confidence" if gate.meets_threshold else "moderate confidence"
    item = category.value.lower()

    if can_afford:
        status = impact.budget_utilization.status.value.lower()
        if impact.streak_risk is StreakRisk.NONE:
            streak_text = "won't affect your streak"
        else:
            streak_text = f"may impact your {current_streak}-day streak"
        return (
            f"You can afford this {item} item with {confidence_text}! "
            f"Your budget is {status} and this purchase {streak_text}. "
            f"Remaining in category: ${impact.category_budget_remaining:.0f}"
        )

    if impact.would_exceed_budget:
        shortfall = estimated_price - impact.category_budget_remaining
        reasoning = f"This {item} item exceeds your {category.value} budget by ${shortfall:.0f} with {confidence_text}."
    else:
        reasoning = f"This {item} item exceeds your remaining monthly budget with {confidence_text}."

    overage = impact.projected_month_end.projected_overage
    if overage > 0:
        reasoning += f" Your current spending pace suggests you'll exceed your monthly budget by ${overage:.0f}."

    if current_streak > NOTABLE_STREAK_DAYS:
        reasoning += f" This could break your {current_streak}-day spending streak."

    return reasoning


def evaluate(item: DetectedItem, ledger: LedgerSnapshot, streak: SpendingStreak) -> AffordabilityResult:
    """
    Main entry point: evaluate a detected item against the ledger and streak.

    Flow:
    1. Gate the detection confidence for the item's category
    2. Decide affordability and compute the budget impact
    3. Generate ranked recommendations
    4. Assemble the result with reasoning and a transaction preview
    5. Record metrics and a structured log line
    """
    category = item.category
    gate = ConfidenceGate.for_detection(category, item.confidence)
    assessment = evaluate_affordability(category, item.estimated_price, ledger, streak.current_streak)
    impact = assessment.budget_impact

    recommendations = generate_recommendations(
        can_afford=assessment.can_afford,
        estimated_price=item.estimated_price,
        category=category,
        impact=impact,
        other_category_remainders=ledger.other_category_remainders(category),
        current_streak=streak.current_streak,
        gate=gate,
    )

    result = AffordabilityResult(
        can_afford=assessment.can_afford,
        estimated_price=item.estimated_price,
        price_range=price_range(item.estimated_price),
        category=category,
        budget_impact=impact,
        reasoning=explain_decision(
            assessment.can_afford,
            item.estimated_price,
            category,
            impact,
            gate,
            streak.current_streak,
        ),
        confidence=gate.adjusted,
        recommendations=recommendations,
        transaction_preview=build_transaction_preview(item, gate),
        detected_item=item,
        confidence_gate=gate,
    )

    record_evaluation(result.can_afford, impact.streak_risk.value, [r.type.value for r in recommendations])
    log_evaluation(category.value, item.estimated_price, result.can_afford, impact.streak_risk.value, len(recommendations))

    return result

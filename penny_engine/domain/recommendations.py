"""Recommendation engine - ranked, actionable suggestions for a purchase"""

import math
from typing import List, Optional, Sequence

from penny_engine.config import settings
from penny_engine.domain.models import (
    ActionType,
    AlternativeAction,
    BudgetImpact,
    Category,
    ConfidenceGate,
    EstimatedImpact,
    Priority,
    Recommendation,
    RecommendationType,
    StreakRisk,
)

OPTIMAL_TIMING_USAGE = 0.7


def rank_recommendations(recommendations: Sequence[Recommendation]) -> List[Recommendation]:
    """Order by priority, highest first; equal priorities keep emission order."""
    return sorted(recommendations, key=lambda r: r.priority.rank, reverse=True)


def savings_plan(
    estimated_price: float,
    category_budget_remaining: float,
    plan_days: int,
) -> Recommendation:
    """
    Wait-and-save plan for a purchase the category cannot cover.

    `category_budget_remaining` is the remainder after the purchase, as carried
    on BudgetImpact. The daily amount spreads the shortfall over `plan_days`,
    so the plan length always comes back as `plan_days` (zero when the
    shortfall is not positive).
    """
    shortfall = max(estimated_price - category_budget_remaining, 0.0)
    daily_savings_needed = shortfall / plan_days
    # round before ceil so float noise cannot push the plan to plan_days + 1
    days_to_save = math.ceil(round(shortfall / daily_savings_needed, 9)) if daily_savings_needed > 0 else 0
    low_end = max(category_budget_remaining * 0.8, 0.0)
    high_end = max(category_budget_remaining, 0.0)

    return Recommendation(
        type=RecommendationType.WAIT_AND_SAVE,
        title="Smart Savings Plan",
        description=f"Save ${daily_savings_needed:.2f} daily for {days_to_save} days to afford this item",
        actionable=True,
        priority=Priority.MEDIUM,
        reasoning="Spreading the shortfall evenly keeps daily spending predictable",
        estimated_impact=EstimatedImpact(
            budget_savings=shortfall,
            time_to_afford=days_to_save,
            streak_protection=0.9,
            confidence_level=0.8,
        ),
        alternative_actions=[
            AlternativeAction(
                title="Find Similar Item",
                description=f"Look for alternatives in the ${low_end:.0f}-${high_end:.0f} range",
                action_type=ActionType.SUBSTITUTE,
                estimated_outcome="Immediate purchase within budget",
            )
        ],
    )


def budget_reallocation(shortfall: float, category: Category) -> Recommendation:
    return Recommendation(
        type=RecommendationType.BUDGET_ADJUSTMENT,
        title="Reallocate Budget",
        description=f"Move ${max(shortfall, 0.0):.0f} from other categories to {category.value}",
        actionable=True,
        priority=Priority.HIGH,
        reasoning="You have sufficient funds in other categories",
        estimated_impact=EstimatedImpact(streak_protection=0.7, confidence_level=0.9),
    )


def streak_warning(risk: StreakRisk, current_streak: int) -> Recommendation:
    return Recommendation(
        type=RecommendationType.STREAK_PROTECTION,
        title="Streak Impact Warning",
        description=(
            f"This purchase has {risk.description.lower()}. "
            "Consider timing for optimal streak protection."
        ),
        actionable=False,
        priority=Priority.HIGH if risk is StreakRisk.HIGH else Priority.MEDIUM,
        reasoning=f"Your {current_streak}-day streak is valuable for building good spending habits",
        estimated_impact=EstimatedImpact(
            streak_protection=0.3 if risk is StreakRisk.HIGH else 0.7,
            confidence_level=0.8,
        ),
    )


def optimal_timing(monthly_usage: float) -> Recommendation:
    return Recommendation(
        type=RecommendationType.OPTIMAL_TIMING,
        title="Consider Next Month",
        description=(
            f"You've used {monthly_usage * 100:.0f}% of your monthly budget. "
            "Waiting until next month might be safer."
        ),
        actionable=True,
        priority=Priority.LOW,
        reasoning="Early month purchases provide better budget flexibility",
        estimated_impact=EstimatedImpact(streak_protection=0.9, confidence_level=0.7),
    )


def price_verification(gate: ConfidenceGate) -> Recommendation:
    return Recommendation(
        type=RecommendationType.BEHAVIORAL_INSIGHT,
        title="Verify Price Estimate",
        description=(
            f"Detection confidence is {gate.raw * 100:.0f}%. "
            "Double-check the actual price before purchasing."
        ),
        actionable=True,
        priority=Priority.MEDIUM,
        reasoning="Lower detection confidence suggests price verification would be beneficial",
        estimated_impact=EstimatedImpact(confidence_level=0.6),
    )


def generate_recommendations(
    can_afford: bool,
    estimated_price: float,
    category: Category,
    impact: BudgetImpact,
    other_category_remainders: Sequence[float],
    current_streak: int,
    gate: ConfidenceGate,
    savings_plan_days: Optional[int] = None,
    verification_confidence: Optional[float] = None,
) -> List[Recommendation]:
    """
    Build the ranked recommendation list for one evaluation.

    Shortfalls are measured against `impact.category_budget_remaining`, the
    category remainder after the purchase.

    Unaffordable:
    - savings plan (always)
    - reallocation when other categories hold more than the shortfall
    Affordable:
    - streak warning when the purchase carries any streak risk
    - next-month timing once 70% of the monthly budget is used
    - price verification when the raw detection confidence is low
    """
    plan_days = settings.savings_plan_days if savings_plan_days is None else savings_plan_days
    verification_limit = (
        settings.price_verification_confidence if verification_confidence is None else verification_confidence
    )
    recommendations = []

    if not can_afford:
        recommendations.append(savings_plan(estimated_price, impact.category_budget_remaining, plan_days))

        shortfall = estimated_price - impact.category_budget_remaining
        available_elsewhere = sum(r for r in other_category_remainders if r > 0)
        if available_elsewhere > shortfall:
            recommendations.append(budget_reallocation(shortfall, category))
    else:
        if impact.streak_risk is not StreakRisk.NONE:
            recommendations.append(streak_warning(impact.streak_risk, current_streak))

        if impact.budget_utilization.monthly_usage_percentage > OPTIMAL_TIMING_USAGE:
            recommendations.append(optimal_timing(impact.budget_utilization.monthly_usage_percentage))

        if gate.raw_below(verification_limit):
            recommendations.append(price_verification(gate))

    return rank_recommendations(recommendations)

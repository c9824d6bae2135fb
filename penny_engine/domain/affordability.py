"""Affordability evaluator - core decision logic for candidate purchases"""

from typing import List, Optional

from penny_engine.domain.exceptions import InvalidBudgetError, InvalidPriceError
from penny_engine.domain.models import (
    AffordabilityAssessment,
    BudgetImpact,
    BudgetRecommendationType,
    BudgetUtilization,
    Category,
    LedgerSnapshot,
    Priority,
    ProjectedMonthEnd,
    SmartBudgetRecommendation,
    StreakRisk,
)

# A streak this long doubles the weight of a purchase in the risk score
STREAK_SATURATION_DAYS = 30


def can_afford(estimated_price: float, category_remaining: float, monthly_remaining: float) -> bool:
    """Both the category and the monthly budget must cover the price."""
    return estimated_price <= category_remaining and estimated_price <= monthly_remaining


def _utilization(estimated_price: float, remaining: float) -> Optional[float]:
    """Share of `remaining` the price would consume; None when it cannot fit at all."""
    if remaining <= 0:
        return 0.0 if estimated_price == 0 else None
    return estimated_price / remaining


def calculate_streak_risk(
    affordable: bool,
    estimated_price: float,
    category_remaining: float,
    monthly_remaining: float,
    current_streak: int,
) -> StreakRisk:
    """
    Score how much a purchase threatens the current streak.

    Unaffordable purchases are always high risk. Otherwise the average share
    of the category and monthly remainders the price consumes is scaled by
    up to 2x for streaks of STREAK_SATURATION_DAYS or more:

    - > 0.8: high
    - > 0.6: medium
    - > 0.3: low
    """
    if not affordable:
        return StreakRisk.HIGH

    category_utilization = _utilization(estimated_price, category_remaining)
    monthly_utilization = _utilization(estimated_price, monthly_remaining)
    if category_utilization is None or monthly_utilization is None:
        return StreakRisk.HIGH

    streak_multiplier = min(current_streak / STREAK_SATURATION_DAYS, 1.0)
    risk_score = (category_utilization + monthly_utilization) / 2.0 * (1.0 + streak_multiplier)

    if risk_score > 0.8:
        return StreakRisk.HIGH
    elif risk_score > 0.6:
        return StreakRisk.MEDIUM
    elif risk_score > 0.3:
        return StreakRisk.LOW
    else:
        return StreakRisk.NONE


def projection_confidence(risk: StreakRisk) -> float:
    # Medium and high risk share the lowest confidence
    if risk is StreakRisk.NONE:
        return 0.9
    elif risk is StreakRisk.LOW:
        return 0.7
    return 0.5


def analyze_utilization(
    estimated_price: float,
    ledger: LedgerSnapshot,
    days_remaining: int,
) -> BudgetUtilization:
    """Usage, burn rate and month-end spending if the purchase goes ahead."""
    monthly_budget = ledger.monthly_budget
    spending = ledger.total_monthly_spending
    remaining_after_purchase = ledger.monthly_budget_remaining - estimated_price
    days_elapsed = ledger.days_in_month - days_remaining
    daily_impact = estimated_price / days_remaining

    return BudgetUtilization(
        monthly_usage_percentage=spending / monthly_budget,
        category_usage_percentage=(monthly_budget - remaining_after_purchase) / monthly_budget,
        daily_burn_rate=spending / max(days_elapsed, 1),
        projected_monthly_spending=spending + daily_impact * days_remaining,
    )


def build_budget_recommendations(
    would_exceed_budget: bool,
    streak_risk: StreakRisk,
    utilization: BudgetUtilization,
    ledger: LedgerSnapshot,
    category_remaining_after: float,
    monthly_remaining_after: float,
    days_remaining: int,
    current_streak: int,
) -> List[SmartBudgetRecommendation]:
    """
    Budget-level suggestions attached to the impact.

    - Reallocation when the category cannot cover the purchase
    - Pace warning when the daily burn rate runs 20% above an even split
    - Streak protection whenever the purchase carries any streak risk
    """
    recommendations = []

    if would_exceed_budget:
        recommendations.append(
            SmartBudgetRecommendation(
                type=BudgetRecommendationType.BUDGET_REALLOCATION,
                priority=Priority.HIGH,
                title="Consider Budget Reallocation",
                description="Move funds from other categories to afford this purchase",
                potential_savings=category_remaining_after,
                actionable=True,
            )
        )

    even_daily_spend = ledger.monthly_budget / max(ledger.days_in_month, 1)
    if utilization.daily_burn_rate > even_daily_spend * 1.2:
        recommendations.append(
            SmartBudgetRecommendation(
                type=BudgetRecommendationType.SPENDING_PACE,
                priority=Priority.MEDIUM,
                title="Slow Down Spending Pace",
                description="Current spending rate may exceed monthly budget",
                potential_savings=utilization.daily_burn_rate * days_remaining - monthly_remaining_after,
                actionable=True,
            )
        )

    if streak_risk is not StreakRisk.NONE:
        recommendations.append(
            SmartBudgetRecommendation(
                type=BudgetRecommendationType.STREAK_PROTECTION,
                priority=Priority.HIGH if streak_risk is StreakRisk.HIGH else Priority.MEDIUM,
                title="Protect Your Streak",
                description=f"This purchase may impact your {current_streak} day spending streak",
                potential_savings=0.0,
                actionable=False,
            )
        )

    return recommendations


def evaluate_affordability(
    category: Category,
    estimated_price: float,
    ledger: LedgerSnapshot,
    current_streak: int,
) -> AffordabilityAssessment:
    """
    Main entry point: decide affordability and compute the budget impact.

    Daily impact, burn rate and projection use the days left after today;
    the daily allowance check in streak.py counts today as well.

    Raises:
        InvalidPriceError: estimated_price is negative
        InvalidBudgetError: the monthly budget is not positive
    """
    if estimated_price < 0:
        raise InvalidPriceError(f"Estimated price cannot be negative, got {estimated_price}")
    if ledger.monthly_budget <= 0:
        raise InvalidBudgetError(f"Monthly budget must be positive, got {ledger.monthly_budget}")

    days_remaining = ledger.days_left_after_today
    category_remaining = ledger.remaining_for(category)
    monthly_remaining = ledger.monthly_budget_remaining

    affordable = can_afford(estimated_price, category_remaining, monthly_remaining)
    would_exceed_budget = estimated_price > category_remaining
    streak_risk = calculate_streak_risk(
        affordable, estimated_price, category_remaining, monthly_remaining, current_streak
    )

    utilization = analyze_utilization(estimated_price, ledger, days_remaining)
    projected_spending = utilization.projected_monthly_spending
    projection = ProjectedMonthEnd(
        projected_total_spending=projected_spending,
        projected_overage=max(projected_spending - ledger.monthly_budget, 0.0),
        confidence_level=projection_confidence(streak_risk),
    )

    category_remaining_after = category_remaining - estimated_price
    monthly_remaining_after = monthly_remaining - estimated_price
    impact = BudgetImpact(
        remaining_monthly_budget=monthly_remaining_after,
        category_budget_remaining=category_remaining_after,
        daily_budget_impact=estimated_price / days_remaining,
        would_exceed_budget=would_exceed_budget,
        streak_risk=streak_risk,
        budget_utilization=utilization,
        projected_month_end=projection,
        recommendations=build_budget_recommendations(
            would_exceed_budget,
            streak_risk,
            utilization,
            ledger,
            category_remaining_after,
            monthly_remaining_after,
            days_remaining,
            current_streak,
        ),
    )

    return AffordabilityAssessment(can_afford=affordable, budget_impact=impact)

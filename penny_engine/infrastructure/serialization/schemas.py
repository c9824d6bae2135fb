"""Pydantic schemas for persisted session state and presentation payloads"""

from datetime import date
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from penny_engine.domain.exceptions import DomainException, StateDeserializationError
from penny_engine.domain.models import (
    AffordabilityResult,
    Budget,
    Category,
    IncomeCategory,
    Recommendation,
    SpendingStreak,
    Transaction,
)


class TransactionSchema(BaseModel):
    """Persisted form of a transaction"""

    transaction_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    category: Optional[Category] = None
    income_category: Optional[IncomeCategory] = None
    is_income: bool = False
    date: date
    note: str = ""

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionSchema":
        return cls(
            transaction_id=txn.transaction_id,
            amount=txn.amount,
            category=txn.category,
            income_category=txn.income_category,
            is_income=txn.is_income,
            date=txn.date,
            note=txn.note,
        )

    def to_domain(self) -> Transaction:
        return Transaction(
            amount=self.amount,
            date=self.date,
            category=self.category,
            income_category=self.income_category,
            is_income=self.is_income,
            note=self.note,
            transaction_id=self.transaction_id,
        )


class BudgetSchema(BaseModel):
    """Persisted form of the budget"""

    monthly_budget: float = Field(..., gt=0)
    category_budgets: Dict[Category, float]
    current_month: int = Field(..., ge=1, le=12)
    current_year: int

    @classmethod
    def from_domain(cls, budget: Budget) -> "BudgetSchema":
        return cls(
            monthly_budget=budget.monthly_budget,
            category_budgets=dict(budget.category_budgets),
            current_month=budget.current_month,
            current_year=budget.current_year,
        )

    def to_domain(self) -> Budget:
        return Budget(
            monthly_budget=self.monthly_budget,
            category_budgets=dict(self.category_budgets),
            current_month=self.current_month,
            current_year=self.current_year,
        )


class SpendingStreakSchema(BaseModel):
    """Persisted form of the spending streak"""

    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    last_check_date: Optional[date] = None
    daily_budget_history: Dict[str, bool] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, streak: SpendingStreak) -> "SpendingStreakSchema":
        return cls(
            current_streak=streak.current_streak,
            longest_streak=streak.longest_streak,
            last_check_date=streak.last_check_date,
            daily_budget_history=dict(streak.daily_budget_history),
        )

    def to_domain(self) -> SpendingStreak:
        return SpendingStreak(
            current_streak=self.current_streak,
            longest_streak=self.longest_streak,
            last_check_date=self.last_check_date,
            daily_budget_history=dict(self.daily_budget_history),
        )


class SessionState(BaseModel):
    """Everything a session needs to be restored"""

    transactions: List[TransactionSchema] = Field(default_factory=list)
    budget: BudgetSchema
    streak: SpendingStreakSchema = Field(default_factory=SpendingStreakSchema)


def dump_state(budget: Budget, streak: SpendingStreak, transactions: List[Transaction]) -> str:
    state = SessionState(
        transactions=[TransactionSchema.from_domain(t) for t in transactions],
        budget=BudgetSchema.from_domain(budget),
        streak=SpendingStreakSchema.from_domain(streak),
    )
    return state.model_dump_json()


def load_state(raw: Union[str, bytes]) -> SessionState:
    """
    Parse persisted state and check it against the domain rules.

    Raises:
        StateDeserializationError: Malformed JSON or values the domain rejects
    """
    try:
        state = SessionState.model_validate_json(raw)
        state.budget.to_domain()
        state.streak.to_domain()
        for txn in state.transactions:
            txn.to_domain()
    except (ValidationError, DomainException) as e:
        raise StateDeserializationError(f"Invalid session state: {e}") from e
    return state


class RecommendationSchema(BaseModel):
    """Single recommendation for display"""

    type: str
    title: str
    description: str
    priority: str
    actionable: bool
    impact_summary: str

    @classmethod
    def from_domain(cls, recommendation: Recommendation) -> "RecommendationSchema":
        return cls(
            type=recommendation.type.value,
            title=recommendation.title,
            description=recommendation.description,
            priority=recommendation.priority.value,
            actionable=recommendation.actionable,
            impact_summary=recommendation.estimated_impact.summary,
        )


class AffordabilityResponse(BaseModel):
    """Flattened affordability result for presentation layers"""

    can_afford: bool
    summary: str
    estimated_price: float
    price_low: float
    price_high: float
    category: Category
    streak_risk: str
    utilization_status: str
    remaining_monthly_budget: float
    category_budget_remaining: float
    projected_overage: float
    reasoning: str
    confidence: float
    recommendations: List[RecommendationSchema]
    suggested_adjustments: List[str]

    @classmethod
    def from_result(cls, result: AffordabilityResult) -> "AffordabilityResponse":
        impact = result.budget_impact
        low, high = result.price_range
        return cls(
            can_afford=result.can_afford,
            summary=result.quick_summary,
            estimated_price=result.estimated_price,
            price_low=low,
            price_high=high,
            category=result.category,
            streak_risk=impact.streak_risk.value,
            utilization_status=impact.budget_utilization.status.value,
            remaining_monthly_budget=impact.remaining_monthly_budget,
            category_budget_remaining=impact.category_budget_remaining,
            projected_overage=impact.projected_month_end.projected_overage,
            reasoning=result.reasoning,
            confidence=result.confidence,
            recommendations=[RecommendationSchema.from_domain(r) for r in result.recommendations],
            suggested_adjustments=list(result.transaction_preview.suggested_adjustments),
        )

"""Domain models - pure Python dataclasses representing budgeting entities"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple

from penny_engine.domain.exceptions import (
    InvalidBudgetError,
    InvalidInputError,
    InvalidTransactionDataError,
)
from penny_engine.utils.date_utils import day_key


class Category(str, Enum):
    """Expense categories with detection and pricing constants"""

    FOOD = "Food"
    SHOPPING = "Shopping"
    TRANSPORT = "Transport"
    ENTERTAINMENT = "Entertainment"
    BILLS = "Bills"
    OTHER = "Other"

    @property
    def profile(self) -> "CategoryProfile":
        return CATEGORY_PROFILES[self]

    @property
    def icon(self) -> str:
        return self.profile.icon

    @property
    def typical_price_range(self) -> Tuple[float, float]:
        return self.profile.price_range

    @property
    def detection_confidence_multiplier(self) -> float:
        return self.profile.confidence_multiplier

    @property
    def minimum_detection_confidence(self) -> float:
        return self.profile.minimum_confidence

    @property
    def detection_keywords(self) -> Tuple[str, ...]:
        return self.profile.keywords

    @classmethod
    def from_label(cls, label: str) -> Optional["Category"]:
        """Map a raw detector label onto a category by keyword (None if unknown)"""
        words = label.lower().replace("_", " ").split()
        for category in cls:
            if any(word in category.detection_keywords for word in words):
                return category
        return None


@dataclass(frozen=True)
class CategoryProfile:
    """Immutable per-category constants"""

    icon: str
    price_range: Tuple[float, float]
    confidence_multiplier: float
    minimum_confidence: float
    keywords: Tuple[str, ...]


CATEGORY_PROFILES: Dict[Category, CategoryProfile] = {
    Category.FOOD: CategoryProfile(
        icon="🍕",
        price_range=(5.0, 50.0),
        confidence_multiplier=1.2,  # food is easy to recognise
        minimum_confidence=0.6,
        keywords=("food", "meal", "snack", "drink", "beverage", "restaurant", "pizza", "burger", "coffee", "sandwich"),
    ),
    Category.SHOPPING: CategoryProfile(
        icon="🛒",
        price_range=(10.0, 200.0),
        confidence_multiplier=1.0,
        minimum_confidence=0.7,
        keywords=("clothing", "shoes", "bag", "electronics", "book", "toy", "accessory", "retail", "product"),
    ),
    Category.TRANSPORT: CategoryProfile(
        icon="🚗",
        price_range=(2.0, 100.0),
        confidence_multiplier=0.8,
        minimum_confidence=0.8,
        keywords=("car", "vehicle", "bike", "scooter", "fuel", "gas", "parking", "ticket", "transport"),
    ),
    Category.ENTERTAINMENT: CategoryProfile(
        icon="🎬",
        price_range=(8.0, 80.0),
        confidence_multiplier=1.1,
        minimum_confidence=0.65,
        keywords=("movie", "game", "music", "concert", "theater", "sports", "event", "ticket", "entertainment"),
    ),
    Category.BILLS: CategoryProfile(
        icon="💡",
        price_range=(20.0, 500.0),
        confidence_multiplier=0.7,  # documents are hard to read from a camera frame
        minimum_confidence=0.85,
        keywords=("bill", "invoice", "receipt", "document", "utility", "phone", "internet", "subscription"),
    ),
    Category.OTHER: CategoryProfile(
        icon="📝",
        price_range=(5.0, 100.0),
        confidence_multiplier=0.9,
        minimum_confidence=0.75,
        keywords=("item", "object", "product", "service", "misc", "other"),
    ),
}


class IncomeCategory(str, Enum):
    SALARY = "Salary/Wages"
    FREELANCE = "Freelance/Contract"
    BUSINESS = "Business Income"
    INVESTMENT = "Investment/Interest"
    GIFT = "Gift/Transfer"
    OTHER = "Other Income"


class StreakRisk(str, Enum):
    """How much a purchase threatens the current spending streak"""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def description(self) -> str:
        if self is StreakRisk.NONE:
            return "No impact on streak"
        return f"{self.value.capitalize()} risk to streak"


class UtilizationStatus(str, Enum):
    UNDER_UTILIZED = "Under Utilized"
    ON_TRACK = "On Track"
    NEAR_LIMIT = "Near Limit"
    OVER_BUDGET = "Over Budget"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.LOW: 1, Priority.MEDIUM: 2, Priority.HIGH: 3, Priority.CRITICAL: 4}


class RecommendationType(str, Enum):
    WAIT_AND_SAVE = "Wait and Save"
    OPTIMAL_TIMING = "Optimal Timing"
    BUDGET_ADJUSTMENT = "Budget Adjustment"
    STREAK_PROTECTION = "Streak Protection"
    BEHAVIORAL_INSIGHT = "Behavioral Insight"


class BudgetRecommendationType(str, Enum):
    BUDGET_REALLOCATION = "Budget Reallocation"
    SPENDING_PACE = "Spending Pace"
    STREAK_PROTECTION = "Streak Protection"


class ActionType(str, Enum):
    POSTPONE = "Postpone Purchase"
    SUBSTITUTE = "Find Substitute"
    REALLOCATE = "Reallocate Budget"
    SAVE_FIRST = "Save First"


@dataclass(frozen=True)
class Transaction:
    """A recorded expense or income entry; never edited in place"""

    amount: float
    date: date
    category: Optional[Category] = None
    income_category: Optional[IncomeCategory] = None
    is_income: bool = False
    note: str = ""
    transaction_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise InvalidTransactionDataError(f"Transaction amount must be positive, got {self.amount}")
        if self.is_income:
            if self.income_category is None or self.category is not None:
                raise InvalidTransactionDataError("Income transactions need an income category and no expense category")
        elif self.category is None or self.income_category is not None:
            raise InvalidTransactionDataError("Expense transactions need an expense category and no income category")

    @classmethod
    def expense(cls, amount: float, category: Category, on: date, note: str = "") -> "Transaction":
        return cls(amount=amount, date=on, category=category, note=note)

    @classmethod
    def income(cls, amount: float, income_category: IncomeCategory, on: date, note: str = "") -> "Transaction":
        return cls(amount=amount, date=on, income_category=income_category, is_income=True, note=note)

    @property
    def display_category(self) -> str:
        if self.is_income:
            return self.income_category.value if self.income_category else IncomeCategory.OTHER.value
        return self.category.value if self.category else Category.OTHER.value


def default_category_budgets() -> Dict[Category, float]:
    return {
        Category.FOOD: 300.0,
        Category.SHOPPING: 200.0,
        Category.TRANSPORT: 150.0,
        Category.ENTERTAINMENT: 100.0,
        Category.BILLS: 250.0,
        Category.OTHER: 100.0,
    }


@dataclass(frozen=True)
class Budget:
    """Monthly and per-category spending limits"""

    monthly_budget: float = 1000.0
    category_budgets: Dict[Category, float] = field(default_factory=default_category_budgets)
    current_month: int = field(default_factory=lambda: date.today().month)
    current_year: int = field(default_factory=lambda: date.today().year)

    def __post_init__(self) -> None:
        if self.monthly_budget <= 0:
            raise InvalidBudgetError(f"Monthly budget must be positive, got {self.monthly_budget}")
        negative = [c.value for c, amount in self.category_budgets.items() if amount < 0]
        if negative:
            raise InvalidBudgetError(f"Category budgets cannot be negative: {', '.join(negative)}")

    def budget_for(self, category: Category) -> float:
        return self.category_budgets.get(category, 0.0)

    def with_monthly_budget(self, amount: float) -> "Budget":
        return replace(self, monthly_budget=amount, category_budgets=dict(self.category_budgets))

    def with_category_budget(self, category: Category, amount: float) -> "Budget":
        budgets = dict(self.category_budgets)
        budgets[category] = amount
        return replace(self, category_budgets=budgets)


@dataclass(frozen=True)
class SpendingStreak:
    """Consecutive-days-within-budget counter with a dated compliance history"""

    current_streak: int = 0
    longest_streak: int = 0
    last_check_date: Optional[date] = None
    daily_budget_history: Dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.current_streak < 0 or self.longest_streak < 0:
            raise InvalidInputError("Streak counters cannot be negative")
        if self.longest_streak < self.current_streak:
            raise InvalidInputError("Longest streak cannot be shorter than the current streak")

    def was_within_budget(self, day: date) -> bool:
        # A day with no record counts as non-compliant
        return self.daily_budget_history.get(day_key(day), False)


@dataclass(frozen=True)
class DetectedItem:
    """Output of the detection pipeline, consumed as-is"""

    category: Category
    confidence: float
    estimated_price: float
    raw_label: str = ""

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise InvalidInputError(f"Detection confidence must be within [0, 1], got {self.confidence}")


@dataclass(frozen=True)
class ConfidenceGate:
    """Detection confidence adjusted for the category, with its threshold"""

    raw: float
    adjusted: float
    threshold: float

    @classmethod
    def for_detection(cls, category: Category, confidence: float) -> "ConfidenceGate":
        return cls(
            raw=confidence,
            adjusted=min(confidence * category.detection_confidence_multiplier, 1.0),
            threshold=category.minimum_detection_confidence,
        )

    @property
    def meets_threshold(self) -> bool:
        return self.adjusted >= self.threshold

    def raw_below(self, limit: float) -> bool:
        return self.raw < limit

    def adjusted_below(self, limit: float) -> bool:
        return self.adjusted < limit


@dataclass(frozen=True)
class LedgerSnapshot:
    """Consistent read of the ledger for a single day"""

    as_of: date
    monthly_budget: float
    total_monthly_spending: float
    today_spending: float
    days_in_month: int
    days_remaining_in_month: int
    category_remaining: Dict[Category, float]

    @property
    def monthly_budget_remaining(self) -> float:
        return self.monthly_budget - self.total_monthly_spending

    @property
    def days_left_after_today(self) -> int:
        """Days remaining excluding today (at least 1), used for projections"""
        return max(self.days_remaining_in_month - 1, 1)

    def remaining_for(self, category: Category) -> float:
        return self.category_remaining.get(category, 0.0)

    def other_category_remainders(self, category: Category) -> List[float]:
        return [amount for other, amount in self.category_remaining.items() if other != category]


@dataclass(frozen=True)
class BudgetUtilization:
    """Budget consumption metrics"""

    monthly_usage_percentage: float
    category_usage_percentage: float
    daily_burn_rate: float
    projected_monthly_spending: float

    @property
    def status(self) -> UtilizationStatus:
        if self.monthly_usage_percentage <= 0.7:
            return UtilizationStatus.UNDER_UTILIZED
        elif self.monthly_usage_percentage <= 0.9:
            return UtilizationStatus.ON_TRACK
        elif self.monthly_usage_percentage <= 1.0:
            return UtilizationStatus.NEAR_LIMIT
        else:
            return UtilizationStatus.OVER_BUDGET


@dataclass(frozen=True)
class ProjectedMonthEnd:
    projected_total_spending: float
    projected_overage: float
    confidence_level: float

    @property
    def is_projected_to_exceed(self) -> bool:
        return self.projected_overage > 0

    @property
    def confidence_description(self) -> str:
        if self.confidence_level >= 0.8:
            return "High Confidence"
        elif self.confidence_level >= 0.6:
            return "Medium Confidence"
        else:
            return "Low Confidence"


@dataclass(frozen=True)
class SmartBudgetRecommendation:
    """Budget-level suggestion attached to a BudgetImpact"""

    type: BudgetRecommendationType
    priority: Priority
    title: str
    description: str
    potential_savings: float
    actionable: bool


@dataclass(frozen=True)
class BudgetImpact:
    """Effect of a hypothetical purchase; remainders are after the purchase"""

    remaining_monthly_budget: float
    category_budget_remaining: float
    daily_budget_impact: float
    would_exceed_budget: bool
    streak_risk: StreakRisk
    budget_utilization: BudgetUtilization
    projected_month_end: ProjectedMonthEnd
    recommendations: List[SmartBudgetRecommendation]


@dataclass(frozen=True)
class AffordabilityAssessment:
    """Output of the affordability evaluator"""

    can_afford: bool
    budget_impact: BudgetImpact


@dataclass(frozen=True)
class EstimatedImpact:
    budget_savings: float = 0.0
    time_to_afford: int = 0  # days
    streak_protection: float = 0.0
    confidence_level: float = 0.5

    @property
    def summary(self) -> str:
        parts = []
        if self.budget_savings > 0:
            parts.append(f"Save ${self.budget_savings:.0f}")
        if self.time_to_afford > 0:
            parts.append(f"{self.time_to_afford} days to afford")
        if self.streak_protection > 0.5:
            parts.append("Protects streak")
        return " • ".join(parts) if parts else "Minimal impact"


@dataclass(frozen=True)
class AlternativeAction:
    title: str
    description: str
    action_type: ActionType
    estimated_outcome: str


@dataclass(frozen=True)
class Recommendation:
    """Actionable suggestion returned with an affordability result"""

    type: RecommendationType
    title: str
    description: str
    actionable: bool
    priority: Priority = Priority.MEDIUM
    reasoning: str = ""
    estimated_impact: EstimatedImpact = field(default_factory=EstimatedImpact)
    alternative_actions: List[AlternativeAction] = field(default_factory=list)


@dataclass(frozen=True)
class TransactionPreview:
    """Pre-filled expense entry for a detected item"""

    amount: float
    category: Category
    note: str
    confidence: float
    suggested_adjustments: List[str]

    def to_transaction(self, on: date) -> Transaction:
        return Transaction.expense(self.amount, self.category, on, note=self.note)


@dataclass(frozen=True)
class AffordabilityResult:
    """Complete affordability answer for one detected item"""

    can_afford: bool
    estimated_price: float
    price_range: Tuple[float, float]
    category: Category
    budget_impact: BudgetImpact
    reasoning: str
    confidence: float
    recommendations: List[Recommendation]
    transaction_preview: TransactionPreview
    detected_item: DetectedItem
    confidence_gate: ConfidenceGate

    @property
    def quick_summary(self) -> str:
        status = "✅ Affordable" if self.can_afford else "❌ Not Affordable"
        return f"{status} • ${self.estimated_price:.0f} • {self.category.value}"

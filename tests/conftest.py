"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Callable, Dict, Optional
from penny_engine.domain.ledger import BudgetLedger
from penny_engine.domain.models import Budget, Category, IncomeCategory, LedgerSnapshot, Transaction


# Mid-June: 30-day month, 16 days left counting today
TODAY = date(2025, 6, 15)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def budget() -> Budget:
    """Default budget: 1000/month, Food 300, Shopping 200, Transport 150, ..."""
    return Budget(current_month=TODAY.month, current_year=TODAY.year)


@pytest.fixture
def ledger(budget: Budget) -> BudgetLedger:
    """Ledger with a few June expenses, one May expense and a salary deposit"""
    ledger = BudgetLedger(budget=budget)
    ledger.add_transaction(Transaction.expense(120.0, Category.FOOD, date(2025, 6, 3), note="Groceries"))
    ledger.add_transaction(Transaction.expense(80.0, Category.SHOPPING, date(2025, 6, 10), note="Shoes"))
    ledger.add_transaction(Transaction.expense(15.0, Category.FOOD, TODAY, note="Lunch"))
    ledger.add_transaction(Transaction.expense(60.0, Category.TRANSPORT, date(2025, 5, 28), note="Fuel"))
    ledger.add_transaction(Transaction.income(3000.0, IncomeCategory.SALARY, date(2025, 6, 1), note="Salary"))
    return ledger


@pytest.fixture
def make_snapshot() -> Callable[..., LedgerSnapshot]:
    """Build a LedgerSnapshot from the handful of numbers a test cares about"""

    def _make(
        category: Category = Category.SHOPPING,
        category_remaining: float = 100.0,
        monthly_budget: float = 1000.0,
        total_monthly_spending: float = 500.0,
        today_spending: float = 0.0,
        days_in_month: int = 30,
        days_remaining: int = 16,
        others: Optional[Dict[Category, float]] = None,
    ) -> LedgerSnapshot:
        remaining = {c: 0.0 for c in Category}
        remaining.update(others or {})
        remaining[category] = category_remaining
        return LedgerSnapshot(
            as_of=TODAY,
            monthly_budget=monthly_budget,
            total_monthly_spending=total_monthly_spending,
            today_spending=today_spending,
            days_in_month=days_in_month,
            days_remaining_in_month=days_remaining,
            category_remaining=remaining,
        )

    return _make

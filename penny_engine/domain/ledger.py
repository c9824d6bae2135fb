"""Budget ledger - the budget plus recorded transactions, and the read queries over them"""

from datetime import date
from typing import List, Optional

from penny_engine.domain.exceptions import TransactionNotFoundError
from penny_engine.domain.models import Budget, Category, LedgerSnapshot, Transaction
from penny_engine.domain.streak import is_within_daily_budget
from penny_engine.utils.date_utils import days_in_month, days_remaining_in_month, is_same_month


class BudgetLedger:
    """In-memory budget and transaction list; every query is relative to an explicit day"""

    def __init__(self, budget: Optional[Budget] = None, transactions: Optional[List[Transaction]] = None):
        self.budget = budget or Budget()
        self.transactions: List[Transaction] = list(transactions or [])

    def add_transaction(self, transaction: Transaction) -> None:
        self.transactions.append(transaction)

    def delete_transaction(self, transaction_id: str) -> Transaction:
        """
        Remove a transaction by id and return it.

        Raises:
            TransactionNotFoundError: No transaction has this id
        """
        for index, txn in enumerate(self.transactions):
            if txn.transaction_id == transaction_id:
                return self.transactions.pop(index)
        raise TransactionNotFoundError(f"No transaction with id {transaction_id}")

    def update_budget(self, budget: Budget) -> None:
        self.budget = budget

    # All-time totals

    @property
    def expense_total(self) -> float:
        return sum(t.amount for t in self.transactions if not t.is_income)

    @property
    def income_total(self) -> float:
        return sum(t.amount for t in self.transactions if t.is_income)

    @property
    def balance(self) -> float:
        return self.income_total - self.expense_total

    # Current-month queries

    def current_month_transactions(self, today: date) -> List[Transaction]:
        return [t for t in self.transactions if is_same_month(t.date, today)]

    def total_monthly_spending(self, today: date) -> float:
        return sum(t.amount for t in self.current_month_transactions(today) if not t.is_income)

    def spent_in_category(self, category: Category, today: date) -> float:
        return sum(
            t.amount
            for t in self.current_month_transactions(today)
            if not t.is_income and t.category == category
        )

    def today_spending(self, today: date) -> float:
        return sum(t.amount for t in self.transactions if not t.is_income and t.date == today)

    def category_budget_remaining(self, category: Category, today: date) -> float:
        return self.budget.budget_for(category) - self.spent_in_category(category, today)

    def monthly_budget_remaining(self, today: date) -> float:
        return self.budget.monthly_budget - self.total_monthly_spending(today)

    def days_in_month(self, today: date) -> int:
        return days_in_month(today)

    def days_remaining_in_month(self, today: date) -> int:
        return days_remaining_in_month(today)

    def budget_progress_for_category(self, category: Category, today: date) -> float:
        """Share of the category budget spent (0.0 to 1.0+); 0 when the budget is 0"""
        allotted = self.budget.budget_for(category)
        if allotted <= 0:
            return 0.0
        return self.spent_in_category(category, today) / allotted

    def top_spending_category(self, today: date) -> Optional[Category]:
        """Category with the most spending this month, None when nothing was spent"""
        spent = {c: self.spent_in_category(c, today) for c in Category}
        top = max(spent, key=spent.get)
        return top if spent[top] > 0 else None

    def snapshot(self, today: date) -> LedgerSnapshot:
        """Freeze every figure the engine reads for `today` into one value"""
        return LedgerSnapshot(
            as_of=today,
            monthly_budget=self.budget.monthly_budget,
            total_monthly_spending=self.total_monthly_spending(today),
            today_spending=self.today_spending(today),
            days_in_month=self.days_in_month(today),
            days_remaining_in_month=self.days_remaining_in_month(today),
            category_remaining={c: self.category_budget_remaining(c, today) for c in Category},
        )

    def is_within_daily_budget(self, today: date) -> bool:
        return is_within_daily_budget(self.snapshot(today))

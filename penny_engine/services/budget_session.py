"""Budget session - explicit owner of the ledger and streak, serializing writes"""

import logging
import threading
from datetime import date
from typing import Callable, List, Optional, Union

from penny_engine.domain.decision import evaluate
from penny_engine.domain.exceptions import StateDeserializationError
from penny_engine.domain.ledger import BudgetLedger
from penny_engine.domain.models import (
    AffordabilityResult,
    Budget,
    DetectedItem,
    SpendingStreak,
    Transaction,
)
from penny_engine.domain.streak import advance_streak
from penny_engine.infrastructure.observability.logging import log_streak_update
from penny_engine.infrastructure.observability.metrics import record_streak_advance
from penny_engine.infrastructure.serialization.schemas import dump_state, load_state
from penny_engine.utils.date_utils import day_key

Clock = Callable[[], date]


class BudgetSession:
    """
    Session context around the stateless engine.

    Holds the ledger and streak, advances the streak after every committed
    write and on `refresh_streak`, and hands the engine consistent snapshots.
    A single lock serializes writers; reads go through snapshots.
    """

    def __init__(
        self,
        ledger: Optional[BudgetLedger] = None,
        streak: Optional[SpendingStreak] = None,
        clock: Clock = date.today,
    ):
        self.ledger = ledger or BudgetLedger()
        self.streak = streak or SpendingStreak()
        self._clock = clock
        self._lock = threading.Lock()

    @classmethod
    def from_state(cls, raw: Union[str, bytes], clock: Clock = date.today) -> "BudgetSession":
        """
        Restore a session and advance its streak to today.

        Corrupt state falls back to a fresh session.
        """
        try:
            state = load_state(raw)
        except StateDeserializationError as e:
            logging.warning(f"Discarding unreadable session state: {e}")
            session = cls(clock=clock)
        else:
            ledger = BudgetLedger(
                budget=state.budget.to_domain(),
                transactions=[t.to_domain() for t in state.transactions],
            )
            session = cls(ledger=ledger, streak=state.streak.to_domain(), clock=clock)

        session.refresh_streak()
        return session

    def export_state(self) -> str:
        with self._lock:
            return dump_state(self.ledger.budget, self.streak, self.ledger.transactions)

    @property
    def today(self) -> date:
        return self._clock()

    def add_transaction(self, transaction: Transaction) -> SpendingStreak:
        with self._lock:
            self.ledger.add_transaction(transaction)
            return self._advance_streak_locked()

    def delete_transaction(self, transaction_id: str) -> Transaction:
        with self._lock:
            removed = self.ledger.delete_transaction(transaction_id)
            self._advance_streak_locked()
            return removed

    def update_budget(self, budget: Budget) -> None:
        with self._lock:
            self.ledger.update_budget(budget)

    def refresh_streak(self) -> SpendingStreak:
        """Advance the streak on first access of the day"""
        with self._lock:
            return self._advance_streak_locked()

    def _advance_streak_locked(self) -> SpendingStreak:
        today = self.today
        previous = self.streak
        self.streak = advance_streak(previous, today, self.ledger.snapshot(today))

        if self.streak is not previous:
            within_today = self.streak.daily_budget_history[day_key(today)]
            record_streak_advance(previous.current_streak, self.streak.current_streak)
            log_streak_update(
                day_key(today),
                previous.current_streak,
                self.streak.current_streak,
                self.streak.longest_streak,
                within_today,
            )
        return self.streak

    def evaluate(self, item: DetectedItem) -> AffordabilityResult:
        with self._lock:
            snapshot = self.ledger.snapshot(self.today)
            streak = self.streak
        return evaluate(item, snapshot, streak)

    def commit_preview(self, result: AffordabilityResult) -> Transaction:
        """Record the previewed purchase as an expense dated today"""
        transaction = result.transaction_preview.to_transaction(self.today)
        self.add_transaction(transaction)
        return transaction

    def is_within_daily_budget(self) -> bool:
        with self._lock:
            return self.ledger.is_within_daily_budget(self.today)

    def transactions(self) -> List[Transaction]:
        with self._lock:
            return list(self.ledger.transactions)

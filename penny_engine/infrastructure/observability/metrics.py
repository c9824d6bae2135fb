"""Prometheus metrics for affordability outcomes, streak risk and streak progress"""

from typing import Iterable

from prometheus_client import Counter, Gauge

# Decision metrics
affordability_counter = Counter(
    "penny_affordability_decisions_total",
    "Total affordability evaluations",
    ["outcome"],  # affordable | unaffordable
)

streak_risk_counter = Counter(
    "penny_streak_risk_total",
    "Evaluations by streak risk level",
    ["risk"],  # none | low | medium | high
)

recommendation_counter = Counter(
    "penny_recommendations_total",
    "Recommendations emitted by type",
    ["type"],
)

# Streak metrics
streak_advance_counter = Counter(
    "penny_streak_advances_total",
    "Daily streak advances",
    ["outcome"],  # extended | reset
)

current_streak_gauge = Gauge(
    "penny_current_streak_days",
    "Current spending streak length in days",
)


def record_evaluation(can_afford: bool, streak_risk: str, recommendation_types: Iterable[str]) -> None:
    """Record evaluation metrics for monitoring affordability rates and advice mix"""
    outcome = "affordable" if can_afford else "unaffordable"
    affordability_counter.labels(outcome=outcome).inc()
    streak_risk_counter.labels(risk=streak_risk).inc()

    for recommendation_type in recommendation_types:
        recommendation_counter.labels(type=recommendation_type).inc()


def record_streak_advance(previous_streak: int, current_streak: int) -> None:
    outcome = "extended" if current_streak > previous_streak else "reset"
    streak_advance_counter.labels(outcome=outcome).inc()
    current_streak_gauge.set(current_streak)

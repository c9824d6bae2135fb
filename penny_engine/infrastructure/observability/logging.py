"""Structured JSON logging for engine decisions and streak updates"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from penny_engine.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_evaluation(
    category: str,
    estimated_price: float,
    can_afford: bool,
    streak_risk: str,
    recommendation_count: int,
) -> None:
    """Log structured affordability outcome for analysis"""
    logging.info(
        "Affordability evaluated",
        extra={
            "step": "evaluation_complete",
            "category": category,
            "estimated_price": estimated_price,
            "affordability_outcome": "affordable" if can_afford else "unaffordable",
            "streak_risk": streak_risk,
            "recommendation_count": recommendation_count,
        },
    )


def log_streak_update(
    day: str,
    previous_streak: int,
    current_streak: int,
    longest_streak: int,
    within_budget_today: bool,
) -> None:
    """Log a daily streak advance"""
    logging.info(
        "Streak advanced",
        extra={
            "step": "streak_advance",
            "day": day,
            "previous_streak": previous_streak,
            "current_streak": current_streak,
            "longest_streak": longest_streak,
            "within_budget_today": within_budget_today,
        },
    )

"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from sprint_pricing.config import settings
from sprint_pricing.domain.models import PricingResult


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

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_recalculation(
    request_id: str,
    sprint_id: str,
    trigger: str,
    result: PricingResult,
    duration_ms: float,
) -> None:
    """Log the totals written back onto a sprint draft"""
    logging.info(
        "Sprint totals recalculated",
        extra={
            "request_id": request_id,
            "sprint_id": sprint_id,
            "step": "recalculate_totals",
            "trigger": trigger,
            "total_points": result.points,
            "total_hours": result.hours,
            "total_price": result.price,
            "duration_ms": duration_ms,
        },
    )

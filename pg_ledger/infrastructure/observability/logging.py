"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "pg-ledger"


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


def log_payment_outcome(
    request_id: str,
    resident_id: str,
    outcome: str,
    amount_cents: int,
    period: str,
    payment_id: Optional[str] = None,
) -> None:
    """Log structured payment attempt outcome (accepted or rejection reason)"""
    logging.info(
        "Payment attempt completed",
        extra={
            "request_id": request_id,
            "resident_id": resident_id,
            "step": "payment_recorded" if payment_id else "payment_rejected",
            "outcome": outcome,
            "amount_cents": amount_cents,
            "period": period,
            "payment_id": payment_id,
        },
    )


def log_report(
    request_id: str,
    view: str,
    period: str,
    entry_count: int,
    duration_ms: float,
) -> None:
    """Log structured report build for analysis"""
    logging.info(
        "Report built",
        extra={
            "request_id": request_id,
            "step": "report_built",
            "view": view,
            "period": period,
            "entry_count": entry_count,
            "duration_ms": duration_ms,
        },
    )

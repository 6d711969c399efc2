"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from paytrack.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding timestamp, level and service name"""

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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_auth_event(request_id: str, method: str, outcome: str, user_id: str | None = None) -> None:
    """Log a login/registration attempt"""
    logging.info(
        "Authentication attempt",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "auth",
            "auth_method": method,
            "outcome": outcome,
        },
    )


def log_biller_event(request_id: str, user_id: str, biller_id: str, action: str) -> None:
    """Log a biller create/update/delete"""
    logging.info(
        f"Biller {action}",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "biller_id": biller_id,
            "step": f"biller_{action}",
        },
    )


def log_payment_event(request_id: str, user_id: str, biller_id: str, action: str, month: int, year: int) -> None:
    """Log a paid/unpaid mark on a biller"""
    logging.info(
        f"Payment {action}",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "biller_id": biller_id,
            "step": f"payment_{action}",
            "period": f"{year}-{month:02d}",
        },
    )

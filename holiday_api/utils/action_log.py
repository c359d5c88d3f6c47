"""
Audit-style logging of holiday changes (create, update, delete, import).
Lines look like: HOLIDAY_ACTION | CREATED id='...' name='Tet'
"""
import logging
from typing import Any

ACTION_LOGGER = logging.getLogger("holiday_api.actions")


def _format_details(details: dict) -> str:
    parts = [f"{k}={v!r}" if isinstance(v, str) else f"{k}={v}" for k, v in details.items()]
    return " " + " ".join(parts) if parts else ""


def log_holiday_action(action: str, **details: Any) -> None:
    """
    Log a change made through the API.

    Example:
        log_holiday_action("CREATED", id=holiday.id, name=holiday.name)
        log_holiday_action("IMPORTED_STATIC", added=2, skipped=2)
    """
    ACTION_LOGGER.info(f"HOLIDAY_ACTION | {action}{_format_details(details)}")

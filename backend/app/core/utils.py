"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
from datetime import datetime
import math


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def round_half_up(value: float) -> int:
    """Round to the nearest whole number, halves away from zero."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def format_error(message: str, kind: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message, "kind": kind}
    if details:
        response["details"] = details
    return response

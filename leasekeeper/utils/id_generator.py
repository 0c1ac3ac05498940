"""
Utility functions for generating consistent ID formats for various entities.
"""

import threading
from datetime import datetime, timezone
from typing import Optional

_appeal_id_lock = threading.Lock()
_last_appeal_millis = 0


def generate_property_id(property_id: int) -> str:
    """
    Generate a formatted property ID in the format PROP-XXXX.

    Args:
        property_id (int): The numeric ID of the property

    Returns:
        str: A formatted property ID (e.g., PROP-0001)
    """
    return f"PROP-{property_id:04d}"


def generate_appeal_id(issued_at: Optional[datetime] = None) -> str:
    """
    Generate an appeal receipt ID from the server clock in epoch milliseconds.

    IDs issued within one process strictly increase, so two appeals in the
    same millisecond still get distinct receipts.

    Returns:
        str: A receipt ID (e.g., APPEAL_1718000000000)
    """
    global _last_appeal_millis
    moment = issued_at or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    millis = int(moment.timestamp() * 1000)
    with _appeal_id_lock:
        millis = max(millis, _last_appeal_millis + 1)
        _last_appeal_millis = millis
    return f"APPEAL_{millis}"

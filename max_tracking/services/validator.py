import re
from typing import NewType

from max_tracking.errors import InvalidFormat

TrackingNumber = NewType("TrackingNumber", str)

# MAX Logistics tracking numbers: 'MAX' followed by 9 ASCII digits
TRACKING_NUMBER_PATTERN = re.compile(r"MAX[0-9]{9}")


def validate(raw: str | None) -> TrackingNumber:
    """
    Normalizes a caller-supplied tracking number.
    Raises InvalidFormat for missing, empty or malformed input.
    """
    if raw is None or not raw.strip():
        raise InvalidFormat("Tracking number is required")

    candidate = raw.strip().upper()
    if not TRACKING_NUMBER_PATTERN.fullmatch(candidate):
        raise InvalidFormat()
    return TrackingNumber(candidate)

from enum import Enum
from typing import Protocol


class PresentationStatus(str, Enum):
    COMPLETED = "completed"
    CURRENT = "current"
    PENDING = "pending"


KNOWN_LIFECYCLE_LABELS = frozenset([
    "Package Received",
    "Package Picked Up",
    "In Transit",
    "Out for Delivery",
    "Delivered",
    "Exception",
])


class StatusClassifier(Protocol):
    def classify(self, event_status: str, current_status: str) -> PresentationStatus:
        ...


class LabelStatusClassifier:
    """
    Classifies a timeline entry by its label alone.
    The event whose label equals the shipment's current status is 'current',
    any other known lifecycle label is 'completed', unknown labels are 'pending'.
    Event dates are not consulted.
    """

    def __init__(self, known_labels=KNOWN_LIFECYCLE_LABELS):
        self.known_labels = frozenset(known_labels)

    def classify(self, event_status: str, current_status: str) -> PresentationStatus:
        if event_status == current_status:
            return PresentationStatus.CURRENT
        if event_status in self.known_labels:
            return PresentationStatus.COMPLETED
        return PresentationStatus.PENDING

import logging
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Protocol

from max_tracking.errors import NotFound, StoreUnavailable
from max_tracking.models import Shipment, StatusEvent
from max_tracking.schemas import TimelineEntry, TrackingData
from max_tracking.services.timeline import LabelStatusClassifier, StatusClassifier
from max_tracking.services.validator import TrackingNumber

logger = logging.getLogger(__name__)

DISPLAY_FORMAT = "%Y-%m-%d %H:%M"
WEIGHT_UNIT = "kg"


class Store(Protocol):
    def find_shipment_by_tracking_number(self, tracking_number: str) -> Shipment | None:
        ...

    def list_status_events(self, shipment_id) -> list[StatusEvent]:
        ...


def format_display_time(value: datetime | None, tz: tzinfo | None = None) -> str | None:
    """Aware datetimes are shown in the service timezone, naive ones as stored."""
    if value is None:
        return None
    if tz is not None and value.tzinfo is not None:
        value = value.astimezone(tz)
    return value.strftime(DISPLAY_FORMAT)


def format_weight(weight: Decimal) -> str:
    return f"{weight.quantize(Decimal('0.01'))} {WEIGHT_UNIT}"


class Tracker:
    """Read-only lookup of a shipment and its presentation timeline."""

    def __init__(self, store: Store, classifier: StatusClassifier | None = None, tz: tzinfo | None = None):
        self.store = store
        self.classifier = classifier or LabelStatusClassifier()
        self.tz = tz

    def track(self, tracking_number: TrackingNumber) -> TrackingData:
        shipment = self.store.find_shipment_by_tracking_number(tracking_number)
        if shipment is None:
            logger.info("No shipment for tracking number %s", tracking_number)
            raise NotFound()

        events = self.store.list_status_events(shipment.id)
        try:
            events = sorted(events, key=lambda e: (e.status_date, e.id))
        except TypeError as e:
            # mixed naive/aware dates or incomparable ids in the stored rows
            raise StoreUnavailable(f"Unorderable status history for shipment {shipment.id}") from e

        timeline = [
            TimelineEntry(
                title=event.status,
                description=event.status_description,
                location=event.location,
                date=format_display_time(event.status_date, self.tz),
                status=self.classifier.classify(event.status, shipment.current_status).value,
            )
            for event in events
        ]

        return TrackingData(
            tracking_number=shipment.tracking_number,
            status=shipment.current_status,
            current_status=shipment.current_status_description,
            last_updated=format_display_time(shipment.updated_at or shipment.created_at, self.tz),
            origin=shipment.origin,
            destination=shipment.destination,
            estimated_delivery=shipment.estimated_delivery.isoformat() if shipment.estimated_delivery else None,
            weight=format_weight(shipment.weight),
            service_type=shipment.service_type,
            carrier=shipment.carrier,
            timeline=timeline,
        )

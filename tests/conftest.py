from datetime import date, datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from max_tracking.errors import StoreUnavailable
from max_tracking.main import app
from max_tracking.models import Shipment, StatusEvent
from max_tracking.routers.tracking import get_request_log, get_tracker
from max_tracking.services.tracker import Tracker


class FakeStore:
    """In-memory store keyed the same way as the shipments tables."""

    def __init__(self, shipments=(), events=()):
        self.shipments = {s.tracking_number: s for s in shipments}
        self.events = list(events)
        self.calls = []

    def find_shipment_by_tracking_number(self, tracking_number):
        self.calls.append(("find_shipment_by_tracking_number", tracking_number))
        return self.shipments.get(tracking_number)

    def list_status_events(self, shipment_id):
        self.calls.append(("list_status_events", shipment_id))
        return [e for e in self.events if e.shipment_id == shipment_id]


class BrokenStore:
    def find_shipment_by_tracking_number(self, tracking_number):
        raise StoreUnavailable("connection refused by db.internal:5432")

    def list_status_events(self, shipment_id):
        raise StoreUnavailable("connection refused by db.internal:5432")


class RecordingRequestLog:
    def __init__(self):
        self.lookups = []

    def record_lookup(self, tracking_number, caller_address, caller_agent):
        self.lookups.append((tracking_number, caller_address, caller_agent))


def make_shipment(id, tracking_number, current_status, description, **overrides):
    fields = dict(
        id=id,
        tracking_number=tracking_number,
        origin="Jakarta, Indonesia",
        destination="Surabaya, Indonesia",
        weight=Decimal("2.5"),
        service_type="Express Delivery",
        carrier="MAX Logistics",
        estimated_delivery=date(2024, 1, 18),
        current_status=current_status,
        current_status_description=description,
        created_at=datetime(2024, 1, 15, 8, 0),
        updated_at=datetime(2024, 1, 16, 14, 30),
    )
    fields.update(overrides)
    return Shipment(**fields)


def make_event(id, shipment_id, status, when, location="Jakarta Hub", description=None):
    return StatusEvent(
        id=id,
        shipment_id=shipment_id,
        status=status,
        status_description=description or f"{status} at {location}",
        location=location,
        status_date=when,
    )


@pytest.fixture
def in_transit_store():
    shipment = make_shipment(1, "MAX123456789", "In Transit", "Package is in transit to destination")
    events = [
        # stored out of order on purpose
        make_event(12, 1, "Out for Delivery Scheduled", datetime(2024, 1, 18, 8, 0), "Surabaya, Indonesia"),
        make_event(11, 1, "In Transit", datetime(2024, 1, 16, 14, 30), "Semarang Hub"),
        make_event(10, 1, "Package Picked Up", datetime(2024, 1, 15, 9, 15), "Jakarta, Indonesia"),
    ]
    return FakeStore([shipment], events)


@pytest.fixture
def delivered_store():
    shipment = make_shipment(
        2,
        "MAX987654321",
        "Delivered",
        "Package has been successfully delivered",
        origin="Bandung, Indonesia",
        destination="Medan, Indonesia",
        weight=Decimal("1.80"),
        service_type="Standard Delivery",
        estimated_delivery=date(2024, 1, 12),
        updated_at=datetime(2024, 1, 12, 16, 45),
    )
    events = [
        make_event(20, 2, "Package Received", datetime(2024, 1, 9, 10, 0), "Bandung, Indonesia"),
        make_event(21, 2, "In Transit", datetime(2024, 1, 10, 7, 30), "Jakarta Hub"),
        make_event(22, 2, "Out for Delivery", datetime(2024, 1, 12, 8, 0), "Medan, Indonesia"),
        make_event(23, 2, "Delivered", datetime(2024, 1, 12, 16, 45), "Medan, Indonesia"),
    ]
    return FakeStore([shipment], events)


@pytest.fixture
def request_log():
    return RecordingRequestLog()


@pytest.fixture
def make_client(request_log):
    def _make(store):
        app.dependency_overrides[get_tracker] = lambda: Tracker(store)
        app.dependency_overrides[get_request_log] = lambda: request_log
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()

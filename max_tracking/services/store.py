from typing import Callable

from supabase import Client

from max_tracking.errors import StoreUnavailable
from max_tracking.models import Shipment, StatusEvent

SHIPMENT_COLUMNS = (
    "id, tracking_number, origin, destination, weight, service_type, carrier, "
    "estimated_delivery, current_status, current_status_description, created_at, updated_at"
)
EVENT_COLUMNS = "id, shipment_id, status, status_description, location, status_date"


def _get_single(rowset):
    return rowset[0] if rowset else None


class SupabaseStore:
    """
    Read-only access to the shipments and shipment_status_history tables.
    The client comes from `connect` on first query, so missing credentials
    surface as StoreUnavailable like any other store failure.
    """

    def __init__(self, connect: Callable[[], Client]):
        self.connect = connect

    def find_shipment_by_tracking_number(self, tracking_number: str) -> Shipment | None:
        try:
            resp = (
                self.connect().table("shipments")
                .select(SHIPMENT_COLUMNS)
                .eq("tracking_number", tracking_number)
                .limit(1)
                .execute()
            )
            row = _get_single(resp.data)
            return Shipment.from_row(row) if row else None
        except Exception as e:
            raise StoreUnavailable(f"Shipment lookup failed for {tracking_number}: {e}") from e

    def list_status_events(self, shipment_id) -> list[StatusEvent]:
        try:
            resp = (
                self.connect().table("shipment_status_history")
                .select(EVENT_COLUMNS)
                .eq("shipment_id", shipment_id)
                .order("status_date")
                .order("id")
                .execute()
            )
            return [StatusEvent.from_row(row) for row in (resp.data or [])]
        except Exception as e:
            raise StoreUnavailable(f"Status history query failed for shipment {shipment_id}: {e}") from e

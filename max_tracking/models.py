from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import dateutil.parser


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return dateutil.parser.parse(str(value))


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return dateutil.parser.parse(str(value)).date()


@dataclass(frozen=True)
class Shipment:
    id: Any
    tracking_number: str
    origin: str
    destination: str
    weight: Decimal
    service_type: str
    carrier: str
    estimated_delivery: date | None
    current_status: str
    current_status_description: str | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_row(cls, row: dict):
        return cls(
            id=row["id"],
            tracking_number=row["tracking_number"],
            origin=row.get("origin") or "",
            destination=row.get("destination") or "",
            weight=Decimal(str(row.get("weight") or 0)),
            service_type=row.get("service_type") or "",
            carrier=row.get("carrier") or "MAX Logistics",
            estimated_delivery=_parse_date(row.get("estimated_delivery")),
            current_status=row.get("current_status") or "",
            current_status_description=row.get("current_status_description"),
            created_at=_parse_datetime(row.get("created_at")),
            updated_at=_parse_datetime(row.get("updated_at")),
        )


@dataclass(frozen=True)
class StatusEvent:
    id: Any
    shipment_id: Any
    status: str
    status_description: str | None
    location: str
    status_date: datetime

    @classmethod
    def from_row(cls, row: dict):
        return cls(
            id=row["id"],
            shipment_id=row["shipment_id"],
            status=row.get("status") or "",
            status_description=row.get("status_description"),
            location=row.get("location") or "",
            status_date=_parse_datetime(row["status_date"]),
        )

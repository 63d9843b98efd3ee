import csv
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Protocol

from supabase import Client

from max_tracking.errors import LoggingFailure

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"

# Fields for the lookup ledger
LEDGER_FIELDS = [
    "requested_at",
    "tracking_number",
    "ip_address",
    "user_agent",
]


class RequestLog(Protocol):
    def record_lookup(self, tracking_number: str, caller_address: str | None, caller_agent: str | None) -> None:
        ...


def _lookup_row(tracking_number: str, caller_address: str | None, caller_agent: str | None) -> dict:
    return {
        "requested_at": datetime.now(timezone.utc).isoformat(),
        "tracking_number": tracking_number,
        "ip_address": caller_address or UNKNOWN,
        "user_agent": caller_agent or UNKNOWN,
    }


class BestEffortRequestLog(ABC):
    """
    Base for lookup logs. record_lookup never raises: a failed write is
    reported as a LoggingFailure warning and the request carries on.
    """

    def record_lookup(self, tracking_number: str, caller_address: str | None, caller_agent: str | None) -> None:
        try:
            self._store(_lookup_row(tracking_number, caller_address, caller_agent))
        except LoggingFailure as failure:
            logger.warning("%s", failure)

    def _store(self, row: dict) -> None:
        try:
            self._write(row)
        except Exception as e:
            raise LoggingFailure(f"Failed to log tracking request for {row['tracking_number']}: {e}") from e

    @abstractmethod
    def _write(self, row: dict) -> None:
        ...


class SupabaseRequestLog(BestEffortRequestLog):
    """Inserts lookups into the tracking_logs table."""

    def __init__(self, connect: Callable[[], Client]):
        self.connect = connect

    def _write(self, row: dict) -> None:
        self.connect().table("tracking_logs").insert(row).execute()


class LedgerRequestLog(BestEffortRequestLog):
    """Appends lookups to a CSV ledger, writing the header for a new file."""

    def __init__(self, ledger_file: Path):
        self.ledger_file = Path(ledger_file)

    def _write(self, row: dict) -> None:
        file_exists = self.ledger_file.exists()
        with open(self.ledger_file, mode='a', newline='') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=LEDGER_FIELDS)
            if not file_exists:
                writer.writeheader()
            writer.writerow(row)


class NullRequestLog:
    def record_lookup(self, tracking_number: str, caller_address: str | None, caller_agent: str | None) -> None:
        logger.debug("Lookup logging disabled; skipped %s", tracking_number)

"""Append-only export of finalized job records to a Supabase table."""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence
from supabase import create_client, Client

from config import SUPABASE_URL, SUPABASE_KEY, EXPORT_TABLE
from errors import PersistenceError
from models.record import StructuredRecord, JOB_RECORD_FIELDS

logger = logging.getLogger(__name__)

# Column order of an export row
EXPORT_COLUMNS = ("exported_at", "user_id") + JOB_RECORD_FIELDS


def build_export_row(
    record: StructuredRecord,
    user_id: str,
    timestamp: Optional[datetime] = None
) -> List[str]:
    """
    Flatten a record into an export row.

    Args:
        record: Extracted job record
        user_id: Opaque user identifier
        timestamp: Export time (defaults to now, UTC)

    Returns:
        ``[timestamp ISO-8601, user_id, field_1, ..., field_k]`` in schema order
    """
    timestamp = timestamp or datetime.now(timezone.utc)
    return [timestamp.isoformat(), user_id] + record.values()


class ExportSink:
    """Appends one row per finalized conversation."""

    def __init__(self, client: Optional[Client] = None, table: str = EXPORT_TABLE):
        if client is None:
            if not SUPABASE_URL or not SUPABASE_KEY:
                raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set in environment variables")
            client = create_client(SUPABASE_URL, SUPABASE_KEY)

        self.client: Client = client
        self.table = table
        logger.info(f"ExportSink initialized with Supabase table '{table}'")

    def append_record(self, values: Sequence[str]) -> None:
        """
        Append one row.

        Args:
            values: Ordered values matching EXPORT_COLUMNS

        Raises:
            ValueError: If the row does not have one value per column
            PersistenceError: If the row could not be written
        """
        if len(values) != len(EXPORT_COLUMNS):
            raise ValueError(f"Export row has {len(values)} values, expected {len(EXPORT_COLUMNS)}")

        row = dict(zip(EXPORT_COLUMNS, values))
        try:
            self.client.table(self.table).insert(row).execute()
        except Exception as e:
            raise PersistenceError(f"Error exporting record for user {row['user_id']}: {e}") from e

        logger.info(f"Exported record for user {row['user_id']}", extra={"user_id": row["user_id"]})

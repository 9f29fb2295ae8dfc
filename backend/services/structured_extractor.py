"""Recovers a structured job record from free-form model output."""
import json
import logging
from typing import Any

from errors import ExtractionError
from models.record import StructuredRecord

logger = logging.getLogger(__name__)


class StructuredExtractor:
    """
    Extracts a JSON object embedded in a model reply.

    Models tend to wrap JSON in prose, so the object is recovered by slicing
    from the first ``{`` to the last ``}`` and parsing that span. Text outside
    the span is ignored; anything invalid inside it is a hard failure. If the
    reply holds several objects the span covers all of them and will usually
    fail to parse.
    """

    def extract(self, raw_reply: str) -> StructuredRecord:
        """
        Parse a model reply into a StructuredRecord.

        Args:
            raw_reply: Raw text returned by the model

        Returns:
            StructuredRecord with every declared field present

        Raises:
            ExtractionError: If no JSON object can be recovered
        """
        raw_reply = raw_reply or ""
        start = raw_reply.find("{")
        end = raw_reply.rfind("}")
        if start == -1 or end == -1 or end < start:
            raise ExtractionError("No JSON object found in model reply")

        candidate = raw_reply[start:end + 1]
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as e:
            logger.warning(f"Reply JSON span failed to parse: {e}")
            raise ExtractionError(f"Model reply is not valid JSON: {e.msg}") from e
        except (ValueError, RecursionError) as e:
            # Oversized integer literals and very deep nesting
            logger.warning(f"Reply JSON span rejected by decoder: {type(e).__name__}")
            raise ExtractionError(f"Model reply JSON could not be decoded: {type(e).__name__}") from e

        if not isinstance(parsed, dict):
            raise ExtractionError("Model reply JSON is not an object")

        unknown = set(parsed) - set(StructuredRecord.FIELDS)
        if unknown:
            logger.debug(f"Ignoring unknown fields in reply: {sorted(unknown)}")

        return StructuredRecord({
            field: _as_text(parsed.get(field)) for field in StructuredRecord.FIELDS
        })


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return ", ".join(_as_text(item) for item in value)
    return json.dumps(value, separators=(",", ":"))

"""Structured job record extracted at the end of a conversation."""
from typing import Dict, List, Mapping, Optional

# Declared schema, in export order
JOB_RECORD_FIELDS = (
    "job_title",
    "company",
    "department",
    "location",
    "employment_type",
    "seniority_level",
    "team_size",
    "salary_range",
    "required_skills",
    "responsibilities",
    "start_date",
)


class StructuredRecord:
    """
    Closed-schema mapping of job attributes to text values.

    Every declared field is always present; fields that were not supplied hold
    an empty string. Unknown fields are ignored.
    """

    FIELDS = JOB_RECORD_FIELDS

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        values = values or {}
        self._values: Dict[str, str] = {
            field: values.get(field) or "" for field in self.FIELDS
        }

    def __getitem__(self, field: str) -> str:
        return self._values[field]

    def __iter__(self):
        return iter(self.FIELDS)

    def __len__(self) -> int:
        return len(self.FIELDS)

    def __eq__(self, other) -> bool:
        if not isinstance(other, StructuredRecord):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        filled = {k: v for k, v in self._values.items() if v}
        return f"StructuredRecord({filled!r})"

    def values(self) -> List[str]:
        """Return field values in declared schema order."""
        return [self._values[field] for field in self.FIELDS]

    def to_dict(self) -> Dict[str, str]:
        return dict(self._values)

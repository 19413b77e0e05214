"""
Data models for conversion history.
A ConversionRecord is written once after a successful conversion and never updated.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
import math


@dataclass
class ConversionRecord:
    """One completed conversion."""
    category: str = ""
    from_unit: str = ""
    to_unit: str = ""
    input_value: float = 0.0
    output_value: float = 0.0
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    id: int | None = None    # assigned by the store

    @classmethod
    def from_request(cls, body: dict) -> "ConversionRecord":
        """
        Build a record from the camelCase body the web UI posts.
        Raises ValueError/TypeError/KeyError on missing or malformed fields.
        """
        record = cls(
            category=str(body["category"]),
            from_unit=str(body["fromUnit"]),
            to_unit=str(body["toUnit"]),
            input_value=_number(body["inputValue"], "inputValue"),
            output_value=_number(body["outputValue"], "outputValue"),
        )
        if not record.category or not record.from_unit or not record.to_unit:
            raise ValueError("category, fromUnit and toUnit must be non-empty")
        return record

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "category": self.category,
            "from_unit": self.from_unit,
            "to_unit": self.to_unit,
            "input_value": self.input_value,
            "output_value": self.output_value,
            "timestamp": self.timestamp,
        }


def _number(value, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite")
    return float(value)

"""Rate table - collaborator level × duration bucket → payout amount"""

from typing import Any, Optional

from pydantic import BaseModel, field_validator

from ..enums import CollaboratorLevel

# Bucket keys in ascending threshold order: each pays jobs at or under its hours
BUCKETS = (("hours4", 4), ("hours6", 6), ("hours8", None))

DEFAULT_PAYOUTS = {
    "junior": {"hours4": 60, "hours6": 90, "hours8": 120},
    "senior": {"hours4": 80, "hours6": 120, "hours8": 160},
    "master": {"hours4": 100, "hours6": 150, "hours8": 200},
}


class PayoutMatrix(BaseModel):
    """Payout amounts for one collaborator level"""

    hours4: float
    hours6: float
    hours8: float

    @field_validator("hours4", "hours6", "hours8")
    @classmethod
    def validate_amount(cls, v):
        if v < 0:
            raise ValueError("Payout amounts must not be negative")
        return v


class RateTable(BaseModel):
    """Full payout table as stored in platform settings"""

    junior: PayoutMatrix
    senior: PayoutMatrix
    master: PayoutMatrix

    @classmethod
    def default(cls) -> "RateTable":
        return cls.model_validate(DEFAULT_PAYOUTS)


def lookup_rate(
    rate_table: Any, level: CollaboratorLevel, bucket: str
) -> Optional[float]:
    """
    Find the amount for a level and bucket.

    Accepts a RateTable or the raw JSON mapping stored in platform settings;
    level rows may be keyed lower- or upper-case. Returns None if absent.
    """
    if rate_table is None:
        return None

    if isinstance(rate_table, RateTable):
        row = getattr(rate_table, level.value.lower())
        return getattr(row, bucket)

    if not isinstance(rate_table, dict):
        return None

    row = rate_table.get(level.value.lower()) or rate_table.get(level.value)
    if isinstance(row, PayoutMatrix):
        return getattr(row, bucket)
    if not isinstance(row, dict):
        return None

    amount = row.get(bucket)
    if amount is None:
        return None
    try:
        return float(amount)
    except (TypeError, ValueError):
        return None

"""
Payout calculator

Pure step function over (collaborator level, job duration, rate table).
Inputs are defaulted rather than rejected so a payout is always computable
for display.
"""

import logging
import re
from typing import Any, Optional, Union

from ...config import DEFAULT_DURATION_HOURS, PAYOUT_FALLBACK_AMOUNT
from ..enums import CollaboratorLevel
from .rate_table import BUCKETS, lookup_rate

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def normalize_level(level: Union[str, CollaboratorLevel, None]) -> CollaboratorLevel:
    """JUNIOR, SENIOR or MASTER; anything missing or unrecognized is JUNIOR"""
    if isinstance(level, CollaboratorLevel):
        return level
    if not level:
        return CollaboratorLevel.JUNIOR
    try:
        return CollaboratorLevel(str(level).strip().upper())
    except ValueError:
        return CollaboratorLevel.JUNIOR


def parse_duration_hours(duration: Union[str, int, float, None]) -> int:
    """
    Whole hours from a duration descriptor such as 5, "6", "6h" or "4.5".

    Only the leading integer counts ("6.5" is 6). Missing, unparsable or zero
    durations fall back to the default job length.
    """
    if duration is None or isinstance(duration, bool):
        return DEFAULT_DURATION_HOURS

    if isinstance(duration, (int, float)):
        hours = int(duration)
    else:
        match = _LEADING_INT.match(str(duration))
        if not match:
            logger.debug(f"Malformed duration {duration!r}, using {DEFAULT_DURATION_HOURS}h")
            return DEFAULT_DURATION_HOURS
        hours = int(match.group(1))

    return hours or DEFAULT_DURATION_HOURS


def duration_bucket(duration_hours: int) -> str:
    """hours4 for ≤4h, hours6 for ≤6h, hours8 for everything longer"""
    for bucket, threshold in BUCKETS:
        if threshold is None or duration_hours <= threshold:
            return bucket
    return BUCKETS[-1][0]


def compute_payout(
    level: Union[str, CollaboratorLevel, None],
    duration_hours: Union[str, int, float, None],
    rate_table: Any,
) -> float:
    """
    Payout owed to a collaborator of `level` for a job of `duration_hours`.

    No proration inside a bucket. A rate table without the level row or the
    bucket pays the configured fallback amount.
    """
    tier = normalize_level(level)
    hours = parse_duration_hours(duration_hours)
    bucket = duration_bucket(hours)

    amount = lookup_rate(rate_table, tier, bucket)
    if amount is None:
        logger.warning(
            f"⚠️ No payout rate for {tier.value}/{bucket}, using fallback {PAYOUT_FALLBACK_AMOUNT}"
        )
        return PAYOUT_FALLBACK_AMOUNT
    return amount


def compute_service_payout(collaborator: Optional[Any], service: Any, rate_table: Any) -> float:
    """computePayout(collaborator, service): level from the collaborator, hours from the job"""
    level = getattr(collaborator, "level", None) if collaborator is not None else None
    return compute_payout(level, service.duration, rate_table)

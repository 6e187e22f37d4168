"""
Numeric and time helpers for BRT ledger data.

Amounts are native-unit "drops" strings on the wire and Python ints in
the canonical model. Python ints are arbitrary precision, so negating a
drop amount never overflows, however large the supply.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# BRT network epoch (2021-03-01T00:00:00Z) as Unix time.
EPOCH_OFFSET = 1614556800


def to_unix_time(close_time: int) -> int:
    """Convert a ledger close time (seconds since the BRT epoch) to Unix time."""
    return int(close_time) + EPOCH_OFFSET


def confirmations(current_height: int, height: int) -> int:
    """Number of ledgers closed after ``height``.

    A negative difference means the height reading is staler than the
    data it is compared with; that is reported as 0, never negative.
    """
    count = int(current_height) - int(height)
    if count < 0:
        logger.warning(
            "stale height reading: current=%s is behind ledger %s", current_height, height
        )
        return 0
    return count


def parse_drops(value: object) -> int | None:
    """Parse a scalar native-unit amount.

    Returns None for non-scalar amounts (issued-currency objects) and
    for anything that is not a non-negative integer string or int.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    return None


def signed_amount(amount: int, *, outgoing: bool) -> int:
    """Balance delta of a payment from the viewpoint of one account."""
    return -amount if outgoing else amount

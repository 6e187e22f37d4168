"""
BRT Payment builder.

Builds an UnsignedTransaction from already-known network state. Pure and
deterministic: no secrets, no network calls. The sequence number is
fetched by the pipeline; the fee is whatever the caller supplies.

The builder enforces:
    - TransactionType == "Payment"
    - exactly one destination
    - non-empty source and destination addresses
    - amount, fee and sequence are non-negative integers
"""

from __future__ import annotations

from brt_client.models import UnsignedTransaction


def _require_unsigned(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an int, got: {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got: {value}")
    return value


def build_payment(
    source: str,
    destination: str,
    amount: int,
    *,
    fee: int,
    sequence: int,
) -> UnsignedTransaction:
    """Build an unsigned single-destination Payment.

    Args:
        source: Sending address.
        destination: Receiving address.
        amount: Amount in native units.
        fee: Fee in native units (caller-supplied, not estimated here).
        sequence: Current sequence number of the source account.

    Returns:
        UnsignedTransaction ready for the signer.

    Raises:
        ValueError: If an address is empty or a number is negative or
            not an int.
    """
    if not source:
        raise ValueError("source must be non-empty")
    if not destination:
        raise ValueError("destination must be non-empty")

    return UnsignedTransaction(
        source=source,
        destination=destination,
        amount=_require_unsigned("amount", amount),
        fee=_require_unsigned("fee", fee),
        sequence=_require_unsigned("sequence", sequence),
    )

"""
BRT error taxonomy and engine-result classification.

Maps gateway failures and ledger engine results onto a small, closed
set of domain error codes. Unknown engine codes never leak upstream:
they collapse into the generic failure kind of the layer that saw them.

Engine result prefixes (rippled family):
    - tes: success (tesSUCCESS)
    - tec: claimed cost (tecUNFUNDED_PAYMENT, ...): applied, but "failed"
    - tef: local failure (tefPAST_SEQ, ...): not forwarded
    - tem: malformed (temBAD_SIGNATURE, ...): not forwarded
    - ter: retry (terQUEUED, ...): maybe later

Classification order for submissions:
    1. transport failure dominates → TRANSACTION_SEND_FAILED
    2. not applied → known protocol codes, else TRANSACTION_SEND_FAILED
    3. applied → tesSUCCESS is not an error, known business codes,
       else TRANSACTION_SEND_FAILED
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from brt_client.gateway import RpcResponse

SUCCESS_CODE = "tesSUCCESS"


class ErrorCode(StrEnum):
    """Caller-facing domain errors (stable)."""

    REQUEST_FAILED = "REQUEST_FAILED"
    BLOCK_NOT_FOUND = "BLOCK_NOT_FOUND"
    SEQUENCE_UNDEFINED = "SEQUENCE_UNDEFINED"
    BAD_SIGNATURE = "BAD_SIGNATURE"
    BAD_SEQUENCE = "BAD_SEQUENCE"
    REDUNDANT = "REDUNDANT"
    UNFUNDED_PAYMENT = "UNFUNDED_PAYMENT"
    TRANSACTION_SEND_FAILED = "TRANSACTION_SEND_FAILED"


# Submission rejected before reaching a ledger.
_NOT_APPLIED_MAP: dict[str, ErrorCode] = {
    "temBAD_SIGNATURE": ErrorCode.BAD_SIGNATURE,
    "tefBAD_AUTH_MASTER": ErrorCode.BAD_SIGNATURE,
    "tefPAST_SEQ": ErrorCode.BAD_SEQUENCE,
    "temREDUNDANT": ErrorCode.REDUNDANT,
}

# Applied (sequence consumed, fee claimed) but no funds moved.
_APPLIED_MAP: dict[str, ErrorCode] = {
    "tecUNFUNDED_PAYMENT": ErrorCode.UNFUNDED_PAYMENT,
}


def classify_submission(
    engine_result: str | None,
    *,
    applied: bool,
    transport_ok: bool = True,
) -> ErrorCode | None:
    """Map a submit outcome to a domain error.

    Args:
        engine_result: Engine result string (e.g. "tefPAST_SEQ"). None
            when the node never produced one.
        applied: Whether the node reports the transaction as applied.
        transport_ok: False when the submission never reached the node.

    Returns:
        None for a fully successful submission, otherwise an ErrorCode.
    """
    if not transport_ok:
        return ErrorCode.TRANSACTION_SEND_FAILED

    if not applied:
        if engine_result is None:
            return ErrorCode.TRANSACTION_SEND_FAILED
        return _NOT_APPLIED_MAP.get(engine_result, ErrorCode.TRANSACTION_SEND_FAILED)

    if engine_result == SUCCESS_CODE:
        return None
    if engine_result is None:
        return ErrorCode.TRANSACTION_SEND_FAILED
    return _APPLIED_MAP.get(engine_result, ErrorCode.TRANSACTION_SEND_FAILED)


def classify_rpc_failure(response: RpcResponse) -> ErrorCode:
    """Classify a failed gateway call made by a read-only query.

    Every gateway failure (connection refused, HTTP error, RPC "error"
    status) is a RequestFailed at this layer; the raw node error stays
    in the response detail for diagnostics.
    """
    return ErrorCode.REQUEST_FAILED


def classify_account_lookup(response: RpcResponse) -> ErrorCode:
    """Classify a failed sequence lookup for a signing account.

    Unfunded or unknown accounts (actNotFound), transport failures and
    responses without account data all mean the sequence is undefined.
    """
    return ErrorCode.SEQUENCE_UNDEFINED

"""
BRT ledger adapter.

Converts raw ledger and transaction JSON into the canonical block and
transaction shapes, computing confirmations against the current closed
ledger height and signed balance deltas for a viewpoint account.

Only successful, scalar-amount Payments are representable in the
canonical model. Everything else is "not adaptable" and silently left
out of result sets; engine failures are not errors at this layer.

Every query that reports confirmations issues its ledger call and the
``ledger_closed`` height call concurrently; neither depends on the
other.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Iterable, Iterator, Mapping

from brt_client.amounts import confirmations, parse_drops, signed_amount, to_unix_time
from brt_client.errors import SUCCESS_CODE, ErrorCode, classify_rpc_failure
from brt_client.gateway import RpcGateway, RpcResponse
from brt_client.keypairs import KeypairProvider
from brt_client.models import (
    PAYMENT,
    CanonicalTransaction,
    LedgerBlock,
    Outcome,
    Recipient,
)

logger = logging.getLogger(__name__)

_TX_ID_RE = re.compile(r"[0-9A-F]{64}")

# Fields that API v2 responses carry beside tx_json rather than inside it.
_ENVELOPE_FIELDS = ("hash", "ledger_index", "date", "meta", "metaData")

# Parse failures on node data that lacks required fields.
_MALFORMED = (AttributeError, KeyError, TypeError, ValueError)


# =========================================================================
# Pure adaptation
# =========================================================================


def flatten_transaction(entry: Mapping[str, Any]) -> dict[str, Any]:
    """Merge a tx body with the envelope fields the node puts beside it.

    Handles ``tx`` responses (fields inline), ``account_tx`` entries
    (``{"tx": ..., "meta": ...}``) and API v2 ``tx_json`` envelopes.
    """
    body = entry.get("tx_json") or entry.get("tx") or entry
    flat = dict(body)
    for key in _ENVELOPE_FIELDS:
        if key not in flat and key in entry:
            flat[key] = entry[key]
    return flat


def adapt_transaction(
    raw: Mapping[str, Any],
    current_height: int,
    account: str | None = None,
) -> CanonicalTransaction | None:
    """Adapt raw transaction JSON to a CanonicalTransaction.

    Args:
        raw: Flat transaction JSON (see flatten_transaction) carrying
            ``meta``, ``date`` and ``ledger_index``.
        current_height: Current closed ledger index.
        account: Viewpoint address. The balance is negative when it is
            the sender, positive otherwise (including when absent).

    Returns:
        CanonicalTransaction, or None when the transaction is not a
        successful scalar-amount Payment.

    Raises:
        KeyError, TypeError, ValueError: If an adaptable Payment lacks
            hash, date, ledger_index or Fee.
    """
    if raw.get("TransactionType") != PAYMENT:
        return None

    meta = raw.get("meta") or raw.get("metaData")
    if not isinstance(meta, Mapping) or meta.get("TransactionResult") != SUCCESS_CODE:
        return None

    amount = parse_drops(raw.get("Amount", raw.get("DeliverMax")))
    if amount is None:
        return None

    fee = parse_drops(raw["Fee"])
    if fee is None:
        raise ValueError(f"invalid Fee: {raw['Fee']!r}")

    source = raw["Account"]
    block = int(raw["ledger_index"])
    return CanonicalTransaction(
        hash=raw["hash"],
        value=amount,
        time=to_unix_time(raw["date"]),
        confirmations=confirmations(current_height, block),
        block=block,
        fee=fee,
        account=account or None,
        balance=signed_amount(amount, outgoing=account == source),
        senders=(source,),
        recipients=(Recipient(address=raw["Destination"], value=amount),),
    )


# =========================================================================
# Height
# =========================================================================


async def fetch_block_number(gateway: RpcGateway) -> Outcome[int]:
    """Current closed ledger index: the height every confirmation uses."""
    response = await gateway.call("ledger_closed")
    if not response.ok:
        return _rpc_failure(response)
    try:
        return Outcome.success(int(response.result["ledger_index"]))
    except _MALFORMED as exc:
        return _malformed("ledger_closed", exc)


def _rpc_failure(response: RpcResponse) -> Outcome[Any]:
    return Outcome.failure(classify_rpc_failure(response), response.detail)


def _malformed(method: str, exc: Exception) -> Outcome[Any]:
    logger.debug("malformed %s response: %r", method, exc)
    return Outcome.failure(
        ErrorCode.REQUEST_FAILED, f"malformed {method} response: {exc!r}"
    )


def _adapt_entries(
    entries: Iterable[Any],
    current_height: int,
    account: str | None = None,
    overlay: Mapping[str, Any] | None = None,
) -> Iterator[CanonicalTransaction]:
    """Adapt listing entries, skipping non-adaptable and malformed ones.

    ``overlay`` supplies fields the listing carries once for all of its
    entries (a block's index and close time).
    """
    for entry in entries:
        try:
            flat = flatten_transaction(entry)
            if overlay:
                flat.update(overlay)
            adapted = adapt_transaction(flat, current_height, account)
        except _MALFORMED as exc:
            logger.warning("skipping malformed transaction entry: %r", exc)
            continue
        if adapted is not None:
            yield adapted


# =========================================================================
# Adapter
# =========================================================================


class LedgerAdapter:
    """Read-side queries over a BRT node.

    Stateless: every call goes to the node, nothing is cached.

    Args:
        gateway: RPC gateway to the node.
        keypairs: Address provider used for syntax checks.
    """

    def __init__(self, gateway: RpcGateway, keypairs: KeypairProvider) -> None:
        self._gateway = gateway
        self._keypairs = keypairs

    async def _call_with_height(
        self, method: str, params: dict[str, Any]
    ) -> tuple[RpcResponse, Outcome[int]]:
        response, height = await asyncio.gather(
            self._gateway.call(method, params),
            fetch_block_number(self._gateway),
        )
        return response, height

    async def get_block(
        self, index: int | str, *, expand: bool = False
    ) -> Outcome[LedgerBlock]:
        """Fetch a closed ledger with its transactions.

        With ``expand`` the transactions are adapted (non-adaptable and
        malformed ones dropped); without it the raw transaction ids pass
        through.
        """
        response, height = await self._call_with_height(
            "ledger",
            {
                "ledger_index": index,
                "accounts": False,
                "transactions": True,
                "expand": expand,
            },
        )
        if not response.ok:
            if response.error == "lgrNotFound":
                return Outcome.failure(ErrorCode.BLOCK_NOT_FOUND, response.detail)
            return _rpc_failure(response)

        try:
            result = response.result
            ledger = result["ledger"]
            closed = bool(ledger.get("closed"))
        except _MALFORMED as exc:
            return _malformed("ledger", exc)

        if not closed:
            return Outcome.failure(ErrorCode.BLOCK_NOT_FOUND, f"ledger {index} is not closed")
        if not height.ok:
            return Outcome.failure(height.error, height.detail)

        try:
            ledger_index = int(result.get("ledger_index", ledger.get("ledger_index")))
            close_time = int(ledger["close_time"])
            raw_txs = ledger.get("transactions") or []
            if expand:
                transactions: tuple[Any, ...] = tuple(
                    _adapt_entries(
                        raw_txs,
                        height.value,
                        overlay={"ledger_index": ledger_index, "date": close_time},
                    )
                )
            else:
                transactions = tuple(raw_txs)
            block = LedgerBlock(
                index=ledger_index,
                hash=result.get("ledger_hash") or ledger["ledger_hash"],
                time=to_unix_time(close_time),
                confirmations=confirmations(height.value, ledger_index),
                transactions=transactions,
            )
        except _MALFORMED as exc:
            return _malformed("ledger", exc)

        return Outcome.success(block)

    async def get_total_supply(self) -> str:
        """Total native units in the last closed ledger, as a string.

        Degrades to "0" on any RPC failure instead of reporting an
        error: callers read "0" as "unknown, assume none".
        """
        response = await self._gateway.call(
            "ledger",
            {
                "ledger_index": "closed",
                "accounts": False,
                "transactions": False,
                "expand": False,
            },
        )
        if response.ok:
            ledger = response.result.get("ledger")
            total = ledger.get("total_coins") if isinstance(ledger, dict) else None
            if total is not None:
                return str(total)
        logger.warning("total supply unavailable, reporting 0: %s", response.detail)
        return "0"

    async def get_transaction(
        self, tx_hash: str
    ) -> Outcome[CanonicalTransaction | None]:
        """Fetch and adapt one transaction.

        A transaction that is not adaptable yields a successful outcome
        whose value is None.
        """
        response, height = await self._call_with_height(
            "tx", {"transaction": tx_hash, "binary": False}
        )
        if not response.ok:
            return _rpc_failure(response)
        if not height.ok:
            return Outcome.failure(height.error, height.detail)

        try:
            adapted = adapt_transaction(flatten_transaction(response.result), height.value)
        except _MALFORMED as exc:
            return _malformed("tx", exc)
        return Outcome(value=adapted)

    async def get_address_balance(self, address: str) -> Outcome[str]:
        """Ledger-reported balance of ``address`` in native units, unmodified."""
        response = await self._gateway.call("account_info", {"account": address})
        if not response.ok:
            return _rpc_failure(response)
        try:
            return Outcome.success(response.result["account_data"]["Balance"])
        except _MALFORMED as exc:
            return _malformed("account_info", exc)

    async def get_address_transactions(
        self, address: str
    ) -> Outcome[dict[str, CanonicalTransaction]]:
        """Adapted payment history of ``address``, keyed by tx hash.

        Single, non-paginated ``account_tx`` call. Entries that are not
        successful scalar-amount Payments are dropped, not reported; a
        malformed entry is logged and skipped.
        """
        response, height = await self._call_with_height(
            "account_tx",
            {"account": address, "binary": False, "forward": False, "limit": 0},
        )
        if not response.ok:
            return _rpc_failure(response)
        if not height.ok:
            return Outcome.failure(height.error, height.detail)

        entries = response.result.get("transactions") or []
        if not isinstance(entries, list):
            return _malformed("account_tx", TypeError("transactions is not a list"))
        history = {
            adapted.hash: adapted
            for adapted in _adapt_entries(entries, height.value, address)
        }

        logger.debug("account_tx %s: %d payments", address, len(history))
        return Outcome.success(history)

    def is_address_valid(self, address: str) -> bool:
        return self._keypairs.is_valid_classic_address(address)

    @staticmethod
    def is_transaction_id_valid(tx_hash: str) -> bool:
        """Shape check only: exactly 64 uppercase hex characters."""
        return _TX_ID_RE.fullmatch(tx_hash) is not None

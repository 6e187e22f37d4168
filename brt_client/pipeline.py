"""
BRT transaction pipeline.

sequence lookup → build → sign → submit → classify.

Each step returns an Outcome; nothing is retried here. A stale sequence
(two concurrent signings for one account) surfaces as BAD_SEQUENCE on
submit and retry policy belongs to the caller.

Secrets never appear in logs or return values: the seed goes straight
from the SigningAccount to the signer.
"""

from __future__ import annotations

import logging

from brt_client.errors import (
    SUCCESS_CODE,
    ErrorCode,
    classify_account_lookup,
    classify_rpc_failure,
    classify_submission,
)
from brt_client.gateway import RpcGateway
from brt_client.keypairs import KeypairProvider, generate_address
from brt_client.ledger import fetch_block_number
from brt_client.models import (
    GeneratedAddress,
    Outcome,
    Output,
    SignedTransaction,
    SigningAccount,
)
from brt_client.signer import TransactionSigner
from brt_client.tx import build_payment

logger = logging.getLogger(__name__)


def _infer_applied(engine_result: str | None) -> bool:
    # Servers that omit "applied": tes and tec results are applied.
    if engine_result is None:
        return False
    return engine_result == SUCCESS_CODE or engine_result.startswith("tec")


class TransactionPipeline:
    """Builds, signs and submits single-destination Payments.

    Args:
        gateway: RPC gateway to the node.
        signer: Transaction signer (secrets boundary).
        keypairs: Key provider used for address generation.
    """

    def __init__(
        self,
        gateway: RpcGateway,
        signer: TransactionSigner,
        keypairs: KeypairProvider,
    ) -> None:
        self._gateway = gateway
        self._signer = signer
        self._keypairs = keypairs

    async def sign_transaction(
        self,
        source: SigningAccount,
        output: Output,
        fee: int,
    ) -> Outcome[SignedTransaction]:
        """Sign a Payment of ``output.value`` from ``source`` to ``output.address``.

        The source's current sequence number is read from the node; the
        fee is used as given.

        Returns:
            Outcome with the SignedTransaction, or SEQUENCE_UNDEFINED when
            the source account cannot be looked up (unfunded, unknown,
            node unreachable).

        Raises:
            ValueError: If ``source`` has no address or no seed, or the
                payment fields are invalid.
        """
        if not source.address:
            raise ValueError("source account must have an address")
        if not source.seed:
            raise ValueError("source account must have a seed to sign")

        response = await self._gateway.call("account_info", {"account": source.address})
        if not response.ok:
            return Outcome.failure(classify_account_lookup(response), response.detail)

        account_data = response.result.get("account_data")
        sequence = account_data.get("Sequence") if isinstance(account_data, dict) else None
        if sequence is None:
            return Outcome.failure(
                ErrorCode.SEQUENCE_UNDEFINED,
                f"no account data for {source.address}",
            )

        unsigned = build_payment(
            source.address,
            output.address,
            output.value,
            fee=fee,
            sequence=int(sequence),
        )
        signed = self._signer.sign(unsigned.to_tx_json(), source.seed)
        logger.debug(
            "signed payment %s from %s seq=%s", signed.tx_id, source.address, unsigned.sequence
        )
        return Outcome.success(SignedTransaction(raw=signed.signed_blob, id=signed.tx_id))

    async def submit_transaction(self, signed: SignedTransaction) -> Outcome[str]:
        """Submit a signed blob and classify the engine result.

        Failures still carry ``signed.id`` as the value so callers can
        look the transaction up later. On full success the value is the
        hash reported by the node.
        """
        response = await self._gateway.call("submit", {"tx_blob": signed.raw})

        if response.transport_failed:
            error = classify_submission(None, applied=False, transport_ok=False)
            return Outcome.failure(error, response.detail, value=signed.id)

        result = response.result or {}
        engine_result = result.get("engine_result")
        if response.ok:
            applied = bool(result.get("applied", _infer_applied(engine_result)))
        else:
            applied = False

        error = classify_submission(engine_result, applied=applied)
        if error is not None:
            detail_parts = [f"engine_result={engine_result}"] if engine_result else []
            message = result.get("engine_result_message") or response.detail
            if message:
                detail_parts.append(message)
            logger.debug("submit %s failed: %s (%s)", signed.id, error, engine_result)
            return Outcome.failure(error, "; ".join(detail_parts) or None, value=signed.id)

        tx_json = result.get("tx_json")
        tx_hash = tx_json.get("hash") if isinstance(tx_json, dict) else None
        return Outcome.success(tx_hash or signed.id)

    async def get_block_number(self) -> Outcome[int]:
        return await fetch_block_number(self._gateway)

    async def get_network_fee(self) -> Outcome[int]:
        """Minimum fee in native units, from a single ``fee`` call."""
        response = await self._gateway.call("fee")
        if not response.ok:
            return Outcome.failure(classify_rpc_failure(response), response.detail)
        try:
            return Outcome.success(int(response.result["drops"]["minimum_fee"]))
        except (KeyError, TypeError, ValueError) as exc:
            return Outcome.failure(
                ErrorCode.REQUEST_FAILED, f"malformed fee response: {exc!r}"
            )

    def generate_address(self) -> GeneratedAddress:
        """Fresh address and keypair. Never touches the network."""
        return generate_address(self._keypairs)

"""
BRT signer protocol: the secrets boundary.

The pipeline hands the signer an unsigned transaction dict and the
source seed; the signer serializes canonically, signs, and returns the
signed blob plus the transaction id. The pipeline never parses the blob.

Concrete implementations:
    - XrplTransactionSigner (default, using xrpl-py)
    - FakeSigner (tests)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class SignResult:
    """Result of signing a transaction.

    Attributes:
        signed_blob: Hex-encoded signed transaction blob, ready for
            submission.
        tx_id: Transaction hash (64 uppercase hex chars).
    """

    signed_blob: str
    tx_id: str


@runtime_checkable
class TransactionSigner(Protocol):
    """Interface for transaction signing."""

    def sign(self, tx_json: dict[str, object], seed: str) -> SignResult:
        """Sign an unsigned transaction dict with ``seed``.

        Raises:
            ValueError: If the transaction dict or seed is malformed.
        """
        ...


class XrplTransactionSigner:
    """Signer backed by xrpl-py's binary codec and keypairs.

    Lazily imports xrpl so that tests injecting their own signer do not
    need it.
    """

    def sign(self, tx_json: dict[str, object], seed: str) -> SignResult:
        from xrpl.models.transactions import Transaction
        from xrpl.transaction import sign
        from xrpl.wallet import Wallet

        wallet = Wallet.from_seed(seed)
        signed = sign(Transaction.from_xrpl(tx_json), wallet)
        return SignResult(signed_blob=signed.blob(), tx_id=signed.get_hash())

"""
Canonical data model for the BRT client.

Everything here is a frozen, per-call derived view. Nothing is cached
or persisted; a SignedTransaction is built for one submission attempt
and then discarded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, TypeVar

from brt_client.errors import ErrorCode

T = TypeVar("T")

PAYMENT = "Payment"


# =========================================================================
# Outcome: the (error, value) pair every public operation returns
# =========================================================================


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Explicit (error, value) result.

    Unpacks as a pair::

        err, block = await adapter.get_block(100)

    Attributes:
        error: Domain error code, or None on success.
        value: The result value. May be present alongside an error
            (e.g. a submission that failed but has a known tx id).
        detail: Human-readable detail for diagnostics.
    """

    error: ErrorCode | None = None
    value: T | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __iter__(self) -> Iterator[Any]:
        yield self.error
        yield self.value

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        error: ErrorCode,
        detail: str | None = None,
        value: T | None = None,
    ) -> Outcome[T]:
        return cls(error=error, value=value, detail=detail)


# =========================================================================
# Accounts and keys
# =========================================================================


@dataclass(frozen=True)
class Keypair:
    """Keypair derived from a seed. Only the seed is needed to sign."""

    public: str
    private: str
    seed: str = field(repr=False)


@dataclass(frozen=True)
class GeneratedAddress:
    """A freshly generated account: address plus its keypair."""

    address: str
    keypair: Keypair

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "public": self.keypair.public,
            "secret": {
                "private": self.keypair.private,
                "seed": self.keypair.seed,
            },
        }


@dataclass(frozen=True)
class SigningAccount:
    """Input side of a payment: the source address and its seed."""

    address: str
    seed: str | None = field(default=None, repr=False)

    @classmethod
    def from_generated(cls, generated: GeneratedAddress) -> SigningAccount:
        return cls(address=generated.address, seed=generated.keypair.seed)


@dataclass(frozen=True)
class Output:
    """The single destination of a payment."""

    address: str
    value: int


# =========================================================================
# Transactions
# =========================================================================


@dataclass(frozen=True)
class UnsignedTransaction:
    """An unsigned single-destination Payment.

    Amount, fee and sequence are unsigned integers in native units.
    Built by ``brt_client.tx.build_payment``.
    """

    source: str
    destination: str
    amount: int
    fee: int
    sequence: int
    type: str = PAYMENT

    def to_tx_json(self) -> dict[str, object]:
        """Render the transaction in node JSON format."""
        return {
            "TransactionType": self.type,
            "Account": self.source,
            "Destination": self.destination,
            "Amount": str(self.amount),
            "Fee": str(self.fee),
            "Sequence": self.sequence,
        }


@dataclass(frozen=True)
class SignedTransaction:
    """A signed blob ready for submission and its id (64 uppercase hex)."""

    raw: str
    id: str


@dataclass(frozen=True)
class Recipient:
    address: str
    value: int


@dataclass(frozen=True)
class CanonicalTransaction:
    """Protocol-agnostic view of a successful Payment.

    Attributes:
        hash: Transaction id.
        value: Transferred amount in native units.
        time: Unix time of the ledger close.
        confirmations: Ledgers closed after the one holding the tx.
        block: Ledger index holding the tx.
        fee: Fee in native units.
        account: The address the tx was queried for, if any.
        balance: Signed delta for ``account``: negative when ``account``
            sent the payment, positive otherwise.
        senders: Source addresses (always exactly one).
        recipients: Destinations (always exactly one).
    """

    hash: str
    value: int
    time: int
    confirmations: int
    block: int
    fee: int
    balance: int
    senders: tuple[str, ...]
    recipients: tuple[Recipient, ...]
    account: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Wallet-service shape (``from``/``to`` keys)."""
        return {
            "hash": self.hash,
            "value": self.value,
            "time": self.time,
            "confirmations": self.confirmations,
            "block": self.block,
            "fee": self.fee,
            "account": self.account,
            "balance": self.balance,
            "from": list(self.senders),
            "to": [{"address": r.address, "value": r.value} for r in self.recipients],
        }


@dataclass(frozen=True)
class LedgerBlock:
    """A closed ledger.

    ``transactions`` holds CanonicalTransactions when the block was
    fetched expanded, otherwise the raw transaction ids as returned by
    the node.
    """

    index: int
    hash: str
    time: int
    confirmations: int
    transactions: tuple[CanonicalTransaction | str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "block": self.index,
            "hash": self.hash,
            "time": self.time,
            "txs": [
                tx.to_dict() if isinstance(tx, CanonicalTransaction) else tx
                for tx in self.transactions
            ],
            "confirmations": self.confirmations,
        }

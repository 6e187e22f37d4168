"""
BRT client facade.

One gateway, one LedgerAdapter, one TransactionPipeline: the full
surface a wallet service consumes. Every network operation returns an
Outcome and never raises for transport or business failures.
"""

from __future__ import annotations

from brt_client.config import BrtConfig
from brt_client.gateway import JsonRpcGateway, RpcGateway
from brt_client.keypairs import KeypairProvider, XrplKeypairProvider
from brt_client.ledger import LedgerAdapter
from brt_client.models import (
    CanonicalTransaction,
    GeneratedAddress,
    LedgerBlock,
    Outcome,
    Output,
    SignedTransaction,
    SigningAccount,
)
from brt_client.pipeline import TransactionPipeline
from brt_client.signer import TransactionSigner, XrplTransactionSigner
from brt_client.transport import HttpxTransport, JsonRpcTransport


class BrtClient:
    """Canonical wallet-facing client for a BRT node.

    Args:
        gateway: RPC gateway to the node.
        keypairs: Key/address provider.
        signer: Transaction signer.
        required_confirmations: Confirmations a wallet should wait for
            before treating a payment as final.
    """

    def __init__(
        self,
        gateway: RpcGateway,
        keypairs: KeypairProvider,
        signer: TransactionSigner,
        *,
        required_confirmations: int = 1,
    ) -> None:
        self._ledger = LedgerAdapter(gateway, keypairs)
        self._pipeline = TransactionPipeline(gateway, signer, keypairs)
        self._required_confirmations = required_confirmations

    @property
    def ledger(self) -> LedgerAdapter:
        return self._ledger

    @property
    def pipeline(self) -> TransactionPipeline:
        return self._pipeline

    @property
    def required_confirmations(self) -> int:
        return self._required_confirmations

    @staticmethod
    def has_multiple_outputs() -> bool:
        """Payments on this ledger have exactly one destination."""
        return False

    # -- ledger adapter -------------------------------------------------

    async def get_block(self, index: int | str, *, expand: bool = False) -> Outcome[LedgerBlock]:
        return await self._ledger.get_block(index, expand=expand)

    async def get_total_supply(self) -> str:
        return await self._ledger.get_total_supply()

    async def get_transaction(
        self, tx_hash: str
    ) -> Outcome[CanonicalTransaction | None]:
        return await self._ledger.get_transaction(tx_hash)

    async def get_address_balance(self, address: str) -> Outcome[str]:
        return await self._ledger.get_address_balance(address)

    async def get_address_transactions(
        self, address: str
    ) -> Outcome[dict[str, CanonicalTransaction]]:
        return await self._ledger.get_address_transactions(address)

    def is_address_valid(self, address: str) -> bool:
        return self._ledger.is_address_valid(address)

    def is_transaction_id_valid(self, tx_hash: str) -> bool:
        return self._ledger.is_transaction_id_valid(tx_hash)

    # -- transaction pipeline -------------------------------------------

    async def sign_transaction(
        self, source: SigningAccount, output: Output, fee: int
    ) -> Outcome[SignedTransaction]:
        return await self._pipeline.sign_transaction(source, output, fee)

    async def submit_transaction(self, signed: SignedTransaction) -> Outcome[str]:
        return await self._pipeline.submit_transaction(signed)

    async def get_block_number(self) -> Outcome[int]:
        return await self._pipeline.get_block_number()

    async def get_network_fee(self) -> Outcome[int]:
        return await self._pipeline.get_network_fee()

    def generate_address(self) -> GeneratedAddress:
        return self._pipeline.generate_address()


def create_client(
    config: BrtConfig | None = None,
    *,
    transport: JsonRpcTransport | None = None,
    keypairs: KeypairProvider | None = None,
    signer: TransactionSigner | None = None,
) -> BrtClient:
    """Create a BrtClient.

    Args:
        config: Connection settings. Defaults to ``BrtConfig.from_env()``.
        transport: Override the HTTP transport (tests, custom stacks).
        keypairs: Override the key provider. Defaults to xrpl-py.
        signer: Override the signer. Defaults to xrpl-py.

    Example:
        >>> client = create_client(BrtConfig(url="http://node:5005"))
        >>> err, height = await client.get_block_number()
    """
    config = config or BrtConfig.from_env()
    transport = transport or HttpxTransport(
        timeout=config.timeout_s,
        user=config.user,
        password=config.password,
    )
    return BrtClient(
        JsonRpcGateway(config.url, transport),
        keypairs or XrplKeypairProvider(),
        signer or XrplTransactionSigner(),
        required_confirmations=config.required_confirmations,
    )

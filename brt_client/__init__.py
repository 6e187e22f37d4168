"""
BRT ledger client.

Normalizes a BRT node's rippled-style JSON-RPC interface into canonical
blocks, transactions and balances for a wallet service.

Public API:

    Facade:
        - ``BrtClient`` / ``create_client()``: all operations behind one
          gateway.

    Core:
        - ``LedgerAdapter``: blocks, transactions, balances, supply.
        - ``TransactionPipeline``: sequence → build → sign → submit.
        - ``adapt_transaction()``: raw tx JSON → CanonicalTransaction.
        - ``classify_submission()``: engine result → ErrorCode.

    Protocols (for dependency injection):
        - ``RpcGateway``: network boundary.
        - ``KeypairProvider``: key derivation and address syntax.
        - ``TransactionSigner``: secrets boundary.

    Concrete collaborators:
        - ``JsonRpcGateway`` over ``HttpxTransport``.
        - ``XrplKeypairProvider``, ``XrplTransactionSigner`` (xrpl-py).
"""

from brt_client.amounts import EPOCH_OFFSET
from brt_client.client import BrtClient, create_client
from brt_client.config import BrtConfig
from brt_client.errors import (
    SUCCESS_CODE,
    ErrorCode,
    classify_account_lookup,
    classify_rpc_failure,
    classify_submission,
)
from brt_client.gateway import JsonRpcGateway, RpcGateway, RpcResponse
from brt_client.keypairs import KeypairProvider, XrplKeypairProvider
from brt_client.ledger import LedgerAdapter, adapt_transaction
from brt_client.models import (
    CanonicalTransaction,
    GeneratedAddress,
    Keypair,
    LedgerBlock,
    Outcome,
    Output,
    Recipient,
    SignedTransaction,
    SigningAccount,
    UnsignedTransaction,
)
from brt_client.pipeline import TransactionPipeline
from brt_client.signer import SignResult, TransactionSigner, XrplTransactionSigner
from brt_client.transport import HttpxTransport, JsonRpcTransport
from brt_client.tx import build_payment

__version__ = "0.1.0"

__all__ = [
    "BrtClient",
    "BrtConfig",
    "CanonicalTransaction",
    "EPOCH_OFFSET",
    "ErrorCode",
    "GeneratedAddress",
    "HttpxTransport",
    "JsonRpcGateway",
    "JsonRpcTransport",
    "Keypair",
    "KeypairProvider",
    "LedgerAdapter",
    "LedgerBlock",
    "Outcome",
    "Output",
    "Recipient",
    "RpcGateway",
    "RpcResponse",
    "SUCCESS_CODE",
    "SignResult",
    "SignedTransaction",
    "SigningAccount",
    "TransactionPipeline",
    "TransactionSigner",
    "UnsignedTransaction",
    "XrplKeypairProvider",
    "XrplTransactionSigner",
    "adapt_transaction",
    "build_payment",
    "classify_account_lookup",
    "classify_rpc_failure",
    "classify_submission",
    "create_client",
]

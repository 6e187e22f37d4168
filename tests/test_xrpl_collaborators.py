"""
Tests for the xrpl-py backed key provider and signer.

Offline only: seeds are generated locally and nothing is submitted.
"""

import re

import pytest

pytest.importorskip("xrpl")

from brt_client.keypairs import XrplKeypairProvider, generate_address  # noqa: E402
from brt_client.ledger import LedgerAdapter  # noqa: E402
from brt_client.signer import XrplTransactionSigner  # noqa: E402
from brt_client.tx import build_payment  # noqa: E402

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")


class TestXrplKeypairProvider:
    def test_generated_address_is_valid(self) -> None:
        provider = XrplKeypairProvider()
        generated = generate_address(provider)
        assert generated.address.startswith("r")
        assert provider.is_valid_classic_address(generated.address) is True

    def test_keypair_rederives_from_seed(self) -> None:
        provider = XrplKeypairProvider()
        generated = generate_address(provider)
        public, private = provider.derive_keypair(generated.keypair.seed)
        assert public == generated.keypair.public
        assert private == generated.keypair.private
        assert provider.derive_address(public) == generated.address

    @pytest.mark.parametrize("address", ["", "rNotAnAddress", "0x1234", "r" * 34])
    def test_invalid_addresses(self, address: str) -> None:
        assert XrplKeypairProvider().is_valid_classic_address(address) is False


class TestXrplTransactionSigner:
    def _signed(self):  # type: ignore[no-untyped-def]
        provider = XrplKeypairProvider()
        source = generate_address(provider)
        destination = generate_address(provider)
        tx = build_payment(source.address, destination.address, 1000000, fee=12, sequence=1)
        signer = XrplTransactionSigner()
        return signer, tx, source.keypair.seed

    def test_sign_returns_blob_and_id(self) -> None:
        signer, tx, seed = self._signed()
        result = signer.sign(tx.to_tx_json(), seed)
        assert _HEX_RE.fullmatch(result.signed_blob)
        assert LedgerAdapter.is_transaction_id_valid(result.tx_id)

    def test_signing_is_deterministic(self) -> None:
        signer, tx, seed = self._signed()
        first = signer.sign(tx.to_tx_json(), seed)
        second = signer.sign(tx.to_tx_json(), seed)
        assert first == second

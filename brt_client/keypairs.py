"""
Keypair and address provider protocol.

Seed generation, keypair derivation and classic-address encoding belong
to the network's key library. The client only delegates.

Concrete implementations:
    - XrplKeypairProvider (default, using xrpl-py)
    - FakeKeypairs (tests)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from brt_client.models import GeneratedAddress, Keypair


@runtime_checkable
class KeypairProvider(Protocol):
    """Interface for key derivation and address syntax checks."""

    def generate_seed(self) -> str:
        ...

    def derive_keypair(self, seed: str) -> tuple[str, str]:
        """Return ``(public, private)`` hex keys for ``seed``."""
        ...

    def derive_address(self, public: str) -> str:
        ...

    def is_valid_classic_address(self, address: str) -> bool:
        ...


class XrplKeypairProvider:
    """KeypairProvider backed by xrpl-py (rippled-family key format)."""

    def generate_seed(self) -> str:
        from xrpl.core import keypairs

        return keypairs.generate_seed()

    def derive_keypair(self, seed: str) -> tuple[str, str]:
        from xrpl.core import keypairs

        public, private = keypairs.derive_keypair(seed)
        return public, private

    def derive_address(self, public: str) -> str:
        from xrpl.core import keypairs

        return keypairs.derive_classic_address(public)

    def is_valid_classic_address(self, address: str) -> bool:
        from xrpl.core.addresscodec import is_valid_classic_address

        return is_valid_classic_address(address)


def generate_address(provider: KeypairProvider) -> GeneratedAddress:
    """Generate a fresh seed and derive its keypair and address. No network."""
    seed = provider.generate_seed()
    public, private = provider.derive_keypair(seed)
    address = provider.derive_address(public)
    return GeneratedAddress(
        address=address,
        keypair=Keypair(public=public, private=private, seed=seed),
    )

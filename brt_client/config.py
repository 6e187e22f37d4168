"""
Client configuration.

Values come from keyword arguments or, via ``BrtConfig.from_env()``,
from the environment:

    BRT_RPC_URL                 node JSON-RPC endpoint (default local node)
    BRT_RPC_USER                HTTP basic auth user (optional)
    BRT_RPC_PASSWORD            HTTP basic auth password (optional)
    BRT_RPC_TIMEOUT             request timeout in seconds (default 30)
    BRT_REQUIRED_CONFIRMATIONS  confirmations a wallet should wait for (default 1)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

DEFAULT_URL = "http://127.0.0.1:5005"
DEFAULT_TIMEOUT_S = 30.0
DEFAULT_REQUIRED_CONFIRMATIONS = 1


@dataclass(frozen=True)
class BrtConfig:
    """Connection settings for a BRT node.

    Raises:
        ValueError: On an empty url, a non-positive timeout, or a
            negative confirmation count.
    """

    url: str = DEFAULT_URL
    user: str = ""
    password: str = field(default="", repr=False)
    timeout_s: float = DEFAULT_TIMEOUT_S
    required_confirmations: int = DEFAULT_REQUIRED_CONFIRMATIONS

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("url must be non-empty")
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be > 0, got: {self.timeout_s}")
        if self.required_confirmations < 0:
            raise ValueError(
                f"required_confirmations must be >= 0, got: {self.required_confirmations}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BrtConfig:
        env = os.environ if environ is None else environ
        return cls(
            url=env.get("BRT_RPC_URL", DEFAULT_URL),
            user=env.get("BRT_RPC_USER", ""),
            password=env.get("BRT_RPC_PASSWORD", ""),
            timeout_s=float(env.get("BRT_RPC_TIMEOUT", DEFAULT_TIMEOUT_S)),
            required_confirmations=int(
                env.get("BRT_REQUIRED_CONFIRMATIONS", DEFAULT_REQUIRED_CONFIRMATIONS)
            ),
        )

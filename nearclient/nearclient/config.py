"""Client settings.

Everything is optional; values come from the environment, optionally
seeded from a ``.env`` file in the working directory.

    NEAR_RPC_URL            endpoint (default: mainnet RPC)
    NEAR_RPC_API_KEY        sent as ``x-api-key``
    NEAR_RPC_BEARER_TOKEN   sent as ``Authorization: Bearer ...``
    NEAR_RPC_TIMEOUT        transport timeout, seconds
    NEAR_RPC_POLL_ATTEMPTS  fast-forward poll budget
    NEAR_RPC_POLL_INTERVAL  fast-forward poll interval, seconds
    LOG_LEVEL               logging level for the CLI
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from nearclient.sandbox import DEFAULT_POLL_ATTEMPTS, DEFAULT_POLL_INTERVAL
from nearclient.transport import DEFAULT_TIMEOUT

DEFAULT_URL = "https://rpc.mainnet.near.org"
ENV_PREFIX = "NEAR_RPC_"


@dataclass(slots=True)
class ClientSettings:
    url: str = DEFAULT_URL
    api_key: str | None = None
    bearer_token: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    poll_attempts: int = DEFAULT_POLL_ATTEMPTS
    poll_interval: float = DEFAULT_POLL_INTERVAL
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.api_key and self.bearer_token:
            raise ValueError("set either an API key or a bearer token, not both")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.poll_attempts < 1:
            raise ValueError("poll_attempts must be at least 1")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        dotenv: bool = True,
    ) -> "ClientSettings":
        """Read settings from *environ* (``os.environ`` by default)."""
        if environ is None:
            if dotenv:
                load_dotenv(os.path.join(Path.cwd(), ".env"))
            environ = os.environ

        def get(name: str) -> str | None:
            value = environ.get(ENV_PREFIX + name)
            return value if value else None

        try:
            return cls(
                url=get("URL") or DEFAULT_URL,
                api_key=get("API_KEY"),
                bearer_token=get("BEARER_TOKEN"),
                timeout=float(get("TIMEOUT") or DEFAULT_TIMEOUT),
                poll_attempts=int(get("POLL_ATTEMPTS") or DEFAULT_POLL_ATTEMPTS),
                poll_interval=float(get("POLL_INTERVAL") or DEFAULT_POLL_INTERVAL),
                log_level=environ.get("LOG_LEVEL") or "INFO",
            )
        except ValueError as exc:
            raise ValueError(f"invalid {ENV_PREFIX}* setting: {exc}") from exc

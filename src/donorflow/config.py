"""
Configuration loading.

Settings come from the process environment, after an optional ``.env``
file has been loaded with python-dotenv (existing environment variables
win over the file).  Loaded once at startup; there are no built-in
fallback values for the required options.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import httpx
from dotenv import load_dotenv

from .campaign import UINT256_MAX
from .errors import ConfigurationError
from .sigil.eth import normalize_private_key, parse_address

REQUIRED_KEYS = (
    "RPC_URL",
    "PRIVATE_KEY",
    "FACTORY_ADDRESS",
    "DEPOSIT_TOKEN_ADDRESS",
    "CAMPAIGN_ADDRESS",
    "AMOUNT",
)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    rpc_url: str
    private_key: str
    factory_address: str
    deposit_token_address: str
    campaign_address: str
    amount: int
    mint_before_approve: bool = False
    receipt_timeout: Optional[float] = None

    def redacted(self) -> dict[str, object]:
        """Settings as a dict with the private key masked."""
        return {
            "rpc_url": self.rpc_url,
            "private_key": "0x" + "*" * 8,
            "factory_address": self.factory_address,
            "deposit_token_address": self.deposit_token_address,
            "campaign_address": self.campaign_address,
            "amount": self.amount,
            "mint_before_approve": self.mint_before_approve,
            "receipt_timeout": self.receipt_timeout,
        }


def parse_amount(value: str, name: str = "AMOUNT") -> int:
    """Parse a non-negative integer amount in the token's smallest unit."""
    text = value.strip().replace("_", "")
    try:
        amount = int(text, 0) if text.lower().startswith("0x") else int(text)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be an integer in the token's smallest unit, got {value!r}"
        ) from exc
    if not 0 <= amount <= UINT256_MAX:
        raise ConfigurationError(f"{name} must fit in uint256, got {value!r}")
    return amount


def parse_rpc_url(value: str) -> str:
    """Check RPC_URL is an absolute http(s) URL."""
    text = value.strip()
    try:
        url = httpx.URL(text)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"RPC_URL is not a valid URL: {value!r} ({exc})") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(f"RPC_URL must be an http(s) URL with a host, got {value!r}")
    return text


def parse_bool(value: str, name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def parse_timeout(value: str) -> Optional[float]:
    if not value.strip():
        return None
    try:
        timeout = float(value)
    except ValueError as exc:
        raise ConfigurationError(f"RECEIPT_TIMEOUT must be seconds, got {value!r}") from exc
    if timeout <= 0:
        raise ConfigurationError("RECEIPT_TIMEOUT must be positive")
    return timeout


def load_settings(
    env_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Load and validate settings.

    Args:
        env_path: .env file to load first (default: ./.env if present)
        environ: Mapping to read from instead of os.environ

    Returns:
        Validated Settings

    Raises:
        ConfigurationError: If required options are missing or malformed
        AddressParseError: If an address option is not a valid address
        SigningError: If PRIVATE_KEY is not a valid secp256k1 key
    """
    if environ is None:
        path = env_path or Path.cwd() / ".env"
        if env_path is not None and not env_path.exists():
            raise ConfigurationError(f"Env file not found: {env_path}")
        if path.exists():
            load_dotenv(path, override=False)
        environ = os.environ

    missing = [key for key in REQUIRED_KEYS if not environ.get(key, "").strip()]
    if missing:
        raise ConfigurationError(
            f"Missing required configuration: {', '.join(missing)}. "
            "Set them in the environment or in a .env file."
        )

    return Settings(
        rpc_url=parse_rpc_url(environ["RPC_URL"]),
        private_key=normalize_private_key(environ["PRIVATE_KEY"]),
        factory_address=parse_address(environ["FACTORY_ADDRESS"]),
        deposit_token_address=parse_address(environ["DEPOSIT_TOKEN_ADDRESS"]),
        campaign_address=parse_address(environ["CAMPAIGN_ADDRESS"]),
        amount=parse_amount(environ["AMOUNT"]),
        mint_before_approve=parse_bool(
            environ.get("MINT_BEFORE_APPROVE", ""), "MINT_BEFORE_APPROVE"
        ),
        receipt_timeout=parse_timeout(environ.get("RECEIPT_TIMEOUT", "")),
    )

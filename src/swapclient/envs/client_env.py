from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, field_validator


class Settings(BaseModel):
    """Swap server connection settings sourced from environment variables."""

    swap_server_address: str
    swap_server_insecure: bool = False
    swap_server_tls_path: Optional[str] = None
    swap_server_call_timeout: float = 30.0
    swap_server_auth_token: Optional[str] = None

    @field_validator("swap_server_address")
    @classmethod
    def validate_swap_server_address(cls, v: str) -> str:
        if not v:
            raise ValueError("Swap server address cannot be empty")
        if "://" in v:
            raise ValueError("Swap server address must be host:port, without a scheme")
        host, sep, port = v.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError("Swap server address must be in host:port form")
        return v

    @field_validator("swap_server_tls_path")
    @classmethod
    def validate_swap_server_tls_path(cls, v: Optional[str]) -> Optional[str]:
        # An empty path means "no pinned certificate".
        return v or None

    @field_validator("swap_server_call_timeout")
    @classmethod
    def validate_swap_server_call_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Swap server call timeout must be positive")
        return v


def get_settings() -> Settings:
    swap_server_address = os.environ.get("SWAP_SERVER_ADDRESS")
    if not swap_server_address:
        raise ValueError("SWAP_SERVER_ADDRESS is required")
    return Settings(
        swap_server_address=swap_server_address,
        swap_server_insecure=os.environ.get("SWAP_SERVER_INSECURE", "false").lower()
        == "true",
        swap_server_tls_path=os.environ.get("SWAP_SERVER_TLS_PATH"),
        swap_server_call_timeout=float(
            os.environ.get("SWAP_SERVER_CALL_TIMEOUT", "30")
        ),
        swap_server_auth_token=os.environ.get("SWAP_SERVER_AUTH_TOKEN") or None,
    )

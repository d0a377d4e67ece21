"""Swap negotiation domain values: fixed-size keys, terms, quotes and swaps."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field


class _FixedBytes(bytes):
    """Immutable byte string whose length is checked at construction."""

    SIZE: ClassVar[int] = 0

    def __new__(cls, value: bytes) -> "_FixedBytes":
        if len(value) != cls.SIZE:
            raise ValueError(
                f"{cls.__name__} must be {cls.SIZE} bytes, got {len(value)}"
            )
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.hex()})"


class SwapHash(_FixedBytes):
    """32-byte hash identifying a swap."""

    SIZE = 32


class CompressedPubKey(_FixedBytes):
    """33-byte SEC1 compressed public key.

    Only the length is enforced here; curve membership is checked where the
    key is received from the server.
    """

    SIZE = 33


class TransportMode(str, Enum):
    INSECURE = "insecure"
    PINNED_CERTIFICATE = "pinned_certificate"
    SYSTEM_CA = "system_ca"


def select_transport_mode(insecure: bool, tls_path: Optional[str]) -> TransportMode:
    """Pick the transport security mode; first match wins.

    insecure > pinned self-signed certificate > system trust store.
    """
    if insecure:
        return TransportMode.INSECURE
    if tls_path:
        return TransportMode.PINNED_CERTIFICATE
    return TransportMode.SYSTEM_CA


class ChannelConfig(BaseModel):
    """Where and how to reach the swap server."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., min_length=1)
    insecure: bool = False
    tls_path: Optional[str] = None

    @property
    def transport_mode(self) -> TransportMode:
        return select_transport_mode(self.insecure, self.tls_path)


class _SwapValue(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class LoopOutTerms(_SwapValue):
    """Amount bounds (satoshis) the server accepts for Loop Out swaps."""

    min_swap_amount: int
    max_swap_amount: int


class LoopInTerms(_SwapValue):
    """Amount bounds (satoshis) the server accepts for Loop In swaps."""

    min_swap_amount: int
    max_swap_amount: int


class LoopOutQuote(_SwapValue):
    """Non-binding Loop Out quote for a requested amount."""

    prepay_amount: int
    swap_fee: int
    cltv_delta: int
    swap_payment_dest: CompressedPubKey


class LoopInQuote(_SwapValue):
    """Non-binding Loop In quote for a requested amount."""

    swap_fee: int
    cltv_delta: int


class NewLoopOutResponse(_SwapValue):
    """Server side of a Loop Out creation handshake."""

    swap_invoice: str
    prepay_invoice: str
    sender_key: CompressedPubKey
    expiry: int


class NewLoopInResponse(_SwapValue):
    """Server side of a Loop In creation handshake."""

    receiver_key: CompressedPubKey
    expiry: int

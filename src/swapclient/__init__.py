"""Client for negotiating Loop Out / Loop In swaps with a remote swap server."""

from .domain.entities import (
    CompressedPubKey,
    LoopInQuote,
    LoopInTerms,
    LoopOutQuote,
    LoopOutTerms,
    NewLoopInResponse,
    NewLoopOutResponse,
    SwapHash,
)
from .domain.errors import (
    CanceledError,
    CertificateLoadError,
    ChannelEstablishmentError,
    DeadlineExceededError,
    DecodeError,
    InvalidPaymentDestinationError,
    InvalidServerKeyError,
    RemoteCallError,
    SwapClientError,
)
from .infrastructure.swap_server.swap_server_client import SwapServerClient

__all__ = [
    "CanceledError",
    "CertificateLoadError",
    "ChannelEstablishmentError",
    "CompressedPubKey",
    "DeadlineExceededError",
    "DecodeError",
    "InvalidPaymentDestinationError",
    "InvalidServerKeyError",
    "LoopInQuote",
    "LoopInTerms",
    "LoopOutQuote",
    "LoopOutTerms",
    "NewLoopInResponse",
    "NewLoopOutResponse",
    "RemoteCallError",
    "SwapClientError",
    "SwapHash",
    "SwapServerClient",
]

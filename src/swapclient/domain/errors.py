"""Domain-specific exceptions raised by the swap server client."""

from __future__ import annotations

from typing import Optional

import grpc


class SwapClientError(Exception):
    """Base class for every failure surfaced by the swap server client."""


class ChannelEstablishmentError(SwapClientError):
    """Raised when the gRPC channel to the swap server cannot be set up."""


class CertificateLoadError(ChannelEstablishmentError):
    """Raised when a pinned TLS certificate is missing or unparsable."""


class RemoteCallError(SwapClientError):
    """Raised when a call fails at the transport or on the server side.

    The gRPC status code and details are kept so callers can decide whether
    to retry.
    """

    def __init__(
        self,
        method: str,
        code: Optional[grpc.StatusCode] = None,
        details: Optional[str] = None,
    ) -> None:
        self.method = method
        self.code = code
        self.details = details
        code_name = code.name if code is not None else "UNKNOWN"
        super().__init__(f"{method} failed with {code_name}: {details or ''}")


class DeadlineExceededError(RemoteCallError):
    """Raised when a call is aborted because its deadline expired."""


class CanceledError(RemoteCallError):
    """Raised when a call is aborted by cancellation."""


class DecodeError(SwapClientError):
    """Raised when a server payload cannot be decoded."""


class InvalidPaymentDestinationError(DecodeError):
    """Raised when a quoted payment destination is not exactly 33 bytes."""


class InvalidServerKeyError(SwapClientError):
    """Raised when a server-supplied key is not a valid secp256k1 point."""

"""Protocol interface for swap server client implementations.

Swap execution code depends on this contract rather than on the gRPC client,
so it can be driven by a fake in tests.
"""

from __future__ import annotations

from datetime import datetime
from types import TracebackType
from typing import TYPE_CHECKING, Optional, Protocol, Type

if TYPE_CHECKING:
    from ..entities import (
        CompressedPubKey,
        LoopInQuote,
        LoopInTerms,
        LoopOutQuote,
        LoopOutTerms,
        NewLoopInResponse,
        NewLoopOutResponse,
        SwapHash,
    )


class SwapServerClientProtocol(Protocol):
    """Negotiation and creation calls against a swap server.

    Every call accepts an optional ``timeout`` (seconds); the stricter of it
    and the client's configured call timeout applies.
    """

    # Loop Out

    async def get_loop_out_terms(
        self, *, timeout: Optional[float] = None
    ) -> "LoopOutTerms":
        """Return the amount bounds the server accepts for Loop Out."""
        ...

    async def get_loop_out_quote(
        self,
        amount: int,
        swap_publication_deadline: datetime,
        *,
        timeout: Optional[float] = None,
    ) -> "LoopOutQuote":
        """Quote a Loop Out of ``amount`` satoshis.

        Args:
            amount: Swap amount in satoshis, must be positive
            swap_publication_deadline: Latest time the server may publish
                the on-chain HTLC

        Returns:
            Quote including the 33-byte payment destination
        """
        ...

    async def new_loop_out_swap(
        self,
        swap_hash: "SwapHash",
        amount: int,
        receiver_key: "CompressedPubKey",
        swap_publication_deadline: datetime,
        *,
        timeout: Optional[float] = None,
    ) -> "NewLoopOutResponse":
        """Register a Loop Out with the server.

        Returns:
            Swap and prepay invoices, the server's validated sender key and
            the expiry height
        """
        ...

    # Loop In

    async def get_loop_in_terms(
        self, *, timeout: Optional[float] = None
    ) -> "LoopInTerms":
        """Return the amount bounds the server accepts for Loop In."""
        ...

    async def get_loop_in_quote(
        self, amount: int, *, timeout: Optional[float] = None
    ) -> "LoopInQuote":
        """Quote a Loop In of ``amount`` satoshis."""
        ...

    async def new_loop_in_swap(
        self,
        swap_hash: "SwapHash",
        amount: int,
        sender_key: "CompressedPubKey",
        swap_invoice: str,
        *,
        timeout: Optional[float] = None,
    ) -> "NewLoopInResponse":
        """Register a Loop In with the server.

        Returns:
            The server's validated receiver key and the expiry height
        """
        ...

    # Context Manager Support

    async def close(self) -> None:
        """Release the channel. Safe to call more than once."""
        ...

    async def __aenter__(self: "SwapServerClientProtocol") -> "SwapServerClientProtocol":
        ...

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        ...

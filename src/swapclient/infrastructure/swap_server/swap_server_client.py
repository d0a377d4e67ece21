from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from types import TracebackType
from typing import TYPE_CHECKING, List, Optional, Sequence, Type

import grpc

from ...application import codec
from ...application.dtos import (
    ServerLoopInQuoteRequest,
    ServerLoopInQuoteResponse,
    ServerLoopInRequest,
    ServerLoopInResponse,
    ServerLoopInTermsRequest,
    ServerLoopInTermsResponse,
    ServerLoopOutQuoteRequest,
    ServerLoopOutQuoteResponse,
    ServerLoopOutRequest,
    ServerLoopOutResponse,
    ServerLoopOutTermsRequest,
    ServerLoopOutTermsResponse,
)
from ...domain.entities import (
    CompressedPubKey,
    LoopInQuote,
    LoopInTerms,
    LoopOutQuote,
    LoopOutTerms,
    NewLoopInResponse,
    NewLoopOutResponse,
    SwapHash,
)
from ...domain.errors import ChannelEstablishmentError
from ..grpc.caller import DEFAULT_CALL_TIMEOUT, AuthenticatedCaller
from ..grpc.channel import get_swap_server_channel
from ..grpc.interceptors import (
    CredentialProvider,
    MetadataCredentialInterceptor,
    static_token_provider,
)

if TYPE_CHECKING:
    from ...envs.client_env import Settings

logger = logging.getLogger(__name__)

SERVICE = "looprpc.SwapServer"
LOOP_OUT_TERMS = f"/{SERVICE}/LoopOutTerms"
LOOP_OUT_QUOTE = f"/{SERVICE}/LoopOutQuote"
NEW_LOOP_OUT_SWAP = f"/{SERVICE}/NewLoopOutSwap"
LOOP_IN_TERMS = f"/{SERVICE}/LoopInTerms"
LOOP_IN_QUOTE = f"/{SERVICE}/LoopInQuote"
NEW_LOOP_IN_SWAP = f"/{SERVICE}/NewLoopInSwap"


def _require_positive_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"Swap amount must be an integer, got {type(amount).__name__}")
    if amount <= 0:
        raise ValueError(f"Swap amount must be positive, got {amount}")


class SwapServerClient:
    """Asynchronous gRPC client for negotiating swaps with the swap server.

    The channel is built once here and shared by all calls, which may run
    concurrently. Nothing is retried; every failure is raised to the caller.
    """

    def __init__(
        self,
        address: str,
        *,
        insecure: bool = False,
        tls_path: Optional[str] = None,
        credential_provider: Optional[CredentialProvider] = None,
        interceptors: Optional[Sequence[grpc.aio.ClientInterceptor]] = None,
        call_timeout: float = DEFAULT_CALL_TIMEOUT,
    ) -> None:
        chain: List[grpc.aio.ClientInterceptor] = []
        if credential_provider is not None:
            chain.append(MetadataCredentialInterceptor(credential_provider))
        chain.extend(interceptors or [])

        self._channel = get_swap_server_channel(
            address, insecure=insecure, tls_path=tls_path, interceptors=chain
        )
        self._caller = AuthenticatedCaller(self._channel, call_timeout=call_timeout)
        self._address = address
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        credential_provider: Optional[CredentialProvider] = None,
    ) -> "SwapServerClient":
        if credential_provider is None and settings.swap_server_auth_token:
            credential_provider = static_token_provider(settings.swap_server_auth_token)
        return cls(
            settings.swap_server_address,
            insecure=settings.swap_server_insecure,
            tls_path=settings.swap_server_tls_path,
            credential_provider=credential_provider,
            call_timeout=settings.swap_server_call_timeout,
        )

    async def wait_for_ready(self, timeout: float) -> None:
        """Block until the channel is connected, or fail after ``timeout``."""
        try:
            await asyncio.wait_for(self._channel.channel_ready(), timeout)
        except asyncio.TimeoutError as exc:
            raise ChannelEstablishmentError(
                f"unable to connect to RPC server {self._address} within {timeout}s"
            ) from exc

    # Loop Out

    async def get_loop_out_terms(
        self, *, timeout: Optional[float] = None
    ) -> LoopOutTerms:
        resp = await self._caller.unary(
            LOOP_OUT_TERMS,
            ServerLoopOutTermsRequest(),
            ServerLoopOutTermsResponse,
            timeout=timeout,
        )
        return codec.decode_loop_out_terms(resp)

    async def get_loop_out_quote(
        self,
        amount: int,
        swap_publication_deadline: datetime,
        *,
        timeout: Optional[float] = None,
    ) -> LoopOutQuote:
        _require_positive_amount(amount)
        resp = await self._caller.unary(
            LOOP_OUT_QUOTE,
            ServerLoopOutQuoteRequest(
                amt=amount,
                swap_publication_deadline=codec.to_unix_timestamp(
                    swap_publication_deadline
                ),
            ),
            ServerLoopOutQuoteResponse,
            timeout=timeout,
        )
        return codec.decode_loop_out_quote(resp)

    async def new_loop_out_swap(
        self,
        swap_hash: SwapHash,
        amount: int,
        receiver_key: CompressedPubKey,
        swap_publication_deadline: datetime,
        *,
        timeout: Optional[float] = None,
    ) -> NewLoopOutResponse:
        _require_positive_amount(amount)
        swap_hash = SwapHash(swap_hash)
        receiver_key = CompressedPubKey(receiver_key)
        resp = await self._caller.unary(
            NEW_LOOP_OUT_SWAP,
            ServerLoopOutRequest(
                swap_hash=codec.encode_bytes(swap_hash),
                amt=amount,
                receiver_key=codec.encode_bytes(receiver_key),
                swap_publication_deadline=codec.to_unix_timestamp(
                    swap_publication_deadline
                ),
            ),
            ServerLoopOutResponse,
            timeout=timeout,
        )
        swap = codec.decode_new_loop_out_response(resp)
        logger.info(
            "Loop Out swap %s registered, expiry %d", swap_hash.hex(), swap.expiry
        )
        return swap

    # Loop In

    async def get_loop_in_terms(
        self, *, timeout: Optional[float] = None
    ) -> LoopInTerms:
        resp = await self._caller.unary(
            LOOP_IN_TERMS,
            ServerLoopInTermsRequest(),
            ServerLoopInTermsResponse,
            timeout=timeout,
        )
        return codec.decode_loop_in_terms(resp)

    async def get_loop_in_quote(
        self, amount: int, *, timeout: Optional[float] = None
    ) -> LoopInQuote:
        _require_positive_amount(amount)
        resp = await self._caller.unary(
            LOOP_IN_QUOTE,
            ServerLoopInQuoteRequest(amt=amount),
            ServerLoopInQuoteResponse,
            timeout=timeout,
        )
        return codec.decode_loop_in_quote(resp)

    async def new_loop_in_swap(
        self,
        swap_hash: SwapHash,
        amount: int,
        sender_key: CompressedPubKey,
        swap_invoice: str,
        *,
        timeout: Optional[float] = None,
    ) -> NewLoopInResponse:
        _require_positive_amount(amount)
        swap_hash = SwapHash(swap_hash)
        sender_key = CompressedPubKey(sender_key)
        resp = await self._caller.unary(
            NEW_LOOP_IN_SWAP,
            ServerLoopInRequest(
                swap_hash=codec.encode_bytes(swap_hash),
                amt=amount,
                sender_key=codec.encode_bytes(sender_key),
                swap_invoice=swap_invoice,
            ),
            ServerLoopInResponse,
            timeout=timeout,
        )
        swap = codec.decode_new_loop_in_response(resp)
        logger.info(
            "Loop In swap %s registered, expiry %d", swap_hash.hex(), swap.expiry
        )
        return swap

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._channel.close()

    async def __aenter__(self) -> "SwapServerClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.close()

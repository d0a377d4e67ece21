from __future__ import annotations

import asyncio
import logging
from typing import Optional, Type, TypeVar

import grpc
from pydantic import ValidationError

from ...application.dtos import WireMessage
from ...domain.errors import (
    CanceledError,
    DecodeError,
    DeadlineExceededError,
    RemoteCallError,
)

logger = logging.getLogger(__name__)

DEFAULT_CALL_TIMEOUT = 30.0

_Resp = TypeVar("_Resp", bound=WireMessage)


def effective_timeout(call_timeout: float, timeout: Optional[float]) -> float:
    """The stricter of the global call timeout and the caller's own deadline."""
    if timeout is None:
        return call_timeout
    return max(0.0, min(call_timeout, timeout))


def map_rpc_error(method: str, exc: grpc.RpcError) -> RemoteCallError:
    code = exc.code() if hasattr(exc, "code") else None
    details = exc.details() if hasattr(exc, "details") else str(exc)
    if code == grpc.StatusCode.DEADLINE_EXCEEDED:
        return DeadlineExceededError(method, code, details)
    if code == grpc.StatusCode.CANCELLED:
        return CanceledError(method, code, details)
    return RemoteCallError(method, code, details)


class AuthenticatedCaller:
    """Issue unary calls on a channel that already carries the auth interceptor.

    Each call is bounded by ``call_timeout`` or the caller's ``timeout``,
    whichever is shorter. The bound covers the interceptors too, so a slow
    credential provider cannot hold the call past its deadline. The channel
    is shared; no state is kept per call.
    """

    def __init__(
        self, channel: grpc.aio.Channel, call_timeout: float = DEFAULT_CALL_TIMEOUT
    ) -> None:
        if call_timeout <= 0:
            raise ValueError("call_timeout must be positive")
        self._channel = channel
        self._call_timeout = call_timeout

    async def unary(
        self,
        method: str,
        request: WireMessage,
        response_type: Type[_Resp],
        timeout: Optional[float] = None,
    ) -> _Resp:
        deadline = effective_timeout(self._call_timeout, timeout)
        logger.debug("Calling %s (timeout %.3fs)", method, deadline)

        rpc = self._channel.unary_unary(method)
        try:
            # grpc.aio starts its own deadline only once the interceptors hand
            # the call to the transport.
            raw = await asyncio.wait_for(
                rpc(request.to_wire(), timeout=deadline), deadline
            )
        except asyncio.TimeoutError as exc:
            error = DeadlineExceededError(
                method,
                grpc.StatusCode.DEADLINE_EXCEEDED,
                f"deadline of {deadline:.3f}s exceeded",
            )
            logger.debug("%s", error)
            raise error from exc
        except grpc.RpcError as exc:
            error = map_rpc_error(method, exc)
            logger.debug("%s", error)
            raise error from exc

        try:
            return response_type.from_wire(raw)
        except ValidationError as exc:
            raise DecodeError(
                f"malformed {response_type.__name__} from {method}"
            ) from exc

from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Mapping, Union

import grpc

logger = logging.getLogger(__name__)

CredentialMetadata = Mapping[str, str]
CredentialProvider = Callable[
    [str], Union[CredentialMetadata, Awaitable[CredentialMetadata]]
]


class MetadataCredentialInterceptor(grpc.aio.UnaryUnaryClientInterceptor):
    """Attach credential metadata produced by ``provider`` to every call.

    The provider receives the full method name and may be sync or async. It is
    invoked once per call and is free to do its own network round trips (for
    example a token challenge/response) before returning the metadata.
    """

    def __init__(self, provider: CredentialProvider) -> None:
        self._provider = provider

    async def _credentials(self, method: str) -> CredentialMetadata:
        result = self._provider(method)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def intercept_unary_unary(self, continuation, client_call_details, request):
        method = client_call_details.method
        if isinstance(method, bytes):
            method = method.decode("utf-8")
        credentials = await self._credentials(method)

        metadata = grpc.aio.Metadata(*tuple(client_call_details.metadata or ()))
        for key, value in credentials.items():
            metadata.add(key.lower(), value)
        logger.debug("Attached %d credential header(s) to %s", len(credentials), method)

        details = client_call_details._replace(metadata=metadata)
        return await continuation(details, request)


def static_token_provider(token: str, header: str = "authorization") -> CredentialProvider:
    """Provider that always returns the same token in ``header``."""

    def provider(method: str) -> CredentialMetadata:
        return {header: token}

    return provider

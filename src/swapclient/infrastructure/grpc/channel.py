from __future__ import annotations

import logging
from typing import Optional, Sequence

import grpc
from cryptography import x509

from ...domain.entities import ChannelConfig, TransportMode
from ...domain.errors import CertificateLoadError, ChannelEstablishmentError

logger = logging.getLogger(__name__)


def load_pinned_certificate(tls_path: str) -> bytes:
    """Read a PEM certificate and make sure it parses as X.509."""
    try:
        with open(tls_path, "rb") as f:
            pem = f.read()
    except OSError as exc:
        raise CertificateLoadError(
            f"unable to read TLS certificate {tls_path}: {exc}"
        ) from exc
    try:
        x509.load_pem_x509_certificate(pem)
    except ValueError as exc:
        raise CertificateLoadError(
            f"unable to parse TLS certificate {tls_path}: {exc}"
        ) from exc
    return pem


def build_channel_credentials(
    config: ChannelConfig,
) -> Optional[grpc.ChannelCredentials]:
    """Transport credentials for ``config``; ``None`` means plaintext."""
    mode = config.transport_mode
    if mode is TransportMode.INSECURE:
        return None
    if mode is TransportMode.PINNED_CERTIFICATE:
        pem = load_pinned_certificate(config.tls_path or "")
        return grpc.ssl_channel_credentials(root_certificates=pem)
    return grpc.ssl_channel_credentials()


def get_swap_server_channel(
    address: str,
    insecure: bool = False,
    tls_path: Optional[str] = None,
    interceptors: Optional[Sequence[grpc.aio.ClientInterceptor]] = None,
) -> grpc.aio.Channel:
    """Return a channel to the swap server with ``interceptors`` attached.

    grpc.aio connects lazily, so connection failures can still show up on the
    first call.
    """
    try:
        config = ChannelConfig(address=address, insecure=insecure, tls_path=tls_path)
    except ValueError as exc:
        raise ChannelEstablishmentError(f"invalid swap server address: {exc}") from exc

    credentials = build_channel_credentials(config)
    try:
        if credentials is None:
            logger.warning(
                "Connecting to swap server %s without transport security",
                address,
            )
            channel = grpc.aio.insecure_channel(
                address, interceptors=list(interceptors or [])
            )
        else:
            logger.debug(
                "Connecting to swap server %s using %s",
                address,
                config.transport_mode.value,
            )
            channel = grpc.aio.secure_channel(
                address, credentials, interceptors=list(interceptors or [])
            )
    except Exception as exc:
        raise ChannelEstablishmentError(
            f"unable to connect to RPC server {address}: {exc}"
        ) from exc
    return channel

"""Shared pytest fixtures for swap server client tests."""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from swapclient.infrastructure.swap_server.swap_server_client import SwapServerClient
from tests.fixtures import FakeSwapServer, generate_compressed_key


@pytest.fixture
def compressed_key() -> bytes:
    """A valid 33-byte compressed secp256k1 public key."""
    return generate_compressed_key()


@pytest.fixture
def self_signed_cert_path(tmp_path: Path) -> Path:
    """Write a self-signed PEM certificate for localhost and return its path."""
    private_key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "localhost")])
    now = dt.datetime.now(dt.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - dt.timedelta(days=1))
        .not_valid_after(now + dt.timedelta(days=30))
        .sign(private_key, hashes.SHA256())
    )
    path = tmp_path / "tls.cert"
    path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    return path


@pytest_asyncio.fixture
async def fake_server() -> AsyncGenerator[FakeSwapServer, None]:
    """Start an in-process fake swap server on a random local port."""
    server = FakeSwapServer()
    await server.start()
    yield server
    await server.stop()


@pytest_asyncio.fixture
async def swap_client(
    fake_server: FakeSwapServer,
) -> AsyncGenerator[SwapServerClient, None]:
    """Plaintext client pointed at ``fake_server`` with a static credential."""
    client = SwapServerClient(
        fake_server.address,
        insecure=True,
        credential_provider=lambda method: {"authorization": "LSAT macaroon:preimage"},
        call_timeout=5.0,
    )
    yield client
    await client.close()

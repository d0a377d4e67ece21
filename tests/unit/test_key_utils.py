"""Unit tests for secp256k1 compressed key parsing."""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from swapclient.crypto.key_utils import parse_public_key


class TestParsePublicKey:
    """Test parse_public_key."""

    @pytest.mark.parametrize("_", range(10))
    def test_accepts_generated_keys(self, _: int) -> None:
        """Every freshly generated secp256k1 key round-trips through parsing."""
        public_key = ec.generate_private_key(ec.SECP256K1()).public_key()
        data = public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.CompressedPoint,
        )

        assert len(data) == 33
        assert data[0] in (0x02, 0x03)
        parsed = parse_public_key(data)
        assert parsed.public_numbers() == public_key.public_numbers()

    def test_rejects_all_zero_key(self) -> None:
        with pytest.raises(ValueError):
            parse_public_key(bytes(33))

    def test_rejects_bad_prefix(self, compressed_key: bytes) -> None:
        for prefix in (0x00, 0x04, 0x05, 0xFF):
            with pytest.raises(ValueError, match="prefix"):
                parse_public_key(bytes([prefix]) + compressed_key[1:])

    def test_rejects_x_coordinate_outside_field(self) -> None:
        """x >= p is never a valid curve point."""
        for prefix in (b"\x02", b"\x03"):
            with pytest.raises(ValueError):
                parse_public_key(prefix + b"\xff" * 32)

    @pytest.mark.parametrize("length", [0, 1, 32, 34, 65])
    def test_rejects_wrong_length(self, compressed_key: bytes, length: int) -> None:
        data = (compressed_key * 2)[:length]
        with pytest.raises(ValueError, match="33 bytes"):
            parse_public_key(data)

    def test_rejects_uncompressed_encoding(self) -> None:
        """A valid point in 65-byte uncompressed form is still rejected."""
        public_key = ec.generate_private_key(ec.SECP256K1()).public_key()
        uncompressed = public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint,
        )
        with pytest.raises(ValueError):
            parse_public_key(uncompressed)

from __future__ import annotations

from cryptography.hazmat.primitives.asymmetric import ec

COMPRESSED_PUBKEY_SIZE = 33
_COMPRESSED_PREFIXES = (0x02, 0x03)


def parse_public_key(data: bytes) -> ec.EllipticCurvePublicKey:
    """Load a SEC1 compressed secp256k1 public key.

    Raises:
        ValueError: If ``data`` is not a 33-byte compressed encoding of a
            point on the secp256k1 curve.
    """
    if len(data) != COMPRESSED_PUBKEY_SIZE:
        raise ValueError(
            f"compressed public key must be {COMPRESSED_PUBKEY_SIZE} bytes, "
            f"got {len(data)}"
        )
    if data[0] not in _COMPRESSED_PREFIXES:
        raise ValueError(f"invalid compressed public key prefix 0x{data[0]:02x}")
    return ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), bytes(data))


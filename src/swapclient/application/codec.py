"""Translation between swap server wire messages and domain values.

Every decoder here treats the server as untrusted: malformed encodings raise
``DecodeError`` and keys that must be curve points are verified before the
value is handed back to the caller.
"""

from __future__ import annotations

import base64
import binascii
import logging
from datetime import datetime, timezone

from ..crypto.key_utils import parse_public_key
from ..domain.entities import (
    CompressedPubKey,
    LoopInQuote,
    LoopInTerms,
    LoopOutQuote,
    LoopOutTerms,
    NewLoopInResponse,
    NewLoopOutResponse,
)
from ..domain.errors import (
    DecodeError,
    InvalidPaymentDestinationError,
    InvalidServerKeyError,
)
from .dtos import (
    ServerLoopInQuoteResponse,
    ServerLoopInResponse,
    ServerLoopInTermsResponse,
    ServerLoopOutQuoteResponse,
    ServerLoopOutResponse,
    ServerLoopOutTermsResponse,
)

logger = logging.getLogger(__name__)


def encode_bytes(value: bytes) -> str:
    """Encode a ``bytes`` field for the wire (base64)."""
    return base64.b64encode(value).decode("ascii")


def decode_bytes(value: str, field: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"{field} is not valid base64") from exc


def to_unix_timestamp(value: datetime) -> int:
    """Unix seconds for ``value``; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


def decode_payment_dest(value: str) -> CompressedPubKey:
    """Decode the hex payment destination of a Loop Out quote.

    Only the length is checked; quotes are non-binding so the key is not
    required to be a curve point.
    """
    try:
        dest = binascii.unhexlify(value)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("swap payment destination is not valid hex") from exc
    if len(dest) != CompressedPubKey.SIZE:
        raise InvalidPaymentDestinationError(
            f"invalid payment dest: expected {CompressedPubKey.SIZE} bytes, "
            f"got {len(dest)}"
        )
    return CompressedPubKey(dest)


def decode_server_key(value: str, field: str) -> CompressedPubKey:
    """Decode a server-supplied key and require a valid secp256k1 point."""
    raw = decode_bytes(value, field)
    try:
        parse_public_key(raw)
    except ValueError as exc:
        logger.warning("Rejecting server %s %s: %s", field, raw.hex(), exc)
        raise InvalidServerKeyError(f"invalid {field}: {exc}") from exc
    return CompressedPubKey(raw)


def decode_loop_out_terms(resp: ServerLoopOutTermsResponse) -> LoopOutTerms:
    return LoopOutTerms(
        min_swap_amount=resp.min_swap_amount,
        max_swap_amount=resp.max_swap_amount,
    )


def decode_loop_in_terms(resp: ServerLoopInTermsResponse) -> LoopInTerms:
    return LoopInTerms(
        min_swap_amount=resp.min_swap_amount,
        max_swap_amount=resp.max_swap_amount,
    )


def decode_loop_out_quote(resp: ServerLoopOutQuoteResponse) -> LoopOutQuote:
    return LoopOutQuote(
        prepay_amount=resp.prepay_amt,
        swap_fee=resp.swap_fee,
        cltv_delta=resp.cltv_delta,
        swap_payment_dest=decode_payment_dest(resp.swap_payment_dest),
    )


def decode_loop_in_quote(resp: ServerLoopInQuoteResponse) -> LoopInQuote:
    return LoopInQuote(swap_fee=resp.swap_fee, cltv_delta=resp.cltv_delta)


def decode_new_loop_out_response(resp: ServerLoopOutResponse) -> NewLoopOutResponse:
    return NewLoopOutResponse(
        swap_invoice=resp.swap_invoice,
        prepay_invoice=resp.prepay_invoice,
        sender_key=decode_server_key(resp.sender_key, "sender key"),
        expiry=resp.expiry,
    )


def decode_new_loop_in_response(resp: ServerLoopInResponse) -> NewLoopInResponse:
    return NewLoopInResponse(
        receiver_key=decode_server_key(resp.receiver_key, "receiver key"),
        expiry=resp.expiry,
    )

"""Wire messages exchanged with the swap server.

Field names follow the proto3 JSON mapping of the ``looprpc.SwapServer``
service: camelCase on the wire, ``bytes`` fields carried as base64 strings.
Proto3 omits zero values, so every response field has a zero default.

The bodies are proto3 JSON, not the binary protobuf encoding. A server that
only speaks binary protobuf cannot read them; to talk to one, replace
``WireMessage.to_wire`` and ``WireMessage.from_wire`` with the generated
message serializers.
"""

from __future__ import annotations

from typing import Type, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_DTO = TypeVar("_DTO", bound="WireMessage")


class WireMessage(BaseModel):
    """Base for every request/response message."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")

    @classmethod
    def from_wire(cls: Type[_DTO], data: bytes) -> _DTO:
        return cls.model_validate_json(data)


# Loop Out
class ServerLoopOutTermsRequest(WireMessage):
    pass


class ServerLoopOutTermsResponse(WireMessage):
    min_swap_amount: int = 0
    max_swap_amount: int = 0


class ServerLoopOutQuoteRequest(WireMessage):
    amt: int
    swap_publication_deadline: int


class ServerLoopOutQuoteResponse(WireMessage):
    """Quote; ``swap_payment_dest`` is a hex-encoded compressed public key."""

    swap_payment_dest: str = ""
    swap_fee: int = 0
    prepay_amt: int = 0
    cltv_delta: int = 0


class ServerLoopOutRequest(WireMessage):
    receiver_key: str
    swap_hash: str
    amt: int
    swap_publication_deadline: int


class ServerLoopOutResponse(WireMessage):
    swap_invoice: str = ""
    prepay_invoice: str = ""
    sender_key: str = ""
    expiry: int = 0


# Loop In
class ServerLoopInTermsRequest(WireMessage):
    pass


class ServerLoopInTermsResponse(WireMessage):
    min_swap_amount: int = 0
    max_swap_amount: int = 0


class ServerLoopInQuoteRequest(WireMessage):
    amt: int


class ServerLoopInQuoteResponse(WireMessage):
    swap_fee: int = 0
    cltv_delta: int = 0


class ServerLoopInRequest(WireMessage):
    sender_key: str
    swap_hash: str
    amt: int
    swap_invoice: str


class ServerLoopInResponse(WireMessage):
    receiver_key: str = ""
    expiry: int = 0

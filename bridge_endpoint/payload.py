"""Wire codec for inbound transfer payloads."""

from dataclasses import dataclass

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError

from asset_adapter.unit_id import encode_unit_id
from bridge_core.config import PayloadFormat
from bridge_core.errors import MalformedPayloadError
from bridge_core.models import MESSAGE_ID_LENGTH, AssetKind, TransferInfo

PAYLOAD_VERSION = 1

_GENERIC_TYPES = ["address", "uint256", "bytes32", "bytes"]
_EXPLICIT_ID_TYPES = _GENERIC_TYPES + ["uint256", "uint256"]


@dataclass(frozen=True)
class InboundMessage:
    receiver: str
    amount: int
    message_id: bytes
    extra_data: bytes = b""
    single_id: int = 0
    multi_id: int = 0


def encode_payload(message: InboundMessage, payload_format: PayloadFormat) -> bytes:
    _require_message_id(message.message_id)
    generic = [message.receiver, message.amount, message.message_id, message.extra_data]
    try:
        if payload_format == PayloadFormat.GENERIC:
            return encode(_GENERIC_TYPES, generic)
        body = encode(_EXPLICIT_ID_TYPES, generic + [message.single_id, message.multi_id])
    except EncodingError as exc:
        raise MalformedPayloadError(f"Cannot encode inbound message: {exc}") from exc

    if payload_format == PayloadFormat.EXPLICIT_IDS:
        return body
    return bytes([PAYLOAD_VERSION]) + body


def decode_payload(payload: bytes, payload_format: PayloadFormat) -> InboundMessage:
    payload = bytes(payload)
    if payload_format == PayloadFormat.VERSIONED:
        if not payload:
            raise MalformedPayloadError("Payload is empty.")
        if payload[0] != PAYLOAD_VERSION:
            raise MalformedPayloadError(
                f"Unsupported payload version {payload[0]}; expected {PAYLOAD_VERSION}."
            )
        payload = payload[1:]

    types = _GENERIC_TYPES if payload_format == PayloadFormat.GENERIC else _EXPLICIT_ID_TYPES
    try:
        values = decode(types, payload)
    except DecodingError as exc:
        raise MalformedPayloadError(
            f"Payload does not decode as {payload_format.value}: {exc}"
        ) from exc

    if payload_format == PayloadFormat.GENERIC:
        receiver, amount, message_id, extra_data = values
        return InboundMessage(receiver, amount, message_id, extra_data)
    receiver, amount, message_id, extra_data, single_id, multi_id = values
    return InboundMessage(receiver, amount, message_id, extra_data, single_id, multi_id)


def transfer_info_for(
    message: InboundMessage, asset_kind: AssetKind, payload_format: PayloadFormat
) -> TransferInfo:
    """Build the adapter-facing transfer; typed ids take precedence over raw extra data."""

    extra_data = message.extra_data
    if payload_format != PayloadFormat.GENERIC:
        if asset_kind == AssetKind.NON_FUNGIBLE_SINGLE:
            extra_data = encode_unit_id(message.single_id)
        elif asset_kind == AssetKind.NON_FUNGIBLE_MULTI:
            extra_data = encode_unit_id(message.multi_id)
    return TransferInfo(receiver=message.receiver, amount=message.amount, extra_data=extra_data)


def _require_message_id(message_id: bytes) -> None:
    if len(message_id) != MESSAGE_ID_LENGTH:
        raise MalformedPayloadError(
            f"message_id must be {MESSAGE_ID_LENGTH} bytes, got {len(message_id)}."
        )

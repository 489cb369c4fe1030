"""Encoding of non-fungible unit identifiers carried in ``extra_data``."""

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError

from bridge_core.errors import MalformedExtraDataError

UNIT_ID_LENGTH = 32


def encode_unit_id(token_id: int) -> bytes:
    try:
        return encode(["uint256"], [token_id])
    except EncodingError as exc:
        raise MalformedExtraDataError(f"Unit id {token_id!r} is not a uint256.") from exc


def decode_unit_id(extra_data: bytes) -> int:
    if not extra_data:
        raise MalformedExtraDataError("extra_data must carry a unit id.")
    if len(extra_data) != UNIT_ID_LENGTH:
        raise MalformedExtraDataError(
            f"extra_data must be {UNIT_ID_LENGTH} bytes, got {len(extra_data)}."
        )
    try:
        (token_id,) = decode(["uint256"], bytes(extra_data))
    except DecodingError as exc:
        raise MalformedExtraDataError("extra_data is not an ABI-encoded uint256.") from exc
    return token_id

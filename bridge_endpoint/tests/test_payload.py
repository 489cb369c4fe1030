"""Inbound payload wire format tests."""

import unittest

from eth_abi import encode

from asset_adapter.unit_id import encode_unit_id
from bridge_core.config import PayloadFormat
from bridge_core.errors import MalformedPayloadError
from bridge_core.models import AssetKind, TransferInfo
from bridge_endpoint.payload import (
    PAYLOAD_VERSION,
    InboundMessage,
    decode_payload,
    encode_payload,
    transfer_info_for,
)

RECEIVER = "0x" + "4" * 40
MESSAGE_ID = b"\x01" * 32


class PayloadCodecTests(unittest.TestCase):
    def test_generic_layout_matches_abi_tuple(self) -> None:
        message = InboundMessage(RECEIVER, 500, MESSAGE_ID, b"\xaa\xbb")

        payload = encode_payload(message, PayloadFormat.GENERIC)

        self.assertEqual(
            payload,
            encode(["address", "uint256", "bytes32", "bytes"], [RECEIVER, 500, MESSAGE_ID, b"\xaa\xbb"]),
        )
        self.assertEqual(decode_payload(payload, PayloadFormat.GENERIC), message)

    def test_versioned_payload_prefixes_explicit_ids(self) -> None:
        message = InboundMessage(RECEIVER, 1, MESSAGE_ID, b"", single_id=7, multi_id=0)

        versioned = encode_payload(message, PayloadFormat.VERSIONED)
        explicit = encode_payload(message, PayloadFormat.EXPLICIT_IDS)

        self.assertEqual(versioned[0], PAYLOAD_VERSION)
        self.assertEqual(versioned[1:], explicit)
        self.assertEqual(decode_payload(versioned, PayloadFormat.VERSIONED), message)

    def test_formats_are_not_interchangeable(self) -> None:
        message = InboundMessage(RECEIVER, 1, MESSAGE_ID)
        explicit = encode_payload(message, PayloadFormat.EXPLICIT_IDS)

        with self.assertRaises(MalformedPayloadError):
            decode_payload(explicit, PayloadFormat.VERSIONED)
        with self.assertRaises(MalformedPayloadError):
            decode_payload(encode_payload(message, PayloadFormat.GENERIC)[:64], PayloadFormat.GENERIC)

    def test_unknown_version_and_empty_payload_rejected(self) -> None:
        message = InboundMessage(RECEIVER, 1, MESSAGE_ID)
        payload = bytes([PAYLOAD_VERSION + 1]) + encode_payload(message, PayloadFormat.EXPLICIT_IDS)

        with self.assertRaises(MalformedPayloadError):
            decode_payload(payload, PayloadFormat.VERSIONED)
        with self.assertRaises(MalformedPayloadError):
            decode_payload(b"", PayloadFormat.VERSIONED)

    def test_message_id_must_be_32_bytes(self) -> None:
        with self.assertRaises(MalformedPayloadError):
            encode_payload(InboundMessage(RECEIVER, 1, b"\x01" * 31), PayloadFormat.GENERIC)


class TransferInfoMappingTests(unittest.TestCase):
    def test_typed_ids_become_unit_extra_data(self) -> None:
        message = InboundMessage(RECEIVER, 3, MESSAGE_ID, b"ignored", single_id=7, multi_id=9)

        single = transfer_info_for(message, AssetKind.NON_FUNGIBLE_SINGLE, PayloadFormat.VERSIONED)
        multi = transfer_info_for(message, AssetKind.NON_FUNGIBLE_MULTI, PayloadFormat.EXPLICIT_IDS)

        self.assertEqual(single.extra_data, encode_unit_id(7))
        self.assertEqual(multi.extra_data, encode_unit_id(9))

    def test_generic_format_passes_extra_data_through(self) -> None:
        message = InboundMessage(RECEIVER, 3, MESSAGE_ID, encode_unit_id(5))

        info = transfer_info_for(message, AssetKind.NON_FUNGIBLE_SINGLE, PayloadFormat.GENERIC)

        self.assertEqual(info, TransferInfo(RECEIVER, 3, encode_unit_id(5)))

    def test_fungible_keeps_extra_data(self) -> None:
        message = InboundMessage(RECEIVER, 3, MESSAGE_ID, b"\x01")

        info = transfer_info_for(message, AssetKind.FUNGIBLE, PayloadFormat.VERSIONED)

        self.assertEqual(info.extra_data, b"\x01")


if __name__ == "__main__":
    unittest.main()

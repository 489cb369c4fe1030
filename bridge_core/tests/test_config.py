"""Configuration loading and value validation tests."""

import io
import json
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from loguru import logger

from bridge_core.config import EndpointConfig, PayloadFormat, RateLimitPolicy, load_config
from bridge_core.errors import ConfigurationError, InvalidAmountError
from bridge_core.logs import configure_logging
from bridge_core.models import MAX_UINT256, AssetKind, make_event, require_amount

ENDPOINT = "0x" + "1" * 40


class EndpointConfigTests(unittest.TestCase):
    def test_defaults_to_versioned_payload(self) -> None:
        config = EndpointConfig(address=ENDPOINT, asset_kind=AssetKind.FUNGIBLE)

        self.assertEqual(config.payload_format, PayloadFormat.VERSIONED)
        self.assertTrue(config.verify_asset_kind)

    def test_dict_round_trip(self) -> None:
        config = EndpointConfig(
            address=ENDPOINT,
            asset_kind=AssetKind.NON_FUNGIBLE_MULTI,
            payload_format=PayloadFormat.GENERIC,
            verify_asset_kind=False,
        )

        self.assertEqual(EndpointConfig.from_dict(config.to_dict()), config)

    def test_invalid_values_fail_loudly(self) -> None:
        invalid_cases = [
            {"address": "not-an-address", "asset_kind": "FUNGIBLE"},
            {"address": ENDPOINT, "asset_kind": "BOND"},
            {"address": ENDPOINT, "asset_kind": "FUNGIBLE", "payload_format": "CSV"},
            {"asset_kind": "FUNGIBLE"},
        ]

        for case in invalid_cases:
            with self.subTest(case=case):
                with self.assertRaises(ConfigurationError):
                    EndpointConfig.from_dict(case)

    def test_load_config_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tempdir:
            path = Path(tempdir) / "endpoint.json"
            path.write_text(
                json.dumps(
                    {
                        "address": ENDPOINT,
                        "asset_kind": "NATIVE",
                        "payload_format": "EXPLICIT_IDS",
                    }
                )
            )

            config = load_config(path)

        self.assertEqual(config.asset_kind, AssetKind.NATIVE)
        self.assertEqual(config.payload_format, PayloadFormat.EXPLICIT_IDS)

    def test_load_config_rejects_non_json(self) -> None:
        with tempfile.TemporaryDirectory() as tempdir:
            path = Path(tempdir) / "endpoint.json"
            path.write_text("address = 0x1")
            with self.assertRaises(ConfigurationError):
                load_config(path)


class RateLimitPolicyTests(unittest.TestCase):
    def test_rejects_negative_capacity_and_empty_window(self) -> None:
        with self.assertRaises(ConfigurationError):
            RateLimitPolicy(capacity=-1)
        with self.assertRaises(ConfigurationError):
            RateLimitPolicy(capacity=10, window_seconds=0)


class ValueHelperTests(unittest.TestCase):
    def test_require_amount_bounds(self) -> None:
        self.assertEqual(require_amount(0), 0)
        self.assertEqual(require_amount(MAX_UINT256), MAX_UINT256)
        for bad in (-1, MAX_UINT256 + 1, 1.5, True, "10"):
            with self.subTest(amount=bad):
                with self.assertRaises(InvalidAmountError):
                    require_amount(bad)

    def test_event_fields_are_ordered(self) -> None:
        first = make_event("tokens_minted", receiver="r", amount=5)
        second = make_event("tokens_minted", amount=5, receiver="r")

        self.assertEqual(first, second)
        self.assertEqual(first.to_dict(), {"name": "tokens_minted", "amount": 5, "receiver": "r"})


class LoggingSetupTests(unittest.TestCase):
    def tearDown(self) -> None:
        logger.remove()
        logger.add(sys.stderr)

    def test_lines_carry_service_name_and_respect_level(self) -> None:
        buffer = io.StringIO()
        with mock.patch("sys.stderr", buffer):
            configure_logging("usdc-vault", level="INFO")
        logger.debug("hidden")
        logger.info("bridged")

        output = buffer.getvalue()
        self.assertIn("usdc-vault", output)
        self.assertIn("bridged", output)
        self.assertNotIn("hidden", output)


if __name__ == "__main__":
    unittest.main()

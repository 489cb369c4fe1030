"""Asset kind probing and declared-kind consistency checks."""

import unittest

from loguru import logger

from asset_adapter.resolver import check_declared_kind, resolve
from asset_adapter.tokens import (
    InMemoryFungibleToken,
    InMemoryNativeCurrency,
    InMemoryNonFungibleMultiToken,
    InMemoryNonFungibleSingleToken,
)
from bridge_core.errors import UnsupportedAssetKindError
from bridge_core.models import NATIVE_TOKEN_ADDRESS, AssetKind

TOKEN = "0x" + "3" * 40


class _Opaque:
    address = TOKEN


class _BrokenProbe:
    address = TOKEN

    def supports_interface(self, interface_id: bytes) -> bool:
        raise RuntimeError("reverted")

    def total_supply(self) -> int:
        return 0


class ResolverTests(unittest.TestCase):
    def test_probes_each_kind(self) -> None:
        cases = [
            (InMemoryNativeCurrency(), AssetKind.NATIVE),
            (NATIVE_TOKEN_ADDRESS.lower(), AssetKind.NATIVE),
            (InMemoryFungibleToken(TOKEN), AssetKind.FUNGIBLE),
            (InMemoryNonFungibleSingleToken(TOKEN), AssetKind.NON_FUNGIBLE_SINGLE),
            (InMemoryNonFungibleMultiToken(TOKEN), AssetKind.NON_FUNGIBLE_MULTI),
        ]

        for token, expected in cases:
            with self.subTest(expected=expected):
                self.assertEqual(resolve(token), expected)

    def test_failing_probe_falls_back_to_next_capability(self) -> None:
        self.assertEqual(resolve(_BrokenProbe()), AssetKind.FUNGIBLE)

    def test_unknown_handle_is_unsupported(self) -> None:
        with self.assertRaises(UnsupportedAssetKindError):
            resolve(_Opaque())


class DeclaredKindTests(unittest.TestCase):
    def setUp(self) -> None:
        self.messages = []
        sink_id = logger.add(self.messages.append, level="WARNING")
        self.addCleanup(logger.remove, sink_id)

    def test_declared_kind_wins_and_mismatch_is_logged(self) -> None:
        token = InMemoryFungibleToken(TOKEN)

        kind = check_declared_kind(token, AssetKind.NON_FUNGIBLE_MULTI)

        self.assertEqual(kind, AssetKind.NON_FUNGIBLE_MULTI)
        self.assertEqual(len(self.messages), 1)
        self.assertIn("declared NON_FUNGIBLE_MULTI", str(self.messages[0]))

    def test_matching_kind_is_silent(self) -> None:
        check_declared_kind(InMemoryNonFungibleSingleToken(TOKEN), AssetKind.NON_FUNGIBLE_SINGLE)

        self.assertEqual(self.messages, [])

    def test_unprobeable_handle_keeps_declared_kind(self) -> None:
        kind = check_declared_kind(_Opaque(), AssetKind.FUNGIBLE)

        self.assertEqual(kind, AssetKind.FUNGIBLE)
        self.assertEqual(len(self.messages), 1)


if __name__ == "__main__":
    unittest.main()

"""Invariant tests for supply, pool and binding ledgers."""

import unittest

from bridge_core.errors import InvalidPoolIdError, LedgerUnderflowError
from bridge_ledger.ledger import (
    CirculatingSupply,
    ConnectorPoolBinding,
    LedgerState,
    PoolLedger,
)

CONNECTOR_A = "0x" + "a1" * 20
CONNECTOR_B = "0x" + "b2" * 20


class CirculatingSupplyTests(unittest.TestCase):
    def test_increase_and_decrease(self) -> None:
        supply = CirculatingSupply(100)
        supply.increase(50)
        supply.decrease(120)

        self.assertEqual(supply.total_minted, 30)

    def test_underflow_never_clamps(self) -> None:
        supply = CirculatingSupply(10)

        with self.assertRaises(LedgerUnderflowError):
            supply.decrease(11)
        self.assertEqual(supply.total_minted, 10)


class PoolLedgerTests(unittest.TestCase):
    def test_pools_are_independent(self) -> None:
        pools = PoolLedger({7: 1000})
        pools.credit(9, 40)
        pools.debit(7, 300)

        self.assertEqual(pools.locked_amount(7), 700)
        self.assertEqual(pools.locked_amount(9), 40)
        self.assertEqual(pools.locked_amount(11), 0)
        self.assertEqual(pools.pools(), (7, 9))

    def test_debit_underflow_leaves_pool_unchanged(self) -> None:
        pools = PoolLedger({7: 100})

        with self.assertRaises(LedgerUnderflowError):
            pools.debit(7, 101)
        self.assertEqual(pools.locked_amount(7), 100)

    def test_zero_pool_id_rejected(self) -> None:
        pools = PoolLedger()
        with self.assertRaises(InvalidPoolIdError):
            pools.credit(0, 1)
        with self.assertRaises(InvalidPoolIdError):
            pools.debit(0, 0)
        with self.assertRaises(InvalidPoolIdError):
            PoolLedger({0: 5})


class ConnectorPoolBindingTests(unittest.TestCase):
    def test_unbound_connector_resolves_to_zero(self) -> None:
        bindings = ConnectorPoolBinding({CONNECTOR_A: 7})

        self.assertEqual(bindings.pool_id_of(CONNECTOR_A), 7)
        self.assertEqual(bindings.pool_id_of(CONNECTOR_B), 0)
        with self.assertRaises(InvalidPoolIdError):
            bindings.require_pool_id(CONNECTOR_B)

    def test_connectors_may_share_a_pool(self) -> None:
        bindings = ConnectorPoolBinding()
        bindings.update((CONNECTOR_A, CONNECTOR_B), (7, 7))

        self.assertEqual(bindings.items(), ((CONNECTOR_A, 7), (CONNECTOR_B, 7)))

    def test_batch_with_zero_entry_changes_nothing(self) -> None:
        bindings = ConnectorPoolBinding({CONNECTOR_A: 7})

        with self.assertRaises(InvalidPoolIdError):
            bindings.update((CONNECTOR_A, CONNECTOR_B), (9, 0))

        self.assertEqual(bindings.pool_id_of(CONNECTOR_A), 7)
        self.assertEqual(bindings.pool_id_of(CONNECTOR_B), 0)

    def test_batch_length_mismatch(self) -> None:
        with self.assertRaises(ValueError):
            ConnectorPoolBinding().update((CONNECTOR_A,), (1, 2))


class LedgerStateTests(unittest.TestCase):
    def test_restore_returns_every_component(self) -> None:
        state = LedgerState(
            supply=CirculatingSupply(500),
            pools=PoolLedger({7: 500}),
            bindings=ConnectorPoolBinding({CONNECTOR_A: 7}),
        )
        before = state.view()
        snapshot = state.snapshot()

        state.supply.decrease(100)
        state.pools.debit(7, 100)
        state.bindings.update((CONNECTOR_B,), (9,))
        self.assertNotEqual(state.view(), before)

        state.restore(snapshot)
        self.assertEqual(state.view(), before)


if __name__ == "__main__":
    unittest.main()

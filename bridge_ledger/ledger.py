"""Running totals owned by bridge endpoints."""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

from loguru import logger

from bridge_core.errors import InvalidAmountError, InvalidPoolIdError, LedgerUnderflowError
from bridge_core.models import MAX_UINT256, require_amount

UNCONFIGURED_POOL_ID = 0


def _require_pool_id(pool_id: int) -> None:
    if pool_id == UNCONFIGURED_POOL_ID:
        raise InvalidPoolIdError("Pool id 0 is not a configured pool.")


class CirculatingSupply:
    """Representative units in circulation; increases on mint, decreases on burn."""

    def __init__(self, total_minted: int = 0) -> None:
        require_amount(total_minted)
        self._total_minted = total_minted

    @property
    def total_minted(self) -> int:
        return self._total_minted

    def increase(self, amount: int) -> None:
        require_amount(amount)
        if self._total_minted + amount > MAX_UINT256:
            raise InvalidAmountError("Circulating supply would overflow.")
        self._total_minted += amount

    def decrease(self, amount: int) -> None:
        require_amount(amount)
        if amount > self._total_minted:
            raise LedgerUnderflowError(
                f"Cannot burn {amount}; only {self._total_minted} in circulation."
            )
        self._total_minted -= amount

    def snapshot(self) -> int:
        return self._total_minted

    def restore(self, snapshot: int) -> None:
        self._total_minted = snapshot


class PoolLedger:
    """Locked amount owed to each liquidity pool."""

    def __init__(self, locked: Optional[Dict[int, int]] = None) -> None:
        self._locked: Dict[int, int] = {}
        for pool_id, amount in (locked or {}).items():
            _require_pool_id(pool_id)
            require_amount(amount)
            self._locked[pool_id] = amount

    def locked_amount(self, pool_id: int) -> int:
        return self._locked.get(pool_id, 0)

    def credit(self, pool_id: int, amount: int) -> None:
        _require_pool_id(pool_id)
        require_amount(amount)
        updated = self.locked_amount(pool_id) + amount
        if updated > MAX_UINT256:
            raise InvalidAmountError(f"Pool {pool_id} locked amount would overflow.")
        self._locked[pool_id] = updated
        logger.debug(f"Pool {pool_id} credited {amount}; locked now {updated}")

    def debit(self, pool_id: int, amount: int) -> None:
        _require_pool_id(pool_id)
        require_amount(amount)
        current = self.locked_amount(pool_id)
        if amount > current:
            raise LedgerUnderflowError(
                f"Cannot debit {amount} from pool {pool_id}; only {current} locked."
            )
        self._locked[pool_id] = current - amount
        logger.debug(f"Pool {pool_id} debited {amount}; locked now {current - amount}")

    def pools(self) -> Tuple[int, ...]:
        return tuple(sorted(self._locked))

    def snapshot(self) -> Dict[int, int]:
        return dict(self._locked)

    def restore(self, snapshot: Dict[int, int]) -> None:
        self._locked = dict(snapshot)


class ConnectorPoolBinding:
    """Many-to-one mapping from connector address to pool id."""

    def __init__(self, bindings: Optional[Dict[str, int]] = None) -> None:
        self._bindings: Dict[str, int] = {}
        if bindings:
            self.update(tuple(bindings.keys()), tuple(bindings.values()))

    def pool_id_of(self, connector: str) -> int:
        return self._bindings.get(connector, UNCONFIGURED_POOL_ID)

    def require_pool_id(self, connector: str) -> int:
        pool_id = self.pool_id_of(connector)
        if pool_id == UNCONFIGURED_POOL_ID:
            raise InvalidPoolIdError(f"Connector {connector} is not bound to a pool.")
        return pool_id

    def update(self, connectors: Sequence[str], pool_ids: Sequence[int]) -> None:
        """Apply the whole batch or nothing."""

        if len(connectors) != len(pool_ids):
            raise ValueError("connectors and pool_ids must have the same length.")
        for connector, pool_id in zip(connectors, pool_ids):
            if isinstance(pool_id, bool) or not isinstance(pool_id, int) or pool_id < 0:
                raise InvalidPoolIdError(f"Invalid pool id {pool_id!r} for connector {connector}.")
            if pool_id == UNCONFIGURED_POOL_ID:
                raise InvalidPoolIdError(f"Pool id 0 rejected for connector {connector}.")
        self._bindings.update(zip(connectors, pool_ids))

    def items(self) -> Iterable[Tuple[str, int]]:
        return tuple(sorted(self._bindings.items()))

    def snapshot(self) -> Dict[str, int]:
        return dict(self._bindings)

    def restore(self, snapshot: Dict[str, int]) -> None:
        self._bindings = dict(snapshot)


@dataclass(frozen=True)
class LedgerSnapshot:
    total_minted: int
    locked: Tuple[Tuple[int, int], ...]
    bindings: Tuple[Tuple[str, int], ...]


class LedgerState:
    """State store passed by reference into every endpoint operation."""

    def __init__(
        self,
        supply: Optional[CirculatingSupply] = None,
        pools: Optional[PoolLedger] = None,
        bindings: Optional[ConnectorPoolBinding] = None,
    ) -> None:
        self.supply = supply or CirculatingSupply()
        self.pools = pools or PoolLedger()
        self.bindings = bindings or ConnectorPoolBinding()

    def view(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            total_minted=self.supply.total_minted,
            locked=tuple(sorted(self.pools.snapshot().items())),
            bindings=tuple(self.bindings.items()),
        )

    def snapshot(self) -> Tuple[int, Dict[int, int], Dict[str, int]]:
        return (
            self.supply.snapshot(),
            self.pools.snapshot(),
            self.bindings.snapshot(),
        )

    def restore(self, snapshot: Tuple[int, Dict[int, int], Dict[str, int]]) -> None:
        supply, pools, bindings = snapshot
        self.supply.restore(supply)
        self.pools.restore(pools)
        self.bindings.restore(bindings)

"""Controller variant that tracks liabilities per liquidity pool."""

from typing import Dict, Iterable, Optional, Sequence

from loguru import logger

from asset_adapter.interfaces import MintableAssetContract
from bridge_core.config import EndpointConfig
from bridge_core.models import PendingHookResult, TransferInfo
from bridge_ledger.ledger import ConnectorPoolBinding, LedgerState

from .connector import Connector
from .endpoint import ControllerEndpoint
from .hooks import Hook


class PooledControllerEndpoint(ControllerEndpoint):
    """Controller whose connectors settle into shared pools.

    Each connector is bound to a pool id. Bridging out debits the pool and
    burns; receiving credits the pool with the full hook-adjusted amount
    (including any part the hook deferred) and mints what is honored now.
    A retry only mints the deferred part: its pool credit was applied when the
    message first arrived.
    """

    def __init__(
        self,
        config: EndpointConfig,
        token: MintableAssetContract,
        hook: Optional[Hook] = None,
        connectors: Iterable[Connector] = (),
        state: Optional[LedgerState] = None,
        pool_bindings: Optional[Dict[str, int]] = None,
    ) -> None:
        super().__init__(config, token, hook=hook, connectors=connectors, state=state)
        if pool_bindings:
            self._state.bindings.update(tuple(pool_bindings), tuple(pool_bindings.values()))

    @property
    def bindings(self) -> ConnectorPoolBinding:
        return self._state.bindings

    def pool_id_of(self, connector: str) -> int:
        return self._state.bindings.pool_id_of(connector)

    def locked_amount(self, pool_id: int) -> int:
        return self._state.pools.locked_amount(pool_id)

    def update_connector_pool_id(self, connectors: Sequence[str], pool_ids: Sequence[int]) -> None:
        with self._transaction("update_connector_pool_id"):
            self._state.bindings.update(connectors, pool_ids)
            for connector, pool_id in zip(connectors, pool_ids):
                self._record("pool_id_updated", connector=connector, pool_id=pool_id)
        logger.info(f"Rebound {len(connectors)} connector(s) to pools")

    def _before_operation(self, connector: str) -> None:
        self._state.bindings.require_pool_id(connector)

    def _outbound(self, connector: str, sender: str, transfer_info: TransferInfo) -> None:
        if transfer_info.amount:
            pool_id = self._state.bindings.require_pool_id(connector)
            self._state.pools.debit(pool_id, transfer_info.amount)
        super()._outbound(connector, sender, transfer_info)

    def _inbound(self, connector: str, result: PendingHookResult) -> None:
        owed = result.transfer_info.amount + result.deferred_amount
        if owed:
            pool_id = self._state.bindings.require_pool_id(connector)
            self._state.pools.credit(pool_id, owed)
        self._complete(result.transfer_info)

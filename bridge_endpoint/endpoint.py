"""Bridge endpoints: orchestrate hooks, adapters, ledger and connectors per call."""

from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from loguru import logger

from asset_adapter.controller import MintBurnAdapter, mint_burn_adapter_for
from asset_adapter.interfaces import AssetContract, MintableAssetContract
from asset_adapter.resolver import check_declared_kind
from asset_adapter.vault import CustodyAdapter, custody_adapter_for
from bridge_core.config import EndpointConfig
from bridge_core.errors import BridgeError, InvalidConnectorError
from bridge_core.models import (
    AssetKind,
    BridgeEvent,
    PendingHookResult,
    TransferInfo,
    make_event,
    require_amount,
)
from bridge_ledger.ledger import LedgerState

from .connector import Connector
from .guard import ReentrancyGuard
from .hooks import Hook, PassThroughHook
from .payload import decode_payload, transfer_info_for


class BridgeEndpoint:
    """Shared call shape of vault and controller endpoints.

    ``bridge``, ``receive_inbound`` and ``retry`` each run under the reentrancy
    guard and inside a transaction: endpoint state and every collaborator that
    offers ``snapshot``/``restore`` are rolled back if the call raises.
    """

    def __init__(
        self,
        config: EndpointConfig,
        token: AssetContract,
        hook: Optional[Hook] = None,
        connectors: Iterable[Connector] = (),
        state: Optional[LedgerState] = None,
    ) -> None:
        if config.verify_asset_kind:
            check_declared_kind(token, config.asset_kind)
        self._config = config
        self._token = token
        self._hook: Hook = hook or PassThroughHook()
        self._state = state or LedgerState()
        self._connectors: Dict[str, Connector] = {}
        self._enabled: Dict[str, bool] = {}
        for connector in connectors:
            self._connectors[connector.address] = connector
            self._enabled[connector.address] = True
        self._events: List[BridgeEvent] = []
        self._guard = ReentrancyGuard()

    @property
    def address(self) -> str:
        return self._config.address

    @property
    def asset_kind(self) -> AssetKind:
        return self._config.asset_kind

    @property
    def config(self) -> EndpointConfig:
        return self._config

    @property
    def hook(self) -> Hook:
        return self._hook

    @property
    def state(self) -> LedgerState:
        return self._state

    @property
    def events(self) -> Tuple[BridgeEvent, ...]:
        return tuple(self._events)

    def is_connector_enabled(self, connector: str) -> bool:
        return self._enabled.get(connector, False)

    def bridge(
        self,
        sender: str,
        receiver: str,
        amount: int,
        gas_limit: int,
        connector: str,
        extra_data: bytes = b"",
        options: bytes = b"",
    ) -> TransferInfo:
        with self._guard.hold("bridge"), self._transaction("bridge"):
            target = self._require_connector(connector)
            require_amount(amount)
            self._before_operation(connector)

            transfer_info = TransferInfo(receiver=receiver, amount=amount, extra_data=extra_data)
            transfer_info = self._hook.pre_bridge(connector, sender, transfer_info)
            require_amount(transfer_info.amount)
            self._outbound(connector, sender, transfer_info)
            transfer_info = self._hook.post_bridge(connector, transfer_info)

            self._record(
                "bridging_tokens",
                connector=connector,
                sender=sender,
                receiver=transfer_info.receiver,
                amount=transfer_info.amount,
            )
            target.dispatch(gas_limit, options, transfer_info)
            logger.info(
                f"Bridged {transfer_info.amount} from {sender} to {transfer_info.receiver} "
                f"via {connector}"
            )
            return transfer_info

    def receive_inbound(
        self, connector: str, sibling_chain_id: int, payload: bytes
    ) -> PendingHookResult:
        with self._guard.hold("receive_inbound"), self._transaction("receive_inbound"):
            self._require_connector(connector)
            self._before_operation(connector)

            message = decode_payload(payload, self._config.payload_format)
            transfer_info = transfer_info_for(
                message, self._config.asset_kind, self._config.payload_format
            )
            result = self._hook.pre_mint(connector, message.message_id, transfer_info)
            require_amount(result.transfer_info.amount)
            require_amount(result.deferred_amount)
            self._inbound(connector, result)
            self._hook.post_mint(
                connector, message.message_id, result.transfer_info, result.hook_data
            )

            self._record(
                self._inbound_event,
                connector=connector,
                sibling_chain_id=sibling_chain_id,
                receiver=result.transfer_info.receiver,
                amount=result.transfer_info.amount,
                message_id=message.message_id,
            )
            logger.info(
                f"Inbound 0x{message.message_id.hex()} from chain {sibling_chain_id} via "
                f"{connector}: {result.transfer_info.amount} to {result.transfer_info.receiver}"
            )
            return result

    def retry(self, connector: str, message_id: bytes) -> TransferInfo:
        with self._guard.hold("retry"), self._transaction("retry"):
            self._require_connector(connector)
            self._before_operation(connector)

            result = self._hook.pre_retry(connector, message_id)
            require_amount(result.transfer_info.amount)
            self._complete(result.transfer_info)
            self._hook.post_retry(connector, message_id, result.transfer_info, result.hook_data)

            self._record(
                "retry_completed",
                connector=connector,
                receiver=result.transfer_info.receiver,
                amount=result.transfer_info.amount,
                message_id=message_id,
                remaining=result.deferred_amount,
            )
            logger.info(
                f"Retry of 0x{message_id.hex()} via {connector} completed "
                f"{result.transfer_info.amount} to {result.transfer_info.receiver}"
            )
            return result.transfer_info

    def update_hook(self, hook: Hook, approve: bool = False) -> None:
        with self._transaction("update_hook"):
            self._hook = hook
            if approve:
                self._adapter.approve_operator(hook.address)
            self._record("hook_updated", hook=hook.address, approved=approve)
            logger.info(f"Hook updated to {hook.address} (approved={approve})")

    def update_connector_status(
        self, connectors: Sequence[Connector], statuses: Sequence[bool]
    ) -> None:
        if len(connectors) != len(statuses):
            raise ValueError("connectors and statuses must have the same length.")
        for connector in connectors:
            if not getattr(connector, "address", ""):
                raise InvalidConnectorError("Connector must expose an address.")

        with self._transaction("update_connector_status"):
            for connector, status in zip(connectors, statuses):
                self._connectors[connector.address] = connector
                self._enabled[connector.address] = bool(status)
                self._record(
                    "connector_status_updated", connector=connector.address, status=bool(status)
                )
        logger.info(f"Updated status of {len(connectors)} connector(s)")

    # Subclass extension points.

    _inbound_event = "tokens_minted"

    @property
    def _adapter(self):
        raise NotImplementedError

    def _before_operation(self, connector: str) -> None:
        return None

    def _outbound(self, connector: str, sender: str, transfer_info: TransferInfo) -> None:
        raise NotImplementedError

    def _inbound(self, connector: str, result: PendingHookResult) -> None:
        self._complete(result.transfer_info)

    def _complete(self, transfer_info: TransferInfo) -> None:
        raise NotImplementedError

    # Internals.

    def _require_connector(self, connector: str) -> Connector:
        if not self._enabled.get(connector, False):
            raise InvalidConnectorError(f"Connector {connector} is not enabled on this endpoint.")
        return self._connectors[connector]

    def _record(self, name: str, **fields: object) -> None:
        event = make_event(name, **fields)
        self._events.append(event)
        logger.debug(f"Event {name}: {event.to_dict()}")

    def _participants(self) -> List[object]:
        candidates = [self._token, self._hook] + list(self._connectors.values())
        seen = set()
        participants = []
        for candidate in candidates:
            if id(candidate) in seen:
                continue
            seen.add(id(candidate))
            if callable(getattr(candidate, "snapshot", None)) and callable(
                getattr(candidate, "restore", None)
            ):
                participants.append(candidate)
        return participants

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[None]:
        state_snapshot = self._state.snapshot()
        events_snapshot = list(self._events)
        hook = self._hook
        participants = [(item, item.snapshot()) for item in self._participants()]
        try:
            yield
        except BridgeError as exc:
            self._rollback(state_snapshot, events_snapshot, hook, participants)
            logger.warning(f"{operation} aborted: {type(exc).__name__}: {exc}")
            raise
        except Exception as exc:
            self._rollback(state_snapshot, events_snapshot, hook, participants)
            logger.error(f"{operation} failed in a collaborator: {type(exc).__name__}: {exc}")
            raise

    def _rollback(self, state_snapshot, events_snapshot, hook, participants) -> None:
        self._state.restore(state_snapshot)
        self._events = events_snapshot
        self._hook = hook
        for item, snapshot in participants:
            item.restore(snapshot)


class VaultEndpoint(BridgeEndpoint):
    """Escrows real assets: custody is taken on bridge and released on inbound."""

    _inbound_event = "tokens_released"

    def __init__(
        self,
        config: EndpointConfig,
        token: AssetContract,
        hook: Optional[Hook] = None,
        connectors: Iterable[Connector] = (),
        state: Optional[LedgerState] = None,
    ) -> None:
        super().__init__(config, token, hook=hook, connectors=connectors, state=state)
        self._custody = custody_adapter_for(config.asset_kind, token, config.address)

    @property
    def _adapter(self) -> CustodyAdapter:
        return self._custody

    def _outbound(self, connector: str, sender: str, transfer_info: TransferInfo) -> None:
        self._custody.take_custody(sender, transfer_info.amount, transfer_info.extra_data)

    def _complete(self, transfer_info: TransferInfo) -> None:
        self._custody.release_custody(
            transfer_info.receiver, transfer_info.amount, transfer_info.extra_data
        )


class ControllerEndpoint(BridgeEndpoint):
    """Manages a representative asset: burned on bridge, minted on inbound."""

    def __init__(
        self,
        config: EndpointConfig,
        token: MintableAssetContract,
        hook: Optional[Hook] = None,
        connectors: Iterable[Connector] = (),
        state: Optional[LedgerState] = None,
    ) -> None:
        super().__init__(config, token, hook=hook, connectors=connectors, state=state)
        self._mint_burn = mint_burn_adapter_for(
            config.asset_kind, token, config.address, self._state.supply
        )

    @property
    def _adapter(self) -> MintBurnAdapter:
        return self._mint_burn

    @property
    def total_minted(self) -> int:
        return self._state.supply.total_minted

    def _outbound(self, connector: str, sender: str, transfer_info: TransferInfo) -> None:
        self._mint_burn.burn_from(sender, transfer_info.amount, transfer_info.extra_data)

    def _complete(self, transfer_info: TransferInfo) -> None:
        self._mint_burn.mint_to(
            transfer_info.receiver, transfer_info.amount, transfer_info.extra_data
        )

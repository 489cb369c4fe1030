"""Connector interface toward the message layer."""

from dataclasses import dataclass
from typing import List, Protocol, Tuple

from bridge_core.models import TransferInfo


class Connector(Protocol):
    address: str

    def dispatch(self, gas_limit: int, options: bytes, transfer_info: TransferInfo) -> None:
        ...


@dataclass(frozen=True)
class DispatchedMessage:
    gas_limit: int
    options: bytes
    transfer_info: TransferInfo


class RecordingConnector:
    """Keeps outbound messages in memory instead of handing them to a message layer."""

    def __init__(self, address: str) -> None:
        self.address = address
        self._dispatched: List[DispatchedMessage] = []

    @property
    def dispatched(self) -> Tuple[DispatchedMessage, ...]:
        return tuple(self._dispatched)

    def dispatch(self, gas_limit: int, options: bytes, transfer_info: TransferInfo) -> None:
        self._dispatched.append(
            DispatchedMessage(gas_limit=gas_limit, options=options, transfer_info=transfer_info)
        )

    def snapshot(self) -> Tuple[DispatchedMessage, ...]:
        return tuple(self._dispatched)

    def restore(self, snapshot: Tuple[DispatchedMessage, ...]) -> None:
        self._dispatched = list(snapshot)

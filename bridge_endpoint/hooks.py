"""Lifecycle hook interface and the pass-through default."""

from typing import Protocol

from bridge_core.errors import UnknownOrCompletedMessageError
from bridge_core.models import PendingHookResult, TransferInfo

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class Hook(Protocol):
    """Policy applied around every bridge, inbound and retry operation."""

    address: str

    def pre_bridge(self, connector: str, sender: str, transfer_info: TransferInfo) -> TransferInfo:
        ...

    def post_bridge(self, connector: str, transfer_info: TransferInfo) -> TransferInfo:
        ...

    def pre_mint(
        self, connector: str, message_id: bytes, transfer_info: TransferInfo
    ) -> PendingHookResult:
        ...

    def post_mint(
        self,
        connector: str,
        message_id: bytes,
        transfer_info: TransferInfo,
        hook_data: bytes,
    ) -> None:
        ...

    def pre_retry(self, connector: str, message_id: bytes) -> PendingHookResult:
        ...

    def post_retry(
        self,
        connector: str,
        message_id: bytes,
        transfer_info: TransferInfo,
        hook_data: bytes,
    ) -> None:
        ...


class PassThroughHook:
    """Applies no policy; nothing is ever deferred, so retry has nothing to complete."""

    def __init__(self, address: str = ZERO_ADDRESS) -> None:
        self.address = address

    def pre_bridge(self, connector: str, sender: str, transfer_info: TransferInfo) -> TransferInfo:
        return transfer_info

    def post_bridge(self, connector: str, transfer_info: TransferInfo) -> TransferInfo:
        return transfer_info

    def pre_mint(
        self, connector: str, message_id: bytes, transfer_info: TransferInfo
    ) -> PendingHookResult:
        return PendingHookResult(transfer_info=transfer_info)

    def post_mint(
        self,
        connector: str,
        message_id: bytes,
        transfer_info: TransferInfo,
        hook_data: bytes,
    ) -> None:
        return None

    def pre_retry(self, connector: str, message_id: bytes) -> PendingHookResult:
        raise UnknownOrCompletedMessageError(
            f"No pending transfer for message 0x{message_id.hex()} on {connector}."
        )

    def post_retry(
        self,
        connector: str,
        message_id: bytes,
        transfer_info: TransferInfo,
        hook_data: bytes,
    ) -> None:
        return None

"""Value objects shared by the bridge accounting layers."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from .errors import InvalidAmountError

MAX_UINT256 = 2**256 - 1

NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

MESSAGE_ID_LENGTH = 32


class AssetKind(Enum):
    NATIVE = "NATIVE"
    FUNGIBLE = "FUNGIBLE"
    NON_FUNGIBLE_SINGLE = "NON_FUNGIBLE_SINGLE"
    NON_FUNGIBLE_MULTI = "NON_FUNGIBLE_MULTI"

    @property
    def is_non_fungible(self) -> bool:
        return self in (AssetKind.NON_FUNGIBLE_SINGLE, AssetKind.NON_FUNGIBLE_MULTI)


@dataclass(frozen=True)
class TransferInfo:
    """One transfer as it flows through hooks and adapters."""

    receiver: str
    amount: int
    extra_data: bytes = b""


@dataclass(frozen=True)
class PendingHookResult:
    """Hook output: the transfer to act on now plus opaque data for the post hook.

    ``deferred_amount`` is the part of an inbound transfer the hook declined to
    honor immediately; it is completed later through ``retry``.
    """

    transfer_info: TransferInfo
    hook_data: bytes = b""
    deferred_amount: int = 0


@dataclass(frozen=True)
class BridgeEvent:
    name: str
    fields: Tuple[Tuple[str, object], ...]

    def to_dict(self) -> Dict[str, object]:
        return {"name": self.name, **dict(self.fields)}


def make_event(name: str, **fields: object) -> BridgeEvent:
    return BridgeEvent(name=name, fields=tuple(sorted(fields.items())))


def require_amount(amount: int) -> int:
    """Return ``amount`` if it is a valid unsigned 256-bit integer."""

    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError("Amount must be an integer.")
    if amount < 0 or amount > MAX_UINT256:
        raise InvalidAmountError(f"Amount out of range: {amount}")
    return amount

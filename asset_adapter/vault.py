"""Custody adapters: move real assets into and out of a vault."""

from typing import Dict, Type

from loguru import logger

from bridge_core.errors import InvalidAmountError, UnsupportedAssetKindError
from bridge_core.models import MAX_UINT256, AssetKind

from .interfaces import (
    AssetContract,
    FungibleToken,
    NativeCurrency,
    NonFungibleMultiToken,
    NonFungibleSingleToken,
)
from .unit_id import decode_unit_id


class CustodyAdapter:
    """Takes and releases custody of one asset on behalf of ``custodian``."""

    kind: AssetKind

    def __init__(self, token: AssetContract, custodian: str) -> None:
        self._token = token
        self._custodian = custodian

    @property
    def token(self) -> AssetContract:
        return self._token

    def take_custody(self, sender: str, amount: int, extra_data: bytes) -> None:
        if amount == 0:
            return
        self._take(sender, amount, extra_data)
        logger.debug(f"Custody of {amount} {self.kind.value} taken from {sender}")

    def release_custody(self, receiver: str, amount: int, extra_data: bytes) -> None:
        if amount == 0:
            return
        self._release(receiver, amount, extra_data)
        logger.debug(f"Custody of {amount} {self.kind.value} released to {receiver}")

    def approve_operator(self, operator: str) -> None:
        """Allow ``operator`` to move assets held by the custodian."""
        raise UnsupportedAssetKindError(
            f"{self.kind.value} custody has no operator approvals to grant."
        )

    def _take(self, sender: str, amount: int, extra_data: bytes) -> None:
        raise NotImplementedError

    def _release(self, receiver: str, amount: int, extra_data: bytes) -> None:
        raise NotImplementedError


class NativeCustody(CustodyAdapter):
    kind = AssetKind.NATIVE
    _token: NativeCurrency

    def _take(self, sender: str, amount: int, extra_data: bytes) -> None:
        # Value arrives attached to the call; the amount is informational.
        return None

    def _release(self, receiver: str, amount: int, extra_data: bytes) -> None:
        self._token.send(self._custodian, receiver, amount)


class FungibleCustody(CustodyAdapter):
    kind = AssetKind.FUNGIBLE
    _token: FungibleToken

    def _take(self, sender: str, amount: int, extra_data: bytes) -> None:
        self._token.transfer_from(self._custodian, sender, self._custodian, amount)

    def _release(self, receiver: str, amount: int, extra_data: bytes) -> None:
        self._token.transfer(self._custodian, receiver, amount)

    def approve_operator(self, operator: str) -> None:
        self._token.approve(self._custodian, operator, MAX_UINT256)


class NonFungibleSingleCustody(CustodyAdapter):
    kind = AssetKind.NON_FUNGIBLE_SINGLE
    _token: NonFungibleSingleToken

    def _take(self, sender: str, amount: int, extra_data: bytes) -> None:
        token_id = decode_unit_id(extra_data)
        _require_single_unit(amount)
        self._token.transfer_from(self._custodian, sender, self._custodian, token_id)

    def _release(self, receiver: str, amount: int, extra_data: bytes) -> None:
        token_id = decode_unit_id(extra_data)
        _require_single_unit(amount)
        self._token.transfer_from(self._custodian, self._custodian, receiver, token_id)

    def approve_operator(self, operator: str) -> None:
        self._token.set_approval_for_all(self._custodian, operator, True)


class NonFungibleMultiCustody(CustodyAdapter):
    kind = AssetKind.NON_FUNGIBLE_MULTI
    _token: NonFungibleMultiToken

    def _take(self, sender: str, amount: int, extra_data: bytes) -> None:
        token_id = decode_unit_id(extra_data)
        self._token.safe_transfer_from(
            self._custodian, sender, self._custodian, token_id, amount, b""
        )

    def _release(self, receiver: str, amount: int, extra_data: bytes) -> None:
        token_id = decode_unit_id(extra_data)
        self._token.safe_transfer_from(
            self._custodian, self._custodian, receiver, token_id, amount, b""
        )

    def approve_operator(self, operator: str) -> None:
        self._token.set_approval_for_all(self._custodian, operator, True)


_CUSTODY_ADAPTERS: Dict[AssetKind, Type[CustodyAdapter]] = {
    AssetKind.NATIVE: NativeCustody,
    AssetKind.FUNGIBLE: FungibleCustody,
    AssetKind.NON_FUNGIBLE_SINGLE: NonFungibleSingleCustody,
    AssetKind.NON_FUNGIBLE_MULTI: NonFungibleMultiCustody,
}


def custody_adapter_for(
    kind: AssetKind, token: AssetContract, custodian: str
) -> CustodyAdapter:
    adapter_class = _CUSTODY_ADAPTERS.get(kind)
    if adapter_class is None:
        raise UnsupportedAssetKindError(f"No custody adapter for asset kind {kind!r}.")
    return adapter_class(token, custodian)


def _require_single_unit(amount: int) -> None:
    if amount != 1:
        raise InvalidAmountError(f"Single-unit assets move one unit at a time, got {amount}.")

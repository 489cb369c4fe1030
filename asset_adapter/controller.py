"""Mint/burn adapters for the representative asset managed by a controller."""

from typing import Dict, Tuple, Type

from loguru import logger

from bridge_core.errors import InvalidAmountError, UnsupportedAssetKindError
from bridge_core.models import MAX_UINT256, AssetKind
from bridge_ledger.ledger import CirculatingSupply

from .interfaces import (
    MintableAssetContract,
    MintableFungibleToken,
    MintableNonFungibleMultiToken,
    MintableNonFungibleSingleToken,
)
from .unit_id import decode_unit_id


class MintBurnAdapter:
    """Mints and burns the representative asset while tracking circulating supply.

    Supply is adjusted before the asset contract is called, so an underflow
    aborts the call before any burn reaches the contract.
    """

    kind: AssetKind
    required_capabilities: Tuple[str, ...] = ("mint", "burn")

    def __init__(
        self, token: MintableAssetContract, controller: str, supply: CirculatingSupply
    ) -> None:
        missing = [
            name for name in self.required_capabilities
            if not callable(getattr(token, name, None))
        ]
        if missing:
            raise UnsupportedAssetKindError(
                f"Representative asset for {self.kind.value} lacks: {', '.join(missing)}."
            )
        self._token = token
        self._controller = controller
        self._supply = supply

    @property
    def token(self) -> MintableAssetContract:
        return self._token

    @property
    def supply(self) -> CirculatingSupply:
        return self._supply

    def burn_from(self, user: str, amount: int, extra_data: bytes) -> None:
        if amount == 0:
            return
        self._burn(user, amount, extra_data)
        logger.debug(
            f"Burned {amount} {self.kind.value} from {user}; "
            f"total minted {self._supply.total_minted}"
        )

    def mint_to(self, user: str, amount: int, extra_data: bytes) -> None:
        if amount == 0:
            return
        self._mint(user, amount, extra_data)
        logger.debug(
            f"Minted {amount} {self.kind.value} to {user}; "
            f"total minted {self._supply.total_minted}"
        )

    def approve_operator(self, operator: str) -> None:
        """Allow ``operator`` to move representative units held by the controller."""
        raise NotImplementedError

    def _burn(self, user: str, amount: int, extra_data: bytes) -> None:
        raise NotImplementedError

    def _mint(self, user: str, amount: int, extra_data: bytes) -> None:
        raise NotImplementedError


class FungibleMintBurn(MintBurnAdapter):
    kind = AssetKind.FUNGIBLE
    _token: MintableFungibleToken

    def _burn(self, user: str, amount: int, extra_data: bytes) -> None:
        self._supply.decrease(amount)
        self._token.burn(user, amount)

    def _mint(self, user: str, amount: int, extra_data: bytes) -> None:
        self._supply.increase(amount)
        self._token.mint(user, amount)

    def approve_operator(self, operator: str) -> None:
        self._token.approve(self._controller, operator, MAX_UINT256)


class NonFungibleSingleMintBurn(MintBurnAdapter):
    kind = AssetKind.NON_FUNGIBLE_SINGLE
    _token: MintableNonFungibleSingleToken
    required_capabilities = ("mint", "burn", "transfer_from", "set_approval_for_all")

    def _burn(self, user: str, amount: int, extra_data: bytes) -> None:
        token_id = decode_unit_id(extra_data)
        _require_single_unit(amount)
        self._supply.decrease(amount)
        # Ownership moves into controller custody first so only the owner's unit burns.
        self._token.transfer_from(self._controller, user, self._controller, token_id)
        self._token.burn(token_id)

    def _mint(self, user: str, amount: int, extra_data: bytes) -> None:
        token_id = decode_unit_id(extra_data)
        _require_single_unit(amount)
        self._supply.increase(amount)
        self._token.mint(user, token_id)

    def approve_operator(self, operator: str) -> None:
        self._token.set_approval_for_all(self._controller, operator, True)


class NonFungibleMultiMintBurn(MintBurnAdapter):
    kind = AssetKind.NON_FUNGIBLE_MULTI
    _token: MintableNonFungibleMultiToken
    required_capabilities = ("mint", "burn", "set_approval_for_all")

    def _burn(self, user: str, amount: int, extra_data: bytes) -> None:
        token_id = decode_unit_id(extra_data)
        self._supply.decrease(amount)
        self._token.burn(user, token_id, amount)

    def _mint(self, user: str, amount: int, extra_data: bytes) -> None:
        token_id = decode_unit_id(extra_data)
        self._supply.increase(amount)
        self._token.mint(user, token_id, amount, b"")

    def approve_operator(self, operator: str) -> None:
        self._token.set_approval_for_all(self._controller, operator, True)


_MINT_BURN_ADAPTERS: Dict[AssetKind, Type[MintBurnAdapter]] = {
    AssetKind.FUNGIBLE: FungibleMintBurn,
    AssetKind.NON_FUNGIBLE_SINGLE: NonFungibleSingleMintBurn,
    AssetKind.NON_FUNGIBLE_MULTI: NonFungibleMultiMintBurn,
}


def mint_burn_adapter_for(
    kind: AssetKind, token: MintableAssetContract, controller: str, supply: CirculatingSupply
) -> MintBurnAdapter:
    adapter_class = _MINT_BURN_ADAPTERS.get(kind)
    if adapter_class is None:
        raise UnsupportedAssetKindError(f"No mint/burn adapter for asset kind {kind!r}.")
    return adapter_class(token, controller, supply)


def _require_single_unit(amount: int) -> None:
    if amount != 1:
        raise InvalidAmountError(f"Single-unit assets move one unit at a time, got {amount}.")

"""Capabilities the adapters consume from asset contracts."""

from typing import Protocol, Union, runtime_checkable

ERC721_INTERFACE_ID = bytes.fromhex("80ac58cd")
ERC1155_INTERFACE_ID = bytes.fromhex("d9b67a26")


@runtime_checkable
class NativeCurrency(Protocol):
    address: str

    def balance_of(self, account: str) -> int:
        ...

    def send(self, sender: str, receiver: str, amount: int) -> None:
        ...


@runtime_checkable
class FungibleToken(Protocol):
    address: str

    def total_supply(self) -> int:
        ...

    def balance_of(self, account: str) -> int:
        ...

    def transfer(self, sender: str, receiver: str, amount: int) -> None:
        ...

    def transfer_from(self, spender: str, owner: str, receiver: str, amount: int) -> None:
        ...

    def approve(self, owner: str, spender: str, amount: int) -> None:
        ...


@runtime_checkable
class NonFungibleSingleToken(Protocol):
    address: str

    def supports_interface(self, interface_id: bytes) -> bool:
        ...

    def owner_of(self, token_id: int) -> str:
        ...

    def transfer_from(self, operator: str, owner: str, receiver: str, token_id: int) -> None:
        ...

    def set_approval_for_all(self, owner: str, operator: str, approved: bool) -> None:
        ...


@runtime_checkable
class NonFungibleMultiToken(Protocol):
    address: str

    def supports_interface(self, interface_id: bytes) -> bool:
        ...

    def balance_of(self, account: str, token_id: int) -> int:
        ...

    def safe_transfer_from(
        self,
        operator: str,
        owner: str,
        receiver: str,
        token_id: int,
        amount: int,
        data: bytes,
    ) -> None:
        ...

    def set_approval_for_all(self, owner: str, operator: str, approved: bool) -> None:
        ...


@runtime_checkable
class MintableFungibleToken(FungibleToken, Protocol):
    def mint(self, receiver: str, amount: int) -> None:
        ...

    def burn(self, owner: str, amount: int) -> None:
        ...


@runtime_checkable
class MintableNonFungibleSingleToken(NonFungibleSingleToken, Protocol):
    def mint(self, receiver: str, token_id: int) -> None:
        ...

    def burn(self, token_id: int) -> None:
        ...


@runtime_checkable
class MintableNonFungibleMultiToken(NonFungibleMultiToken, Protocol):
    def mint(self, receiver: str, token_id: int, amount: int, data: bytes) -> None:
        ...

    def burn(self, owner: str, token_id: int, amount: int) -> None:
        ...


AssetContract = Union[NativeCurrency, FungibleToken, NonFungibleSingleToken, NonFungibleMultiToken]
MintableAssetContract = Union[
    MintableFungibleToken, MintableNonFungibleSingleToken, MintableNonFungibleMultiToken
]

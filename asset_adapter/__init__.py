from .controller import (
    FungibleMintBurn,
    MintBurnAdapter,
    NonFungibleMultiMintBurn,
    NonFungibleSingleMintBurn,
    mint_burn_adapter_for,
)
from .interfaces import (
    ERC721_INTERFACE_ID,
    ERC1155_INTERFACE_ID,
    AssetContract,
    FungibleToken,
    MintableAssetContract,
    MintableFungibleToken,
    MintableNonFungibleMultiToken,
    MintableNonFungibleSingleToken,
    NativeCurrency,
    NonFungibleMultiToken,
    NonFungibleSingleToken,
)
from .resolver import check_declared_kind, resolve
from .tokens import (
    InMemoryFungibleToken,
    InMemoryNativeCurrency,
    InMemoryNonFungibleMultiToken,
    InMemoryNonFungibleSingleToken,
    TokenOperationError,
)
from .unit_id import decode_unit_id, encode_unit_id
from .vault import (
    CustodyAdapter,
    FungibleCustody,
    NativeCustody,
    NonFungibleMultiCustody,
    NonFungibleSingleCustody,
    custody_adapter_for,
)

__all__ = [
    "AssetContract",
    "CustodyAdapter",
    "ERC1155_INTERFACE_ID",
    "ERC721_INTERFACE_ID",
    "FungibleCustody",
    "FungibleMintBurn",
    "FungibleToken",
    "InMemoryFungibleToken",
    "InMemoryNativeCurrency",
    "InMemoryNonFungibleMultiToken",
    "InMemoryNonFungibleSingleToken",
    "MintBurnAdapter",
    "MintableAssetContract",
    "MintableFungibleToken",
    "MintableNonFungibleMultiToken",
    "MintableNonFungibleSingleToken",
    "NativeCurrency",
    "NativeCustody",
    "NonFungibleMultiCustody",
    "NonFungibleMultiMintBurn",
    "NonFungibleMultiToken",
    "NonFungibleSingleCustody",
    "NonFungibleSingleMintBurn",
    "NonFungibleSingleToken",
    "TokenOperationError",
    "check_declared_kind",
    "custody_adapter_for",
    "decode_unit_id",
    "encode_unit_id",
    "mint_burn_adapter_for",
    "resolve",
]

"""Classify asset handles into the supported asset kinds."""

from loguru import logger

from bridge_core.errors import UnsupportedAssetKindError
from bridge_core.models import NATIVE_TOKEN_ADDRESS, AssetKind

from .interfaces import ERC721_INTERFACE_ID, ERC1155_INTERFACE_ID


def handle_address(token: object) -> str:
    if isinstance(token, str):
        return token
    return str(getattr(token, "address", ""))


def resolve(token: object) -> AssetKind:
    """Probe the handle's capabilities and return the kind they suggest.

    Probing is heuristic: any object exposing a matching method is accepted.
    Endpoints treat the declared kind as authoritative and use this only as a
    consistency check (see ``check_declared_kind``).
    """

    if handle_address(token).lower() == NATIVE_TOKEN_ADDRESS.lower():
        return AssetKind.NATIVE
    if _supports_interface(token, ERC1155_INTERFACE_ID):
        return AssetKind.NON_FUNGIBLE_MULTI
    if _supports_interface(token, ERC721_INTERFACE_ID):
        return AssetKind.NON_FUNGIBLE_SINGLE
    if _has_total_supply(token):
        return AssetKind.FUNGIBLE
    raise UnsupportedAssetKindError(
        f"Asset {handle_address(token) or token!r} matches no supported kind."
    )


def check_declared_kind(token: object, declared: AssetKind) -> AssetKind:
    """Return ``declared``, warning when probing disagrees with it."""

    try:
        probed = resolve(token)
    except UnsupportedAssetKindError as exc:
        logger.warning(f"Asset kind probe failed, keeping declared {declared.value}: {exc}")
        return declared

    if probed != declared:
        logger.warning(
            f"Asset {handle_address(token)} probes as {probed.value} "
            f"but is declared {declared.value}; using the declared kind"
        )
    return declared


def _supports_interface(token: object, interface_id: bytes) -> bool:
    probe = getattr(token, "supports_interface", None)
    if not callable(probe):
        return False
    try:
        return bool(probe(interface_id))
    except Exception as exc:
        logger.debug(f"supports_interface({interface_id.hex()}) probe raised: {exc}")
        return False


def _has_total_supply(token: object) -> bool:
    probe = getattr(token, "total_supply", None)
    if not callable(probe):
        return False
    try:
        probe()
    except Exception as exc:
        logger.debug(f"total_supply probe raised: {exc}")
        return False
    return True

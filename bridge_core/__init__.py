from .config import EndpointConfig, PayloadFormat, RateLimitPolicy, load_config
from .errors import (
    BridgeError,
    ConfigurationError,
    InvalidAmountError,
    InvalidConnectorError,
    InvalidPoolIdError,
    LedgerUnderflowError,
    MalformedExtraDataError,
    MalformedPayloadError,
    RateLimitExceededError,
    ReentrancyDetectedError,
    UnknownOrCompletedMessageError,
    UnsupportedAssetKindError,
)
from .logs import configure_logging
from .models import (
    MAX_UINT256,
    MESSAGE_ID_LENGTH,
    NATIVE_TOKEN_ADDRESS,
    AssetKind,
    BridgeEvent,
    PendingHookResult,
    TransferInfo,
    make_event,
    require_amount,
)

__all__ = [
    "AssetKind",
    "BridgeError",
    "BridgeEvent",
    "ConfigurationError",
    "EndpointConfig",
    "InvalidAmountError",
    "InvalidConnectorError",
    "InvalidPoolIdError",
    "LedgerUnderflowError",
    "MAX_UINT256",
    "MESSAGE_ID_LENGTH",
    "MalformedExtraDataError",
    "MalformedPayloadError",
    "NATIVE_TOKEN_ADDRESS",
    "PayloadFormat",
    "PendingHookResult",
    "RateLimitExceededError",
    "RateLimitPolicy",
    "ReentrancyDetectedError",
    "TransferInfo",
    "UnknownOrCompletedMessageError",
    "UnsupportedAssetKindError",
    "configure_logging",
    "load_config",
    "make_event",
    "require_amount",
]

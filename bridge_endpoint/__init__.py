from .connector import Connector, DispatchedMessage, RecordingConnector
from .endpoint import BridgeEndpoint, ControllerEndpoint, VaultEndpoint
from .guard import ReentrancyGuard
from .hooks import ZERO_ADDRESS, Hook, PassThroughHook
from .payload import (
    PAYLOAD_VERSION,
    InboundMessage,
    decode_payload,
    encode_payload,
    transfer_info_for,
)
from .pooled import PooledControllerEndpoint
from .rate_limit import PendingTransfer, RateLimitHook

__all__ = [
    "BridgeEndpoint",
    "Connector",
    "ControllerEndpoint",
    "DispatchedMessage",
    "Hook",
    "InboundMessage",
    "PAYLOAD_VERSION",
    "PassThroughHook",
    "PendingTransfer",
    "PooledControllerEndpoint",
    "RateLimitHook",
    "RecordingConnector",
    "ReentrancyGuard",
    "VaultEndpoint",
    "ZERO_ADDRESS",
    "decode_payload",
    "encode_payload",
    "transfer_info_for",
]

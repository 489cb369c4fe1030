"""Error taxonomy for the bridge accounting core."""


class BridgeError(Exception):
    """Base class for every error raised by the bridge core."""


# Configuration errors: fixed administratively, never retried.


class ConfigurationError(BridgeError, ValueError):
    """Raised when endpoint configuration values are invalid."""


class InvalidPoolIdError(BridgeError, ValueError):
    """Raised when a connector has no pool bound or a zero pool id is supplied."""


class UnsupportedAssetKindError(BridgeError, ValueError):
    """Raised when no adapter exists for an asset kind or a token lacks a capability."""


class InvalidConnectorError(BridgeError, ValueError):
    """Raised when a call arrives through an unknown or disabled connector."""


# Malformed input: caller-correctable.


class MalformedExtraDataError(BridgeError, ValueError):
    """Raised when a non-fungible unit identifier cannot be decoded."""


class MalformedPayloadError(BridgeError, ValueError):
    """Raised when an inbound payload does not match the deployment's wire format."""


class InvalidAmountError(BridgeError, ValueError):
    """Raised when an amount is out of range for the asset kind."""


# Invariant violations.


class LedgerUnderflowError(BridgeError, RuntimeError):
    """Raised when a ledger decrement would go below zero."""


# Concurrency.


class ReentrancyDetectedError(BridgeError, RuntimeError):
    """Raised when an endpoint operation is entered while another one is running."""


# Deferred state.


class UnknownOrCompletedMessageError(BridgeError, KeyError):
    """Raised when a retry names a message with nothing pending."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class RateLimitExceededError(BridgeError, RuntimeError):
    """Raised when a retry cannot be honored within the current rate limit."""

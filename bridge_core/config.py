"""Deployment configuration for bridge endpoints."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Union
import json

from eth_utils import is_address, to_checksum_address

from .errors import ConfigurationError
from .models import AssetKind


class PayloadFormat(Enum):
    GENERIC = "GENERIC"
    EXPLICIT_IDS = "EXPLICIT_IDS"
    VERSIONED = "VERSIONED"


@dataclass(frozen=True)
class EndpointConfig:
    """Static settings chosen once per deployed endpoint."""

    address: str
    asset_kind: AssetKind
    payload_format: PayloadFormat = PayloadFormat.VERSIONED
    verify_asset_kind: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.asset_kind, AssetKind):
            raise ConfigurationError("asset_kind must be an AssetKind.")
        if not isinstance(self.payload_format, PayloadFormat):
            raise ConfigurationError("payload_format must be a PayloadFormat.")
        if not is_address(self.address):
            raise ConfigurationError(f"Invalid endpoint address: {self.address}")
        object.__setattr__(self, "address", to_checksum_address(self.address))

    def to_dict(self) -> Dict[str, object]:
        return {
            "address": self.address,
            "asset_kind": self.asset_kind.value,
            "payload_format": self.payload_format.value,
            "verify_asset_kind": self.verify_asset_kind,
        }

    @staticmethod
    def from_dict(data: Dict[str, object]) -> "EndpointConfig":
        try:
            return EndpointConfig(
                address=str(data["address"]),
                asset_kind=AssetKind(data["asset_kind"]),
                payload_format=PayloadFormat(
                    data.get("payload_format", PayloadFormat.VERSIONED.value)
                ),
                verify_asset_kind=bool(data.get("verify_asset_kind", True)),
            )
        except KeyError as exc:
            raise ConfigurationError(f"Missing config field: {exc.args[0]}") from exc
        except ValueError as exc:
            if isinstance(exc, ConfigurationError):
                raise
            raise ConfigurationError(str(exc)) from exc


@dataclass(frozen=True)
class RateLimitPolicy:
    """Capacity of the rate-limiting hook: ``capacity`` units per window."""

    capacity: int
    window_seconds: float = 3600.0

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ConfigurationError("capacity must be non-negative.")
        if self.window_seconds <= 0:
            raise ConfigurationError("window_seconds must be positive.")


def load_config(path: Union[str, Path]) -> EndpointConfig:
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Config file is not valid JSON: {config_path}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError("Config file must contain a JSON object.")
    return EndpointConfig.from_dict(data)

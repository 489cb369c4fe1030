from .ledger import (
    UNCONFIGURED_POOL_ID,
    CirculatingSupply,
    ConnectorPoolBinding,
    LedgerSnapshot,
    LedgerState,
    PoolLedger,
)

__all__ = [
    "CirculatingSupply",
    "ConnectorPoolBinding",
    "LedgerSnapshot",
    "LedgerState",
    "PoolLedger",
    "UNCONFIGURED_POOL_ID",
]

"""Rate-limiting hook that defers inbound value it cannot honor yet."""

import copy
import time
from dataclasses import dataclass, replace
from fractions import Fraction
from typing import Callable, Dict, Optional, Tuple

from eth_abi import decode, encode
from loguru import logger

from bridge_core.config import RateLimitPolicy
from bridge_core.errors import RateLimitExceededError, UnknownOrCompletedMessageError
from bridge_core.models import PendingHookResult, TransferInfo


@dataclass(frozen=True)
class PendingTransfer:
    connector: str
    message_id: bytes
    transfer_info: TransferInfo
    hook_data: bytes


class _Bucket:
    """Capacity that refills linearly to ``policy.capacity`` over one window.

    Refill is computed with exact rationals and only whole units are credited;
    ``last_updated`` advances by the time those units took, so partial
    progress carries over between calls.
    """

    def __init__(self, policy: RateLimitPolicy, now: float) -> None:
        self._policy = policy
        self.level = policy.capacity
        self.last_updated = Fraction(now)

    def available(self, now: float) -> int:
        return self._refill(now)[0]

    def consume(self, amount: int, now: float) -> None:
        level, last_updated = self._refill(now)
        self.level = level - amount
        self.last_updated = last_updated

    def _refill(self, now: float) -> Tuple[int, Fraction]:
        capacity = self._policy.capacity
        now = Fraction(now)
        if self.level >= capacity or now <= self.last_updated:
            return min(self.level, capacity), max(now, self.last_updated)
        window = Fraction(self._policy.window_seconds)
        units = (now - self.last_updated) * capacity // window
        if self.level + units >= capacity:
            return capacity, now
        return self.level + units, self.last_updated + units * window / capacity


class RateLimitHook:
    """Per-connector sending and receiving limits.

    Outbound transfers above the sending limit are rejected. Inbound transfers
    above the receiving limit are honored up to the limit and the remainder is
    recorded as pending. Each ``retry`` releases as much of the pending amount
    as the refilled capacity allows until nothing is left.
    """

    def __init__(
        self,
        address: str,
        sending: RateLimitPolicy,
        receiving: RateLimitPolicy,
        time_provider: Optional[Callable[[], float]] = None,
    ) -> None:
        self.address = address
        self._sending = sending
        self._receiving = receiving
        self._time_provider = time_provider or time.monotonic
        self._sending_buckets: Dict[str, _Bucket] = {}
        self._receiving_buckets: Dict[str, _Bucket] = {}
        self._pending: Dict[Tuple[str, bytes], PendingTransfer] = {}

    def pending(self, connector: str, message_id: bytes) -> Optional[PendingTransfer]:
        return self._pending.get((connector, message_id))

    def sending_available(self, connector: str) -> int:
        return self._bucket(self._sending_buckets, self._sending, connector).available(
            self._time_provider()
        )

    def receiving_available(self, connector: str) -> int:
        return self._bucket(self._receiving_buckets, self._receiving, connector).available(
            self._time_provider()
        )

    def pre_bridge(self, connector: str, sender: str, transfer_info: TransferInfo) -> TransferInfo:
        now = self._time_provider()
        bucket = self._bucket(self._sending_buckets, self._sending, connector)
        available = bucket.available(now)
        if transfer_info.amount > available:
            raise RateLimitExceededError(
                f"Sending {transfer_info.amount} via {connector} exceeds limit {available}."
            )
        bucket.consume(transfer_info.amount, now)
        return transfer_info

    def post_bridge(self, connector: str, transfer_info: TransferInfo) -> TransferInfo:
        return transfer_info

    def pre_mint(
        self, connector: str, message_id: bytes, transfer_info: TransferInfo
    ) -> PendingHookResult:
        key = (connector, message_id)
        if key in self._pending:
            raise ValueError(f"Message 0x{message_id.hex()} is already pending on {connector}.")

        now = self._time_provider()
        bucket = self._bucket(self._receiving_buckets, self._receiving, connector)
        honored = min(transfer_info.amount, bucket.available(now))
        deferred = transfer_info.amount - honored
        bucket.consume(honored, now)

        hook_data = encode(["uint256", "uint256"], [honored, deferred])
        if deferred:
            self._pending[key] = PendingTransfer(
                connector=connector,
                message_id=message_id,
                transfer_info=replace(transfer_info, amount=deferred),
                hook_data=hook_data,
            )
            logger.info(
                f"Deferred {deferred} of message 0x{message_id.hex()} on {connector}; "
                f"honoring {honored} now"
            )
        return PendingHookResult(
            transfer_info=replace(transfer_info, amount=honored),
            hook_data=hook_data,
            deferred_amount=deferred,
        )

    def post_mint(
        self,
        connector: str,
        message_id: bytes,
        transfer_info: TransferInfo,
        hook_data: bytes,
    ) -> None:
        honored, deferred = decode(["uint256", "uint256"], hook_data)
        if honored != transfer_info.amount:
            raise RuntimeError("Inbound amount changed between pre_mint and post_mint.")
        logger.debug(f"Inbound 0x{message_id.hex()}: honored {honored}, pending {deferred}")

    def pre_retry(self, connector: str, message_id: bytes) -> PendingHookResult:
        record = self._pending.get((connector, message_id))
        if record is None:
            raise UnknownOrCompletedMessageError(
                f"No pending transfer for message 0x{message_id.hex()} on {connector}."
            )

        now = self._time_provider()
        bucket = self._bucket(self._receiving_buckets, self._receiving, connector)
        pending = record.transfer_info.amount
        honored = min(pending, bucket.available(now))
        if honored == 0:
            raise RateLimitExceededError(
                f"Retry of 0x{message_id.hex()} via {connector}: no receiving capacity left."
            )
        bucket.consume(honored, now)
        remaining = pending - honored
        return PendingHookResult(
            transfer_info=replace(record.transfer_info, amount=honored),
            hook_data=encode(["uint256", "uint256"], [honored, remaining]),
            deferred_amount=remaining,
        )

    def post_retry(
        self,
        connector: str,
        message_id: bytes,
        transfer_info: TransferInfo,
        hook_data: bytes,
    ) -> None:
        key = (connector, message_id)
        record = self._pending.get(key)
        if record is None:
            return
        honored, remaining = decode(["uint256", "uint256"], hook_data)
        if honored != transfer_info.amount or honored + remaining != record.transfer_info.amount:
            raise RuntimeError("Retry amount changed between pre_retry and post_retry.")
        if remaining == 0:
            del self._pending[key]
            return
        self._pending[key] = replace(
            record,
            transfer_info=replace(record.transfer_info, amount=remaining),
            hook_data=hook_data,
        )
        logger.info(
            f"Retry of 0x{message_id.hex()} on {connector} released {honored}; "
            f"{remaining} still pending"
        )

    def snapshot(self) -> Dict[str, object]:
        return copy.deepcopy(
            {
                "sending": self._sending_buckets,
                "receiving": self._receiving_buckets,
                "pending": self._pending,
            }
        )

    def restore(self, snapshot: Dict[str, object]) -> None:
        state = copy.deepcopy(snapshot)
        self._sending_buckets = state["sending"]
        self._receiving_buckets = state["receiving"]
        self._pending = state["pending"]

    def _bucket(
        self, buckets: Dict[str, _Bucket], policy: RateLimitPolicy, connector: str
    ) -> _Bucket:
        if connector not in buckets:
            buckets[connector] = _Bucket(policy, self._time_provider())
        return buckets[connector]

"""In-memory asset contracts implementing the adapter capabilities.

Every contract keeps its balances in plain dictionaries and exposes
``snapshot``/``restore`` so an endpoint can roll it back together with its own
ledger when a call aborts.
"""

import copy
from typing import Dict, Optional, Set, Tuple

from bridge_core.models import NATIVE_TOKEN_ADDRESS

from .interfaces import ERC721_INTERFACE_ID, ERC1155_INTERFACE_ID


class TokenOperationError(RuntimeError):
    """Raised when an asset contract rejects a transfer, mint or burn."""


class _Journaled:
    def snapshot(self) -> Dict[str, object]:
        return copy.deepcopy(self._state())

    def restore(self, snapshot: Dict[str, object]) -> None:
        for name, value in copy.deepcopy(snapshot).items():
            setattr(self, name, value)

    def _state(self) -> Dict[str, object]:
        raise NotImplementedError


class InMemoryNativeCurrency(_Journaled):
    """Chain-native value, addressed through the native sentinel."""

    def __init__(self, balances: Optional[Dict[str, int]] = None) -> None:
        self.address = NATIVE_TOKEN_ADDRESS
        self._balances: Dict[str, int] = dict(balances or {})
        self._rejecting: Set[str] = set()

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def reject_from(self, receiver: str) -> None:
        """Make every later send to ``receiver`` fail, like a reverting fallback."""

        self._rejecting.add(receiver)

    def send(self, sender: str, receiver: str, amount: int) -> None:
        if receiver in self._rejecting:
            raise TokenOperationError(f"Native transfer to {receiver} rejected.")
        _debit(self._balances, sender, amount)
        self._balances[receiver] = self.balance_of(receiver) + amount

    def _state(self) -> Dict[str, object]:
        return {"_balances": self._balances}


class InMemoryFungibleToken(_Journaled):
    def __init__(self, address: str, balances: Optional[Dict[str, int]] = None) -> None:
        self.address = address
        self._balances: Dict[str, int] = dict(balances or {})
        self._allowances: Dict[Tuple[str, str], int] = {}

    def total_supply(self) -> int:
        return sum(self._balances.values())

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        self._allowances[(owner, spender)] = amount

    def transfer(self, sender: str, receiver: str, amount: int) -> None:
        _debit(self._balances, sender, amount)
        self._balances[receiver] = self.balance_of(receiver) + amount

    def transfer_from(self, spender: str, owner: str, receiver: str, amount: int) -> None:
        if spender != owner:
            allowed = self.allowance(owner, spender)
            if allowed < amount:
                raise TokenOperationError(
                    f"Allowance {allowed} of {spender} over {owner} is below {amount}."
                )
            self._allowances[(owner, spender)] = allowed - amount
        self.transfer(owner, receiver, amount)

    def mint(self, receiver: str, amount: int) -> None:
        self._balances[receiver] = self.balance_of(receiver) + amount

    def burn(self, owner: str, amount: int) -> None:
        _debit(self._balances, owner, amount)

    def _state(self) -> Dict[str, object]:
        return {"_balances": self._balances, "_allowances": self._allowances}


class InMemoryNonFungibleSingleToken(_Journaled):
    def __init__(self, address: str, owners: Optional[Dict[int, str]] = None) -> None:
        self.address = address
        self._owners: Dict[int, str] = dict(owners or {})
        self._operators: Set[Tuple[str, str]] = set()

    def supports_interface(self, interface_id: bytes) -> bool:
        return interface_id == ERC721_INTERFACE_ID

    def owner_of(self, token_id: int) -> str:
        if token_id not in self._owners:
            raise TokenOperationError(f"Token {token_id} does not exist.")
        return self._owners[token_id]

    def is_approved_for_all(self, owner: str, operator: str) -> bool:
        return (owner, operator) in self._operators

    def set_approval_for_all(self, owner: str, operator: str, approved: bool) -> None:
        if approved:
            self._operators.add((owner, operator))
        else:
            self._operators.discard((owner, operator))

    def transfer_from(self, operator: str, owner: str, receiver: str, token_id: int) -> None:
        if self.owner_of(token_id) != owner:
            raise TokenOperationError(f"{owner} does not own token {token_id}.")
        if operator != owner and not self.is_approved_for_all(owner, operator):
            raise TokenOperationError(f"{operator} is not an operator for {owner}.")
        self._owners[token_id] = receiver

    def mint(self, receiver: str, token_id: int) -> None:
        if token_id in self._owners:
            raise TokenOperationError(f"Token {token_id} already minted.")
        self._owners[token_id] = receiver

    def burn(self, token_id: int) -> None:
        self.owner_of(token_id)
        del self._owners[token_id]

    def _state(self) -> Dict[str, object]:
        return {"_owners": self._owners, "_operators": self._operators}


class InMemoryNonFungibleMultiToken(_Journaled):
    def __init__(
        self, address: str, balances: Optional[Dict[Tuple[str, int], int]] = None
    ) -> None:
        self.address = address
        self._balances: Dict[Tuple[str, int], int] = dict(balances or {})
        self._operators: Set[Tuple[str, str]] = set()

    def supports_interface(self, interface_id: bytes) -> bool:
        return interface_id == ERC1155_INTERFACE_ID

    def balance_of(self, account: str, token_id: int) -> int:
        return self._balances.get((account, token_id), 0)

    def is_approved_for_all(self, owner: str, operator: str) -> bool:
        return (owner, operator) in self._operators

    def set_approval_for_all(self, owner: str, operator: str, approved: bool) -> None:
        if approved:
            self._operators.add((owner, operator))
        else:
            self._operators.discard((owner, operator))

    def safe_transfer_from(
        self,
        operator: str,
        owner: str,
        receiver: str,
        token_id: int,
        amount: int,
        data: bytes,
    ) -> None:
        if operator != owner and not self.is_approved_for_all(owner, operator):
            raise TokenOperationError(f"{operator} is not an operator for {owner}.")
        _debit(self._balances, (owner, token_id), amount)
        key = (receiver, token_id)
        self._balances[key] = self._balances.get(key, 0) + amount

    def mint(self, receiver: str, token_id: int, amount: int, data: bytes) -> None:
        key = (receiver, token_id)
        self._balances[key] = self._balances.get(key, 0) + amount

    def burn(self, owner: str, token_id: int, amount: int) -> None:
        _debit(self._balances, (owner, token_id), amount)

    def _state(self) -> Dict[str, object]:
        return {"_balances": self._balances, "_operators": self._operators}


def _debit(balances: Dict, key, amount: int) -> None:
    current = balances.get(key, 0)
    if amount > current:
        raise TokenOperationError(f"Insufficient balance for {key}: {current} < {amount}.")
    balances[key] = current - amount

"""
Ownership ledger: who holds which token id.

The registry only needs the small capability described by ``OwnershipLedger``;
``InMemoryLedger`` is the implementation used by the service and the tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Protocol

from .errors import NotFoundError, OwnershipError

log = logging.getLogger(__name__)

Address = str

NULL_ADDRESS: Address = "0x" + "00" * 20


@dataclass(frozen=True)
class Transfer:
    """Transfer-style event; ``sender`` is NULL_ADDRESS for a mint."""

    token_id: int
    sender: Address
    recipient: Address


class OwnershipLedger(Protocol):
    def next_token_id(self) -> int: ...

    def mint_to(self, owner: Address) -> int: ...

    def owner_of(self, token_id: int) -> Address: ...

    def balance_of(self, owner: Address) -> int: ...

    def transfer(self, sender: Address, recipient: Address, token_id: int) -> None: ...

    def tokens_of_owner(self, owner: Address) -> List[int]: ...


@dataclass
class InMemoryLedger:
    owners: List[Address] = field(default_factory=list)  # index = token id
    holdings: Dict[Address, List[int]] = field(default_factory=dict)
    events: List[Transfer] = field(default_factory=list)

    def next_token_id(self) -> int:
        return len(self.owners)

    def mint_to(self, owner: Address) -> int:
        _check_recipient(owner)
        token_id = len(self.owners)
        self.owners.append(owner)
        self.holdings.setdefault(owner, []).append(token_id)
        self.events.append(Transfer(token_id, NULL_ADDRESS, owner))
        return token_id

    def owner_of(self, token_id: int) -> Address:
        if not 0 <= token_id < len(self.owners):
            raise NotFoundError(f"token {token_id} does not exist")
        return self.owners[token_id]

    def balance_of(self, owner: Address) -> int:
        return len(self.holdings.get(owner, ()))

    def tokens_of_owner(self, owner: Address) -> List[int]:
        return list(self.holdings.get(owner, ()))

    def transfer(self, sender: Address, recipient: Address, token_id: int) -> None:
        current = self.owner_of(token_id)
        if current != sender:
            raise OwnershipError(f"{sender} does not own token {token_id}")
        _check_recipient(recipient)
        if recipient == sender:
            return
        self.holdings[sender].remove(token_id)
        if not self.holdings[sender]:
            del self.holdings[sender]
        self.holdings.setdefault(recipient, []).append(token_id)
        self.owners[token_id] = recipient
        self.events.append(Transfer(token_id, sender, recipient))
        log.info("token %d transferred %s → %s", token_id, sender, recipient)


def _check_recipient(owner: Address) -> None:
    if not owner or owner == NULL_ADDRESS:
        raise OwnershipError("cannot assign a token to the null address")


__all__ = ["NULL_ADDRESS", "InMemoryLedger", "OwnershipLedger", "Transfer"]

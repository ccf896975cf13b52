from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import COLLECTION_NAME, COLLECTION_SYMBOL, MAX_SUPPLY
from .errors import (
    DuplicateColorError,
    LedgerMismatchError,
    NotFoundError,
    SupplyExhaustedError,
)
from .ledger import NULL_ADDRESS, Address, InMemoryLedger, OwnershipLedger, Transfer
from .metadata import get_token_uri_for_color
from .validation import require_valid_color

log = logging.getLogger(__name__)

Hex = str


@dataclass
class RegistryState:
    """
    Token ↔ color indices owned by one ColorRegistry.

    colors[token_id] is the color of that token; token ids are the dense
    range [0, len(colors)). colors_of is filled at mint time only and is not
    touched by later transfers.
    """

    colors: List[Hex] = field(default_factory=list)
    token_of: Dict[Hex, int] = field(default_factory=dict)
    colors_of: Dict[Address, List[Hex]] = field(default_factory=dict)

    @property
    def total_supply(self) -> int:
        return len(self.colors)


class ColorRegistry:
    def __init__(
        self,
        ledger: Optional[OwnershipLedger] = None,
        state: Optional[RegistryState] = None,
        *,
        max_supply: int = MAX_SUPPLY,
        name: str = COLLECTION_NAME,
        symbol: str = COLLECTION_SYMBOL,
    ) -> None:
        if max_supply < 0:
            raise ValueError("max_supply must be ≥ 0")
        self.ledger: OwnershipLedger = ledger if ledger is not None else InMemoryLedger()
        self.state = state if state is not None else RegistryState()
        self.max_supply = int(max_supply)
        self.name = name
        self.symbol = symbol
        self.events: List[Transfer] = []
        self._lock = threading.RLock()

    @property
    def total_supply(self) -> int:
        return self.state.total_supply

    # ---- minting ----

    def mint(self, color: Hex, owner: Address) -> int:
        """
        Mint a new token for ``color`` to ``owner`` and return its id.

        Raises FormatError, SupplyExhaustedError, DuplicateColorError or
        LedgerMismatchError, in that order of checking; a rejected mint leaves
        no trace.
        """
        require_valid_color(color)
        with self._lock:
            st = self.state
            if st.total_supply >= self.max_supply:
                log.warning("mint of %s rejected: supply cap %d reached", color, self.max_supply)
                raise SupplyExhaustedError(self.max_supply)
            if color in st.token_of:
                log.warning("mint of %s rejected: already minted", color)
                raise DuplicateColorError(color, st.token_of[color])

            token_id = st.total_supply
            # ids must line up before the ledger is touched
            upcoming = self.ledger.next_token_id()
            if upcoming != token_id:
                raise LedgerMismatchError(token_id, upcoming)
            minted = self.ledger.mint_to(owner)
            if minted != token_id:
                raise LedgerMismatchError(token_id, minted)

            st.colors.append(color)
            st.token_of[color] = token_id
            st.colors_of.setdefault(owner, []).append(color)
            self.events.append(Transfer(token_id, NULL_ADDRESS, owner))

        log.info("minted token %d (%s) to %s", token_id, color, owner)
        return token_id

    def transfer(self, sender: Address, recipient: Address, token_id: int) -> None:
        # ownership is the ledger's business; colors_of stays as minted
        self.color_at(token_id)
        with self._lock:
            self.ledger.transfer(sender, recipient, token_id)

    # ---- lookups ----

    def color_at(self, index: int) -> Hex:
        colors = self.state.colors
        if isinstance(index, bool) or not isinstance(index, int):
            raise NotFoundError(f"token index must be an integer: {index!r}")
        if not 0 <= index < len(colors):
            raise NotFoundError(f"no token at index {index}")
        return colors[index]

    def token_for_color(self, color: Hex) -> int:
        try:
            return self.state.token_of[color]
        except KeyError:
            raise NotFoundError(f"color {color} has not been minted") from None

    def colors_owned_by(self, owner: Address) -> List[Hex]:
        """Colors minted to ``owner``. Transfers after the mint are not reflected."""
        return list(self.state.colors_of.get(owner, ()))

    def colors_held_by(self, owner: Address) -> List[Hex]:
        """Colors of the tokens ``owner`` holds right now, per the ledger."""
        return [self.color_at(t) for t in sorted(self.ledger.tokens_of_owner(owner))]

    def all_colors(self) -> List[Hex]:
        return list(self.state.colors)

    def owner_of(self, token_id: int) -> Address:
        self.color_at(token_id)
        return self.ledger.owner_of(token_id)

    # ---- metadata ----

    def metadata_for_token(self, token_id: int) -> str:
        return get_token_uri_for_color(self.color_at(token_id))

    def metadata_for_color(self, color: Hex) -> str:
        return get_token_uri_for_color(color)

    token_uri = metadata_for_token


__all__ = ["ColorRegistry", "RegistryState"]

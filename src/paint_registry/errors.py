from __future__ import annotations


class FormatError(ValueError):
    """Malformed hex color string or channel value."""


class DivideByZeroError(ZeroDivisionError):
    pass


class RegistryError(RuntimeError):
    """Base class for rejected registry and ledger operations."""


class DuplicateColorError(RegistryError):
    def __init__(self, color: str, token_id: int) -> None:
        super().__init__(f"color {color} already minted as token {token_id}")
        self.color = color
        self.token_id = token_id


class SupplyExhaustedError(RegistryError):
    def __init__(self, max_supply: int) -> None:
        super().__init__(f"supply cap of {max_supply} tokens reached")
        self.max_supply = max_supply


class NotFoundError(RegistryError, LookupError):
    pass


class OwnershipError(RegistryError):
    pass


class LedgerMismatchError(RegistryError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"ledger would mint token {actual}, registry expects {expected}")
        self.expected = expected
        self.actual = actual


__all__ = [
    "DivideByZeroError",
    "DuplicateColorError",
    "FormatError",
    "LedgerMismatchError",
    "NotFoundError",
    "OwnershipError",
    "RegistryError",
    "SupplyExhaustedError",
]

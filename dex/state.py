"""Mutable pool ledger: reserves, total shares and per-holder share balances.

PoolState has no behavior beyond storage, checked increments/decrements and
invariant checks. Callers (dex.pool.Pool) are responsible for serializing
access.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from dex.errors import InsufficientReserves, InsufficientShares, InvariantViolation


@dataclass(frozen=True)
class PoolSnapshot:
    """Immutable copy of a PoolState at one point in time."""

    reserve_a: int
    reserve_b: int
    total_shares: int
    shares: Mapping[str, int]

    @property
    def k(self) -> int:
        """Constant-product invariant reserve_a * reserve_b."""
        return self.reserve_a * self.reserve_b


@dataclass
class PoolState:
    """Reserves and share balances of one pool.

    Invariants (checked by check_invariants):
    - all quantities are non-negative
    - total_shares == sum(shares.values())
    - total_shares == 0 iff reserve_a == 0 and reserve_b == 0
    - when liquidity exists, both reserves are strictly positive
    """

    reserve_a: int = 0
    reserve_b: int = 0
    total_shares: int = 0
    shares: dict[str, int] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.total_shares == 0

    @property
    def k(self) -> int:
        return self.reserve_a * self.reserve_b

    def share_of(self, holder: str) -> int:
        """Share balance of holder (0 for unknown holders)."""
        return self.shares.get(holder, 0)

    def credit_reserves(self, amount_a: int, amount_b: int) -> None:
        if amount_a < 0 or amount_b < 0:
            raise ValueError(f"Reserve credit must be non-negative: ({amount_a}, {amount_b})")
        self.reserve_a += amount_a
        self.reserve_b += amount_b

    def debit_reserves(self, amount_a: int, amount_b: int) -> None:
        """Decrease reserves.

        Raises:
            InsufficientReserves: If either reserve would go negative
        """
        if amount_a < 0 or amount_b < 0:
            raise ValueError(f"Reserve debit must be non-negative: ({amount_a}, {amount_b})")
        if amount_a > self.reserve_a or amount_b > self.reserve_b:
            raise InsufficientReserves(
                f"Cannot debit ({amount_a}, {amount_b}) from reserves "
                f"({self.reserve_a}, {self.reserve_b})"
            )
        self.reserve_a -= amount_a
        self.reserve_b -= amount_b

    def mint(self, holder: str, amount: int) -> None:
        """Credit new shares to holder and to the total."""
        if amount < 0:
            raise ValueError(f"Mint amount must be non-negative: {amount}")
        self.shares[holder] = self.share_of(holder) + amount
        self.total_shares += amount

    def burn(self, holder: str, amount: int) -> None:
        """Remove shares from holder and from the total.

        The holder's entry stays in the mapping at zero after a full burn.

        Raises:
            InsufficientShares: If holder owns fewer than amount shares
        """
        if amount < 0:
            raise ValueError(f"Burn amount must be non-negative: {amount}")
        balance = self.share_of(holder)
        if amount > balance:
            raise InsufficientShares()
        self.shares[holder] = balance - amount
        self.total_shares -= amount

    def snapshot(self) -> PoolSnapshot:
        return PoolSnapshot(
            reserve_a=self.reserve_a,
            reserve_b=self.reserve_b,
            total_shares=self.total_shares,
            shares=MappingProxyType(dict(self.shares)),
        )

    def restore(self, snapshot: PoolSnapshot) -> None:
        """Reset every field to the values captured in snapshot."""
        self.reserve_a = snapshot.reserve_a
        self.reserve_b = snapshot.reserve_b
        self.total_shares = snapshot.total_shares
        self.shares = dict(snapshot.shares)

    def check_invariants(self) -> None:
        """Raise InvariantViolation if the ledger is inconsistent."""
        if self.reserve_a < 0 or self.reserve_b < 0 or self.total_shares < 0:
            raise InvariantViolation(
                f"Negative quantity: reserves=({self.reserve_a}, {self.reserve_b}) "
                f"total_shares={self.total_shares}"
            )
        if any(balance < 0 for balance in self.shares.values()):
            raise InvariantViolation("Negative holder share balance")
        held = sum(self.shares.values())
        if held != self.total_shares:
            raise InvariantViolation(
                f"Share balances sum to {held}, total_shares is {self.total_shares}"
            )
        if self.total_shares == 0:
            if self.reserve_a != 0 or self.reserve_b != 0:
                raise InvariantViolation(
                    f"Reserves ({self.reserve_a}, {self.reserve_b}) without outstanding shares"
                )
        elif self.reserve_a == 0 or self.reserve_b == 0:
            raise InvariantViolation(
                f"Outstanding shares with empty reserve: ({self.reserve_a}, {self.reserve_b})"
            )

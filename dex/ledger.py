"""Asset ledger interface consumed by the pool.

The pool never holds balances itself. It asks a ledger to move assets from
a participant into its custody account (transfer_in) and back out
(transfer_out). Any object satisfying AssetLedger can be injected;
InMemoryLedger is a reference implementation for tests and local runs.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import Protocol, runtime_checkable

import structlog

from dex.errors import TransferFailed

logger = structlog.get_logger()


@runtime_checkable
class AssetLedger(Protocol):
    """Custody and transfer of the pool's underlying assets.

    Both methods are synchronous and atomic: they either move the full
    amount or raise TransferFailed without moving anything.
    """

    def transfer_in(self, asset: str, sender: str, amount: int) -> None:
        """Move amount of asset from sender into the pool's custody.

        Raises:
            TransferFailed: If sender lacks balance or has not authorized the pool
        """
        ...

    def transfer_out(self, asset: str, recipient: str, amount: int) -> None:
        """Move amount of asset from the pool's custody to recipient.

        Raises:
            TransferFailed: If custody does not hold amount
        """
        ...


class InMemoryLedger:
    """Balances and allowances kept in process memory.

    Allowances are granted by an owner to the custodian only, the single
    spender this ledger serves.
    """

    def __init__(self, custodian: str) -> None:
        self.custodian = custodian
        self._balances: dict[str, dict[str, int]] = defaultdict(dict)
        self._allowances: dict[str, dict[str, int]] = defaultdict(dict)
        self._lock = threading.Lock()

    def balance_of(self, asset: str, account: str) -> int:
        with self._lock:
            return self._balances[asset].get(account, 0)

    def allowance(self, asset: str, owner: str) -> int:
        with self._lock:
            return self._allowances[asset].get(owner, 0)

    def mint(self, asset: str, account: str, amount: int) -> None:
        """Create amount of asset out of thin air in account."""
        if amount < 0:
            raise ValueError(f"Mint amount must be non-negative: {amount}")
        with self._lock:
            balances = self._balances[asset]
            balances[account] = balances.get(account, 0) + amount

    def approve(self, asset: str, owner: str, amount: int) -> None:
        """Set how much of owner's asset the custodian may pull."""
        if amount < 0:
            raise ValueError(f"Allowance must be non-negative: {amount}")
        with self._lock:
            self._allowances[asset][owner] = amount

    def transfer_in(self, asset: str, sender: str, amount: int) -> None:
        with self._lock:
            balance = self._balances[asset].get(sender, 0)
            allowance = self._allowances[asset].get(sender, 0)
            if amount > allowance:
                logger.info(
                    "transfer_refused",
                    asset=asset,
                    sender=sender,
                    amount=amount,
                    allowance=allowance,
                )
                raise TransferFailed(
                    f"Insufficient allowance: {sender} approved {allowance} {asset}"
                )
            if amount > balance:
                logger.info(
                    "transfer_refused",
                    asset=asset,
                    sender=sender,
                    amount=amount,
                    balance=balance,
                )
                raise TransferFailed(f"Insufficient balance: {sender} holds {balance} {asset}")
            self._allowances[asset][sender] = allowance - amount
            self._move(asset, sender, self.custodian, amount)

    def transfer_out(self, asset: str, recipient: str, amount: int) -> None:
        with self._lock:
            held = self._balances[asset].get(self.custodian, 0)
            if amount > held:
                raise TransferFailed(f"Custody holds {held} {asset}, cannot pay {amount}")
            self._move(asset, self.custodian, recipient, amount)

    def _move(self, asset: str, source: str, destination: str, amount: int) -> None:
        balances = self._balances[asset]
        balances[source] = balances.get(source, 0) - amount
        balances[destination] = balances.get(destination, 0) + amount

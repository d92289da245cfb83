"""Port for the persisted diagnostic artifact counter."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CounterStore(Protocol):
    """Monotonic integer used to number diagnostic dumps.

    Implementations:
      - FileCounterStore (plain decimal text file)
      - InMemoryCounterStore (tests, ephemeral runs)
    """

    def read(self) -> int:
        """Return the next artifact number (1 if unset or zero)."""
        ...

    def write(self, value: int) -> None:
        """Persist the next artifact number."""
        ...

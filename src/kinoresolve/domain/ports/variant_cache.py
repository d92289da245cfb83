"""Port for caching resolved stream variants per media request."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from kinoresolve.domain.entities.stream import StreamVariant


@runtime_checkable
class VariantCache(Protocol):
    """Thread-safe key-value store of variant lists keyed by ``MediaRequest.cache_key``."""

    def get(self, key: str) -> list[StreamVariant] | None:
        """Return cached variants. None = not cached."""
        ...

    def set(self, key: str, variants: list[StreamVariant]) -> None: ...

    def delete(self, key: str) -> bool:
        """Delete key. True = deleted, False = did not exist."""
        ...

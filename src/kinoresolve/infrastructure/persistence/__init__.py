from .counter_store import FileCounterStore, InMemoryCounterStore
from .variant_cache import InMemoryVariantCache

__all__ = ["FileCounterStore", "InMemoryCounterStore", "InMemoryVariantCache"]

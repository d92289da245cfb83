from .counter_store import CounterStore
from .variant_cache import VariantCache

__all__ = ["CounterStore", "VariantCache"]

"""Output merge writer + id registry"""

from .registry import IdRegistry, RegistryUpdate
from .writer import WriteResult, get_existing_ids, write_items

__all__ = [
    "IdRegistry",
    "RegistryUpdate",
    "WriteResult",
    "get_existing_ids",
    "write_items",
]

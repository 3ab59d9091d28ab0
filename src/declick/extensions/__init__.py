"""Reusable hook bundles."""

from .item_counter import ItemCounter
from .memory_limit import MemoryLimit, parse_memory_limit
from .sigterm import SigtermListener

__all__ = ["ItemCounter", "MemoryLimit", "SigtermListener", "parse_memory_limit"]

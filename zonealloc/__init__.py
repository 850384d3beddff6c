"""Building blocks for a simulated zone-based allocator: flags, formatting, red-black trees and memory."""

__version__ = "0.1.0"
__all__ = [
    "flags",
    "formatting",
    "memory",
    "rbnode",
    "rbtree",
    "treeprint",
]
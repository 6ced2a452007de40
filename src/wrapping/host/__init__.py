"""
Editor host boundary.

The plugin never touches editor internals directly; it consumes the
EditorHost protocol. InMemoryHost is the in-process implementation.
"""

from .ports import EditorHost, BUF_WIN_ENTER, BUF_WIPEOUT
from .memory import InMemoryHost, MemoryBuffer

__all__ = [
    "EditorHost",
    "BUF_WIN_ENTER",
    "BUF_WIPEOUT",
    "InMemoryHost",
    "MemoryBuffer",
]

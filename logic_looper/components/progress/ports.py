"""
Progress component port definitions.
"""

from __future__ import annotations

from logic_looper.ports.kv import KeyValueStorePort

__all__ = ["KeyValueStorePort"]

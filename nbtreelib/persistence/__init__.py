"""Persistence of numeric binary trees.

Encoding lives in ``codec``, byte-stream access in ``storage`` and the
save/verify/load workflow in ``store``.
"""

from .codec import encode_tree, decode_tree, MAGIC, SUPPORTED_VERSIONS
from .storage import StorageAdapter, FileStorageAdapter, MemoryStorageAdapter
from .store import write_tree, read_tree, verify_saved

__all__ = [
    'encode_tree',
    'decode_tree',
    'MAGIC',
    'SUPPORTED_VERSIONS',
    'StorageAdapter',
    'FileStorageAdapter',
    'MemoryStorageAdapter',
    'write_tree',
    'read_tree',
    'verify_saved',
]

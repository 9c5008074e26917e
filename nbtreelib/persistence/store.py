"""Saving and loading whole trees through a StorageAdapter.

``write_tree`` encodes a tree, writes it, and (unless disabled) reads the
location back to check that what was stored decodes to an identical tree.
``read_tree`` reads and decodes a tree without touching any existing one.

Recoverable problems surface as PersistenceError subclasses; OSErrors from
the storage medium itself propagate unchanged.
"""

import logging
from typing import Optional

from ..config import PersistenceConfig, DEFAULT_PERSISTENCE_CONFIG
from ..core.tree import NumericBinaryTree
from ..errors import PersistenceError, VerificationError
from .codec import decode_tree, encode_tree
from .storage import FileStorageAdapter, Location, StorageAdapter

logger = logging.getLogger(__name__)


def _prepare(location, storage, config):
    config = config or DEFAULT_PERSISTENCE_CONFIG
    problems = config.validate()
    if problems:
        raise ValueError(f"Invalid persistence configuration: {'; '.join(problems)}")
    return config.resolve(location), storage or FileStorageAdapter(), config


def write_tree(tree: NumericBinaryTree,
               location: Optional[Location] = None,
               storage: Optional[StorageAdapter] = None,
               config: Optional[PersistenceConfig] = None) -> None:
    """Encode tree and write it to location.

    Args:
        tree: Tree to save (may be empty)
        location: Where to write (None = config.default_location)
        storage: Adapter to write through (None = FileStorageAdapter())
        config: Persistence options (None = DEFAULT_PERSISTENCE_CONFIG)

    Raises:
        TreeEncodeError: If a value cannot be encoded
        VerificationError: If the stored bytes do not read back as tree
        OSError: If the write itself fails
    """
    location, storage, config = _prepare(location, storage, config)

    data = encode_tree(tree)
    try:
        storage.write_bytes(location, data)
    except OSError as e:
        logger.error("Unsuccessful save to %s: %s", location, e)
        raise
    logger.debug("Wrote %d bytes to %s", len(data), location)

    if config.verify_on_save:
        verify_saved(tree, location, storage)


def verify_saved(tree: NumericBinaryTree,
                 location: Location,
                 storage: StorageAdapter) -> None:
    """Check that location holds an encoding of a tree identical to tree.

    Identical means equal under ``==`` and rendering to the same text.

    Raises:
        VerificationError: If reading, decoding or either comparison fails
    """
    try:
        restored = decode_tree(storage.read_bytes(location))
    except (PersistenceError, OSError) as e:
        raise VerificationError(location, f"could not read back ({e})") from e

    if str(restored) != str(tree):
        raise VerificationError(location, "restored tree renders differently")
    if restored != tree:
        raise VerificationError(location, "restored tree is not equal")


def read_tree(location: Optional[Location] = None,
              storage: Optional[StorageAdapter] = None,
              config: Optional[PersistenceConfig] = None) -> NumericBinaryTree:
    """Read and decode the tree stored at location.

    Args:
        location: Where to read (None = config.default_location)
        storage: Adapter to read through (None = FileStorageAdapter())
        config: Persistence options (None = DEFAULT_PERSISTENCE_CONFIG)

    Returns:
        A new tree, sharing no nodes with any existing tree

    Raises:
        LocationUnavailableError: If nothing can be opened at location
        TreeDecodeError: If the stored bytes are not a valid encoded tree
        OSError: If the location was opened but reading it failed
    """
    location, storage, config = _prepare(location, storage, config)
    data = storage.read_bytes(location)
    logger.debug("Read %d bytes from %s", len(data), location)
    return decode_tree(data)

"""Factory functions for creating pre-configured RecordStore instances."""

from __future__ import annotations

import logging

from foamdesk.config import STORAGE_MEMORY, AppConfig, load_config
from foamdesk.data.repository import RecordStore
from foamdesk.data.storage import FileStorage, MemoryStorage

logger = logging.getLogger(__name__)


def create_store(config: AppConfig) -> RecordStore:
    """Create a RecordStore on the backend named by ``config.storage``."""
    if config.storage == STORAGE_MEMORY:
        logger.info("Using in-memory storage; records will not survive a restart")
        return RecordStore(MemoryStorage())
    logger.info("Using file storage in %s", config.data_dir)
    return RecordStore(FileStorage(config.data_dir))


def create_default_store() -> RecordStore:
    """Create a RecordStore from the environment.

    This is the recommended way to get a store for typical usage.

    Example::

        from foamdesk import create_default_store, compute

        store = create_default_store()
        pricing = store.get_settings().pricing()
    """
    return create_store(load_config())

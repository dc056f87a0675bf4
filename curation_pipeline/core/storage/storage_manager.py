"""
Storage Manager for the Creator Curation Pipeline
Owns the local directory layout: channel bindings, csv sheets and logs.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Service responsible for managing local storage.

    Responsibilities:
    - Create and validate storage directory structure.
    - Provide canonical paths for all storage components.
    """

    BINDINGS_FILE = "channel_bindings.json"

    def __init__(self, storage_root: str = "./storage"):
        """
        Initialize the StorageManager.

        Args:
            storage_root (str): The base directory for all storage.
        """
        self._root = Path(storage_root).resolve()

        self._bindings_dir = self._root / "bindings"
        self._sheets_dir = self._root / "sheets"
        self._logs_dir = self._root / "logs"

        self._ensure_directories()

    def _ensure_directories(self):
        """Ensures that all required storage directories exist."""
        for d in (self._bindings_dir, self._sheets_dir, self._logs_dir):
            d.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Storage directory verified: {d}")

    @property
    def root(self) -> Path:
        return self._root

    @property
    def bindings_file(self) -> Path:
        return self._bindings_dir / self.BINDINGS_FILE

    @property
    def sheets_path(self) -> Path:
        return self._sheets_dir

    @property
    def logs_path(self) -> Path:
        return self._logs_dir

    def __repr__(self):
        return f"StorageManager(root={self._root})"

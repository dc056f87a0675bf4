"""
Binding Storage
Persistence port for channel bindings: one record per user.
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class BindingStorage(ABC):
    """Read/write one binding record per user key."""

    @abstractmethod
    def read(self, user_key: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def write(self, user_key: str, record: Dict[str, Any]) -> None:
        raise NotImplementedError


class InMemoryBindingStorage(BindingStorage):
    """Volatile storage, for tests and throwaway sessions."""

    def __init__(self):
        self._records: Dict[str, Dict[str, Any]] = {}
        self.write_count = 0

    def read(self, user_key: str) -> Optional[Dict[str, Any]]:
        record = self._records.get(user_key)
        return dict(record) if record is not None else None

    def write(self, user_key: str, record: Dict[str, Any]) -> None:
        self._records[user_key] = dict(record)
        self.write_count += 1


class JsonFileBindingStorage(BindingStorage):
    """
    Stores all users' bindings in a single JSON document.

    Writes go to a temporary file in the same directory which then
    replaces the document, so readers never see a half-written record.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self, user_key: str) -> Optional[Dict[str, Any]]:
        record = self._load().get(user_key)
        return record if isinstance(record, dict) else None

    def write(self, user_key: str, record: Dict[str, Any]) -> None:
        document = self._load()
        document[user_key] = record

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".bindings-", suffix=".json", dir=self._path.parent)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug(f"Binding for {user_key} written to {self._path}")

    def _load(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}

        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read bindings from {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Bindings file {self._path} is not a JSON object, ignoring it")
            return {}
        return data

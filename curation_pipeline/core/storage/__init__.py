"""
Local storage module
"""

from .binding_storage import BindingStorage, InMemoryBindingStorage, JsonFileBindingStorage
from .storage_manager import StorageManager

__all__ = ["BindingStorage", "InMemoryBindingStorage", "JsonFileBindingStorage", "StorageManager"]

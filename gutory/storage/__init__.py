from .local import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore

__all__ = ["KeyValueStore", "FileKeyValueStore", "MemoryKeyValueStore"]

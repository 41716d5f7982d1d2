from .base import NullStorage, StorageAdapter
from .factory import build_storage
from .file_adapter import FileStorage
from .redis_adapter import RedisStorage
from .serialization import decode_snapshot, encode_snapshot

__all__ = [
    "StorageAdapter",
    "NullStorage",
    "FileStorage",
    "RedisStorage",
    "build_storage",
    "encode_snapshot",
    "decode_snapshot",
]

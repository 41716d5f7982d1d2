"""JSON file storage with atomic writes."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
import typing as t
from pathlib import Path

import aiofiles
import aiofiles.os

from ..models import Snapshot
from .base import StorageAdapter
from .serialization import Decoder, decode_snapshot, encode_snapshot

_logger = logging.getLogger(__name__)


class FileStorage(StorageAdapter):
    """Persists the snapshot as indented JSON at `path`.

    Writes go to a temp file in the same directory and are renamed into
    place, so a crash mid-write never leaves a truncated snapshot behind.
    """

    def __init__(
        self,
        path: t.Union[str, os.PathLike] = "./cache-data.json",
        *,
        key_decoder: t.Optional[Decoder] = None,
        value_decoder: t.Optional[Decoder] = None,
    ) -> None:
        self.path = Path(path)
        self._key_decoder = key_decoder
        self._value_decoder = value_decoder

    async def load(self) -> Snapshot:
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            _logger.warning("Could not read cache file %s: %s", self.path, exc)
            return {}
        return decode_snapshot(raw, key_decoder=self._key_decoder, value_decoder=self._value_decoder)

    async def save(self, data: Snapshot) -> None:
        try:
            payload = encode_snapshot(data, indent=2)
        except (TypeError, ValueError) as exc:
            _logger.warning("Cache snapshot is not JSON serialisable: %s", exc)
            return

        temp_path: t.Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=".tmp_",
                suffix=self.path.suffix,
            )
            os.close(temp_fd)
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(temp_path, self.path)
            temp_path = None
        except OSError as exc:
            _logger.warning("Could not write cache file %s: %s", self.path, exc)
        finally:
            if temp_path is not None:
                with contextlib.suppress(OSError):
                    os.unlink(temp_path)

    async def clear(self) -> None:
        try:
            await aiofiles.os.remove(self.path)
        except FileNotFoundError:
            return
        except OSError as exc:
            _logger.warning("Could not remove cache file %s: %s", self.path, exc)

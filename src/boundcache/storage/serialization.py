"""JSON codec for cache snapshots.

A snapshot is written as a list of ``[key, entry]`` pairs rather than a JSON
object, since keys are not necessarily strings. Values must be
JSON-serialisable; anything richer has to be encoded by the caller first.
"""

from __future__ import annotations

import json
import logging
import typing as t

from ..models import CacheEntry, Snapshot

_logger = logging.getLogger(__name__)

Decoder = t.Callable[[t.Any], t.Any]


def _freeze(obj: t.Any) -> t.Any:
    # JSON turns tuples into arrays; turn them back so keys stay hashable
    if isinstance(obj, list):
        return tuple(_freeze(item) for item in obj)
    return obj


def encode_snapshot(data: Snapshot, *, indent: t.Optional[int] = None) -> str:
    pairs = [[key, entry.to_dict()] for key, entry in data.items()]
    return json.dumps(pairs, indent=indent)


def decode_snapshot(
    raw: t.Union[str, bytes, None],
    *,
    key_decoder: t.Optional[Decoder] = None,
    value_decoder: t.Optional[Decoder] = None,
) -> Snapshot:
    """Parse a serialised snapshot, returning ``{}`` for anything malformed."""
    if not raw:
        return {}
    decode_key = key_decoder or _freeze
    try:
        pairs = json.loads(raw)
        result: Snapshot = {}
        for key, entry_data in pairs:
            entry = CacheEntry.from_dict(entry_data)
            if value_decoder is not None:
                entry.value = value_decoder(entry.value)
            result[decode_key(key)] = entry
        return result
    except (ValueError, TypeError, KeyError) as exc:
        _logger.warning("Discarding unreadable cache snapshot: %s", exc)
        return {}

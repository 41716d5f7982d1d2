from __future__ import annotations

import typing as t
from dataclasses import dataclass

V = t.TypeVar("V")


@dataclass
class CacheEntry(t.Generic[V]):
    value: V
    # Absolute epoch seconds; None means the entry never expires
    expires_at: t.Optional[float]
    last_accessed: float

    def is_expired(self, now: float) -> bool:
        if self.expires_at is None:
            return False
        return now > self.expires_at

    def to_dict(self) -> t.Dict[str, t.Any]:
        return {
            "value": self.value,
            "expires_at": self.expires_at,
            "last_accessed": self.last_accessed,
        }

    @classmethod
    def from_dict(cls, data: t.Mapping[str, t.Any]) -> "CacheEntry[t.Any]":
        expires_at = data.get("expires_at")
        return cls(
            value=data["value"],
            expires_at=None if expires_at is None else float(expires_at),
            last_accessed=float(data["last_accessed"]),
        )


Snapshot = t.Dict[t.Any, CacheEntry[t.Any]]

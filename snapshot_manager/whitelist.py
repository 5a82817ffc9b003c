"""Only volumes recognized in a whitelist can be snapshotted.

File format, one volume per line:
  - empty lines are ignored
  - lines starting with "#" are ignored

A rejected request says nothing about which volumes exist, and since only
exact pre-approved strings are accepted no further input sanitation is needed.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable


class WhitelistLoadError(Exception):
    """Raised when the whitelist file cannot be opened or read."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"Could not read whitelist {path}: {reason}")
        self.path = str(path)


class VolumeWhitelist:
    __slots__ = ("_entries", "_lookup")

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: tuple[str, ...] = tuple(entries)
        self._lookup: frozenset[str] = frozenset(self._entries)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> VolumeWhitelist:
        entries = []
        for line in lines:
            volume = line.strip()
            if not volume or volume.startswith("#"):
                continue
            entries.append(volume)
        return cls(entries)

    @classmethod
    def load(cls, path: str | Path) -> VolumeWhitelist:
        try:
            with open(path, encoding="utf-8") as f:
                return cls.from_lines(f)
        except (OSError, UnicodeDecodeError) as exc:
            raise WhitelistLoadError(path, str(exc)) from exc

    @property
    def entries(self) -> tuple[str, ...]:
        return self._entries

    def is_allowed(self, volume: str) -> bool:
        return volume in self._lookup

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, volume: object) -> bool:
        return volume in self._lookup

    def __repr__(self) -> str:
        return f"VolumeWhitelist({list(self._entries)!r})"
